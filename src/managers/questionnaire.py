#!/usr/bin/env python3
# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

"""Sources of the instance configuration."""

import logging
from abc import ABC, abstractmethod

import yaml
from charmlibs import pathops
from pydantic import ValidationError
from typing_extensions import override

from common.exceptions import InvalidAnswersError
from core.config import InstanceConfig, validate_port, validate_secret_key
from core.literals import (
    DEFAULT_BIND_ADDRESS,
    DEFAULT_PORT,
    DEFAULT_REDIS_URL,
    SECRET_KEY_MIN_LENGTH,
)
from core.prompts import Prompts
from core.workload import WorkloadBase

logger = logging.getLogger(__name__)


class ConfigurationSource(ABC):
    """Base interface for providers of the instance configuration."""

    @abstractmethod
    def collect(self) -> InstanceConfig:
        """Get validated instance configuration."""
        pass


class Questionnaire(ConfigurationSource):
    """Interactive collection of the instance configuration."""

    def __init__(self, prompts: Prompts, workload: WorkloadBase):
        self.prompts = prompts
        self.workload = workload

    @override
    def collect(self) -> InstanceConfig:
        secret_key = self.ask_secret_key()
        bind_address = self.prompts.ask(
            "Bind Address",
            f"Enter bind address for SearXNG (default: {DEFAULT_BIND_ADDRESS}):",
            DEFAULT_BIND_ADDRESS,
        )
        port = self.ask_port()
        redis_url = self.prompts.ask(
            "Redis URL",
            f"Enter Redis URL (default: {DEFAULT_REDIS_URL}):",
            DEFAULT_REDIS_URL,
        )
        debug = self.prompts.confirm("Debug Mode", "Enable debug mode?")

        return InstanceConfig(
            secret_key=secret_key,
            bind_address=bind_address,
            port=port,
            redis_url=redis_url,
            debug=debug,
        )

    def ask_secret_key(self) -> str:
        """Ask for a custom secret key or generate one."""
        if not self.prompts.confirm(
            "Secret Key",
            "Do you want to enter your own secret key? "
            "If not, a random one will be generated.",
        ):
            secret_key = self.workload.generate_secret()
            self.prompts.message("Secret Key", f"Generated random secret key: {secret_key}", 12)
            return secret_key

        text = f"Enter your secret key (min. {SECRET_KEY_MIN_LENGTH} characters):"
        secret_key = self.prompts.ask("Secret Key", text)
        while not validate_secret_key(secret_key):
            self.prompts.message(
                "Secret Key",
                f"Secret key must be at least {SECRET_KEY_MIN_LENGTH} characters long!",
            )
            secret_key = self.prompts.ask("Secret Key", text)
        return secret_key

    def ask_port(self) -> int:
        """Ask for the listening port until a valid one is given."""
        while True:
            port = self.prompts.ask(
                "Port", f"Enter port for SearXNG (default: {DEFAULT_PORT}):", str(DEFAULT_PORT)
            )
            if validate_port(port):
                return int(port)
            self.prompts.message(
                "Port", "Invalid port number. Please enter a number between 1 and 65535."
            )


class AnswersFile(ConfigurationSource):
    """Pre-supplied instance configuration read from a YAML file."""

    def __init__(self, path: str, workload: WorkloadBase):
        self.path = pathops.LocalPath(path)
        self.workload = workload

    @override
    def collect(self) -> InstanceConfig:
        try:
            answers = yaml.safe_load(self.path.read_text()) or {}
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise InvalidAnswersError(f"Cannot read answers file {self.path}: {e}")

        if not isinstance(answers, dict):
            raise InvalidAnswersError(f"Answers file {self.path} should contain a mapping")

        if not answers.get("secret_key"):
            logger.info("No secret key in answers file, generating a random one")
            answers["secret_key"] = self.workload.generate_secret()

        try:
            return InstanceConfig.model_validate(answers)
        except ValidationError as e:
            logger.error(f"Answers file haven't passed validation: {e}")
            raise InvalidAnswersError(f"Invalid answers in {self.path}: {e}")
