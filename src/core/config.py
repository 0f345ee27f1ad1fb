#!/usr/bin/env python3
# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

"""Installer and instance config definition."""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.literals import (
    BOOTSTRAP_PACKAGES,
    CONFIG_DIR,
    DAEMON_RECOVERY_DELAY,
    DEFAULT_BIND_ADDRESS,
    DEFAULT_PORT,
    DEFAULT_REDIS_URL,
    EXTRA_PACKAGES,
    INSTALL_ROOT,
    REDIS_UNIT,
    REPOSITORY_URL,
    SECRET_KEY_MIN_LENGTH,
    SERVICE_UNIT,
    SERVICE_USER,
    SYSTEM_PACKAGES,
    SYSTEMD_DIR,
)

_DIGITS = re.compile(r"[0-9]+")
MAX_PORT_DIGITS = 5


def validate_port(value: str) -> bool:
    """Whether `value` is a decimal port number in range 1-65535."""
    if len(value) > MAX_PORT_DIGITS or not _DIGITS.fullmatch(value):
        return False
    return 1 <= int(value) <= 65535


def validate_secret_key(value: str) -> bool:
    """Whether `value` is long enough to be used as instance secret key."""
    return len(value) >= SECRET_KEY_MIN_LENGTH


class InstanceConfig(BaseModel):
    """Operator supplied values of the SearXNG instance."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    secret_key: str
    bind_address: str = DEFAULT_BIND_ADDRESS
    port: int = DEFAULT_PORT
    redis_url: str = DEFAULT_REDIS_URL
    debug: bool = False

    @field_validator("secret_key")
    @classmethod
    def secret_key_length(cls, value: str) -> str:
        """Check secret key is at least 32 characters long."""
        if not validate_secret_key(value):
            raise ValueError(
                f"secret_key must be at least {SECRET_KEY_MIN_LENGTH} characters long"
            )

        return value

    @field_validator("port", mode="before")
    @classmethod
    def port_values(cls, value: object) -> object:
        """Check port is a number between 1 and 65535."""
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise ValueError("port should be a number between 1 and 65535")
        if not validate_port(str(value)):
            raise ValueError("port should be a number between 1 and 65535")

        return int(value)


class InstallerConfig(BaseModel):
    """Layout of the provisioned host."""

    model_config = ConfigDict(frozen=True)

    service_user: str = SERVICE_USER
    service_unit: str = SERVICE_UNIT
    redis_unit: str = REDIS_UNIT
    install_root: str = INSTALL_ROOT
    config_dir: str = CONFIG_DIR
    systemd_dir: str = SYSTEMD_DIR
    repository_url: str = REPOSITORY_URL
    recovery_delay: float = Field(default=DAEMON_RECOVERY_DELAY, ge=0)
    system_packages: list[str] = Field(default_factory=lambda: list(SYSTEM_PACKAGES))
    bootstrap_packages: list[str] = Field(default_factory=lambda: list(BOOTSTRAP_PACKAGES))
    extra_packages: list[str] = Field(default_factory=lambda: list(EXTRA_PACKAGES))
    strict: bool = False

    @field_validator("service_user", "service_unit", "redis_unit")
    @classmethod
    def names_not_empty(cls, value: str) -> str:
        """Check user and unit names are not empty."""
        if len(value) == 0:
            raise ValueError("name cannot be empty")

        return value
