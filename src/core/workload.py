#!/usr/bin/env python3
# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

"""Workload definition."""

import os
import secrets
from abc import ABC, abstractmethod
from dataclasses import dataclass

from charmlibs import pathops

from core.config import InstallerConfig
from core.literals import SECRET_KEY_BYTES


class SearxngPaths:
    """Filesystem paths of the SearXNG workload."""

    install_root: pathops.PathProtocol
    config_dir: pathops.PathProtocol
    systemd_dir: pathops.PathProtocol
    service_unit: str

    def __init__(self, config: InstallerConfig) -> None:
        self.install_root = pathops.LocalPath(config.install_root)
        self.config_dir = pathops.LocalPath(config.config_dir)
        self.systemd_dir = pathops.LocalPath(config.systemd_dir)
        self.service_unit = config.service_unit

    @property
    def source_dir(self) -> pathops.PathProtocol:
        """Checkout of the application repository."""
        return self.install_root / "searxng-src"

    @property
    def venv_dir(self) -> pathops.PathProtocol:
        """Virtual environment the application runs in."""
        return self.install_root / "searx-pyenv"

    @property
    def settings(self) -> pathops.PathProtocol:
        """Main settings file."""
        return self.config_dir / "settings.yml"

    @property
    def unit(self) -> pathops.PathProtocol:
        """Systemd unit file of the application service."""
        return self.systemd_dir / f"{self.service_unit}.service"


@dataclass(frozen=True)
class RuntimeEnvironment:
    """Activated virtual environment, passed to commands that need it."""

    venv_dir: str

    @property
    def bin_dir(self) -> str:
        """Directory with the environment executables."""
        return os.path.join(self.venv_dir, "bin")

    @property
    def python(self) -> str:
        """Interpreter of the environment."""
        return os.path.join(self.bin_dir, "python")

    @property
    def pip(self) -> str:
        """Package installer of the environment."""
        return os.path.join(self.bin_dir, "pip")

    def env(self, base: dict[str, str] | None = None) -> dict[str, str]:
        """Process environment equivalent to sourcing `bin/activate`."""
        env = dict(os.environ if base is None else base)
        env.pop("PYTHONHOME", None)
        env["VIRTUAL_ENV"] = self.venv_dir
        env["PATH"] = os.pathsep.join(
            [self.bin_dir, *filter(None, env.get("PATH", "").split(os.pathsep))]
        )
        return env


class WorkloadBase(ABC):
    """Base interface for workload operations."""

    paths: SearxngPaths

    @property
    @abstractmethod
    def is_root(self) -> bool:
        """Whether the installer runs with root privileges."""
        pass

    @abstractmethod
    def path_exists(self, path: str) -> bool:
        """Check if file or directory exists."""
        pass

    @abstractmethod
    def make_directory(self, directory: str) -> None:
        """Create directory with its parents, no-op if present."""
        pass

    @abstractmethod
    def set_owner(self, path: str, user: str, group: str | None = None) -> None:
        """Change owner of a file or directory."""
        pass

    @abstractmethod
    def write_file(
        self,
        content: str,
        file: str,
        mode: int | None = None,
        user: str | None = None,
        group: str | None = None,
    ) -> None:
        """Write content to a file, optionally restricting access to it."""
        pass

    @abstractmethod
    def exec(
        self,
        command: list[str],
        cwd: str | None = None,
        env: dict[str, str] | None = None,
        timeout: float | None = None,
        suppress_error_log: bool = False,
    ) -> tuple[str, str]:
        """Run a command on the workload substrate."""
        pass

    @abstractmethod
    def exec_as(
        self,
        user: str,
        command: list[str],
        cwd: str | None = None,
        timeout: float | None = None,
    ) -> tuple[str, str]:
        """Run a command as another system user."""
        pass

    @staticmethod
    def generate_secret(nbytes: int = SECRET_KEY_BYTES) -> str:
        """Create hex encoded random secret.

        Returns:
            String of `2 * nbytes` hexadecimal characters
        """
        return secrets.token_hex(nbytes)
