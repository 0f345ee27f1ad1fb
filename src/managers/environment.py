#!/usr/bin/env python3
# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

"""Virtual environment manager."""

import logging

from common.exceptions import DependencyInstallError, EnvironmentActivationError, ExecError
from core.workload import RuntimeEnvironment, WorkloadBase

logger = logging.getLogger(__name__)

PYTHON = "python3"
PIP_TIMEOUT = 1800


class EnvironmentManager:
    """Manager of the virtual environment the application runs in."""

    def __init__(self, workload: WorkloadBase, user: str):
        self._workload = workload
        self.user = user

    @property
    def venv_dir(self) -> str:
        """Path of the virtual environment."""
        return self._workload.paths.venv_dir.as_posix()

    def create(self) -> bool:
        """Create the virtual environment as the service account.

        Returns:
            whether operation was successful.
        """
        try:
            self._workload.exec_as(self.user, [PYTHON, "-m", "venv", self.venv_dir])
            return True
        except ExecError as e:
            logger.warning(f"Failed to create virtual environment: {e.stderr}")
            return False

    def activate(self) -> RuntimeEnvironment:
        """Get the runtime environment of the virtual environment.

        Raises:
            EnvironmentActivationError: the environment has no interpreter.
        """
        runtime = RuntimeEnvironment(self.venv_dir)
        if not self._workload.path_exists(runtime.python):
            logger.error(f"No interpreter found in {self.venv_dir}")
            raise EnvironmentActivationError(self.venv_dir)
        return runtime

    def install(
        self, runtime: RuntimeEnvironment, packages: list[str], upgrade: bool = False
    ) -> None:
        """Install packages into the runtime environment.

        Raises:
            DependencyInstallError: pip failed.
        """
        command = [runtime.pip, "install"]
        if upgrade:
            command.append("--upgrade")
        try:
            self._workload.exec([*command, *packages], env=runtime.env(), timeout=PIP_TIMEOUT)
        except ExecError as e:
            raise DependencyInstallError(packages, e.stderr)

    def install_editable(self, runtime: RuntimeEnvironment, project_dir: str) -> None:
        """Install a local project in editable mode.

        Raises:
            DependencyInstallError: pip failed.
        """
        self.install(runtime, ["-e", project_dir])
