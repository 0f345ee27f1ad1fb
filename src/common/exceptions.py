#!/usr/bin/env python3
# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

"""Exceptions."""


class ExecError(Exception):
    """Error during executing command in workload."""

    def __init__(self, stdout: str, stderr: str) -> None:
        super().__init__("Error during command execution")
        self.stdout = stdout
        self.stderr = stderr

    stdout: str
    stderr: str


class ProvisioningError(Exception):
    """Unrecoverable provisioning step failure, aborts the run."""


class PrivilegeError(ProvisioningError):
    """Installer is not run by root."""

    def __init__(self) -> None:
        super().__init__("This script must be run as root")


class DaemonStartError(ProvisioningError):
    """Backing-store daemon failed to become active."""

    def __init__(self, unit: str) -> None:
        super().__init__(f"Failed to start {unit}. Please check the logs.")
        self.unit = unit


class EnvironmentActivationError(ProvisioningError):
    """Virtual environment interpreter is missing after creation."""

    def __init__(self, venv_dir: str) -> None:
        super().__init__(f"Failed to activate virtual environment at {venv_dir}")
        self.venv_dir = venv_dir


class DependencyInstallError(ProvisioningError):
    """Checked pip installation failed."""

    def __init__(self, packages: list[str], stderr: str = "") -> None:
        super().__init__(f"Failed to install Python packages: {' '.join(packages)}")
        self.packages = packages
        self.stderr = stderr


class InvalidAnswersError(ProvisioningError):
    """Pre-supplied configuration values did not pass validation."""


class DialogUnavailableError(ProvisioningError):
    """Dialog program needed for the interactive configuration is missing."""

    def __init__(self, program: str) -> None:
        super().__init__(
            f"{program} is not installed. Install it or use --frontend terminal."
        )
        self.program = program


class StepFailedError(ProvisioningError):
    """Unchecked step failed while running in strict mode."""

    def __init__(self, step: str) -> None:
        super().__init__(f"Provisioning step failed: {step}")
        self.step = step
