#!/usr/bin/env python3
# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

"""System package manager."""

import logging
import os

from common.exceptions import ExecError
from core.workload import WorkloadBase

logger = logging.getLogger(__name__)

APT = "apt-get"
APT_TIMEOUT = 1800


class PackageManager:
    """Manager of OS packages installed with apt."""

    def __init__(self, workload: WorkloadBase):
        self._workload = workload

    def refresh(self) -> bool:
        """Update package lists and upgrade installed packages.

        Returns:
            whether both update and upgrade succeeded.
        """
        if not self._apt(["update"]):
            return False
        return self._apt(["upgrade", "-y"])

    def install(self, packages: list[str]) -> bool:
        """Install packages, already installed ones are left as is.

        Returns:
            whether operation was successful.
        """
        return self._apt(["install", "-y", *packages])

    def _apt(self, args: list[str]) -> bool:
        env = dict(os.environ, DEBIAN_FRONTEND="noninteractive")
        try:
            self._workload.exec([APT, *args], env=env, timeout=APT_TIMEOUT)
            return True
        except ExecError as e:
            logger.warning(f"apt {args[0]} failed: {e.stderr}")
            return False
