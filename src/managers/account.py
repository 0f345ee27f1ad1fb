#!/usr/bin/env python3
# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

"""Service account manager."""

import logging

from common.exceptions import ExecError
from core.workload import WorkloadBase

logger = logging.getLogger(__name__)

NOLOGIN_SHELL = "/bin/false"


class AccountManager:
    """Manager of the service account and the directories it owns."""

    def __init__(self, workload: WorkloadBase, user: str):
        self._workload = workload
        self.user = user

    @property
    def exists(self) -> bool:
        """Whether the service account is present."""
        try:
            self._workload.exec(["id", "-u", self.user], suppress_error_log=True)
            return True
        except ExecError:
            return False

    def ensure_user(self) -> bool:
        """Create a system account with login disabled, unless already present.

        Returns:
            whether the account exists afterwards.
        """
        if self.exists:
            logger.debug(f"User {self.user} already exists")
            return True
        try:
            self._workload.exec(["useradd", "-r", "-s", NOLOGIN_SHELL, self.user])
            logger.info(f"Created system user {self.user}")
            return True
        except ExecError:
            return False

    def ensure_directories(self, directories: list[str]) -> bool:
        """Create directories owned by the service account.

        Returns:
            whether all directories were created and handed over.
        """
        success = True
        for directory in directories:
            try:
                self._workload.make_directory(directory)
                self._workload.set_owner(directory, self.user, self.user)
            except (OSError, LookupError) as e:
                logger.warning(f"Failed to set up directory {directory}: {e}")
                success = False
        return success
