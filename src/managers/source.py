#!/usr/bin/env python3
# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

"""Application source manager."""

import logging

from common.exceptions import ExecError
from core.workload import WorkloadBase

logger = logging.getLogger(__name__)

GIT = "git"
GIT_TIMEOUT = 600


class SourceManager:
    """Manager of the application repository checkout."""

    def __init__(self, workload: WorkloadBase, user: str, repository_url: str):
        self._workload = workload
        self.user = user
        self.repository_url = repository_url

    @property
    def source_dir(self) -> str:
        """Path of the checkout."""
        return self._workload.paths.source_dir.as_posix()

    @property
    def is_cloned(self) -> bool:
        """Whether checkout directory is present."""
        return self._workload.path_exists(self.source_dir)

    def update(self) -> bool:
        """Pull latest changes into the existing checkout.

        Returns:
            whether operation was successful.
        """
        try:
            self._workload.exec_as(
                self.user, [GIT, "pull"], cwd=self.source_dir, timeout=GIT_TIMEOUT
            )
            return True
        except ExecError as e:
            logger.warning(f"git pull failed: {e.stderr}")
            return False

    def clone(self) -> bool:
        """Clone the repository into the checkout directory.

        Returns:
            whether operation was successful.
        """
        try:
            self._workload.exec_as(
                self.user,
                [GIT, "clone", self.repository_url, self.source_dir],
                timeout=GIT_TIMEOUT,
            )
            return True
        except ExecError as e:
            logger.warning(f"git clone failed: {e.stderr}")
            return False
