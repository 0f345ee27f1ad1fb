#!/usr/bin/env python3
# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

"""Systemd service manager."""

import logging
from typing import Callable

from tenacity import RetryCallState, Retrying, retry_if_result, stop_after_attempt, wait_fixed

from common.exceptions import DaemonStartError, ExecError
from core.workload import WorkloadBase

logger = logging.getLogger(__name__)

SYSTEMCTL = "systemctl"


class ServiceManager:
    """Manager of systemd units."""

    def __init__(self, workload: WorkloadBase):
        self._workload = workload

    def is_active(self, unit: str) -> bool:
        """Whether unit is active."""
        try:
            self._workload.exec([SYSTEMCTL, "is-active", "--quiet", unit], suppress_error_log=True)
            return True
        except ExecError:
            return False

    def enable(self, unit: str) -> bool:
        """Enable unit and start it right away.

        Returns:
            whether operation was successful.
        """
        try:
            self._workload.exec([SYSTEMCTL, "enable", "--now", unit])
            return True
        except ExecError:
            return False

    def daemon_reload(self) -> bool:
        """Reload systemd unit files.

        Returns:
            whether operation was successful.
        """
        try:
            self._workload.exec([SYSTEMCTL, "daemon-reload"])
            return True
        except ExecError:
            return False

    def status(self, unit: str) -> str:
        """Get `systemctl status` report of the unit, also for inactive units."""
        try:
            stdout, _ = self._workload.exec(
                [SYSTEMCTL, "status", unit, "--no-pager"], suppress_error_log=True
            )
        except ExecError as e:
            stdout = e.stdout
        return stdout

    def ensure_active(
        self, unit: str, delay: float, on_recover: Callable[[], None] | None = None
    ) -> bool:
        """Make sure the unit is active, enabling and starting it once if needed.

        `on_recover` is called before the unit gets enabled.

        Returns:
            whether the unit had to be recovered.

        Raises:
            DaemonStartError: unit is still inactive `delay` seconds after start.
        """
        recovered = False

        def _recover(_: RetryCallState) -> None:
            nonlocal recovered
            recovered = True
            logger.info(f"{unit} is not active, enabling and starting it")
            if on_recover is not None:
                on_recover()
            self.enable(unit)

        retrying = Retrying(
            stop=stop_after_attempt(2),
            wait=wait_fixed(delay),
            retry=retry_if_result(lambda active: not active),
            before_sleep=_recover,
            retry_error_callback=lambda _: False,
        )
        if not retrying(self.is_active, unit):
            logger.error(f"{unit} failed to start")
            raise DaemonStartError(unit)

        return recovered
