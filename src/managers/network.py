#!/usr/bin/env python3
# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

"""Network manager."""

import logging
import re
import socket

from common.exceptions import ExecError
from core.workload import WorkloadBase

logger = logging.getLogger(__name__)

_INET = re.compile(r"\binet\s+(\d+(?:\.\d+){3})")


class NetworkManager:
    """Introspection of the host network interfaces."""

    def __init__(self, workload: WorkloadBase):
        self._workload = workload

    def primary_ip(self) -> str:
        """Get the first non-loopback IPv4 address of this host."""
        try:
            stdout, _ = self._workload.exec(["ip", "-4", "-o", "addr", "show"])
        except ExecError:
            stdout = ""

        for address in _INET.findall(stdout):
            if not address.startswith("127."):
                return address

        logger.debug("No non-loopback address found on interfaces, resolving hostname")
        try:
            return socket.gethostbyname(socket.gethostname())
        except OSError:
            return "127.0.0.1"
