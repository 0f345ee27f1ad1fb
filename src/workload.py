#!/usr/bin/env python3
# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

"""Local host workload."""

import logging
import os
import shutil
import subprocess

from charmlibs import pathops
from typing_extensions import override

from common.exceptions import ExecError
from core.config import InstallerConfig
from core.workload import SearxngPaths, WorkloadBase

logger = logging.getLogger(__name__)


class SearxngWorkload(WorkloadBase):
    """Implementation of WorkloadBase for the local host."""

    def __init__(self, config: InstallerConfig) -> None:
        super().__init__()
        self.paths = SearxngPaths(config)

    @property
    @override
    def is_root(self) -> bool:
        return os.geteuid() == 0

    @override
    def path_exists(self, path: str) -> bool:
        return pathops.LocalPath(path).exists()

    @override
    def make_directory(self, directory: str) -> None:
        pathops.LocalPath(directory).mkdir(parents=True, exist_ok=True)

    @override
    def set_owner(self, path: str, user: str, group: str | None = None) -> None:
        shutil.chown(path, user=user, group=group or user)

    @override
    def write_file(
        self,
        content: str,
        file: str,
        mode: int | None = None,
        user: str | None = None,
        group: str | None = None,
    ) -> None:
        path = pathops.LocalPath(file)
        path.parent.mkdir(exist_ok=True, parents=True)
        path.write_text(content, mode=mode, user=user, group=group)

    @override
    def exec(
        self,
        command: list[str],
        cwd: str | None = None,
        env: dict[str, str] | None = None,
        timeout: float | None = None,
        suppress_error_log: bool = False,
    ) -> tuple[str, str]:
        try:
            result = subprocess.run(
                command,
                check=True,
                text=True,
                capture_output=True,
                cwd=cwd,
                env=env,
                timeout=timeout,
            )
            stdout = result.stdout.strip()
            stderr = result.stderr.strip()
            logger.debug("Executed command: %s", " ".join(command))
            logger.debug("STDOUT: %s", stdout)
            logger.debug("STDERR: %s", stderr)
            return stdout, stderr
        except subprocess.CalledProcessError as e:
            stdout = (e.stdout or "").strip()
            stderr = (e.stderr or "").strip()
            if not suppress_error_log:
                logger.error(
                    "Got non-zero return code %s while executing command: %s",
                    e.returncode,
                    " ".join(command),
                )
            logger.debug("STDOUT: %s", stdout)
            logger.debug("STDERR: %s", stderr)
            raise ExecError(stdout, stderr)
        except subprocess.TimeoutExpired as e:
            stdout = _decode(e.stdout)
            stderr = _decode(e.stderr)
            logger.error("Got timeout error while executing command: %s", " ".join(command))
            logger.debug("STDOUT: %s", stdout)
            logger.debug("STDERR: %s", stderr)
            raise ExecError(stdout, stderr)
        except FileNotFoundError as e:
            logger.error("Command not found: %s", command[0])
            raise ExecError("", str(e))

    @override
    def exec_as(
        self,
        user: str,
        command: list[str],
        cwd: str | None = None,
        timeout: float | None = None,
    ) -> tuple[str, str]:
        return self.exec(["sudo", "-u", user, "-H", *command], cwd=cwd, timeout=timeout)


def _decode(output: bytes | str | None) -> str:
    if not output:
        return ""
    if isinstance(output, bytes):
        return output.decode().strip()
    return output.strip()
