#!/usr/bin/env python3
# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from core.config import InstallerConfig
from core.workload import SearxngPaths

logger = logging.getLogger(__name__)

GENERATED_SECRET = "0123456789abcdef" * 4


@pytest.fixture
def config(tmp_path: Path) -> InstallerConfig:
    """Installer config with all host paths under a temporary directory."""
    return InstallerConfig(
        install_root=(tmp_path / "usr/local/searxng").as_posix(),
        config_dir=(tmp_path / "etc/searxng").as_posix(),
        systemd_dir=(tmp_path / "etc/systemd/system").as_posix(),
        recovery_delay=0,
    )


@pytest.fixture
def workload(config: InstallerConfig) -> MagicMock:
    """Mocked workload with real paths."""
    workload = MagicMock(paths=SearxngPaths(config), is_root=True)
    workload.generate_secret.return_value = GENERATED_SECRET
    workload.exec.return_value = ("", "")
    workload.exec_as.return_value = ("", "")
    logger.info("Workload mocked")
    return workload
