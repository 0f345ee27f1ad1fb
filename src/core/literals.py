#!/usr/bin/env python3
# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

"""Literals."""

SERVICE_USER = "searxng"
SERVICE_UNIT = "searxng"
REDIS_UNIT = "redis-server"

INSTALL_ROOT = "/usr/local/searxng"
CONFIG_DIR = "/etc/searxng"
SYSTEMD_DIR = "/etc/systemd/system"

REPOSITORY_URL = "https://github.com/searxng/searxng.git"
APP_MODULE = "searx.webapp"
SETTINGS_ENV_VAR = "SEARXNG_SETTINGS_PATH"

SYSTEM_PACKAGES = [
    "redis-server",
    "git",
    "python3-pip",
    "python3-venv",
    "build-essential",
    "python3-dev",
    "libffi-dev",
    "libssl-dev",
    "whiptail",
    "python3-yaml",
]
BOOTSTRAP_PACKAGES = ["pip", "setuptools", "wheel"]
EXTRA_PACKAGES = ["pyyaml"]

DAEMON_RECOVERY_DELAY = 2.0

DEFAULT_BIND_ADDRESS = "0.0.0.0"
DEFAULT_PORT = 8888
DEFAULT_REDIS_URL = "redis://127.0.0.1:6379/0"
SECRET_KEY_MIN_LENGTH = 32
SECRET_KEY_BYTES = 32
