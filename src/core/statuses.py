#!/usr/bin/env python3
# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

"""Installer progress statuses."""

from enum import Enum


class Status(Enum):
    """Collection of progress messages shown to the operator."""

    INSTALLING_PACKAGES = "Updating package lists and installing Redis..."
    STARTING_REDIS = "Starting Redis server..."
    CREATING_ACCOUNT = "Creating user and directories for SearXNG..."
    CLONING_SOURCE = "Cloning SearXNG repository..."
    UPDATING_SOURCE = "Directory exists, updating repository..."
    SETTING_UP_ENVIRONMENT = "Setting up Python environment..."
    INSTALLING_DEPENDENCIES = "Installing Python dependencies..."
    CONFIGURING = "Configuring SearXNG settings..."
    WRITING_SETTINGS = "Writing configuration to {path}..."
    CREATING_SERVICE = "Creating systemd service..."
    INSTALLED = "Installation complete. Here is a summary of your configurations:"
    ACTIVE = "SearXNG is running successfully!"
    NOT_ACTIVE = (
        "Warning: SearXNG service is not running. "
        "Please check the logs with: journalctl -u {unit}"
    )
