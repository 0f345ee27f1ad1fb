#!/usr/bin/env python3
# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

"""Config manager."""

import logging
from typing import Any

import yaml

from core.config import InstanceConfig
from core.literals import APP_MODULE, SETTINGS_ENV_VAR
from core.workload import RuntimeEnvironment, WorkloadBase

logger = logging.getLogger(__name__)

SETTINGS_HEADER = "# SearXNG settings\n"
SETTINGS_MODE = 0o640

ENABLED_PLUGINS = [
    "Hash plugin",
    "Self Information",
    "Tracker URL remover",
    "Ahmia blacklist",
]


class ConfigManager:
    """Manager of config files."""

    def __init__(
        self,
        workload: WorkloadBase,
        user: str,
        redis_unit: str,
    ):
        self.workload = workload
        self.user = user
        self.redis_unit = redis_unit

    def render_settings(self, config: InstanceConfig) -> bool:
        """Generate and write SearXNG settings, readable by the service account only.

        Returns:
            whether settings were changed.
        """
        content = SETTINGS_HEADER + yaml.dump(
            self._settings(config),
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )

        changed = not (
            self.workload.paths.settings.exists()
            and self.workload.paths.settings.read_text() == content
        )

        # rewritten anyway so that ownership and mode get restored
        self.workload.write_file(
            content,
            self.workload.paths.settings.as_posix(),
            mode=SETTINGS_MODE,
            user=self.user,
            group=self.user,
        )
        return changed

    def render_unit(self, runtime: RuntimeEnvironment) -> bool:
        """Generate and write systemd unit of the application service.

        Returns:
            whether unit was changed.
        """
        content = self._render_unit(self._unit(runtime))

        if (
            self.workload.paths.unit.exists()
            and self.workload.paths.unit.read_text() == content
        ):
            return False

        self.workload.write_file(content, self.workload.paths.unit.as_posix())
        return True

    def _settings(self, config: InstanceConfig) -> dict[str, Any]:
        return (
            {"use_default_settings": True}
            | self._general_config(config.debug)
            | self._server_config(config)
            | {"redis": {"url": config.redis_url}}
            | {"ui": {"static_use_hash": True}}
            | {"enabled_plugins": list(ENABLED_PLUGINS)}
            | self._search_config()
        )

    @staticmethod
    def _general_config(debug: bool) -> dict[str, Any]:
        return {
            "general": {
                "debug": debug,
                "instance_name": "SearXNG",
                "privacypolicy_url": False,
                "contact_url": False,
            }
        }

    @staticmethod
    def _server_config(config: InstanceConfig) -> dict[str, Any]:
        return {
            "server": {
                "bind_address": config.bind_address,
                "port": config.port,
                "secret_key": config.secret_key,
                "limiter": True,
                "image_proxy": True,
            }
        }

    @staticmethod
    def _search_config() -> dict[str, Any]:
        return {
            "search": {
                "safe_search": 2,
                "autocomplete": "google",
            },
            "engines": [
                {"name": "google", "engine": "google", "shortcut": "gg", "use_mobile_ui": False},
                {
                    "name": "duckduckgo",
                    "engine": "duckduckgo",
                    "shortcut": "ddg",
                    "display_error_messages": True,
                },
                {"name": "wikipedia", "engine": "wikipedia", "shortcut": "wp"},
                {"name": "github", "engine": "github", "shortcut": "gh"},
            ],
        }

    def _unit(self, runtime: RuntimeEnvironment) -> dict[str, dict[str, str]]:
        settings_path = self.workload.paths.settings.as_posix()
        return {
            "Unit": {
                "Description": "SearXNG service",
                "After": f"network.target {self.redis_unit}.service",
                "Wants": f"{self.redis_unit}.service",
            },
            "Service": {
                "Type": "simple",
                "User": self.user,
                "Group": self.user,
                "Environment": f'"{SETTINGS_ENV_VAR}={settings_path}"',
                "ExecStart": f"{runtime.python} -m {APP_MODULE}",
                "WorkingDirectory": self.workload.paths.source_dir.as_posix(),
                "Restart": "always",
            },
            "Install": {
                "WantedBy": "multi-user.target",
            },
        }

    @staticmethod
    def _render_unit(sections: dict[str, dict[str, str]]) -> str:
        return "\n".join(
            "\n".join([f"[{section}]", *[f"{key}={value}" for key, value in options.items()]])
            + "\n"
            for section, options in sections.items()
        )
