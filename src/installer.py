#!/usr/bin/env python3
# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

"""Installer definition."""

import logging

import typer

from common.exceptions import PrivilegeError, StepFailedError
from core.config import InstallerConfig, InstanceConfig
from core.statuses import Status
from core.workload import RuntimeEnvironment, WorkloadBase
from managers.account import AccountManager
from managers.config import ConfigManager
from managers.environment import EnvironmentManager
from managers.network import NetworkManager
from managers.packages import PackageManager
from managers.questionnaire import ConfigurationSource
from managers.service import ServiceManager
from managers.source import SourceManager

logger = logging.getLogger(__name__)


class SearxngInstaller:
    """Provisioning of a SearXNG instance on this host."""

    def __init__(
        self,
        config: InstallerConfig,
        workload: WorkloadBase,
        source: ConfigurationSource,
    ):
        self.config = config
        self.workload = workload
        self.source = source

        self.package_manager = PackageManager(workload=workload)
        self.service_manager = ServiceManager(workload=workload)
        self.account_manager = AccountManager(workload=workload, user=config.service_user)
        self.source_manager = SourceManager(
            workload=workload, user=config.service_user, repository_url=config.repository_url
        )
        self.environment_manager = EnvironmentManager(workload=workload, user=config.service_user)
        self.config_manager = ConfigManager(
            workload=workload, user=config.service_user, redis_unit=config.redis_unit
        )
        self.network_manager = NetworkManager(workload=workload)

    def run(self) -> InstanceConfig:
        """Run all provisioning steps in order, stopping at the first fatal one."""
        self.check_privileges()
        self.install_packages()
        self.ensure_redis()
        self.provision_account()
        self.acquire_source()
        runtime = self.setup_environment()
        instance = self.configure()
        self.render_settings(instance)
        self.register_service(runtime)
        self.report(instance)
        return instance

    def check_privileges(self) -> None:
        """Abort unless running as root."""
        if not self.workload.is_root:
            raise PrivilegeError()

    def install_packages(self) -> None:
        """Refresh package lists and install system dependencies."""
        self._announce(Status.INSTALLING_PACKAGES)
        self._unchecked(self.package_manager.refresh(), "package lists refresh")
        self._unchecked(
            self.package_manager.install(self.config.system_packages), "system packages install"
        )

    def ensure_redis(self) -> None:
        """Make sure the Redis daemon runs, starting it once if needed."""
        unit = self.config.redis_unit
        if self.service_manager.ensure_active(
            unit,
            self.config.recovery_delay,
            on_recover=lambda: self._announce(Status.STARTING_REDIS),
        ):
            logger.info(f"{unit} started")
        else:
            logger.debug(f"{unit} is active")

    def provision_account(self) -> None:
        """Create the service account and its directories."""
        self._announce(Status.CREATING_ACCOUNT)
        self._unchecked(self.account_manager.ensure_user(), "service account creation")
        directories = [
            self.workload.paths.install_root.as_posix(),
            self.workload.paths.config_dir.as_posix(),
        ]
        self._unchecked(
            self.account_manager.ensure_directories(directories), "directories creation"
        )

    def acquire_source(self) -> None:
        """Clone the application repository or pull into the existing checkout."""
        self._announce(Status.CLONING_SOURCE)
        if self.source_manager.is_cloned:
            self._announce(Status.UPDATING_SOURCE)
            self._unchecked(self.source_manager.update(), "repository update")
        else:
            self._unchecked(self.source_manager.clone(), "repository clone")

    def setup_environment(self) -> RuntimeEnvironment:
        """Create the virtual environment and install the application into it."""
        self._announce(Status.SETTING_UP_ENVIRONMENT)
        self._unchecked(self.environment_manager.create(), "virtual environment creation")
        runtime = self.environment_manager.activate()

        self._announce(Status.INSTALLING_DEPENDENCIES)
        self.environment_manager.install(runtime, self.config.bootstrap_packages, upgrade=True)
        self.environment_manager.install(runtime, self.config.extra_packages)
        self.environment_manager.install_editable(
            runtime, self.workload.paths.source_dir.as_posix()
        )
        return runtime

    def configure(self) -> InstanceConfig:
        """Collect instance configuration from the operator."""
        self._announce(Status.CONFIGURING)
        return self.source.collect()

    def render_settings(self, instance: InstanceConfig) -> None:
        """Write SearXNG settings file."""
        self._announce(Status.WRITING_SETTINGS, path=self.workload.paths.settings.as_posix())
        if not self.config_manager.render_settings(instance):
            logger.info("Settings unchanged, ownership and mode restored")

    def register_service(self, runtime: RuntimeEnvironment) -> None:
        """Write the systemd unit, then enable and start the service."""
        self._announce(Status.CREATING_SERVICE)
        if not self.config_manager.render_unit(runtime):
            logger.info(f"Unit {self.config.service_unit} unchanged")
        self._unchecked(self.service_manager.daemon_reload(), "systemd daemon reload")
        self._unchecked(
            self.service_manager.enable(self.config.service_unit), "service enable and start"
        )

    def report(self, instance: InstanceConfig) -> bool:
        """Print configuration summary and service status.

        Returns:
            whether the service is active.
        """
        unit = self.config.service_unit
        ip = self.network_manager.primary_ip()

        self._announce(Status.INSTALLED)
        typer.secho(f"Bind Address: {instance.bind_address}", fg=typer.colors.RED)
        typer.secho(f"Port: {instance.port}", fg=typer.colors.RED)
        typer.secho(f"Redis URL: {instance.redis_url}", fg=typer.colors.RED)
        typer.secho(f"Debug Mode: {str(instance.debug).lower()}", fg=typer.colors.RED)
        typer.secho(f"Secret Key: {instance.secret_key}", fg=typer.colors.RED)
        typer.echo("Service Status:")
        typer.echo(self.service_manager.status(unit))

        typer.secho(
            f"You can now access SearXNG at http://{ip}:{instance.port}", fg=typer.colors.GREEN
        )
        typer.secho(
            "Basic search engines have been configured (Google, DuckDuckGo, Wikipedia, GitHub)",
            fg=typer.colors.GREEN,
        )
        typer.secho(
            f"You can modify the engines in {self.workload.paths.settings.as_posix()}",
            fg=typer.colors.GREEN,
        )

        if self.service_manager.is_active(unit):
            self._announce(Status.ACTIVE)
            return True

        logger.warning(f"{unit} is not active after installation")
        typer.echo(Status.NOT_ACTIVE.value.format(unit=unit))
        return False

    def _announce(self, status: Status, **kwargs: str) -> None:
        message = status.value.format(**kwargs)
        logger.debug(message)
        typer.secho(message, fg=typer.colors.GREEN)

    def _unchecked(self, success: bool, step: str) -> None:
        if success:
            return
        if self.config.strict:
            raise StepFailedError(step)
        logger.warning(f"Step '{step}' failed, continuing")
