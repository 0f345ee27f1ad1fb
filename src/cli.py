#!/usr/bin/env python3
# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

"""Command line interface of the installer."""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from common.exceptions import ProvisioningError
from core.config import InstallerConfig
from core.literals import DAEMON_RECOVERY_DELAY, REPOSITORY_URL
from core.prompts import build_prompts
from installer import SearxngInstaller
from managers.questionnaire import AnswersFile, ConfigurationSource, Questionnaire
from workload import SearxngWorkload

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class FrontendChoice(str, Enum):
    """Dialog frontends."""

    WHIPTAIL = "whiptail"
    TERMINAL = "terminal"


def setup_logging(verbose: bool) -> None:
    """Configure root logger."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT)


def install(
    frontend: FrontendChoice = typer.Option(
        FrontendChoice.WHIPTAIL,
        "--frontend",
        "-f",
        help="Dialogs used to ask for configuration values",
        case_sensitive=False,
    ),
    answers: Optional[Path] = typer.Option(
        None,
        "--answers",
        "-a",
        help="YAML file with configuration values, skips the dialogs",
        exists=True,
        dir_okay=False,
    ),
    repository: str = typer.Option(
        REPOSITORY_URL,
        "--repository",
        help="Git repository of the application",
    ),
    recovery_delay: float = typer.Option(
        DAEMON_RECOVERY_DELAY,
        "--recovery-delay",
        help="Seconds to wait for Redis after starting it",
        min=0,
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Abort when apt, git or systemctl commands fail",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (DEBUG logging)",
    ),
) -> None:
    """Install and start a SearXNG instance on this host."""
    setup_logging(verbose)

    try:
        config = InstallerConfig(
            repository_url=repository, recovery_delay=recovery_delay, strict=strict
        )
    except ValidationError as e:
        typer.secho(f"Invalid installer options: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    workload = SearxngWorkload(config)
    source: ConfigurationSource
    if answers is not None:
        source = AnswersFile(str(answers), workload)
    else:
        source = Questionnaire(build_prompts(frontend.value), workload)

    try:
        SearxngInstaller(config=config, workload=workload, source=source).run()
    except ProvisioningError as e:
        logger.debug("Provisioning aborted", exc_info=True)
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(1)


app = typer.Typer(
    name="searxng-install",
    help="Provision a SearXNG instance with Redis and systemd.",
    add_completion=False,
)
app.command()(install)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":  # pragma: nocover
    main()
