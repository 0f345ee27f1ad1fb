#!/usr/bin/env python3
# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

"""Operator dialogs."""

import logging
import subprocess
from abc import ABC, abstractmethod
from typing import Literal

import typer
from typing_extensions import override

from common.exceptions import DialogUnavailableError

logger = logging.getLogger(__name__)

Frontend = Literal["whiptail", "terminal"]

WHIPTAIL = "whiptail"
BOX_HEIGHT = 8
BOX_WIDTH = 78


class Prompts(ABC):
    """Base interface for blocking operator dialogs."""

    @abstractmethod
    def confirm(self, title: str, text: str) -> bool:
        """Ask a yes/no question."""
        pass

    @abstractmethod
    def ask(self, title: str, text: str, default: str = "") -> str:
        """Ask for a free-text value."""
        pass

    @abstractmethod
    def message(self, title: str, text: str, height: int = BOX_HEIGHT) -> None:
        """Show a message and wait for acknowledgement."""
        pass


class WhiptailPrompts(Prompts):
    """Modal whiptail dialogs.

    whiptail draws the dialog on stdout and prints the answer on stderr, so only
    stderr is captured.
    """

    def _run(self, args: list[str]) -> tuple[int, str]:
        try:
            result = subprocess.run(
                [WHIPTAIL, *args],
                stderr=subprocess.PIPE,
                text=True,
                check=False,
            )
        except FileNotFoundError:
            logger.error(f"{WHIPTAIL} not found")
            raise DialogUnavailableError(WHIPTAIL)
        logger.debug("whiptail %s returned %s", args[0], result.returncode)
        return result.returncode, result.stderr or ""

    @override
    def confirm(self, title: str, text: str) -> bool:
        returncode, _ = self._run(
            ["--title", title, "--yesno", text, str(BOX_HEIGHT), str(BOX_WIDTH)]
        )
        return returncode == 0

    @override
    def ask(self, title: str, text: str, default: str = "") -> str:
        args = ["--inputbox", text, str(BOX_HEIGHT), str(BOX_WIDTH)]
        if default:
            args.append(default)
        # a cancelled input box answers with an empty string
        _, answer = self._run([*args, "--title", title])
        return answer

    @override
    def message(self, title: str, text: str, height: int = BOX_HEIGHT) -> None:
        self._run(["--title", title, "--msgbox", text, str(height), str(BOX_WIDTH)])


class TerminalPrompts(Prompts):
    """Line based prompts for terminals without whiptail."""

    @override
    def confirm(self, title: str, text: str) -> bool:
        return typer.confirm(f"[{title}] {text}", default=False)

    @override
    def ask(self, title: str, text: str, default: str = "") -> str:
        return typer.prompt(f"[{title}] {text}", default=default, show_default=False)

    @override
    def message(self, title: str, text: str, height: int = BOX_HEIGHT) -> None:
        typer.echo(f"[{title}] {text}")


def build_prompts(frontend: Frontend) -> Prompts:
    """Get dialogs implementation for the frontend name."""
    if frontend == "terminal":
        return TerminalPrompts()
    return WhiptailPrompts()
