# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from cli import app
from common.exceptions import DaemonStartError, DialogUnavailableError, PrivilegeError
from core.prompts import TerminalPrompts, WhiptailPrompts
from managers.questionnaire import AnswersFile, Questionnaire

runner = CliRunner()


def test_successful_run_exits_zero():
    with patch("cli.SearxngInstaller") as installer:
        result = runner.invoke(app, [])

    assert result.exit_code == 0
    kwargs = installer.call_args.kwargs
    assert isinstance(kwargs["source"], Questionnaire)
    assert isinstance(kwargs["source"].prompts, WhiptailPrompts)
    assert kwargs["config"].recovery_delay == 2.0
    assert not kwargs["config"].strict
    installer.return_value.run.assert_called_once()


def test_options_are_passed_to_installer(tmp_path: Path):
    answers = tmp_path / "answers.yaml"
    answers.write_text("port: 8888\n")

    with patch("cli.SearxngInstaller") as installer:
        result = runner.invoke(
            app,
            [
                "--answers",
                answers.as_posix(),
                "--repository",
                "https://example.com/searxng.git",
                "--recovery-delay",
                "5",
                "--strict",
            ],
        )

    assert result.exit_code == 0
    kwargs = installer.call_args.kwargs
    assert isinstance(kwargs["source"], AnswersFile)
    assert kwargs["config"].repository_url == "https://example.com/searxng.git"
    assert kwargs["config"].recovery_delay == 5.0
    assert kwargs["config"].strict


def test_terminal_frontend():
    with patch("cli.SearxngInstaller") as installer:
        result = runner.invoke(app, ["--frontend", "terminal"])

    assert result.exit_code == 0
    assert isinstance(installer.call_args.kwargs["source"].prompts, TerminalPrompts)


def test_daemon_failure_exits_one():
    with patch("cli.SearxngInstaller") as installer:
        installer.return_value.run.side_effect = DaemonStartError("redis-server")
        result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert "Failed to start redis-server" in result.output


def test_non_root_exits_one():
    with patch("cli.SearxngInstaller") as installer:
        installer.return_value.run.side_effect = PrivilegeError()
        result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert "must be run as root" in result.output


def test_missing_answers_file_rejected(tmp_path: Path):
    with patch("cli.SearxngInstaller") as installer:
        result = runner.invoke(app, ["--answers", (tmp_path / "missing.yaml").as_posix()])

    assert result.exit_code != 0
    installer.assert_not_called()


def test_missing_whiptail_exits_one():
    with patch("cli.SearxngInstaller") as installer:
        installer.return_value.run.side_effect = DialogUnavailableError("whiptail")
        result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert "whiptail is not installed" in result.output
