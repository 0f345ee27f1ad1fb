# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from common.exceptions import ExecError
from core.config import InstallerConfig
from core.workload import RuntimeEnvironment
from workload import SearxngWorkload


def test_is_root_follows_effective_uid(config: InstallerConfig):
    with patch("workload.os.geteuid", return_value=0):
        assert SearxngWorkload(config).is_root
    with patch("workload.os.geteuid", return_value=1000):
        assert not SearxngWorkload(config).is_root


def test_exec_successful_command_returns_output(config: InstallerConfig):
    with patch("workload.subprocess.run") as mock_run:
        mock_run.return_value = subprocess.CompletedProcess(
            args=["echo", "hello"], returncode=0, stdout="hello\n", stderr=""
        )
        workload = SearxngWorkload(config)
        stdout, stderr = workload.exec(["echo", "hello"])
        assert stdout == "hello"
        assert stderr == ""


def test_exec_command_raises_on_failure(config: InstallerConfig):
    with patch("workload.subprocess.run") as mock_run:
        mock_run.side_effect = subprocess.CalledProcessError(
            returncode=1, cmd=["false"], output="", stderr="error"
        )
        workload = SearxngWorkload(config)
        with pytest.raises(ExecError) as e:
            workload.exec(["false"])
        assert "error" in e.value.stderr


def test_exec_command_raises_on_timeout(config: InstallerConfig):
    with patch("workload.subprocess.run") as mock_run:
        mock_run.side_effect = subprocess.TimeoutExpired(
            cmd=["sleep", "10"], timeout=1, output=b"partial", stderr=None
        )
        with pytest.raises(ExecError) as e:
            SearxngWorkload(config).exec(["sleep", "10"], timeout=1)
        assert e.value.stdout == "partial"
        assert e.value.stderr == ""


def test_exec_missing_executable_raises(config: InstallerConfig):
    with patch("workload.subprocess.run", side_effect=FileNotFoundError("no such file")):
        with pytest.raises(ExecError):
            SearxngWorkload(config).exec(["whiptail"])


def test_exec_as_runs_command_with_sudo(config: InstallerConfig):
    with patch.object(SearxngWorkload, "exec", return_value=("", "")) as exec:
        SearxngWorkload(config).exec_as("searxng", ["git", "pull"], cwd="/srv")
        exec.assert_called_once_with(
            ["sudo", "-u", "searxng", "-H", "git", "pull"], cwd="/srv", timeout=None
        )


def test_write_file_creates_parents(config: InstallerConfig, tmp_path: Path):
    workload = SearxngWorkload(config)
    target = tmp_path / "etc" / "searxng" / "settings.yml"

    workload.write_file("content", target.as_posix(), mode=0o640)

    assert target.read_text() == "content"
    assert target.stat().st_mode & 0o777 == 0o640
    assert workload.path_exists(target.as_posix())


def test_make_directory_is_idempotent(config: InstallerConfig, tmp_path: Path):
    workload = SearxngWorkload(config)
    directory = (tmp_path / "usr" / "local" / "searxng").as_posix()

    workload.make_directory(directory)
    workload.make_directory(directory)

    assert workload.path_exists(directory)


def test_paths_layout(config: InstallerConfig, tmp_path: Path):
    paths = SearxngWorkload(config).paths
    assert paths.source_dir.as_posix() == f"{tmp_path}/usr/local/searxng/searxng-src"
    assert paths.venv_dir.as_posix() == f"{tmp_path}/usr/local/searxng/searx-pyenv"
    assert paths.settings.as_posix() == f"{tmp_path}/etc/searxng/settings.yml"
    assert paths.unit.as_posix() == f"{tmp_path}/etc/systemd/system/searxng.service"


def test_runtime_environment_prepends_bin_dir():
    runtime = RuntimeEnvironment("/opt/venv")
    env = runtime.env({"PATH": "/usr/bin:/bin", "PYTHONHOME": "/usr"})

    assert runtime.python == "/opt/venv/bin/python"
    assert runtime.pip == "/opt/venv/bin/pip"
    assert env["VIRTUAL_ENV"] == "/opt/venv"
    assert env["PATH"] == "/opt/venv/bin:/usr/bin:/bin"
    assert "PYTHONHOME" not in env


def test_generate_secret_is_hex_encoded_32_bytes():
    secret = SearxngWorkload.generate_secret()
    assert len(secret) == 64
    int(secret, 16)
    assert secret != SearxngWorkload.generate_secret()
