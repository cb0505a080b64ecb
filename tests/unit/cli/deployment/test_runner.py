"""Tests for the command runner."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from src.cli.deployment.shell_commands.runner import (
    COMMAND_NOT_EXECUTABLE,
    COMMAND_NOT_FOUND,
    CommandRunner,
    redact,
)


@pytest.fixture
def runner() -> CommandRunner:
    return CommandRunner(Path("/test/project"), env={"HELM_HOST": "localhost:44134"})


@patch("subprocess.run")
def test_run_executes_command(mock_run, runner):
    """Test that run() executes subprocess with correct arguments."""
    mock_run.return_value = subprocess.CompletedProcess(
        args=[], returncode=0, stdout="ok", stderr=""
    )

    result = runner.run(["helm", "lint", "chart"])

    assert result.success
    assert result.stdout == "ok"
    call_args = mock_run.call_args
    assert call_args.args[0] == ["helm", "lint", "chart"]
    assert call_args.kwargs["cwd"] == Path("/test/project")
    assert call_args.kwargs["env"]["HELM_HOST"] == "localhost:44134"


@patch("subprocess.run")
def test_run_reports_failure(mock_run, runner):
    mock_run.return_value = subprocess.CompletedProcess(
        args=[], returncode=2, stdout=None, stderr="bad chart"
    )

    result = runner.run(["helm", "lint", "chart"])

    assert not result.success
    assert result.returncode == 2
    assert result.stdout == ""
    assert result.stderr == "bad chart"


@patch("subprocess.run", side_effect=FileNotFoundError("No such file: 'helm'"))
def test_run_missing_executable(mock_run, runner):
    result = runner.run(["helm", "version"])

    assert not result.success
    assert result.returncode == COMMAND_NOT_FOUND
    assert "helm" in result.stderr


@patch("subprocess.run", side_effect=PermissionError("Permission denied: 'helm'"))
def test_run_non_executable_binary(mock_run, runner):
    result = runner.run(["helm", "version"])

    assert not result.success
    assert result.returncode == COMMAND_NOT_EXECUTABLE
    assert "Permission denied" in result.stderr


def test_build_env_layers_over_process_environment(runner, monkeypatch):
    monkeypatch.setenv("HELM_HOST", "elsewhere:1")
    monkeypatch.setenv("HOME", "/home/ci")

    env = runner.build_env()

    assert env["HELM_HOST"] == "localhost:44134"
    assert env["HOME"] == "/home/ci"


@patch("subprocess.Popen")
def test_run_streaming_forwards_lines(mock_popen, runner):
    process = MagicMock()
    process.stdout.readline.side_effect = ["line one\n", "\n", "line two\n", ""]
    process.returncode = 0
    mock_popen.return_value = process
    seen: list[str] = []

    result = runner.run_streaming(["helm", "upgrade"], on_output=seen.append)

    assert result.success
    assert seen == ["line one", "line two"]
    assert result.stdout == "line one\nline two"
    assert mock_popen.call_args.kwargs["env"]["PYTHONUNBUFFERED"] == "1"


@patch("subprocess.Popen", side_effect=FileNotFoundError("helm"))
def test_run_streaming_missing_executable(mock_popen, runner):
    result = runner.run_streaming(["helm", "upgrade"])

    assert not result.success
    assert result.returncode == COMMAND_NOT_FOUND


@patch("subprocess.Popen", side_effect=PermissionError("helm"))
def test_run_streaming_non_executable_binary(mock_popen, runner):
    result = runner.run_streaming(["helm", "upgrade"])

    assert not result.success
    assert result.returncode == COMMAND_NOT_EXECUTABLE


@patch("subprocess.Popen")
def test_spawn_starts_background_process(mock_popen, runner):
    process = MagicMock(pid=123)
    mock_popen.return_value = process

    assert runner.spawn(["tiller", "--storage=secret"]) is process
    assert mock_popen.call_args.args[0] == ["tiller", "--storage=secret"]
    assert mock_popen.call_args.kwargs["env"]["HELM_HOST"] == "localhost:44134"


def test_redact_masks_credentials():
    cmd = [
        "kubectl",
        "config",
        "set-credentials",
        "deployer",
        "--token=abc",
        "--set",
        "registry.secret.password=hunter2",
        "--set",
        "image.tag=abc1234",
    ]

    text = redact(cmd)

    assert "--token=abc" not in text
    assert "hunter2" not in text
    assert "--token=***" in text
    assert "registry.secret.password=***" in text
    assert "image.tag=abc1234" in text
