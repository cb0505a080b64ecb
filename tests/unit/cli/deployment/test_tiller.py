"""Tests for the local Tiller process handle."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from src.cli.deployment.shell_commands.tiller import TillerCommands, TillerProcess


@pytest.fixture
def process() -> MagicMock:
    process = MagicMock(spec=subprocess.Popen)
    process.pid = 4711
    process.poll.return_value = None
    return process


class TestTillerCommands:
    def test_start_spawns_with_storage_backend(self) -> None:
        runner = MagicMock()
        runner.spawn.return_value = MagicMock(pid=99)

        tiller = TillerCommands(runner).start("secret")

        runner.spawn.assert_called_once_with(["tiller", "--storage=secret"])
        assert tiller.pid == 99


class TestTillerProcess:
    @patch("os.kill")
    def test_alive_when_signal_zero_succeeds(self, mock_kill, process) -> None:
        assert TillerProcess(process.pid, process).is_alive() is True
        mock_kill.assert_called_once_with(4711, 0)

    @patch("os.kill", side_effect=ProcessLookupError)
    def test_dead_when_process_lookup_fails(self, mock_kill, process) -> None:
        assert TillerProcess(process.pid, process).is_alive() is False

    @patch("os.kill")
    def test_exited_child_is_dead(self, mock_kill, process) -> None:
        process.poll.return_value = 1

        assert TillerProcess(process.pid, process).is_alive() is False
        mock_kill.assert_not_called()

    def test_terminate_running_process(self, process) -> None:
        assert TillerProcess(process.pid, process).terminate() is True
        process.terminate.assert_called_once()
        process.wait.assert_called_once()

    def test_terminate_already_exited(self, process) -> None:
        process.poll.return_value = 0

        assert TillerProcess(process.pid, process).terminate() is False
        process.terminate.assert_not_called()

    def test_terminate_kills_after_timeout(self, process) -> None:
        process.wait.side_effect = [subprocess.TimeoutExpired("tiller", 1), 0]

        assert TillerProcess(process.pid, process).terminate(timeout=1) is True
        process.kill.assert_called_once()

    def test_terminate_race_with_exit(self, process) -> None:
        process.terminate.side_effect = ProcessLookupError

        assert TillerProcess(process.pid, process).terminate() is False
