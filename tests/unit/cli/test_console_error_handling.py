import pytest
import typer
from rich.console import Console

from src.cli.deployment.helm_deployer.errors import (
    DeploymentError,
    MissingRequiredVariable,
)
from src.cli.shared import console as console_module
from src.cli.shared.console import CLIConsole, LogLevel, with_error_handling


def _recording_console(level: LogLevel) -> CLIConsole:
    return CLIConsole(level=level, console=Console(record=True, width=200))


def test_with_error_handling_handles_deployment_error():
    @with_error_handling
    def _command() -> None:
        raise DeploymentError("Boom", details="extra")

    with pytest.raises(typer.Exit) as excinfo:
        _command()

    assert excinfo.value.exit_code == 1


def test_with_error_handling_handles_missing_variable():
    @with_error_handling
    def _command() -> None:
        raise MissingRequiredVariable("CI_JOB_ID")

    with pytest.raises(typer.Exit) as excinfo:
        _command()

    assert excinfo.value.exit_code == 1


def test_with_error_handling_handles_keyboard_interrupt():
    @with_error_handling
    def _command() -> None:
        raise KeyboardInterrupt

    with pytest.raises(typer.Exit) as excinfo:
        _command()

    assert excinfo.value.exit_code == 130


def test_with_error_handling_reports_message(monkeypatch):
    recording = _recording_console(LogLevel.ERROR)
    monkeypatch.setattr(console_module, "console", recording)

    @with_error_handling
    def _command() -> None:
        raise DeploymentError("could not deploy template")

    with pytest.raises(typer.Exit):
        _command()

    assert "could not deploy template" in recording.console.export_text()


class TestLogLevel:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("error", LogLevel.ERROR),
            ("warn", LogLevel.WARN),
            ("debug", LogLevel.DEBUG),
            ("info", LogLevel.INFO),
            ("INFO", LogLevel.INFO),
            ("verbose", LogLevel.UNRECOGNIZED),
            ("", LogLevel.UNRECOGNIZED),
            (None, LogLevel.UNRECOGNIZED),
        ],
    )
    def test_parse(self, value, expected):
        assert LogLevel.parse(value) is expected

    def test_numeric_values(self):
        assert [int(level) for level in LogLevel] == [-1, 1, 2, 3, 4]


class TestCLIConsoleGating:
    def test_warn_level_shows_error_and_warn_only(self):
        c = _recording_console(LogLevel.WARN)

        c.error("e-msg")
        c.warn("w-msg")
        c.debug("d-msg")
        c.info("i-msg")

        text = c.console.export_text()
        assert "e-msg" in text
        assert "w-msg" in text
        assert "d-msg" not in text
        assert "i-msg" not in text

    def test_debug_level_hides_info(self):
        c = _recording_console(LogLevel.DEBUG)

        c.debug("d-msg")
        c.info("i-msg")

        text = c.console.export_text()
        assert "d-msg" in text
        assert "i-msg" not in text

    def test_info_level_shows_everything(self):
        c = _recording_console(LogLevel.INFO)

        c.error("e-msg")
        c.debug("d-msg")
        c.info("i-msg")
        c.ok("done")

        text = c.console.export_text()
        for msg in ("e-msg", "d-msg", "i-msg", "done"):
            assert msg in text

    def test_unrecognized_level_is_silent(self):
        c = _recording_console(LogLevel.UNRECOGNIZED)

        c.error("e-msg")
        c.info("i-msg")

        assert c.console.export_text() == ""

    def test_handle_error_exits_with_code(self):
        c = _recording_console(LogLevel.ERROR)

        with pytest.raises(typer.Exit) as excinfo:
            c.handle_error("failed", details="exit code 2", exit_code=3)

        assert excinfo.value.exit_code == 3
        text = c.console.export_text()
        assert "failed" in text
        assert "exit code 2" in text
