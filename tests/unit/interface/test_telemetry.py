"""Unit tests for ProjectTelemetry."""
import io
from unittest.mock import MagicMock

from rich.console import Console

from closure_end_linter.interface.telemetry import ProjectTelemetry


def test_handshake_prints_banner():
    tel = ProjectTelemetry("Test", "blue", "Hello")
    tel.console = MagicMock()
    tel.logger = MagicMock()
    tel.handshake()
    assert tel.console.print.call_count == 2
    tel.logger.info.assert_called()


def test_step_prints_and_logs():
    tel = ProjectTelemetry("Test", "blue", "Hello")
    tel.console = MagicMock()
    tel.logger = MagicMock()
    tel.step("Done")
    tel.console.print.assert_called_once()
    tel.logger.info.assert_called_once_with("Done")


def test_warning_prints_and_logs():
    tel = ProjectTelemetry("Test", "blue", "Hello")
    tel.console = MagicMock()
    tel.logger = MagicMock()
    tel.warning("Careful")
    tel.console.print.assert_called_once()
    tel.logger.warning.assert_called_once_with("Careful")


def test_error_prints_and_logs():
    tel = ProjectTelemetry("Test", "blue", "Hello")
    tel.console = MagicMock()
    tel.logger = MagicMock()
    tel.error("Failed")
    tel.logger.error.assert_called_once_with("Failed")


def test_messages_with_brackets_are_printed_verbatim():
    stream = io.StringIO()
    tel = ProjectTelemetry("Test", "blue", "Hello", console=Console(file=stream, color_system=None))
    tel.step("file=Sources/[Generated]/App.swift status=fixed")
    assert ">> file=Sources/[Generated]/App.swift status=fixed" in stream.getvalue()
