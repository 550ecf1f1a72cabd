"""Tests for logging setup."""

import io
import logging

import pytest

from utilkit.infrastructure.logging import get_logger, setup_logging


@pytest.fixture(autouse=True)
def _restore_root():
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)


class TestSetupLogging:
    def test_logs_go_to_stderr(self, capsys: pytest.CaptureFixture) -> None:
        """Command output on stdout stays free of log records."""
        setup_logging("INFO")
        get_logger("utilkit.test").info("bounds computed")
        captured = capsys.readouterr()
        assert "bounds computed" in captured.err
        assert "bounds computed" not in captured.out

    def test_custom_stream_and_format(self) -> None:
        stream = io.StringIO()
        setup_logging("DEBUG", format_string="%(levelname)s:%(message)s", stream=stream)
        get_logger("utilkit.test").debug("hello")
        assert stream.getvalue() == "DEBUG:hello\n"

    def test_level(self) -> None:
        stream = io.StringIO()
        setup_logging("warning", stream=stream)
        get_logger("utilkit.test").info("hidden")
        assert stream.getvalue() == ""
