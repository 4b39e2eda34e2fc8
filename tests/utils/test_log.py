"""Tests for stderr logging setup."""

from __future__ import annotations

import io
import logging

import pytest

from toolwire.utils.log import configure_logging


@pytest.fixture(autouse=True)
def _restore_logger():
    yield
    logger = logging.getLogger("toolwire")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


class TestConfigureLogging:
    def test_format(self) -> None:
        stream = io.StringIO()
        configure_logging("DEBUG", stream=stream)
        logging.getLogger("toolwire.protocol.loop").debug("Received message: %s", "{}")
        assert stream.getvalue() == "[DEBUG] Received message: {}\n"

    def test_level_filters(self) -> None:
        stream = io.StringIO()
        configure_logging("warning", stream=stream)
        log = logging.getLogger("toolwire.tools")
        log.info("hidden")
        log.error("shown")
        assert stream.getvalue() == "[ERROR] shown\n"

    def test_reconfigure_replaces_handler(self) -> None:
        first, second = io.StringIO(), io.StringIO()
        configure_logging("INFO", stream=first)
        logger = configure_logging("INFO", stream=second)
        assert len(logger.handlers) == 1
        logging.getLogger("toolwire").info("once")
        assert first.getvalue() == ""
        assert second.getvalue() == "[INFO] once\n"

    def test_defaults_to_stderr(self, capsys) -> None:
        configure_logging("INFO")
        logging.getLogger("toolwire").warning("careful")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "[WARNING] careful" in captured.err
