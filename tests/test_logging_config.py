"""Tests for logging configuration."""

import json
import logging
import sys

import pytest

from sectest.logging_config import LOGGER_NAME, SecTestLogFormatter, configure_logging, get_logger


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def _record(msg="checked", exc_info=None, **extra):
    record = logging.LogRecord("sectest.security", logging.WARNING, __file__, 1, msg, None, exc_info)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestConfigureLogging:
    """Levels, handlers and propagation."""

    def test_level_and_propagation(self):
        logger = configure_logging("debug")
        assert logger is get_logger()
        assert logger.level == logging.DEBUG
        assert logger.propagate is False

    def test_unknown_level_falls_back_to_warning(self):
        assert configure_logging("LOUD").level == logging.WARNING

    def test_repeated_calls_do_not_stack_handlers(self):
        configure_logging("INFO")
        logger = configure_logging("INFO")
        assert len(logger.handlers) == 1

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "sectest.log"
        logger = configure_logging("INFO", log_file=str(log_file), enable_console=False)
        assert len(logger.handlers) == 1
        logging.getLogger("sectest.cli").info("report written")
        logger.handlers[0].flush()
        assert "report written" in log_file.read_text()

    def test_json_file_output(self, tmp_path):
        log_file = tmp_path / "sectest.log"
        configure_logging("INFO", log_file=str(log_file), json_format=True, enable_console=False)
        logging.getLogger("sectest.suite").info("suite finished", extra={"passed": 11, "failed": 5})
        entry = json.loads(log_file.read_text().strip())
        assert entry["message"] == "suite finished"
        assert entry["logger"] == "sectest.suite"
        assert (entry["passed"], entry["failed"]) == (11, 5)


class TestJsonFormatter:
    """One JSON object per record."""

    def test_basic_fields(self):
        entry = json.loads(SecTestLogFormatter().format(_record()))
        assert entry["level"] == "WARNING"
        assert entry["message"] == "checked"
        assert "timestamp" in entry

    def test_known_extra_fields_only(self):
        entry = json.loads(SecTestLogFormatter().format(_record(check="XSS Prevention", vulnerable=True, secret="x")))
        assert entry["check"] == "XSS Prevention"
        assert entry["vulnerable"] is True
        assert "secret" not in entry

    def test_exception(self):
        try:
            raise ValueError("broken manifest")
        except ValueError:
            record = _record(exc_info=sys.exc_info())
        entry = json.loads(SecTestLogFormatter().format(record))
        assert "ValueError: broken manifest" in entry["exception"]
