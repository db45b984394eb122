"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging
import logging.handlers

import pytest

from feature_setting.config import TestConfig
from feature_setting.logging_config import LOGGER_NAMESPACE, JSONFormatter, get_logger, setup_logging


@pytest.fixture
def configured_logger(tmp_path):
    config = TestConfig(data_dir=tmp_path)
    logger = setup_logging(config)
    yield config, logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_json_formatter():
    """Test that JSONFormatter correctly formats log records."""
    formatter = JSONFormatter()

    record = logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname="test.py",
        lineno=42,
        msg="Synchronized %d setting(s)",
        args=(4,),
        exc_info=None,
    )
    record.module = "test_module"
    record.funcName = "test_function"
    record.klass = "app.MailerSetting"

    log_data = json.loads(formatter.format(record))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "test.logger"
    assert log_data["message"] == "Synchronized 4 setting(s)"
    assert log_data["function"] == "test_function"
    assert log_data["line"] == 42
    assert log_data["extra"] == {"klass": "app.MailerSetting"}
    assert "timestamp" in log_data


def test_json_formatter_with_exception():
    """Test that JSONFormatter correctly handles exceptions."""
    formatter = JSONFormatter()

    try:
        raise ValueError("Test error")
    except ValueError:
        import sys

        exc_info = sys.exc_info()

    record = logging.LogRecord(
        name="test.logger",
        level=logging.ERROR,
        pathname="test.py",
        lineno=42,
        msg="Error occurred",
        args=(),
        exc_info=exc_info,
    )

    log_data = json.loads(formatter.format(record))

    assert log_data["exception"]["type"] == "ValueError"
    assert "Test error" in log_data["exception"]["message"]
    assert log_data["exception"]["traceback"] is not None


def test_setup_logging(configured_logger, tmp_path):
    """Logging setup installs console + rotating JSON file handlers."""
    _, logger = configured_logger

    assert logger.name == LOGGER_NAMESPACE
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 2

    log_file = tmp_path / "logs" / "feature_setting.log"
    assert log_file.exists()

    get_logger("base").warning("Stale rows found")
    for handler in logger.handlers:
        handler.flush()

    lines = [line for line in log_file.read_text().splitlines() if line.strip()]
    entries = [json.loads(line) for line in lines]
    assert entries[0]["message"] == "Logging initialized"
    assert entries[-1]["message"] == "Stale rows found"
    assert entries[-1]["logger"] == "feature_setting.base"


def test_get_logger():
    """get_logger namespaces bare names and keeps package module names as-is."""
    assert get_logger("module1").name == "feature_setting.module1"
    assert get_logger("feature_setting.settings").name == "feature_setting.settings"


def test_repository_logger_is_namespaced(caplog):
    """Repository modules log under the package namespace."""
    from feature_setting.infra.repositories import base

    assert base.logger.name == "feature_setting.infra.repositories.base"
    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAMESPACE):
        base.logger.debug("Created row")

    assert "Created row" in caplog.messages


@pytest.mark.parametrize("dev_mode", [True, False])
def test_logging_levels_by_mode(tmp_path, dev_mode):
    """Console logging level adjusts based on dev mode."""
    config = TestConfig(data_dir=tmp_path)
    config.DEV_MODE = dev_mode

    logger = setup_logging(config)
    try:
        console_handler = next(
            handler
            for handler in logger.handlers
            if isinstance(handler, logging.StreamHandler)
            and not isinstance(handler, logging.handlers.RotatingFileHandler)
        )
        expected_level = logging.DEBUG if dev_mode else logging.WARNING
        assert console_handler.level == expected_level
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()


def test_synchronization_is_logged(sample_setting, caplog):
    with caplog.at_level(logging.INFO, logger=LOGGER_NAMESPACE):
        sample_setting.init_settings()

    assert any("Synchronized 4 setting(s)" in message for message in caplog.messages)
