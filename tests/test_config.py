from __future__ import annotations

import json
import logging
from typing import Iterator

import pytest

from request_validator.config import Settings, failure_logging_enabled, get_settings
from request_validator.errors import ConfigurationError
from request_validator.logging_config import JsonFormatter, configure_logging


@pytest.fixture
def restore_root_logger() -> Iterator[logging.Logger]:
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield root_logger
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


def test_settings_defaults():
    settings = Settings.from_env({})

    assert settings == Settings(log_level="INFO", log_format="json", log_failures=True)


def test_settings_from_environment_mapping():
    settings = Settings.from_env(
        {
            "REQUEST_VALIDATOR_LOG_LEVEL": "debug",
            "REQUEST_VALIDATOR_LOG_FORMAT": "PLAIN",
            "REQUEST_VALIDATOR_LOG_FAILURES": "off",
        }
    )

    assert settings.log_level == "DEBUG"
    assert settings.log_format == "plain"
    assert settings.log_failures is False


@pytest.mark.parametrize(
    "environ",
    [
        {"REQUEST_VALIDATOR_LOG_FORMAT": "xml"},
        {"REQUEST_VALIDATOR_LOG_FAILURES": "sometimes"},
    ],
)
def test_invalid_settings_raise_configuration_error(environ):
    with pytest.raises(ConfigurationError):
        Settings.from_env(environ)


def test_get_settings_reads_process_environment(monkeypatch):
    monkeypatch.setenv("REQUEST_VALIDATOR_LOG_LEVEL", "warning")

    assert get_settings().log_level == "WARNING"
    assert get_settings() is get_settings()


def test_json_formatter_includes_extras():
    record = logging.LogRecord(
        name="request_validator.orchestrator",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Request validation failed",
        args=(),
        exc_info=None,
    )
    record.field = "title"
    record.error_code = "missing_param"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["message"] == "Request validation failed"
    assert payload["logger"] == "request_validator.orchestrator"
    assert payload["extra"] == {"field": "title", "error_code": "missing_param"}


def test_configure_logging_installs_json_handler(restore_root_logger):
    configure_logging(Settings(log_level="DEBUG"))

    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1
    assert isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)


def test_configure_logging_plain_format(restore_root_logger):
    configure_logging(Settings(log_format="plain"))

    formatter = restore_root_logger.handlers[0].formatter
    assert not isinstance(formatter, JsonFormatter)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, True), ("false", False), ("OFF", False), ("yes", True), ("sometimes", True)],
)
def test_failure_logging_flag_is_read_leniently(monkeypatch, raw, expected):
    if raw is not None:
        monkeypatch.setenv("REQUEST_VALIDATOR_LOG_FAILURES", raw)

    assert failure_logging_enabled() is expected
