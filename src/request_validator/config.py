"""Environment driven settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping

from dotenv import load_dotenv

from .errors import ConfigurationError


ENV_PREFIX = "REQUEST_VALIDATOR_"
LOG_FORMATS = ("json", "plain")

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _parse_bool(key: str, raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ConfigurationError(f"{key} must be a boolean flag, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for logging around validation."""

    log_level: str = "INFO"
    log_format: str = "json"
    log_failures: bool = True

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        if environ is None:
            load_dotenv()
            environ = os.environ

        log_level = environ.get(f"{ENV_PREFIX}LOG_LEVEL", cls.log_level).upper()
        log_format = environ.get(f"{ENV_PREFIX}LOG_FORMAT", cls.log_format).lower()
        if log_format not in LOG_FORMATS:
            raise ConfigurationError(
                f"{ENV_PREFIX}LOG_FORMAT must be one of: {', '.join(LOG_FORMATS)}"
            )

        failures_key = f"{ENV_PREFIX}LOG_FAILURES"
        log_failures = cls.log_failures
        if failures_key in environ:
            log_failures = _parse_bool(failures_key, environ[failures_key])

        return cls(log_level=log_level, log_format=log_format, log_failures=log_failures)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


def failure_logging_enabled() -> bool:
    """Read ``REQUEST_VALIDATOR_LOG_FAILURES`` from the process environment.

    Used on the rejection path, so it never loads ``.env`` and never raises:
    unrecognised values fall back to the default.
    """

    raw = os.environ.get(f"{ENV_PREFIX}LOG_FAILURES")
    if raw is None:
        return Settings.log_failures
    return raw.strip().lower() not in _FALSY


__all__ = ["Settings", "failure_logging_enabled", "get_settings", "ENV_PREFIX", "LOG_FORMATS"]
