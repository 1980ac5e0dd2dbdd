"""Error types raised by the request validator.

Two disjoint families of errors exist:

``ConfigurationError``
    Raised synchronously when a field spec is malformed (a full options
    mapping without ``name``, an unknown ``type``...).  It signals a mistake
    in how the validator was invoked, never bad user input.

``BadRequestError`` (400)
    Raised, or delivered through the awaitable returned by
    :func:`request_validator.validate_request`, when the payload fails
    validation.  Only the first failing field is ever reported.

The ``code`` values carried by ``BadRequestError`` are:

``missing_param``
    The field is absent or blank.

``invalid_type``
    The (possibly coerced) value does not match the declared type.

``validation_failed``
    A chained or custom validator rejected the value.

``invalid_request``
    The HTTP body could not be read as a JSON object.
"""

from __future__ import annotations

from dataclasses import dataclass


MISSING_PARAM = "missing_param"
INVALID_TYPE = "invalid_type"
VALIDATION_FAILED = "validation_failed"
INVALID_REQUEST = "invalid_request"


class ConfigurationError(ValueError):
    """Raised when a field spec entry cannot be turned into a descriptor."""


@dataclass(eq=False)
class BadRequestError(Exception):
    """Exception representing a rejected request payload.

    Parameters
    ----------
    message:
        Human readable summary that can be surfaced in API responses.
    status_code:
        HTTP status code, always 400 for validation failures.
    code:
        Machine readable identifier for the failure kind.
    field:
        Name of the payload key that failed, when there is one.
    """

    message: str
    status_code: int = 400
    code: str = VALIDATION_FAILED
    field: str | None = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover - trivial override
        return self.message


__all__ = [
    "BadRequestError",
    "ConfigurationError",
    "INVALID_REQUEST",
    "INVALID_TYPE",
    "MISSING_PARAM",
    "VALIDATION_FAILED",
]
