"""Batch validation of request payloads."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .config import failure_logging_enabled
from .errors import INVALID_REQUEST, VALIDATION_FAILED, BadRequestError, ConfigurationError
from .field import FieldStatus, validate_field
from .spec import FieldDescriptor, FieldSpec, normalize_specs


logger = logging.getLogger(__name__)

FieldSpecs = Iterable[FieldSpec | FieldDescriptor]


@dataclass(frozen=True)
class ValidationSuccess:
    """Validated payload, including any coerced values."""

    payload: dict[str, Any]


@dataclass(frozen=True)
class ValidationFailure:
    """First validation failure encountered for a payload."""

    message: str
    status_code: int = 400
    field: str | None = None
    code: str | None = None

    def to_error(self) -> BadRequestError:
        return BadRequestError(
            message=self.message,
            status_code=self.status_code,
            code=self.code or VALIDATION_FAILED,
            field=self.field,
        )


ValidationOutcome = ValidationSuccess | ValidationFailure


def _request_body(request: Any) -> Mapping[str, Any]:
    if isinstance(request, Mapping):
        return request
    body = getattr(request, "body", None)
    if isinstance(body, Mapping):
        return body
    if body is None:
        return {}
    raise BadRequestError(
        message="Request body must be an object",
        code=INVALID_REQUEST,
    )


def _evaluate(payload: Mapping[str, Any], descriptors: list[FieldDescriptor]) -> ValidationOutcome:
    validated = dict(payload)
    for descriptor in descriptors:
        result = validate_field(descriptor, validated)
        if result.error is not None:
            error = result.error
            if failure_logging_enabled():
                logger.warning(
                    "Request validation failed",
                    extra={
                        "field": error.field,
                        "error_code": error.code,
                        "status_code": error.status_code,
                    },
                )
            return ValidationFailure(
                message=error.message,
                status_code=error.status_code,
                field=error.field,
                code=error.code,
            )
        if descriptor.coerce and result.status is FieldStatus.PASSED:
            validated[descriptor.name] = result.value

    logger.debug("Request validation succeeded", extra={"fields": [d.name for d in descriptors]})
    return ValidationSuccess(payload=validated)


def check_payload(payload: Mapping[str, Any], params: FieldSpecs) -> ValidationOutcome:
    """Validate ``payload`` against ``params`` and return the outcome.

    Fields are checked in declaration order and evaluation stops at the first
    failure.  On success the returned payload is a new ``dict`` holding the
    original values overlaid with coerced ones; ``payload`` itself is left
    untouched.

    Raises
    ------
    ConfigurationError
        If any entry of ``params`` is malformed.
    """

    if not isinstance(payload, Mapping):
        raise ConfigurationError("Payload must be a mapping of field names to values")
    return _evaluate(payload, normalize_specs(params))


def validate_request_sync(request: Any, params: FieldSpecs) -> dict[str, Any]:
    """Blocking variant of :func:`validate_request` raising ``BadRequestError``."""

    descriptors = normalize_specs(params)
    outcome = _evaluate(_request_body(request), descriptors)
    if isinstance(outcome, ValidationFailure):
        raise outcome.to_error()
    return outcome.payload


def validate_request(request: Any, params: FieldSpecs) -> Awaitable[dict[str, Any]]:
    """Validate a request body and return an awaitable result.

    Parameters
    ----------
    request:
        Either the payload mapping itself or an object exposing it as
        ``request.body``.
    params:
        Ordered field specs: bare names, ``{name: type}`` shorthands, or full
        option mappings with a ``name`` key.

    Returns
    -------
    Awaitable[dict]
        Resolves to the validated payload, or raises ``BadRequestError`` with
        the first failure when awaited.

    Raises
    ------
    ConfigurationError
        Immediately, before anything is awaited, when ``params`` is malformed.
    """

    descriptors = normalize_specs(params)

    async def _resolve() -> dict[str, Any]:
        outcome = _evaluate(_request_body(request), descriptors)
        if isinstance(outcome, ValidationFailure):
            raise outcome.to_error()
        return outcome.payload

    return _resolve()


__all__ = [
    "ValidationFailure",
    "ValidationOutcome",
    "ValidationSuccess",
    "check_payload",
    "validate_request",
    "validate_request_sync",
]
