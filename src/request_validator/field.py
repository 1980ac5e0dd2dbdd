"""Validation of a single payload field against its descriptor."""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final

from .errors import INVALID_TYPE, MISSING_PARAM, VALIDATION_FAILED, BadRequestError
from .predicates import TYPE_CHECKS, is_number, v
from .spec import FieldDescriptor, FieldType


logger = logging.getLogger(__name__)

_NUMERIC_LITERAL: Final[re.Pattern[str]] = re.compile(
    r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
)
_INTEGER_LITERAL: Final[re.Pattern[str]] = re.compile(r"[+-]?\d+")


class FieldStatus(str, Enum):
    PASSED = "passed"
    SKIPPED = "skipped"
    REJECTED = "rejected"


@dataclass(frozen=True)
class FieldResult:
    """Outcome of validating one field."""

    status: FieldStatus
    value: Any = None
    error: BadRequestError | None = None


def is_blank(value: Any) -> bool:
    """Return ``True`` for values a request treats as not supplied.

    ``None``, ``False``, empty strings, numeric zero and NaN are blank.  Empty
    lists and mappings are considered supplied.
    """

    if value is None or value is False or value == "":
        return True
    if is_number(value):
        return value == 0
    return isinstance(value, float) and math.isnan(value)


def parse_number(value: Any) -> int | float:
    """Parse ``value`` as a number, returning NaN when it is not numeric."""

    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        if _INTEGER_LITERAL.fullmatch(text):
            return int(text)
        if _NUMERIC_LITERAL.fullmatch(text):
            return float(text)
        if text in ("Infinity", "+Infinity", "-Infinity"):
            return float(text.replace("Infinity", "inf"))
    return math.nan


def coerce_value(field_type: FieldType | None, value: Any) -> Any:
    # Integral floats are rendered without a trailing ``.0``.
    if field_type is FieldType.STRING:
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value) if is_number(value) else value
    if field_type in (FieldType.NUMBER, FieldType.INTEGER):
        return parse_number(value)
    if field_type is FieldType.BOOLEAN:
        return value == "true" or value is True
    return value


def _reject(descriptor: FieldDescriptor, message: str, code: str) -> FieldResult:
    error = BadRequestError(message=message, code=code, field=descriptor.name)
    return FieldResult(status=FieldStatus.REJECTED, error=error)


def _validator_failed(descriptor: FieldDescriptor) -> FieldResult:
    message = descriptor.fail_msg or f"{descriptor.name} failed to validate"
    return _reject(descriptor, message, VALIDATION_FAILED)


def validate_field(descriptor: FieldDescriptor, payload: Mapping[str, Any]) -> FieldResult:
    """Run presence, coercion, type and validator checks for one field.

    The payload is never modified; a coerced value is returned in the result
    for the caller to merge.
    """

    name = descriptor.name
    raw_value = payload.get(name)
    is_boolean_field = descriptor.type is FieldType.BOOLEAN

    if is_blank(raw_value):
        if is_boolean_field and not isinstance(raw_value, bool):
            # ``optional`` does not apply to boolean fields.
            return _reject(descriptor, f"Missing {name} param", MISSING_PARAM)
        if not is_boolean_field and not descriptor.optional:
            return _reject(descriptor, f"Missing {name} param", MISSING_PARAM)
        if descriptor.optional:
            logger.debug("Skipping optional field", extra={"field": name})
            return FieldResult(status=FieldStatus.SKIPPED, value=raw_value)

    value = coerce_value(descriptor.type, raw_value) if descriptor.coerce else raw_value

    if descriptor.type is not None and not TYPE_CHECKS[descriptor.type.value](value):
        return _reject(
            descriptor,
            f"{name} param must be a {descriptor.type.value}",
            INVALID_TYPE,
        )

    if descriptor.validator is not None:
        predicate = descriptor.validator(v())
        if not predicate.test(value):
            logger.debug(
                "Validator chain rejected field",
                extra={"field": name, "rules": getattr(predicate, "rule_names", None)},
            )
            return _validator_failed(descriptor)

    if descriptor.custom_validator is not None and not descriptor.custom_validator(value):
        return _validator_failed(descriptor)

    return FieldResult(status=FieldStatus.PASSED, value=value)


__all__ = [
    "FieldResult",
    "FieldStatus",
    "coerce_value",
    "is_blank",
    "parse_number",
    "validate_field",
]
