"""Declarative validation of request parameters."""

from __future__ import annotations

from .errors import BadRequestError, ConfigurationError
from .orchestrator import (
    ValidationFailure,
    ValidationOutcome,
    ValidationSuccess,
    check_payload,
    validate_request,
    validate_request_sync,
)
from .predicates import Predicate, v
from .spec import FieldDescriptor, FieldType, normalize_field_spec


__all__ = [
    "BadRequestError",
    "ConfigurationError",
    "FieldDescriptor",
    "FieldType",
    "Predicate",
    "ValidationFailure",
    "ValidationOutcome",
    "ValidationSuccess",
    "check_payload",
    "normalize_field_spec",
    "v",
    "validate_request",
    "validate_request_sync",
]
