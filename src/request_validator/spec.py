"""Normalisation of heterogeneous field specs into descriptors."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable

from .errors import ConfigurationError
from .predicates import Predicate


class FieldType(str, Enum):
    STRING = "string"
    OBJECT = "object"
    ARRAY = "array"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"


SUPPORTED_TYPES: tuple[str, ...] = tuple(member.value for member in FieldType)

ValidatorFn = Callable[[Predicate], Predicate]
CustomValidatorFn = Callable[[Any], bool]
FieldSpec = str | Mapping[str, Any]


def _parse_type(value: Any, *, required: bool = False) -> FieldType | None:
    if value is None and not required:
        return None
    if isinstance(value, FieldType):
        return value
    if isinstance(value, str) and value in SUPPORTED_TYPES:
        return FieldType(value)
    raise ConfigurationError(
        f'Type "{value}" is not supported. Type must be one of: {", ".join(SUPPORTED_TYPES)}'
    )


def _ensure_callable(name: str, option: str, value: Any) -> Any:
    if value is not None and not callable(value):
        raise ConfigurationError(f'The "{option}" option of field "{name}" must be callable')
    return value


@dataclass(frozen=True)
class FieldDescriptor:
    """Canonical, fully resolved specification for one payload key."""

    name: str
    type: FieldType | None = None
    coerce: bool = False
    optional: bool = False
    validator: ValidatorFn | None = None
    custom_validator: CustomValidatorFn | None = None
    fail_msg: str | None = None

    @classmethod
    def from_name(cls, name: str) -> "FieldDescriptor":
        if not name:
            raise ConfigurationError("Field names must be non-empty strings")
        return cls(name=name)

    @classmethod
    def from_shorthand(cls, entry: Mapping[str, Any]) -> "FieldDescriptor":
        ((name, type_name),) = entry.items()
        if not isinstance(name, str) or not name:
            raise ConfigurationError("Field names must be non-empty strings")
        return cls(name=name, type=_parse_type(type_name, required=True))

    @classmethod
    def from_options(cls, entry: Mapping[str, Any]) -> "FieldDescriptor":
        name = entry.get("name")
        if not name:
            raise ConfigurationError(
                'Parameters object that have more than { paramName: paramType } must have a "name" property'
            )
        if not isinstance(name, str):
            raise ConfigurationError(f'The "name" property must be a string, got {type(name).__name__}')

        fail_msg = entry.get("failMsg", entry.get("fail_msg"))
        return cls(
            name=name,
            type=_parse_type(entry.get("type")),
            coerce=bool(entry.get("coerce", False)),
            optional=bool(entry.get("optional", False)),
            validator=_ensure_callable(name, "validator", entry.get("validator")),
            custom_validator=_ensure_callable(
                name,
                "customValidator",
                entry.get("customValidator", entry.get("custom_validator")),
            ),
            fail_msg=str(fail_msg) if fail_msg else None,
        )


def normalize_field_spec(entry: FieldSpec | FieldDescriptor) -> FieldDescriptor:
    """Resolve one raw field-spec entry into a :class:`FieldDescriptor`.

    Accepted shapes are a bare field name (``"title"``), a single-key type
    shorthand (``{"age": "integer"}``) and a full options mapping carrying a
    ``name`` key.  Anything else raises :class:`ConfigurationError`.
    """

    if isinstance(entry, FieldDescriptor):
        return entry
    if isinstance(entry, str):
        return FieldDescriptor.from_name(entry)
    if isinstance(entry, Mapping):
        if len(entry) == 1:
            return FieldDescriptor.from_shorthand(entry)
        return FieldDescriptor.from_options(entry)
    raise ConfigurationError(
        f"Field spec entries must be strings or mappings, got {type(entry).__name__}"
    )


def normalize_specs(entries: Iterable[FieldSpec | FieldDescriptor]) -> list[FieldDescriptor]:
    if isinstance(entries, (str, Mapping)):
        raise ConfigurationError("Field specs must be provided as a list of entries")
    return [normalize_field_spec(entry) for entry in entries]


__all__ = [
    "FieldDescriptor",
    "FieldSpec",
    "FieldType",
    "SUPPORTED_TYPES",
    "normalize_field_spec",
    "normalize_specs",
]
