"""Chainable predicates used to express field validation rules.

A :class:`Predicate` is an immutable sequence of rules.  Every chaining call
returns a new predicate with one more rule appended, and :meth:`Predicate.test`
succeeds only when every rule holds for the value::

    >>> v().integer().between(7, 77).test(30)
    True
    >>> v().string().not_().empty().test("")
    False

Field specs receive a fresh builder through their ``validator`` callable, so
``{"name": "age", "validator": lambda p: p.between(7, 77)}`` is the usual way
of attaching a range check to a field.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any, Callable, Final, Pattern


RuleFn = Callable[[Any], bool]


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_number(value: Any) -> bool:
    """Return ``True`` for real numbers, rejecting booleans and NaN."""

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not (isinstance(value, float) and math.isnan(value))


def is_integer(value: Any) -> bool:
    if not is_number(value):
        return False
    return isinstance(value, int) or (math.isfinite(value) and float(value).is_integer())


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_object(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


# ``integer`` shares the numeric check; integrality is only enforced by
# ``v().integer()`` in a validator chain.
TYPE_CHECKS: Final[Mapping[str, RuleFn]] = {
    "string": is_string,
    "object": is_object,
    "array": is_array,
    "number": is_number,
    "integer": is_number,
    "boolean": is_boolean,
}


@dataclass(frozen=True)
class Rule:
    """A named check, optionally negated."""

    name: str
    check: RuleFn
    negated: bool = False

    def holds(self, value: Any) -> bool:
        try:
            outcome = bool(self.check(value))
        except (AttributeError, TypeError, ValueError):
            outcome = False
        return not outcome if self.negated else outcome


@dataclass(frozen=True)
class Predicate:
    """Immutable chain of rules terminated by :meth:`test`."""

    rules: tuple[Rule, ...] = ()
    _negate_next: bool = False

    def _chain(self, name: str, check: RuleFn) -> "Predicate":
        rule = Rule(name=name, check=check, negated=self._negate_next)
        return replace(self, rules=self.rules + (rule,), _negate_next=False)

    def test(self, value: Any) -> bool:
        return all(rule.holds(value) for rule in self.rules)

    def not_(self) -> "Predicate":
        """Negate the next rule added to the chain."""

        return replace(self, _negate_next=not self._negate_next)

    # Types

    def string(self) -> "Predicate":
        return self._chain("string", is_string)

    def number(self) -> "Predicate":
        return self._chain("number", is_number)

    def integer(self) -> "Predicate":
        return self._chain("integer", is_integer)

    def boolean(self) -> "Predicate":
        return self._chain("boolean", is_boolean)

    def object(self) -> "Predicate":
        return self._chain("object", is_object)

    def array(self) -> "Predicate":
        return self._chain("array", is_array)

    def null(self) -> "Predicate":
        return self._chain("null", lambda value: value is None)

    # Comparisons

    def equal(self, expected: Any) -> "Predicate":
        return self._chain("equal", lambda value: value == expected)

    def between(self, lower: Any, upper: Any) -> "Predicate":
        return self._chain("between", lambda value: lower <= value <= upper)

    def greater_than(self, bound: Any) -> "Predicate":
        return self._chain("greater_than", lambda value: value > bound)

    def less_than(self, bound: Any) -> "Predicate":
        return self._chain("less_than", lambda value: value < bound)

    def greater_than_or_equal(self, bound: Any) -> "Predicate":
        return self._chain("greater_than_or_equal", lambda value: value >= bound)

    def less_than_or_equal(self, bound: Any) -> "Predicate":
        return self._chain("less_than_or_equal", lambda value: value <= bound)

    def positive(self) -> "Predicate":
        return self._chain("positive", lambda value: value >= 0)

    def negative(self) -> "Predicate":
        return self._chain("negative", lambda value: value < 0)

    def one_of(self, *choices: Any) -> "Predicate":
        allowed = tuple(choices)
        return self._chain("one_of", lambda value: value in allowed)

    # Sized values

    def min_length(self, minimum: int) -> "Predicate":
        return self._chain("min_length", lambda value: len(value) >= minimum)

    def max_length(self, maximum: int) -> "Predicate":
        return self._chain("max_length", lambda value: len(value) <= maximum)

    def length(self, minimum: int, maximum: int | None = None) -> "Predicate":
        upper = minimum if maximum is None else maximum
        return self._chain("length", lambda value: minimum <= len(value) <= upper)

    def empty(self) -> "Predicate":
        return self._chain("empty", lambda value: len(value) == 0)

    def first(self, item: Any) -> "Predicate":
        return self._chain("first", lambda value: len(value) > 0 and value[0] == item)

    def last(self, item: Any) -> "Predicate":
        return self._chain("last", lambda value: len(value) > 0 and value[-1] == item)

    def includes(self, item: Any) -> "Predicate":
        return self._chain("includes", lambda value: item in value)

    # Strings

    def pattern(self, expression: str | Pattern[str]) -> "Predicate":
        compiled = re.compile(expression) if isinstance(expression, str) else expression
        return self._chain("pattern", lambda value: compiled.search(value) is not None)

    def lowercase(self) -> "Predicate":
        return self._chain("lowercase", lambda value: value == value.lower())

    def uppercase(self) -> "Predicate":
        return self._chain("uppercase", lambda value: value == value.upper())

    # Escape hatch

    def passes(self, check: RuleFn) -> "Predicate":
        return self._chain(getattr(check, "__name__", "passes"), check)

    @property
    def rule_names(self) -> list[str]:
        return [f"not {rule.name}" if rule.negated else rule.name for rule in self.rules]


def v() -> Predicate:
    """Return a fresh, empty predicate builder."""

    return Predicate()


__all__ = [
    "Predicate",
    "Rule",
    "TYPE_CHECKS",
    "is_array",
    "is_boolean",
    "is_integer",
    "is_number",
    "is_object",
    "is_string",
    "v",
]
