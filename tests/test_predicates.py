import math
import re

import pytest

from request_validator.predicates import TYPE_CHECKS, Predicate, is_integer, is_number, v


def test_empty_predicate_accepts_anything():
    assert v().test(None) is True
    assert v().test("anything") is True


def test_v_returns_fresh_instances():
    base = v()
    ranged = base.between(1, 3)

    assert base.rules == ()
    assert len(ranged.rules) == 1
    assert isinstance(ranged, Predicate)


def test_chained_rules_must_all_hold():
    predicate = v().integer().between(7, 77)

    assert predicate.test(30) is True
    assert predicate.test(5) is False
    assert predicate.test(30.5) is False


def test_not_negates_only_the_next_rule():
    predicate = v().string().not_().empty()

    assert predicate.test("hello") is True
    assert predicate.test("") is False
    assert predicate.rule_names == ["string", "not empty"]


def test_rule_raising_type_error_counts_as_failure():
    assert v().between(1, 10).test("five") is False
    assert v().min_length(2).test(12) is False
    assert v().lowercase().test(12) is False


@pytest.mark.parametrize(
    ("predicate", "value", "expected"),
    [
        (v().pattern(r"^\d{3}$"), "123", True),
        (v().pattern(re.compile(r"^[a-z]+$")), "ABC", False),
        (v().one_of("red", "green"), "green", True),
        (v().length(2, 4), "abcde", False),
        (v().length(3), "abc", True),
        (v().max_length(2), [1, 2, 3], False),
        (v().first("a").last("c"), ["a", "b", "c"], True),
        (v().includes("@"), "user@example.com", True),
        (v().positive(), -1, False),
        (v().negative(), -1, True),
        (v().greater_than(3).less_than(5), 4, True),
        (v().greater_than_or_equal(3).less_than_or_equal(3), 3, True),
        (v().equal(42), 42, True),
        (v().uppercase(), "ABC", True),
        (v().null(), None, True),
        (v().passes(lambda value: value % 2 == 0), 3, False),
    ],
)
def test_refinements(predicate, value, expected):
    assert predicate.test(value) is expected


def test_number_check_rejects_booleans_and_nan():
    assert is_number(3) is True
    assert is_number(2.5) is True
    assert is_number(True) is False
    assert is_number(math.nan) is False
    assert is_number("3") is False


def test_integer_refinement_checks_integrality():
    assert is_integer(4) is True
    assert is_integer(4.0) is True
    assert is_integer(4.5) is False
    assert is_integer(math.inf) is False


def test_builtin_type_checks():
    assert TYPE_CHECKS["string"]("x") is True
    assert TYPE_CHECKS["object"]({"a": 1}) is True
    assert TYPE_CHECKS["object"]([1]) is False
    assert TYPE_CHECKS["array"]([1]) is True
    assert TYPE_CHECKS["array"]("abc") is False
    assert TYPE_CHECKS["boolean"](False) is True
    assert TYPE_CHECKS["integer"](4.5) is True
