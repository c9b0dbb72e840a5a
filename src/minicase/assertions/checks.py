"""Assertion predicates for use inside test procedures.

Every predicate returns None when its condition holds and raises
AssertionFailure otherwise.
"""

from __future__ import annotations

from typing import Any, Callable

from minicase.assertions.base import fail_unless

ALMOST_EQUAL_TOLERANCE = 2.0**-22


def _describe_callable(func: Callable[..., Any]) -> str:
    return getattr(func, "__qualname__", None) or repr(func)


def _call_raises(func: Callable[[], Any]) -> bool:
    try:
        func()
    except Exception:
        return True
    return False


def equal(actual: Any, expected: Any) -> None:
    fail_unless(
        actual == expected, "ASSERT_EQUAL", f"{actual} is not equal to {expected}."
    )


def not_equal(actual: Any, expected: Any) -> None:
    fail_unless(
        actual != expected, "ASSERT_NOT_EQUAL", f"{actual} is equal to {expected}."
    )


def is_true(value: Any) -> None:
    fail_unless(value is True, "ASSERT_TRUE", f"{value} is not true.")


def is_false(value: Any) -> None:
    fail_unless(value is False, "ASSERT_FALSE", f"{value} is not false.")


def truthy(value: Any) -> None:
    fail_unless(value, "ASSERT_TRUTHY", f"{value} is not truthy.")


def falsy(value: Any) -> None:
    fail_unless(not value, "ASSERT_FALSY", f"{value} is not falsy.")


def is_none(value: Any) -> None:
    fail_unless(value is None, "ASSERT_NONE", f"{value} is not None.")


def raises(func: Callable[[], Any]) -> None:
    fail_unless(
        _call_raises(func),
        "ASSERT_RAISES",
        f"{_describe_callable(func)} did not raise error.",
    )


def not_raises(func: Callable[[], Any]) -> None:
    fail_unless(
        not _call_raises(func),
        "ASSERT_NOT_RAISES",
        f"{_describe_callable(func)} raised an error.",
    )


def almost_equal(actual: float, expected: float) -> None:
    fail_unless(
        abs(actual - expected) < ALMOST_EQUAL_TOLERANCE,
        "ASSERT_ALMOST_EQUAL",
        f"{actual} is not almost equal to {expected}.",
    )


def not_almost_equal(actual: float, expected: float) -> None:
    fail_unless(
        abs(actual - expected) > ALMOST_EQUAL_TOLERANCE,
        "ASSERT_NOT_ALMOST_EQUAL",
        f"{actual} is almost equal to {expected}.",
    )


def greater(actual: Any, expected: Any) -> None:
    fail_unless(
        actual > expected,
        "ASSERT_GREATER",
        f"{actual} is not greater than {expected}.",
    )


def greater_equal(actual: Any, expected: Any) -> None:
    fail_unless(
        actual >= expected,
        "ASSERT_GREATER_EQUAL",
        f"{actual} is not greater or equal to {expected}.",
    )


def less(actual: Any, expected: Any) -> None:
    fail_unless(
        actual < expected, "ASSERT_LESS", f"{actual} is not less than {expected}."
    )


def less_equal(actual: Any, expected: Any) -> None:
    fail_unless(
        actual <= expected,
        "ASSERT_LESS_EQUAL",
        f"{actual} is not less or equal to {expected}.",
    )
