"""Assertion system for test procedures."""

from minicase.assertions.base import AssertionFailure, using_resolver
from minicase.assertions.checks import (
    almost_equal,
    equal,
    falsy,
    greater,
    greater_equal,
    is_false,
    is_none,
    is_true,
    less,
    less_equal,
    not_almost_equal,
    not_equal,
    not_raises,
    raises,
    truthy,
)

__all__ = [
    "AssertionFailure",
    "almost_equal",
    "equal",
    "falsy",
    "greater",
    "greater_equal",
    "is_false",
    "is_none",
    "is_true",
    "less",
    "less_equal",
    "not_almost_equal",
    "not_equal",
    "not_raises",
    "raises",
    "truthy",
    "using_resolver",
]
