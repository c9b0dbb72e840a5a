"""Base data structures for the assertion system."""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

from minicase.callsite import CallSiteResolver

LINE_WIDTH = 80

_active_resolver: ContextVar[CallSiteResolver] = ContextVar(
    "minicase_assertion_resolver", default=CallSiteResolver()
)


class AssertionFailure(AssertionError):
    """Raised by an assertion whose condition does not hold.

    Attributes:
        tag: Assertion identifier, e.g. "ASSERT_EQUAL".
        description: Human-readable failure sentence without the tag.
        line: Line in the calling user file, or None when it could not be found.
    """

    def __init__(self, tag: str, description: str, line: int | None = None):
        self.tag = tag
        self.description = description
        self.line = line
        super().__init__(format_failure(tag, description, line))


def line_suffix(message: str, line: int) -> str:
    """Left-pad a " :<line>" marker so that it ends at column LINE_WIDTH."""
    marker = f" :{line}"
    width = len(message) + len(marker)
    if width < LINE_WIDTH:
        return " " * (LINE_WIDTH - width) + marker
    return marker


def format_failure(tag: str, description: str, line: int | None) -> str:
    message = f"{tag}: {description}"
    if line is None:
        return message
    return message + line_suffix(message, line)


@contextmanager
def using_resolver(resolver: CallSiteResolver) -> Iterator[CallSiteResolver]:
    """Locate failing assertion lines with ``resolver`` inside the block.

    IndividualTest.execute wraps each procedure in this so that assertions use
    the resolver configured on the test.
    """
    token = _active_resolver.set(resolver)
    try:
        yield resolver
    finally:
        _active_resolver.reset(token)


def fail_unless(check: object, tag: str, description: str) -> None:
    """Raise AssertionFailure for ``tag`` unless ``check`` is truthy.

    Must be called directly from a predicate in the internal checks module so
    that the call-site walk lands on the user's line.
    """
    if check:
        return
    site = _active_resolver.get().resolve()
    raise AssertionFailure(tag, description, site.line if site else None)
