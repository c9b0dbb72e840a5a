"""Locate the first stack frame outside the framework's own modules."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from typing import Callable, Iterable

# File names of the layers sitting between a failing user line and the report:
# the assertion predicates, IndividualTest and TestCase.
DEFAULT_INTERNAL_MODULES: frozenset[str] = frozenset(
    {"checks.py", "individual.py", "case.py"}
)
DEFAULT_MAX_DEPTH = 10

# resolve() itself is level 0 and its framework caller is level 1.
_FIRST_LEVEL = 2

_SEPARATORS = re.compile(r"[\\/]")

FrameLookup = Callable[[int], "tuple[str, int] | None"]


@dataclass(frozen=True)
class CallSite:
    source: str
    line: int

    def __str__(self) -> str:
        return f"{self.source}:{self.line}"


def stack_frame(depth: int) -> tuple[str, int] | None:
    """Return (filename, line) of the frame ``depth`` levels above the caller.

    Level 0 is the function calling ``stack_frame``. Returns None when the
    stack is not that deep.
    """
    try:
        frame = sys._getframe(depth + 1)
    except ValueError:
        return None
    return frame.f_code.co_filename, frame.f_lineno


def short_source(source: str) -> str:
    """Strip directories from a source path, keeping the final component."""
    return _SEPARATORS.split(source)[-1]


class CallSiteResolver:
    """Resolves the nearest caller that is not part of the framework.

    Assertions and test execution add a variable number of internal frames
    between the user's line and the point where the location is requested, so
    the walk skips every frame whose file name is in ``internal_modules``.
    """

    def __init__(
        self,
        internal_modules: Iterable[str] = DEFAULT_INTERNAL_MODULES,
        max_depth: int = DEFAULT_MAX_DEPTH,
        frame_lookup: FrameLookup = stack_frame,
    ):
        self.internal_modules = frozenset(internal_modules)
        self.max_depth = max_depth
        self.frame_lookup = frame_lookup

    def with_modules(self, *names: str) -> CallSiteResolver:
        """Return a copy that also skips ``names``."""
        return CallSiteResolver(
            internal_modules=self.internal_modules | set(names),
            max_depth=self.max_depth,
            frame_lookup=self.frame_lookup,
        )

    def resolve(self) -> CallSite | None:
        for level in range(_FIRST_LEVEL, _FIRST_LEVEL + self.max_depth):
            info = self.frame_lookup(level)
            if info is None:
                return None
            source, line = info
            name = short_source(source)
            if name not in self.internal_modules:
                return CallSite(source=name, line=line)
        return None
