"""IndividualTest: the smallest executable and reportable unit.

Name instances with a sufficiently descriptive string (the module under test,
module_function, the file name...) since the name is all a report shows.
"""

from __future__ import annotations

import inspect
import logging
import weakref
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Sequence, Union

from minicase.assertions.base import AssertionFailure, using_resolver
from minicase.callsite import CallSite, CallSiteResolver
from minicase.errors import ConfigurationError
from minicase.messages import normalize_message

if TYPE_CHECKING:
    from minicase.case import TestCase

LINE_WIDTH = 80
LOGGER_NAME = "minicase"

Procedure = Callable[..., Any]
WriteLine = Callable[[str], Any]


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of one IndividualTest.execute() call.

    ``caller`` is where execute() was invoked from and does not take part in
    equality: two runs with the same outcome compare equal.
    """

    passed: bool
    message: str | None = None
    caller: CallSite | None = field(default=None, compare=False)


@dataclass(frozen=True)
class Single:
    procedure: Procedure


@dataclass(frozen=True)
class Many:
    procedures: tuple[Procedure, ...]


Procedures = Union[Single, Many]


def classify_procedures(procedures: Any) -> Procedures | None:
    """Resolve the shape of a test's procedures, or None if it is unusable."""
    if callable(procedures):
        return Single(procedures)
    if isinstance(procedures, (str, bytes)) or not isinstance(procedures, Sequence):
        return None
    if not procedures or not all(callable(p) for p in procedures):
        return None
    return Many(tuple(procedures))


def _takes_context(procedure: Procedure) -> bool:
    try:
        signature = inspect.signature(procedure)
    except (TypeError, ValueError):
        return False
    try:
        signature.bind(None)
    except TypeError:
        return False
    return True


def describe_exception(exc: BaseException) -> str:
    if isinstance(exc, AssertionFailure):
        return str(exc)
    text = str(exc)
    name = type(exc).__name__
    return f"{name}: {text}" if text else name


class IndividualTest:
    """One or more procedures run and reported together under one name.

    Args:
        name: Human-readable test name.
        procedures: A callable or a non-empty sequence of callables. A
            procedure taking one argument receives this test as context.
        resolver: Call-site resolver used to locate the execute() caller and
            the user line of failing assertions.
        logger: Debug logger, defaults to the "minicase" logger.
    """

    def __init__(
        self,
        name: str,
        procedures: Procedure | Sequence[Procedure] | None,
        resolver: CallSiteResolver | None = None,
        logger: logging.Logger | None = None,
    ):
        self.name = name
        self.procedures = classify_procedures(procedures)
        self.resolver = resolver or CallSiteResolver()
        self.logger = logger or logging.getLogger(LOGGER_NAME)
        self._case_ref: weakref.ref[TestCase] | None = None

    def __repr__(self) -> str:
        return f"IndividualTest({self.name!r})"

    @property
    def case(self) -> TestCase | None:
        """The TestCase this test belongs to, if any."""
        if self._case_ref is None:
            return None
        return self._case_ref()

    def _attach(self, case: TestCase) -> None:
        self._case_ref = weakref.ref(case)

    def _run(self, procedure: Procedure, resolver: CallSiteResolver) -> str | None:
        try:
            with using_resolver(resolver):
                if _takes_context(procedure):
                    procedure(self)
                else:
                    procedure()
        # a procedure calling sys.exit() fails this test, not the whole run
        except (Exception, SystemExit) as exc:
            return normalize_message(describe_exception(exc))
        return None

    def execute(self, resolver: CallSiteResolver | None = None) -> ExecutionResult:
        """Run the procedures and capture the outcome.

        A failing procedure never stops the others: every failure message is
        collected, one per line, in procedure order. Assertions inside the
        procedures, and the caller lookup, use ``resolver`` when given and the
        test's own resolver otherwise.

        Raises:
            ConfigurationError: if the test has no usable procedures.
        """
        resolver = resolver or self.resolver
        procedures = self.procedures
        if isinstance(procedures, Single):
            self.logger.debug(f"Executing test '{self.name}'")
            failure = self._run(procedures.procedure, resolver)
            passed = failure is None
            message = failure
        elif isinstance(procedures, Many):
            self.logger.debug(
                f"Executing test '{self.name}' ({len(procedures.procedures)} procedures)"
            )
            failures = [
                message
                for message in (self._run(p, resolver) for p in procedures.procedures)
                if message is not None
            ]
            passed = not failures
            message = "\n".join(failures) if failures else None
        else:
            raise ConfigurationError(f'"{self.name}" does not contain any tests.')

        caller = resolver.resolve()
        self.logger.debug(
            f"Test '{self.name}' {'passed' if passed else 'failed'}"
            + (f": {message}" if message else "")
        )
        return ExecutionResult(passed=passed, message=message, caller=caller)

    def header(self, result: ExecutionResult) -> str:
        case = self.case
        content = ("PASSED | " if result.passed else "FAILED | ") + self.name
        if case is None and result.caller is not None:
            content += f", {result.caller}"
        if len(content) < LINE_WIDTH:
            content = content.ljust(LINE_WIDTH)
        if case is not None:
            content += f" | {case.name}"
        return content

    def report(self, result: ExecutionResult, write_line: WriteLine | None = None) -> None:
        """Write the formatted result block of a previous execute()."""
        write = write_line or print
        case = self.case
        write("-" * LINE_WIDTH)
        write(self.header(result))
        if not result.passed:
            write(result.message or "")
        # inside a TestCase the case closes the block
        if case is None:
            write("-" * LINE_WIDTH)
