"""TestCase: an ordered collection of individual tests under one banner."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from minicase.callsite import CallSiteResolver
from minicase.individual import (
    LINE_WIDTH,
    LOGGER_NAME,
    ExecutionResult,
    IndividualTest,
    WriteLine,
)


@dataclass
class CaseSummary:
    """Tally of one TestCase.execute() call."""

    name: str
    results: list[tuple[IndividualTest, ExecutionResult]] = field(default_factory=list)
    passed: int = 0
    failed: int = 0
    total: int = 0

    @property
    def all_passed(self) -> bool:
        return self.failed == 0 and self.passed == self.total


def summary_line(passed: int, failed: int) -> str:
    run = passed + failed
    noun = "test" if run == 1 else "tests"
    return f"{run} {noun} run. {passed} passed, {failed} failed."


class TestCase:
    """Collection of individual tests executed and reported together.

    Constructing a TestCase makes it the owning case of each test it contains.
    """

    # not a pytest test class
    __test__ = False

    def __init__(
        self,
        name: str,
        tests: Iterable[IndividualTest],
        resolver: CallSiteResolver | None = None,
        write_line: WriteLine | None = None,
        logger: logging.Logger | None = None,
    ):
        self.name = name
        self.tests = tuple(tests)
        self.resolver = resolver or CallSiteResolver()
        self.write_line = write_line or print
        self.logger = logger or logging.getLogger(LOGGER_NAME)
        for test in self.tests:
            test._attach(self)

    def __repr__(self) -> str:
        return f"TestCase({self.name!r}, {len(self.tests)} tests)"

    def execute(
        self,
        write_line: WriteLine | None = None,
        resolver: CallSiteResolver | None = None,
        internal_modules: Iterable[str] = (),
    ) -> CaseSummary:
        """Execute every contained test in order and write the full report.

        ``internal_modules`` extends each test's resolver for this run, so
        assertions made from those helper files report the suite line.

        A ConfigurationError raised by a test is not caught and aborts the
        report before the summary.
        """
        internal_modules = tuple(internal_modules)
        write = write_line or self.write_line
        caller = (resolver or self.resolver).resolve()
        summary = CaseSummary(name=self.name, total=len(self.tests))

        header = self.name
        if caller is not None:
            header += f", {caller}"
        write("=" * LINE_WIDTH)
        write(header)
        write("=" * LINE_WIDTH)

        self.logger.debug(f"Executing test case '{self.name}' ({summary.total} tests)")
        for test in self.tests:
            test_resolver = (
                test.resolver.with_modules(*internal_modules) if internal_modules else None
            )
            result = test.execute(resolver=test_resolver)
            test.report(result, write_line=write)
            summary.results.append((test, result))
            if result.passed:
                summary.passed += 1
            else:
                summary.failed += 1

        write("-" * LINE_WIDTH)
        if summary.passed + summary.failed != summary.total:
            write(f"WARNING: Not all tests ({summary.total} total) run.")
            self.logger.warning(
                f"Test case '{self.name}' ran {summary.passed + summary.failed} "
                f"of {summary.total} tests"
            )
        write("")
        write(summary_line(summary.passed, summary.failed))
        write("=" * LINE_WIDTH)
        self.logger.debug(
            f"Test case '{self.name}' completed: "
            f"{summary.passed} passed, {summary.failed} failed"
        )
        return summary
