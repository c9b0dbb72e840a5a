from __future__ import annotations

import runpy
import sys
from pathlib import Path

from minicase.callsite import CallSiteResolver
from minicase.case import CaseSummary, TestCase
from minicase.config import RunConfig, SuiteRef
from minicase.errors import ConfigurationError
from minicase.individual import WriteLine
from minicase.verbose import setup_logger


def run_suite(path: Path) -> dict:
    """Execute a suite file with its directory importable, like ``python path``.

    Sibling modules the suite imports are dropped from ``sys.modules``
    afterwards so suites in other directories can reuse their names.
    """
    suite_dir = path.parent.resolve()
    loaded = set(sys.modules)
    sys.path.insert(0, str(suite_dir))
    try:
        return runpy.run_path(str(path))
    finally:
        try:
            sys.path.remove(str(suite_dir))
        except ValueError:
            pass
        for name in set(sys.modules) - loaded:
            origin = getattr(sys.modules[name], "__file__", None)
            if origin and Path(origin).resolve().parent == suite_dir:
                del sys.modules[name]


class Runner:
    """Runs the test cases named in a run config, in config order."""

    def __init__(
        self,
        config: RunConfig,
        write_line: WriteLine = print,
        case_filter: str | None = None,
        verbose: bool = False,
    ):
        self.config = config
        self.write_line = write_line
        self.case_filter = case_filter
        self.verbose = verbose

    def _load_cases(self, suite: SuiteRef) -> list[TestCase]:
        path = Path(suite.path)
        if not path.is_file():
            raise ConfigurationError(f"suite file not found: {suite.path}")

        try:
            namespace = run_suite(path)
        except Exception as e:
            raise ConfigurationError(f"could not load suite {suite.path}: {e}") from e

        cases = []
        for name in suite.cases:
            if self.case_filter and name != self.case_filter:
                continue
            if name not in namespace:
                raise ConfigurationError(f"'{name}' is not defined in {suite.path}")
            case = namespace[name]
            if not isinstance(case, TestCase):
                raise ConfigurationError(
                    f"'{name}' in {suite.path} is not a TestCase "
                    f"(got {type(case).__name__})"
                )
            cases.append(case)
        return cases

    def execute(self) -> list[CaseSummary]:
        """Run every selected case. Returns one summary per executed case."""
        log_file = Path(self.config.log_file) if self.config.log_file else None
        logger = setup_logger(log_file, verbose=self.verbose)
        logger.debug("Starting run")

        if self.case_filter and self.case_filter not in self.config.case_names():
            raise ConfigurationError(f"Unknown test case: {self.case_filter!r}")

        # cases run from here are invoked by the runner, not from user code
        banner_resolver = CallSiteResolver(max_depth=0)

        summaries: list[CaseSummary] = []
        for suite in self.config.suites:
            if self.case_filter and self.case_filter not in suite.cases:
                logger.debug(f"Skipping suite {suite.path}")
                continue
            logger.debug(f"Loading suite {suite.path}")
            for case in self._load_cases(suite):
                summary = case.execute(
                    write_line=self.write_line,
                    resolver=banner_resolver,
                    internal_modules=self.config.internal_modules,
                )
                summaries.append(summary)

        logger.debug(
            f"Run completed: {sum(s.passed for s in summaries)} passed, "
            f"{sum(s.failed for s in summaries)} failed"
        )
        return summaries
