from __future__ import annotations

from pathlib import Path

from junitparser import Failure, JUnitXml, TestCase, TestSuite

from minicase.case import CaseSummary


def write_junit(path: Path, summaries: list[CaseSummary]) -> Path:
    """Write a JUnit XML file with one suite per executed test case, return path."""
    xml = JUnitXml()

    for summary in summaries:
        suite = TestSuite(summary.name)

        # Test cases: one per individual test
        for test, result in summary.results:
            case = TestCase(test.name)
            case.classname = summary.name
            if not result.passed:
                case.result = Failure(result.message or "")
            suite.add_testcase(case)

        # Use append (not +=) to preserve suite attributes
        xml.append(suite)

    path.parent.mkdir(parents=True, exist_ok=True)
    xml.write(str(path), pretty=True)
    return path
