import sys
import textwrap

import pytest

from minicase.config import RunConfig, SuiteRef
from minicase.errors import ConfigurationError
from minicase.runner import Runner

SUITE = """\
from minicase import IndividualTest, TestCase
from minicase import assertions as check

math_case = TestCase(
    "Math",
    [
        IndividualTest("Addition", lambda: check.equal(2 + 2, 4)),
        IndividualTest("BadAdd", lambda: check.equal(2 + 2, 5)),
    ],
)

text_case = TestCase("Text", [IndividualTest("Upper", lambda: check.equal("a".upper(), "A"))])

not_a_case = 42
"""


@pytest.fixture
def suite_file(tmp_path):
    path = tmp_path / "math_suite.py"
    path.write_text(textwrap.dedent(SUITE))
    return path


def _config(suite_file, cases, **kwargs) -> RunConfig:
    return RunConfig(suites=[SuiteRef(path=str(suite_file), cases=cases)], **kwargs)


def test_runner_executes_cases_in_config_order(suite_file, lines):
    runner = Runner(_config(suite_file, ["text_case", "math_case"]), write_line=lines.append)
    summaries = runner.execute()

    assert [s.name for s in summaries] == ["Text", "Math"]
    assert (summaries[1].passed, summaries[1].failed) == (1, 1)
    assert "1 test run. 1 passed, 0 failed." in lines
    assert "2 tests run. 1 passed, 1 failed." in lines


def test_runner_banner_has_no_location(suite_file, lines):
    Runner(_config(suite_file, ["math_case"]), write_line=lines.append).execute()
    assert lines[1] == "Math"


def test_runner_failure_points_into_suite_file(suite_file, lines):
    Runner(_config(suite_file, ["math_case"]), write_line=lines.append).execute()
    failure = next(line for line in lines if line.startswith("ASSERT_EQUAL"))
    # the BadAdd lambda sits on line 8 of the suite
    assert failure.endswith(" :8")


def test_runner_case_filter(suite_file, lines):
    runner = Runner(
        _config(suite_file, ["math_case", "text_case"]),
        write_line=lines.append,
        case_filter="text_case",
    )
    summaries = runner.execute()
    assert [s.name for s in summaries] == ["Text"]


def test_runner_unknown_case_filter(suite_file, lines):
    runner = Runner(
        _config(suite_file, ["math_case"]), write_line=lines.append, case_filter="nope"
    )
    with pytest.raises(ConfigurationError, match="nope"):
        runner.execute()


def test_runner_missing_suite_file(tmp_path, lines):
    runner = Runner(_config(tmp_path / "missing.py", ["c"]), write_line=lines.append)
    with pytest.raises(ConfigurationError, match="suite file not found"):
        runner.execute()


def test_runner_undefined_case(suite_file, lines):
    runner = Runner(_config(suite_file, ["other_case"]), write_line=lines.append)
    with pytest.raises(ConfigurationError, match="'other_case' is not defined"):
        runner.execute()


def test_runner_rejects_non_case_objects(suite_file, lines):
    runner = Runner(_config(suite_file, ["not_a_case"]), write_line=lines.append)
    with pytest.raises(ConfigurationError, match="is not a TestCase"):
        runner.execute()


HELPER_SUITE = """\
import suite_helpers
from minicase import IndividualTest, TestCase

helper_case = TestCase(
    "Helpers",
    [
        IndividualTest("Same", lambda: suite_helpers.same(1, 2)),
    ],
)
"""

HELPERS = """\
from minicase import assertions as check


def same(a, b):
    check.equal(a, b)
"""


@pytest.fixture
def helper_suite(tmp_path):
    (tmp_path / "suite_helpers.py").write_text(HELPERS)
    path = tmp_path / "helper_suite.py"
    path.write_text(HELPER_SUITE)
    return path


def test_runner_internal_modules_point_failures_at_suite_line(helper_suite, lines):
    Runner(
        _config(helper_suite, ["helper_case"], internal_modules=["suite_helpers.py"]),
        write_line=lines.append,
    ).execute()

    failure = next(line for line in lines if line.startswith("ASSERT_EQUAL"))
    # the Same lambda sits on line 7 of the suite
    assert failure.endswith(" :7")
    assert len(failure) == 80


def test_runner_without_internal_modules_points_at_helper_line(helper_suite, lines):
    Runner(_config(helper_suite, ["helper_case"]), write_line=lines.append).execute()

    failure = next(line for line in lines if line.startswith("ASSERT_EQUAL"))
    assert failure.endswith(" :5")


def test_runner_suite_sibling_imports_do_not_leak(helper_suite, lines):
    Runner(_config(helper_suite, ["helper_case"]), write_line=lines.append).execute()

    assert str(helper_suite.parent) not in sys.path
    assert "suite_helpers" not in sys.modules


def test_runner_suite_import_error_names_suite(tmp_path, lines):
    broken = tmp_path / "broken_suite.py"
    broken.write_text("import no_such_module_for_minicase\n")
    runner = Runner(_config(broken, ["c"]), write_line=lines.append)

    with pytest.raises(ConfigurationError, match="could not load suite .*broken_suite.py"):
        runner.execute()


def test_runner_case_filter_skips_other_suites(suite_file, tmp_path, lines):
    config = RunConfig(
        suites=[
            SuiteRef(path=str(suite_file), cases=["text_case"]),
            SuiteRef(path=str(tmp_path / "missing.py"), cases=["other_case"]),
        ]
    )
    summaries = Runner(config, write_line=lines.append, case_filter="text_case").execute()

    assert [s.name for s in summaries] == ["Text"]


def test_runner_writes_debug_log(suite_file, tmp_path, lines):
    log_file = tmp_path / "logs" / "debug.log"
    Runner(
        _config(suite_file, ["math_case"], log_file=str(log_file)),
        write_line=lines.append,
    ).execute()

    content = log_file.read_text()
    assert "Starting run" in content
    assert "Test 'BadAdd' failed" in content
    assert "Run completed: 1 passed, 1 failed" in content
