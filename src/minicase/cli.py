from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(name="minicase", help="Run and report minimal unit test cases")


@app.command()
def run(
    config: str = typer.Argument(help="Path to run YAML config"),
    case: str | None = typer.Option(None, "--case", help="Run only this test case"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
    junit: str | None = typer.Option(
        None, "--junit", help="Also write results as JUnit XML to this path"
    ),
):
    """Run the test cases listed in a config file."""
    from pydantic import ValidationError

    from minicase.config import load_config
    from minicase.reporting.junit import write_junit
    from minicase.runner import Runner

    config_path = Path(config)
    if not config_path.exists():
        typer.echo(f"Error: config file not found: {config}", err=True)
        raise typer.Exit(1)

    try:
        run_config = load_config(config_path)
    except ValidationError as e:
        typer.echo(f"Error: invalid config {config}:\n{e}", err=True)
        raise typer.Exit(1)

    runner = Runner(
        config=run_config,
        write_line=typer.echo,
        case_filter=case,
        verbose=verbose,
    )

    try:
        summaries = runner.execute()
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if junit:
        junit_path = write_junit(Path(junit), summaries)
        typer.echo(f"JUnit report: {junit_path}")

    # Exit with non-zero if any test failed
    if not all(summary.all_passed for summary in summaries):
        raise typer.Exit(1)


@app.command()
def init(
    dir: str = typer.Option(
        "minicase", "--dir", help="Directory to initialize the test project in"
    ),
):
    """Initialize a new test project with an example config and suite."""
    project_dir = Path(dir)

    # Create the project directory if it doesn't exist
    if not project_dir.exists():
        project_dir.mkdir(parents=True, exist_ok=True)

    example = project_dir / "minicase.yaml"
    if example.exists():
        typer.echo(f"minicase.yaml already exists in {dir}, skipping.")
        return

    example.write_text("""\
suites:
  - path: ./math_suite.py
    cases:
      - math_case
""")

    (project_dir / "math_suite.py").write_text('''\
from minicase import IndividualTest, TestCase
from minicase import assertions as check

math_case = TestCase(
    "Math",
    [
        IndividualTest("Addition", lambda: check.equal(2 + 2, 4)),
        IndividualTest(
            "Ordering",
            [
                lambda: check.less(1, 2),
                lambda: check.greater_equal(2, 2),
            ],
        ),
    ],
)
''')

    typer.echo(f"Initialized test project in {dir}:")
    typer.echo("  minicase.yaml  - example run config")
    typer.echo("  math_suite.py  - example test case")
