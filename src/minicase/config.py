from __future__ import annotations

from pathlib import Path

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class SuiteRef(BaseModel):
    """A python file and the names of the TestCase objects it defines."""

    model_config = ConfigDict(extra="forbid")
    path: str
    cases: list[str]

    @field_validator("path")
    @classmethod
    def expand_path_variables(cls, v: str) -> str:
        """Expand ${VAR} references, failing on unset variables without defaults."""
        try:
            return expandvars(v, nounset=True)
        except Exception as e:
            raise ValueError(f"Suite path '{v}' references a missing variable: {e}")

    @field_validator("cases")
    @classmethod
    def cases_must_not_be_empty(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("cases must not be empty")
        return v


class RunConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    suites: list[SuiteRef]
    internal_modules: list[str] = []
    log_file: str | None = None

    @model_validator(mode="after")
    def suites_must_not_be_empty(self) -> RunConfig:
        if not self.suites:
            raise ValueError("suites must not be empty")
        return self

    def case_names(self) -> list[str]:
        return [name for suite in self.suites for name in suite.cases]


def load_config(path: Path) -> RunConfig:
    """Load and validate a run config from a YAML file."""
    config_dir = path.parent.resolve()

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    config = RunConfig(**raw)

    # Resolve relative suite and log paths relative to config file location
    for suite in config.suites:
        suite_path = Path(suite.path)
        if not suite_path.is_absolute():
            suite.path = str((config_dir / suite_path).resolve())
    if config.log_file is not None and not Path(config.log_file).is_absolute():
        config.log_file = str((config_dir / config.log_file).resolve())

    return config
