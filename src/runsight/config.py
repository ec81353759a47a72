"""Configuration parsing from ``.runsight.yml``."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from runsight.models.descriptors import DEFAULT_PROJECT
from runsight.reporters.html_report import DEFAULT_TITLE
from runsight.reporters.sink import DEFAULT_OUTPUT_DIR

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".runsight.yml"

_ENV_VAR_RE = re.compile(r"\$\{(\w+)\}")

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _resolve_env_vars(value: str) -> str:
    """Replace ``${VAR_NAME}`` placeholders with environment variable values."""

    def _replace(match: re.Match[str]) -> str:
        var = match.group(1)
        resolved = os.environ.get(var)
        if resolved is None:
            logger.warning("Environment variable %s is not set (referenced in config)", var)
            return ""
        return resolved

    return _ENV_VAR_RE.sub(_replace, value)


def _resolve_dict(data: dict[str, Any]) -> dict[str, Any]:
    """Recursively resolve environment variables in a dictionary."""
    result: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, str):
            result[key] = _resolve_env_vars(value)
        elif isinstance(value, dict):
            result[key] = _resolve_dict(value)
        elif isinstance(value, list):
            result[key] = [
                _resolve_env_vars(item) if isinstance(item, str) else item for item in value
            ]
        else:
            result[key] = value
    return result


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


@dataclass
class ReportConfig:
    """HTML report output configuration."""

    output_dir: str = DEFAULT_OUTPUT_DIR
    """Directory receiving ``index.html`` (relative paths resolve against the project root)."""

    title: str = DEFAULT_TITLE
    """Title shown in the report header."""

    open_browser: bool = False
    """Open the report in a browser after ``runsight render``."""


@dataclass
class PytestConfig:
    """Settings used by the pytest plugin."""

    project: str = DEFAULT_PROJECT
    """Project name recorded for every test of a pytest session."""


@dataclass
class RunsightConfig:
    """Top-level configuration object."""

    root: str
    """Project root directory."""

    report: ReportConfig = field(default_factory=ReportConfig)
    pytest: PytestConfig = field(default_factory=PytestConfig)
    raw: dict[str, Any] = field(default_factory=dict)
    """The resolved YAML document, for sections runsight does not model."""

    @property
    def output_path(self) -> Path:
        """Absolute output directory."""
        output = Path(self.report.output_dir)
        if output.is_absolute():
            return output
        return Path(self.root) / output


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    value = raw.get(name, {})
    if not isinstance(value, dict):
        logger.debug("Ignoring non-mapping config section %r", name)
        return {}
    return value


def load_config(root: str | Path) -> RunsightConfig:
    """Load and parse ``.runsight.yml`` from *root*.

    Falls back to defaults and ``RUNSIGHT_*`` environment variables when the
    YAML file is missing or incomplete.
    """
    root_path = Path(root).resolve()
    config_file = root_path / CONFIG_FILENAME

    raw: dict[str, Any] = {}
    if config_file.is_file():
        parsed = yaml.safe_load(config_file.read_text(encoding="utf-8"))
        if isinstance(parsed, dict):
            raw = _resolve_dict(parsed)

    report_raw = _section(raw, "report")
    report = ReportConfig(
        output_dir=str(
            report_raw.get("output_dir", os.environ.get("RUNSIGHT_OUTPUT_DIR", DEFAULT_OUTPUT_DIR))
        ),
        title=str(report_raw.get("title", os.environ.get("RUNSIGHT_TITLE", DEFAULT_TITLE))),
        open_browser=_as_bool(report_raw.get("open_browser", False)),
    )

    pytest_raw = _section(raw, "pytest")
    pytest_config = PytestConfig(
        project=str(
            pytest_raw.get("project", os.environ.get("RUNSIGHT_PROJECT", DEFAULT_PROJECT))
        ),
    )

    return RunsightConfig(
        root=str(root_path),
        report=report,
        pytest=pytest_config,
        raw=raw,
    )


def validate_config(config: RunsightConfig) -> list[str]:
    """Validate the configuration and return a list of error messages.

    Returns an empty list if the configuration is valid.
    """
    errors: list[str] = []

    if not config.report.output_dir.strip():
        errors.append("report.output_dir must not be empty")

    if not config.report.title.strip():
        errors.append("report.title must not be empty")

    if not config.pytest.project.strip():
        errors.append("pytest.project must not be empty")

    output = config.output_path
    if output.exists() and not output.is_dir():
        errors.append(f"report.output_dir points to a file, not a directory (got: {output})")

    return errors
