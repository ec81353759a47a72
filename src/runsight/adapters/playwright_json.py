"""Playwright JSON report adapter — replays a finished run into a reporter.

Playwright's ``--reporter=json`` output holds every attempt of every test.
This module turns that document back into the event stream a live run
would have produced (run start, one completion per attempt, run end) and
feeds it to any ``RunReporter``.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any, cast

from runsight.models.descriptors import CaseDescriptor, OutcomeDescriptor

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from runsight.reporters.base import RunReporter

logger = logging.getLogger(__name__)


class ReportInputError(ValueError):
    """Raised when a Playwright JSON report cannot be read or understood."""


@dataclass
class CompletionEvent:
    """One test attempt extracted from the report."""

    case: CaseDescriptor
    outcome: OutcomeDescriptor
    ended_at: datetime | None = None


@dataclass
class PlaywrightRun:
    """A parsed Playwright JSON report."""

    events: list[CompletionEvent] = field(default_factory=list)
    started_at: datetime | None = None
    ended_at: datetime | None = None
    overall_status: str = "passed"
    config: dict[str, Any] = field(default_factory=dict)


# ── Public API ───────────────────────────────────────────────────


def load_playwright_report(path: Path) -> dict[str, Any]:
    """Read and decode a Playwright JSON report file."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ReportInputError(f"Cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ReportInputError(f"{path} is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ReportInputError(f"{path} does not contain a JSON object")
    return data


def parse_playwright_report(data: Mapping[str, Any]) -> PlaywrightRun:
    """Extract completion events and run metadata from a decoded report.

    Events are ordered by the end time of each attempt (``startTime`` plus
    ``duration``) when every attempt carries a start time; otherwise the
    document order is kept.
    """
    config = data.get("config")
    config = config if isinstance(config, dict) else {}
    root_dir = str(config.get("rootDir", "") or "")

    events: list[CompletionEvent] = []
    for suite in _dicts(data.get("suites")):
        _walk_suite(suite, root_dir, events)

    if events and all(event.ended_at is not None for event in events):
        order = {id(event): index for index, event in enumerate(events)}
        try:
            events.sort(key=lambda event: (cast("datetime", event.ended_at), order[id(event)]))
        except TypeError:
            logger.debug("Mixed naive and aware timestamps; keeping document order")

    stats = data.get("stats")
    stats = stats if isinstance(stats, dict) else {}
    started_at = _parse_time(stats.get("startTime"))
    ended_at = None
    if started_at is not None:
        ended_at = started_at + timedelta(milliseconds=_number(stats.get("duration")))

    unexpected = _number(stats.get("unexpected"))
    has_errors = bool(_dicts(data.get("errors")))
    overall_status = "failed" if unexpected > 0 or has_errors else "passed"
    if not stats:
        failing = {"failed", "timedOut", "interrupted"}
        if any(event.outcome.status in failing for event in events):
            overall_status = "failed"

    logger.debug("Parsed %d test attempts from Playwright report", len(events))
    return PlaywrightRun(
        events=events,
        started_at=started_at,
        ended_at=ended_at,
        overall_status=overall_status,
        config=config,
    )


def replay_playwright_report(data: Mapping[str, Any], reporter: RunReporter) -> Any:
    """Feed a decoded Playwright report through *reporter*'s lifecycle hooks.

    Returns:
        Whatever ``reporter.on_run_end`` returns.
    """
    run = parse_playwright_report(data)
    reporter.on_run_start(run.config, started_at=run.started_at)
    for event in run.events:
        reporter.on_test_complete(event.case, event.outcome)
    return reporter.on_run_end(run.overall_status, ended_at=run.ended_at)


# ── Parsing helpers ──────────────────────────────────────────────


def _walk_suite(suite: dict[str, Any], root_dir: str, events: list[CompletionEvent]) -> None:
    """Recursively collect attempts from *suite* and its nested suites."""
    suite_title = str(suite.get("title", "") or "")

    for spec in _dicts(suite.get("specs")):
        file = _join(root_dir, spec.get("file") or suite.get("file"))
        for test in _dicts(spec.get("tests")):
            case = CaseDescriptor(
                title=spec.get("title", ""),
                file=file,
                line=spec.get("line"),
                parent_title=suite_title,
                project=test.get("projectName") or test.get("projectId"),
                annotations=test.get("annotations") or (),
            )
            for result in _dicts(test.get("results")):
                events.append(_completion(case, result))

    # Flat shape: tests listed directly on the suite with their final status.
    for test in _dicts(suite.get("tests")):
        if "status" not in test:
            continue
        location = test.get("location")
        location = location if isinstance(location, dict) else {}
        case = CaseDescriptor(
            title=test.get("title", ""),
            file=_join(root_dir, location.get("file")),
            line=location.get("line"),
            parent_title=suite_title,
            project=test.get("projectName"),
            annotations=test.get("annotations") or (),
        )
        events.append(_completion(case, test))

    for nested in _dicts(suite.get("suites")):
        _walk_suite(nested, root_dir, events)


def _completion(case: CaseDescriptor, result: dict[str, Any]) -> CompletionEvent:
    errors = _dicts(result.get("errors"))
    if not errors and isinstance(result.get("error"), dict):
        errors = [result["error"]]

    duration = _number(result.get("duration"))
    started = _parse_time(result.get("startTime"))
    ended = started + timedelta(milliseconds=duration) if started is not None else None

    outcome = OutcomeDescriptor(
        status=result.get("status", ""),
        duration=duration,
        retry=result.get("retry", 0),
        errors=errors,
        steps=_flatten_steps(_dicts(result.get("steps"))),
    )
    return CompletionEvent(case=case, outcome=outcome, ended_at=ended)


def _flatten_steps(steps: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Flatten nested ``test.step`` entries depth-first, keeping their order."""
    flat: list[dict[str, Any]] = []
    for step in steps:
        flat.append(
            {
                "title": step.get("title", ""),
                "category": step.get("category", "test.step"),
                "duration": step.get("duration", 0),
                "error": step.get("error"),
            }
        )
        flat.extend(_flatten_steps(_dicts(step.get("steps"))))
    return flat


def _dicts(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _join(root_dir: str, file: Any) -> str | None:
    if not file:
        return None
    file = str(file)
    if not root_dir or file.startswith(("/", root_dir)):
        return file
    return f"{root_dir.rstrip('/')}/{file}"


def _number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    number = float(value)
    return number if math.isfinite(number) else 0.0


def _parse_time(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        logger.debug("Ignoring unparseable timestamp %r", value)
        return None
