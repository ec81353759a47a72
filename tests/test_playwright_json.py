"""Tests for the Playwright JSON report adapter."""

from __future__ import annotations

import copy
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any
from unittest.mock import MagicMock

import pytest

from runsight.adapters.playwright_json import (
    ReportInputError,
    load_playwright_report,
    parse_playwright_report,
    replay_playwright_report,
)
from runsight.models import build_record
from runsight.reporters.sink import HtmlReportSink

if TYPE_CHECKING:
    from pathlib import Path


# ── Loading ─────────────────────────────────────────────────────


def test_load_report(playwright_report_file: Path) -> None:
    data = load_playwright_report(playwright_report_file)
    assert data["config"]["rootDir"] == "/repo/tests"


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ReportInputError, match="Cannot read"):
        load_playwright_report(tmp_path / "missing.json")


def test_load_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ReportInputError, match="not valid JSON"):
        load_playwright_report(path)


def test_load_non_object(tmp_path: Path) -> None:
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ReportInputError, match="JSON object"):
        load_playwright_report(path)


def test_input_error_is_value_error() -> None:
    assert issubclass(ReportInputError, ValueError)


# ── Parsing ─────────────────────────────────────────────────────


def test_events_are_ordered_by_attempt_end(playwright_report: dict[str, Any]) -> None:
    run = parse_playwright_report(playwright_report)

    attempts = [(e.case.project, e.outcome.status, e.outcome.retry) for e in run.events]
    assert attempts == [
        ("firefox", "passed", 0),
        ("chromium", "failed", 0),
        ("chromium", "passed", 1),
    ]


def test_case_fields(playwright_report: dict[str, Any]) -> None:
    run = parse_playwright_report(playwright_report)
    record = build_record(run.events[1].case, run.events[1].outcome)

    assert record.title == "applies coupon"
    assert record.file == "cart.spec.ts"
    assert record.file_path == "/repo/tests/cart.spec.ts"
    assert record.line == 14
    assert record.suite == "checkout"
    assert record.errors[0].message == "Timeout 5000ms exceeded"
    assert record.errors[0].stack == "at cart.spec.ts:16"


def test_nested_steps_are_flattened(playwright_report: dict[str, Any]) -> None:
    run = parse_playwright_report(playwright_report)
    record = build_record(run.events[1].case, run.events[1].outcome)

    assert [step.title for step in record.steps] == ["page.click", "locator.wait"]
    assert record.steps[0].error == "Timeout"
    assert record.steps[1].error is None


def test_run_times_and_status(playwright_report: dict[str, Any]) -> None:
    run = parse_playwright_report(playwright_report)

    assert run.started_at == datetime(2026, 3, 14, 9, 29, 59, 500000, tzinfo=UTC)
    assert run.ended_at == datetime(2026, 3, 14, 9, 30, 7, tzinfo=UTC)
    assert run.overall_status == "passed"
    assert run.config == {"rootDir": "/repo/tests"}


def test_unexpected_results_fail_the_run(playwright_report: dict[str, Any]) -> None:
    playwright_report["stats"]["unexpected"] = 1
    assert parse_playwright_report(playwright_report).overall_status == "failed"


def test_top_level_errors_fail_the_run(playwright_report: dict[str, Any]) -> None:
    playwright_report["errors"] = [{"message": "global setup failed"}]
    assert parse_playwright_report(playwright_report).overall_status == "failed"


def test_without_stats_status_comes_from_results(playwright_report: dict[str, Any]) -> None:
    del playwright_report["stats"]

    run = parse_playwright_report(playwright_report)

    assert run.started_at is None
    assert run.ended_at is None
    assert run.overall_status == "failed"


def test_document_order_without_start_times(playwright_report: dict[str, Any]) -> None:
    data = copy.deepcopy(playwright_report)
    spec = data["suites"][0]["suites"][0]["specs"][0]
    for test in spec["tests"]:
        for result in test["results"]:
            result.pop("startTime")

    run = parse_playwright_report(data)

    assert [e.case.project for e in run.events] == ["chromium", "chromium", "firefox"]


def test_flat_suite_shape() -> None:
    data = {
        "suites": [
            {
                "title": "smoke",
                "tests": [
                    {
                        "title": "loads",
                        "status": "timedOut",
                        "duration": 30000,
                        "projectName": "webkit",
                        "location": {"file": "smoke.spec.ts", "line": 3},
                        "error": {"message": "Test timeout of 30000ms exceeded."},
                    }
                ],
            }
        ]
    }

    run = parse_playwright_report(data)
    (event,) = run.events
    record = build_record(event.case, event.outcome)

    assert record.status == "timedOut"
    assert record.file == "smoke.spec.ts"
    assert record.line == 3
    assert record.project == "webkit"
    assert record.errors[0].message == "Test timeout of 30000ms exceeded."
    assert run.overall_status == "failed"


def test_malformed_document_yields_empty_run() -> None:
    run = parse_playwright_report({"suites": "nope", "stats": {"duration": "x"}})

    assert run.events == []
    assert run.started_at is None
    assert run.overall_status == "passed"


def test_invalid_timestamps_are_ignored(playwright_report: dict[str, Any]) -> None:
    playwright_report["stats"]["startTime"] = "yesterday"
    assert parse_playwright_report(playwright_report).started_at is None


# ── Replay ──────────────────────────────────────────────────────


def test_replay_drives_reporter_lifecycle(playwright_report: dict[str, Any]) -> None:
    reporter = MagicMock()
    reporter.on_run_end.return_value = "done"

    result = replay_playwright_report(playwright_report, reporter)

    assert result == "done"
    reporter.on_run_start.assert_called_once()
    assert reporter.on_test_complete.call_count == 3
    reporter.on_run_end.assert_called_once_with(
        "passed", ended_at=datetime(2026, 3, 14, 9, 30, 7, tzinfo=UTC)
    )


def test_replay_into_html_sink(tmp_path: Path, playwright_report: dict[str, Any]) -> None:
    sink = HtmlReportSink(tmp_path / "html", title="Replay", quiet=True)

    path = replay_playwright_report(playwright_report, sink)

    assert path == tmp_path / "html" / "index.html"
    content = path.read_text(encoding="utf-8")
    assert "applies coupon" in content
    assert '<span class="flaky-tag">flaky</span>' in content
    assert "66.7%" in content
    assert "● All Passed" in content
    assert [r.retries for r in sink.records] == [0, 0, 1]
