"""Tests for run summary aggregation."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from runsight.models import ResultRecord
from runsight.reporters.aggregator import group_records, outcome_bucket, pass_rate, summarize

START = datetime(2026, 3, 14, 9, 30, tzinfo=UTC)


def _record(
    status: str, project: str = "default", *, file: str = "a.spec.ts", retries: int = 0
) -> ResultRecord:
    return ResultRecord(
        title=f"{status}-{project}", status=status, project=project, file=file, retries=retries
    )


def test_three_completion_run() -> None:
    records = [
        _record("passed", "A"),
        _record("failed", "A"),
        _record("passed", "B", retries=1),
    ]

    summary = summarize(records, START, START + timedelta(seconds=2), "failed")

    assert summary.total == 3
    assert summary.passed == 2
    assert summary.failed == 1
    assert summary.skipped == 0
    assert summary.timed_out == 0
    assert summary.flaky == 1
    assert summary.pass_rate == "66.7"
    assert {project: len(group) for project, group in summary.by_project.items()} == {
        "A": 2,
        "B": 1,
    }
    assert summary.total_duration_ms == 2000
    assert not summary.all_passed


def test_empty_run() -> None:
    summary = summarize([], START, START, "passed")

    assert summary.total == 0
    assert summary.pass_rate == "0.0"
    assert summary.by_project == {}
    assert summary.all_passed


@pytest.mark.parametrize(
    "statuses",
    [
        ["passed", "failed", "skipped", "timedOut"],
        ["interrupted", "passed"],
        ["weird", "", "timedOut"],
        ["skipped"] * 5,
    ],
)
def test_counters_add_up_to_total(statuses: list[str]) -> None:
    summary = summarize([_record(s) for s in statuses], START, START, "passed")

    assert summary.passed + summary.failed + summary.skipped + summary.timed_out == summary.total


def test_interrupted_and_unknown_count_as_failed() -> None:
    summary = summarize([_record("interrupted"), _record("weird")], START, START, "interrupted")
    assert summary.failed == 2


def test_negative_elapsed_time_is_clamped() -> None:
    summary = summarize([], START, START - timedelta(seconds=5), "passed")
    assert summary.total_duration_ms == 0


def test_outcome_bucket() -> None:
    assert outcome_bucket("passed") == "passed"
    assert outcome_bucket("timedOut") == "timedOut"
    assert outcome_bucket("interrupted") == "failed"
    assert outcome_bucket("unknown") == "failed"


def test_pass_rate_rounding() -> None:
    assert pass_rate(1, 3) == "33.3"
    assert pass_rate(3, 3) == "100.0"
    assert pass_rate(0, 0) == "0.0"


@pytest.mark.parametrize(("passed", "total", "expected"), [(1, 16, "6.3"), (3, 16, "18.8")])
def test_pass_rate_rounds_halves_up(passed: int, total: int, expected: str) -> None:
    assert pass_rate(passed, total) == expected


def test_group_records_keeps_first_seen_order() -> None:
    records = [
        _record("passed", "webkit"),
        _record("passed", "chromium"),
        _record("failed", "webkit"),
    ]

    groups = group_records(records, lambda r: r.project)

    assert list(groups) == ["webkit", "chromium"]
    assert groups["webkit"] == [records[0], records[2]]


def test_by_file_grouping() -> None:
    records = [_record("passed", file="a.spec.ts"), _record("passed", file="b.spec.ts")]
    summary = summarize(records, START, START, "passed")
    assert list(summary.by_file) == ["a.spec.ts", "b.spec.ts"]
