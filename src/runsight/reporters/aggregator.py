"""Aggregate accumulated records into a ``RunSummary``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from runsight.models.result import RecordStatus
from runsight.models.summary import RunSummary
from runsight.reporters.formatting import one_decimal

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence
    from datetime import datetime

    from runsight.models.result import ResultRecord

# Statuses tallied under their own counter; everything else counts as failed.
_SEPARATELY_COUNTED = frozenset(
    {
        RecordStatus.PASSED.value,
        RecordStatus.SKIPPED.value,
        RecordStatus.TIMED_OUT.value,
    }
)


def outcome_bucket(status: str) -> str:
    """Return the summary counter a status is tallied under.

    ``interrupted`` and unrecognized statuses fall into ``failed`` so that
    ``passed + failed + skipped + timedOut == total`` holds for every run.
    """
    return status if status in _SEPARATELY_COUNTED else RecordStatus.FAILED.value


def pass_rate(passed: int, total: int) -> str:
    """Percentage of passed tests with one decimal (halves round up), ``'0.0'`` for no tests."""
    if total <= 0:
        return "0.0"
    return one_decimal(passed / total * 100)


def group_records(
    records: Iterable[ResultRecord],
    key: Callable[[ResultRecord], str],
) -> dict[str, list[ResultRecord]]:
    """Group *records* by *key*, keeping first-seen key order and record order."""
    groups: dict[str, list[ResultRecord]] = {}
    for record in records:
        groups.setdefault(key(record), []).append(record)
    return groups


def summarize(
    records: Sequence[ResultRecord],
    start_time: datetime,
    end_time: datetime,
    overall_status: str,
) -> RunSummary:
    """Compute counts, pass rate and groupings for one run.

    Args:
        records: Records in completion order.
        start_time: When the run started.
        end_time: When the run ended.
        overall_status: Verdict reported by the host runner.

    Returns:
        A ``RunSummary``; ``flaky`` overlaps ``passed`` rather than being a
        separate category.
    """
    counts = {
        RecordStatus.PASSED.value: 0,
        RecordStatus.FAILED.value: 0,
        RecordStatus.SKIPPED.value: 0,
        RecordStatus.TIMED_OUT.value: 0,
    }
    flaky = 0
    for record in records:
        counts[outcome_bucket(record.status)] += 1
        if record.is_flaky:
            flaky += 1

    total = len(records)
    passed = counts[RecordStatus.PASSED.value]
    elapsed_ms = round((end_time - start_time).total_seconds() * 1000)

    return RunSummary(
        start_time=start_time,
        end_time=end_time,
        total_duration_ms=max(elapsed_ms, 0),
        total=total,
        passed=passed,
        failed=counts[RecordStatus.FAILED.value],
        skipped=counts[RecordStatus.SKIPPED.value],
        timed_out=counts[RecordStatus.TIMED_OUT.value],
        flaky=flaky,
        pass_rate=pass_rate(passed, total),
        by_project=group_records(records, lambda record: record.project),
        by_file=group_records(records, lambda record: record.file),
        overall_status=overall_status,
    )
