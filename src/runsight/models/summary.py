"""Run-level summary derived from the accumulated records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from runsight.models.result import ResultRecord


@dataclass(frozen=True)
class RunSummary:
    """Aggregate statistics for one run, computed once at run end."""

    start_time: datetime
    end_time: datetime
    total_duration_ms: int = 0
    total: int = 0
    passed: int = 0
    failed: int = 0
    """Failed, interrupted and unrecognized outcomes."""
    skipped: int = 0
    timed_out: int = 0
    flaky: int = 0
    """Passed after at least one retry; also counted in ``passed``."""
    pass_rate: str = "0.0"
    """Percentage of passed records, one decimal place."""
    by_project: dict[str, list[ResultRecord]] = field(default_factory=dict)
    by_file: dict[str, list[ResultRecord]] = field(default_factory=dict)
    overall_status: str = "passed"

    @property
    def all_passed(self) -> bool:
        return self.overall_status == "passed"
