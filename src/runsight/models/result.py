"""Per-test result models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


class RecordStatus(Enum):
    """Outcome of a single test attempt as reported by the host runner."""

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"
    TIMED_OUT = "timedOut"
    INTERRUPTED = "interrupted"


KNOWN_STATUSES = frozenset(status.value for status in RecordStatus)


@dataclass(frozen=True)
class ErrorDetail:
    """One error attached to a test outcome."""

    message: str = ""
    stack: str = ""
    snippet: str = ""


@dataclass(frozen=True)
class StepDetail:
    """One step executed while running a test."""

    title: str
    """Step title (e.g. ``'page.click(#login)'``)."""

    category: str = ""
    """Step category (``'hook'``, ``'test.step'``, ``'pw:api'``, ...)."""

    duration: int = 0
    """Step duration in milliseconds."""

    error: str | None = None
    """Error message when the step failed."""


@dataclass(frozen=True)
class ResultRecord:
    """Normalized outcome of one completed test.

    Records are created once per completion event and never mutated.
    ``status`` is kept as the raw string so that values outside
    ``RecordStatus`` survive untouched until rendering.
    """

    title: str
    status: str
    file: str = "unknown"
    file_path: str = ""
    line: int = 0
    suite: str = ""
    project: str = "default"
    duration: int = 0
    retries: int = 0
    errors: tuple[ErrorDetail, ...] = ()
    steps: tuple[StepDetail, ...] = ()
    annotations: tuple[Mapping[str, Any], ...] = ()

    @property
    def is_flaky(self) -> bool:
        """A test that ultimately passed but needed at least one retry."""
        return self.status == RecordStatus.PASSED.value and self.retries > 0

    @property
    def is_known_status(self) -> bool:
        return self.status in KNOWN_STATUSES
