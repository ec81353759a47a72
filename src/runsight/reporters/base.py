"""Abstract base class for run reporters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from datetime import datetime

    from runsight.models.descriptors import CaseDescriptor, OutcomeDescriptor


class RunReporter(ABC):
    """Receiver of the three lifecycle events a host test runner emits.

    Host adapters (the pytest plugin, the Playwright JSON replay) only talk
    to this interface.  The host guarantees that calls are serialized and
    that ``on_run_end`` follows ``on_run_start`` even for cancelled runs.
    """

    @abstractmethod
    def on_run_start(self, run_config: Any = None, *, started_at: datetime | None = None) -> None:
        """Called once before any test completes."""

    @abstractmethod
    def on_test_complete(self, case: CaseDescriptor, outcome: OutcomeDescriptor) -> None:
        """Called once per finished test attempt, in completion order."""

    @abstractmethod
    def on_run_end(self, overall_status: str, *, ended_at: datetime | None = None) -> Any:
        """Called once after the last test with the host's overall verdict."""
