"""HTML report sink: accumulates records during a run and writes the page at the end."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.markup import escape

from runsight.models.descriptors import build_record
from runsight.reporters.aggregator import summarize
from runsight.reporters.base import RunReporter
from runsight.reporters.html_report import DEFAULT_TITLE, ReportRenderer

if TYPE_CHECKING:
    from runsight.models.descriptors import CaseDescriptor, OutcomeDescriptor
    from runsight.models.result import ResultRecord

logger = logging.getLogger(__name__)
console = Console()

DEFAULT_OUTPUT_DIR = "tests/reports/html-report"
REPORT_FILENAME = "index.html"


def _now() -> datetime:
    return datetime.now().astimezone()


class HtmlReportSink(RunReporter):
    """Reporter that writes a self-contained HTML page for one run.

    One instance owns the record list of one run.  Reporting problems are
    logged and swallowed: the host's exit status must reflect the tests,
    never the report.
    """

    def __init__(
        self,
        output_dir: str | Path = DEFAULT_OUTPUT_DIR,
        *,
        title: str = DEFAULT_TITLE,
        renderer: ReportRenderer | None = None,
        quiet: bool = False,
    ) -> None:
        """Initialize the sink.

        Args:
            output_dir: Directory that receives ``index.html``; created on demand.
            title: Report title.
            renderer: Renderer to use (default: ``ReportRenderer()``).
            quiet: Suppress the console notice after writing.
        """
        self._output_dir = Path(output_dir)
        self._title = title
        self._renderer = renderer or ReportRenderer()
        self._quiet = quiet
        self._records: list[ResultRecord] = []
        self._started_at: datetime | None = None
        self._run_config: Any = None
        self._finished = False

    @property
    def report_path(self) -> Path:
        return self._output_dir / REPORT_FILENAME

    @property
    def records(self) -> tuple[ResultRecord, ...]:
        """Snapshot of the records accumulated so far, in completion order."""
        return tuple(self._records)

    @property
    def run_config(self) -> Any:
        return self._run_config

    def on_run_start(self, run_config: Any = None, *, started_at: datetime | None = None) -> None:
        self._records = []
        self._finished = False
        self._run_config = run_config
        self._started_at = started_at or _now()
        logger.debug("Run started at %s", self._started_at.isoformat())

    def record(self, case: CaseDescriptor, outcome: OutcomeDescriptor) -> None:
        """Append the record for one completed test."""
        if self._finished:
            logger.warning(
                "Ignoring result for %r reported after run end", getattr(case, "title", case)
            )
            return
        try:
            self._records.append(build_record(case, outcome))
        except Exception:
            logger.exception("Dropping result for %r", getattr(case, "title", case))

    def on_test_complete(self, case: CaseDescriptor, outcome: OutcomeDescriptor) -> None:
        self.record(case, outcome)

    def on_run_end(self, overall_status: str, *, ended_at: datetime | None = None) -> Path | None:
        """Summarize, render and write the report.

        Returns:
            Path of the written report, or ``None`` when writing failed.
        """
        self._finished = True
        ended_at = ended_at or _now()
        started_at = self._started_at or ended_at
        path = self.report_path
        try:
            summary = summarize(self._records, started_at, ended_at, overall_status)
            document = self._renderer.render(summary, self._records, self._title)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(document, encoding="utf-8")
        except Exception:
            logger.exception("Failed to write HTML report to %s", path)
            return None

        logger.info("HTML report written to %s (%d records)", path, len(self._records))
        if not self._quiet:
            console.print(f"\n  HTML report written to [bold]{escape(str(path.resolve()))}[/bold]\n")
        return path
