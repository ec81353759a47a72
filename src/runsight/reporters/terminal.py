"""Terminal reporter with rich output formatting."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from runsight.reporters.aggregator import outcome_bucket
from runsight.reporters.formatting import browser_icon, format_duration

if TYPE_CHECKING:
    from collections.abc import Sequence

    from runsight.models.result import ResultRecord
    from runsight.models.summary import RunSummary

console = Console()

_PERFECT_RATE = 100.0
_GOOD_RATE = 80.0
_BAR_WIDTH = 40
_MAX_MESSAGE_LENGTH = 80

_BUCKET_COLORS = {
    "passed": "green",
    "failed": "red",
    "skipped": "yellow",
    "timedOut": "blue",
}


def _pass_rate_color(rate: float) -> str:
    """Return a Rich color name for a given pass-rate percentage."""
    if rate >= _PERFECT_RATE:
        return "green"
    if rate >= _GOOD_RATE:
        return "yellow"
    return "red"


class CLIReporter:
    """Rich terminal output for run summaries and result tables."""

    def __init__(self, output: Console | None = None) -> None:
        self.console = output or console

    def print_success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def print_error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {message}")

    def print_warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    def print_info(self, message: str) -> None:
        self.console.print(f"[dim]{message}[/dim]")

    def print_summary(self, summary: RunSummary) -> None:
        """Print a one-line distribution bar with the breakdown below it."""
        if summary.total == 0:
            self.console.print("  [dim]No tests executed[/dim]")
            return

        rate_color = _pass_rate_color(float(summary.pass_rate))
        bar = self._build_result_bar(summary)
        self.console.print()
        self.console.print(
            f"  [bold]{summary.total}[/bold] tests  {bar}  "
            f"[bold {rate_color}]{summary.pass_rate}%[/bold {rate_color}] pass rate  "
            f"[dim]⏱ {format_duration(summary.total_duration_ms)}[/dim]"
        )

        parts: list[str] = []
        if summary.passed:
            parts.append(f"[green]✓ {summary.passed} passed[/green]")
        if summary.failed:
            parts.append(f"[red]✗ {summary.failed} failed[/red]")
        if summary.skipped:
            parts.append(f"[yellow]⊘ {summary.skipped} skipped[/yellow]")
        if summary.timed_out:
            parts.append(f"[blue]⏱ {summary.timed_out} timed out[/blue]")
        if summary.flaky:
            parts.append(f"[magenta]↻ {summary.flaky} flaky[/magenta]")
        self.console.print(f"  {'  '.join(parts)}")
        self.console.print()

    def print_records(self, rows: Sequence[tuple[int, ResultRecord]], *, total: int) -> None:
        """Print ``(index, record)`` rows as a table, like the report page."""
        table = Table(title=f"Test Results ({len(rows)} of {total})", title_style="bold cyan")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Status", justify="center")
        table.add_column("Test", style="bold")
        table.add_column("Project")
        table.add_column("Duration", justify="right")
        table.add_column("Retry", justify="center")
        table.add_column("Message")

        for index, record in rows:
            color = _BUCKET_COLORS[outcome_bucket(record.status)]
            message = record.errors[0].message.splitlines()[0] if record.errors else ""
            if len(message) > _MAX_MESSAGE_LENGTH:
                message = message[: _MAX_MESSAGE_LENGTH - 1] + "…"
            table.add_row(
                str(index),
                f"[{color}]{escape(record.status.upper())}[/{color}]",
                escape(f"{record.title}\n{record.file}:{record.line}"),
                escape(f"{browser_icon(record.project)} {record.project}"),
                format_duration(record.duration),
                str(record.retries) if record.retries > 0 else "—",
                escape(message),
            )

        self.console.print(table)

    def _build_result_bar(self, summary: RunSummary, width: int = _BAR_WIDTH) -> str:
        """Build a colored bar proportional to the status counts."""
        chars: list[str] = []
        for count, color in (
            (summary.passed, "green"),
            (summary.failed, "red"),
            (summary.skipped, "yellow"),
            (summary.timed_out, "blue"),
        ):
            chars.extend([color] * round(count / summary.total * width))

        chars = chars[:width]
        chars.extend(["dim"] * (width - len(chars)))

        result = ""
        i = 0
        while i < len(chars):
            color = chars[i]
            j = i + 1
            while j < len(chars) and chars[j] == color:
                j += 1
            glyph = "░" if color == "dim" else "█"
            result += f"[{color}]{glyph * (j - i)}[/{color}]"
            i = j
        return result


reporter = CLIReporter()
