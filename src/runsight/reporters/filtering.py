"""Row visibility rules shared by the report page and the CLI.

The embedded page script applies the same status, project and search
rules to every table row whenever a filter changes.  The Python copy lets
the CLI and the tests reason about which rows a filter combination shows;
search text matches the page except across cell boundaries (see
``row_text``).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from runsight.reporters.aggregator import outcome_bucket
from runsight.reporters.formatting import browser_icon, format_duration, status_icon

if TYPE_CHECKING:
    from collections.abc import Iterable

    from runsight.models.result import ResultRecord

ALL = "all"


@dataclass(frozen=True)
class RowFilter:
    """The three independent filter values of the results table."""

    status: str = ALL
    project: str = ALL
    search: str = ""

    def with_status(self, status: str) -> RowFilter:
        return replace(self, status=status or ALL)

    def toggle_project(self, project: str) -> RowFilter:
        """Select *project*, or reset to all projects if it is already selected."""
        return replace(self, project=ALL if self.project == project else project)

    def with_search(self, search: str) -> RowFilter:
        return replace(self, search=search)

    def matches(self, index: int, record: ResultRecord) -> bool:
        match_status = self.status == ALL or outcome_bucket(record.status) == self.status
        match_project = self.project == ALL or record.project == self.project
        match_search = not self.search or self.search.lower() in row_text(index, record).lower()
        return match_status and match_project and match_search


def row_text(index: int, record: ResultRecord) -> str:
    """Text a reader sees in the table row for *record* (1-based *index*).

    Built from the same fragments the renderer emits for the row, in the
    same order.  Text inside one cell is joined the way the page joins it
    (the flaky tag sits directly after the title); separate cells and
    elements are joined by a single space, whereas the page's
    ``textContent`` carries the template's indentation there.
    """
    title = record.title + ("flaky" if record.is_flaky else "")
    parts = [
        str(index),
        f"{status_icon(record.status)} {record.status.upper()}",
        title,
        f"{record.file}:{record.line}",
    ]
    parts.extend(error.message for error in record.errors)
    parts.extend(_annotation_text(annotation) for annotation in record.annotations)
    if record.steps:
        plural = "s" if len(record.steps) > 1 else ""
        parts.append(f"▶ {len(record.steps)} step{plural}")
        for step in record.steps:
            parts.extend((step.category, step.title, format_duration(step.duration)))
    parts.extend(
        (
            f"{browser_icon(record.project)} {record.project}",
            format_duration(record.duration),
            str(record.retries) if record.retries > 0 else "—",
        )
    )
    return " ".join(parts)


def visible_records(
    records: Iterable[ResultRecord],
    row_filter: RowFilter,
) -> list[tuple[int, ResultRecord]]:
    """Return ``(index, record)`` pairs that stay visible under *row_filter*."""
    return [
        (index, record)
        for index, record in enumerate(records, start=1)
        if row_filter.matches(index, record)
    ]


def _annotation_text(annotation: object) -> str:
    get = getattr(annotation, "get", None)
    if get is None:
        return str(annotation)
    kind = get("type", "")
    description = get("description", "")
    return f"{kind}: {description}" if description else str(kind)
