"""HTML report renderer.

Turns a ``RunSummary`` and the ordered records of a run into one
self-contained page: inline styles, inline script, inline SVG, and no
external references, so the file can be opened straight from disk.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from runsight.models.result import RecordStatus
from runsight.reporters.aggregator import outcome_bucket
from runsight.reporters.assets import SCRIPT, STYLES
from runsight.reporters.donut import render_donut
from runsight.reporters.formatting import (
    browser_icon,
    escape_html,
    format_duration,
    status_class,
    status_icon,
)

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from typing import Any

    from runsight.models.result import ResultRecord, StepDetail
    from runsight.models.summary import RunSummary

DEFAULT_TITLE = "Test Run Report"
GENERATOR_NAME = "runsight"

_TABLE_COLUMNS = 6


class ReportRenderer:
    """Render a complete report document.

    Rendering is a pure function of its inputs: the same summary, records
    and title always produce the same document.
    """

    def render(
        self,
        summary: RunSummary,
        records: Sequence[ResultRecord],
        title: str = DEFAULT_TITLE,
    ) -> str:
        """Render the report page.

        Args:
            summary: Aggregates computed from *records*.
            records: Records in completion order; the table keeps this order.
            title: Report title shown in the header and the browser tab.

        Returns:
            The HTML document as a string.
        """
        safe_title = escape_html(title)
        return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8"/>
  <meta name="viewport" content="width=device-width, initial-scale=1.0"/>
  <title>{safe_title}</title>
  <style>{STYLES}  </style>
</head>
<body>
{self._render_header(summary, safe_title)}
  <div class="container">
{self._render_summary_cards(summary)}
    <div class="chart-section">
      <div class="donut-card">
        {render_donut(summary.passed, summary.failed, summary.skipped, summary.timed_out, summary.total, summary.pass_rate)}
      </div>
      <div class="projects-row">
        {self._render_project_cards(summary.by_project)}
      </div>
    </div>
{self._render_toolbar(summary)}
    <div class="table-wrapper">
      <table>
        <thead>
          <tr>
            <th>#</th>
            <th>Status</th>
            <th>Test</th>
            <th>Project</th>
            <th style="text-align:right">Duration</th>
            <th style="text-align:center">Retry</th>
          </tr>
        </thead>
        <tbody id="testTableBody">
          {self._render_rows(records)}
        </tbody>
      </table>
    </div>

    <div class="footer">
      Generated by {GENERATOR_NAME} &nbsp;·&nbsp; {summary.start_time.isoformat()}
    </div>
  </div>

  <script>{SCRIPT}  </script>
</body>
</html>
"""

    # ── Page sections ────────────────────────────────────────────

    def _render_header(self, summary: RunSummary, safe_title: str) -> str:
        if summary.all_passed:
            banner = '<span class="overall-badge overall-passed">● All Passed</span>'
        else:
            banner = '<span class="overall-badge overall-failed">● Has Failures</span>'

        # Clock times are shown in the local zone of whoever renders the page.
        start, end = summary.start_time.astimezone(), summary.end_time.astimezone()
        flaky = (
            f"<span>🔁 Flaky: <strong>{summary.flaky}</strong></span>" if summary.flaky else ""
        )
        return f"""  <div class="header">
    <div class="header-content">
      <h1>🎭 {safe_title} {banner}</h1>
      <div class="header-meta">
        <span>📅 {start.strftime("%a, %b %d, %Y")}</span>
        <span>🕐 {start.strftime("%H:%M")} → {end.strftime("%H:%M")}</span>
        <span>⏱️ Duration: <strong>{format_duration(summary.total_duration_ms)}</strong></span>
        {flaky}
      </div>
    </div>
  </div>"""

    def _render_summary_cards(self, summary: RunSummary) -> str:
        cards = (
            ("card-total", summary.total, "Total Tests"),
            ("card-passed", summary.passed, "Passed"),
            ("card-failed", summary.failed, "Failed"),
            ("card-skipped", summary.skipped, "Skipped"),
            ("card-duration", format_duration(summary.total_duration_ms), "Duration"),
            ("card-rate", f"{summary.pass_rate}%", "Pass Rate"),
        )
        body = "".join(
            f"""
      <div class="summary-card {css_class}">
        <div class="summary-value">{value}</div>
        <div class="summary-label">{label}</div>
      </div>"""
            for css_class, value, label in cards
        )
        return f'    <div class="summary-grid">{body}\n    </div>'

    def _render_project_cards(self, by_project: Mapping[str, Sequence[ResultRecord]]) -> str:
        cards = []
        for project, records in by_project.items():
            passed = sum(1 for r in records if r.status == RecordStatus.PASSED.value)
            failed = sum(
                1 for r in records if outcome_bucket(r.status) == RecordStatus.FAILED.value
            )
            safe_project = escape_html(project)
            failed_html = f'<span class="mini-failed">{failed} ✗</span>' if failed else ""
            cards.append(f"""
        <div class="project-card" data-project="{safe_project}" onclick="filterByProject(this.dataset.project, this)">
          <div class="project-icon">{browser_icon(project)}</div>
          <div class="project-name">{safe_project}</div>
          <div class="project-stats">
            <span class="mini-passed">{passed} ✓</span>
            {failed_html}
          </div>
        </div>""")
        return "".join(cards)

    def _render_toolbar(self, summary: RunSummary) -> str:
        return f"""    <div class="toolbar">
      <button class="filter-btn active" onclick="filterByStatus('all', this)">All ({summary.total})</button>
      <button class="filter-btn" onclick="filterByStatus('passed', this)">{status_icon("passed")} Passed ({summary.passed})</button>
      <button class="filter-btn" onclick="filterByStatus('failed', this)">{status_icon("failed")} Failed ({summary.failed})</button>
      <button class="filter-btn" onclick="filterByStatus('skipped', this)">{status_icon("skipped")} Skipped ({summary.skipped})</button>
      <input class="search-input" type="text" placeholder="🔍  Search tests..." oninput="searchTests(this.value)"/>
      <span class="visible-count" id="visibleCount">{summary.total} of {summary.total} shown</span>
    </div>"""

    # ── Results table ────────────────────────────────────────────

    def _render_rows(self, records: Sequence[ResultRecord]) -> str:
        if not records:
            return f"""<tr class="empty-row"><td colspan="{_TABLE_COLUMNS}">
              <div class="empty-state">
                <div class="icon">🧪</div>
                <div>No test results found</div>
              </div>
            </td></tr>"""
        return "".join(
            self._render_row(index, record) for index, record in enumerate(records, start=1)
        )

    def _render_row(self, index: int, record: ResultRecord) -> str:
        status = escape_html(record.status)
        retry = (
            f'<span class="retry-badge">{record.retries}</span>' if record.retries > 0 else "—"
        )
        flaky = '<span class="flaky-tag">flaky</span>' if record.is_flaky else ""
        return f"""
          <tr class="test-row {status_class(record.status)}" data-status="{status}" data-project="{escape_html(record.project)}" data-file="{escape_html(record.file)}">
            <td class="cell-index">{index}</td>
            <td class="cell-status"><span class="badge badge-{status}">{status_icon(record.status)} {escape_html(record.status.upper())}</span></td>
            <td class="cell-title">
              <div class="test-title">{escape_html(record.title)}{flaky}</div>
              <div class="test-meta">{escape_html(record.file)}:{record.line}</div>
              {self._render_errors(record)}
              {self._render_annotations(record.annotations)}
              {self._render_steps(record.steps)}
            </td>
            <td class="cell-project"><span class="project-badge">{browser_icon(record.project)} {escape_html(record.project)}</span></td>
            <td class="cell-duration">{format_duration(record.duration)}</td>
            <td class="cell-retry">{retry}</td>
          </tr>"""

    def _render_errors(self, record: ResultRecord) -> str:
        if not record.errors:
            return ""
        messages = "".join(
            f'<pre class="error-message">{escape_html(error.message)}</pre>'
            for error in record.errors
        )
        return f'<div class="error-block">{messages}</div>'

    def _render_annotations(self, annotations: Sequence[Mapping[str, Any]]) -> str:
        if not annotations:
            return ""
        tags = []
        for annotation in annotations:
            get = getattr(annotation, "get", None)
            if get is None:
                text = escape_html(annotation)
            else:
                kind = escape_html(get("type", ""))
                description = escape_html(get("description", ""))
                text = f"{kind}: {description}" if description else kind
            tags.append(f'<span class="annotation">{text}</span>')
        return f'<div class="annotations">{"".join(tags)}</div>'

    def _render_steps(self, steps: Sequence[StepDetail]) -> str:
        if not steps:
            return ""
        items = "".join(
            f"""
                <div class="step-item{' step-error' if step.error else ''}">
                  <span class="step-category">{escape_html(step.category)}</span>
                  <span class="step-title">{escape_html(step.title)}</span>
                  <span class="step-duration">{format_duration(step.duration)}</span>
                </div>"""
            for step in steps
        )
        plural = "s" if len(steps) > 1 else ""
        return f"""<div class="steps-block">
                <div class="steps-toggle" onclick="this.parentElement.classList.toggle('open')">
                  <span class="toggle-icon">▶</span> {len(steps)} step{plural}
                </div>
                <div class="steps-list">{items}
                </div>
              </div>"""
