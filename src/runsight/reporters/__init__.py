"""Reporters that turn accumulated test results into report artifacts."""

from __future__ import annotations

from runsight.reporters.base import RunReporter
from runsight.reporters.html_report import ReportRenderer
from runsight.reporters.sink import HtmlReportSink

__all__ = [
    "HtmlReportSink",
    "ReportRenderer",
    "RunReporter",
]
