"""Adapters that translate host test-runner output into reporter events.

The pytest plugin lives in ``runsight.adapters.pytest_plugin`` and is
loaded by pytest through its ``pytest11`` entry point.
"""

from __future__ import annotations

from runsight.adapters.playwright_json import (
    PlaywrightRun,
    ReportInputError,
    load_playwright_report,
    parse_playwright_report,
    replay_playwright_report,
)

__all__ = [
    "PlaywrightRun",
    "ReportInputError",
    "load_playwright_report",
    "parse_playwright_report",
    "replay_playwright_report",
]
