"""pytest plugin — records a pytest session into an HTML run report.

Enabled with ``--runsight-html=DIR``.  Each test's setup/call/teardown
reports are folded into one completion event whose steps are the phases;
attempts discarded by rerun plugins are reported as separate failed
attempts, like Playwright reports retries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

from runsight.config import load_config
from runsight.models.descriptors import CaseDescriptor, OutcomeDescriptor
from runsight.reporters.sink import HtmlReportSink

if TYPE_CHECKING:
    from runsight.reporters.base import RunReporter

logger = logging.getLogger(__name__)

_PLUGIN_NAME = "runsight-html-reporter"
_plugin_key = pytest.StashKey["RunsightPlugin"]()

# pytest exit codes
_EXIT_OK = 0
_EXIT_INTERRUPTED = 2
_EXIT_NO_TESTS_COLLECTED = 5

_MS_PER_SECOND = 1000

# "file::Class::test" has a parent group; "file::test" does not.
_MIN_NESTED_NODEID_PARTS = 3
_SKIP_LONGREPR_LENGTH = 3


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("runsight", "HTML run report")
    group.addoption(
        "--runsight-html",
        action="store",
        dest="runsight_html",
        metavar="DIR",
        default=None,
        help="Write a self-contained HTML report to DIR/index.html.",
    )
    group.addoption(
        "--runsight-title",
        action="store",
        dest="runsight_title",
        default=None,
        help="Report title (default: report.title from .runsight.yml).",
    )
    group.addoption(
        "--runsight-project",
        action="store",
        dest="runsight_project",
        default=None,
        help="Project name recorded for every test (default: pytest.project from .runsight.yml).",
    )


def pytest_configure(config: pytest.Config) -> None:
    output_dir = config.getoption("runsight_html", None)
    if not output_dir or hasattr(config, "workerinput"):
        return

    settings = load_config(config.rootpath)
    title = config.getoption("runsight_title", None) or settings.report.title
    project = config.getoption("runsight_project", None) or settings.pytest.project

    plugin = RunsightPlugin(HtmlReportSink(output_dir, title=title), project=project)
    config.stash[_plugin_key] = plugin
    config.pluginmanager.register(plugin, _PLUGIN_NAME)
    logger.debug("HTML run report enabled, writing to %s", output_dir)


def pytest_unconfigure(config: pytest.Config) -> None:
    plugin = config.stash.get(_plugin_key, None)
    if plugin is not None:
        del config.stash[_plugin_key]
        config.pluginmanager.unregister(plugin)


@dataclass
class _PendingTest:
    """Phase reports collected for the current attempt of one test."""

    nodeid: str
    location: tuple[str, int | None, str]
    phases: list[Any] = field(default_factory=list)


class RunsightPlugin:
    """Translate pytest session hooks into ``RunReporter`` events."""

    def __init__(self, reporter: RunReporter, *, project: str | None = None) -> None:
        self._reporter = reporter
        self._project = project
        self._rootpath: Path | None = None
        self._pending: dict[str, _PendingTest] = {}

    def pytest_sessionstart(self, session: pytest.Session) -> None:
        config = session.config
        self._rootpath = Path(config.rootpath)
        self._pending = {}
        self._reporter.on_run_start(
            {"rootdir": str(self._rootpath), "args": [str(arg) for arg in config.args]}
        )

    def pytest_runtest_logreport(self, report: pytest.TestReport) -> None:
        pending = self._pending.get(report.nodeid)
        if pending is None:
            pending = _PendingTest(report.nodeid, tuple(report.location))
            self._pending[report.nodeid] = pending
        pending.phases.append(report)

        if report.outcome == "rerun":
            # The attempt is abandoned here; its teardown is never logged.
            self._complete(pending, status="failed")
            pending.phases = []
        elif report.when == "teardown":
            self._complete(pending, status=_final_status(pending.phases))
            del self._pending[report.nodeid]

    def pytest_sessionfinish(self, session: pytest.Session, exitstatus: int) -> None:
        for pending in list(self._pending.values()):
            if pending.phases:
                self._complete(pending, status="interrupted")
        self._pending = {}
        self._reporter.on_run_end(_overall_status(int(exitstatus)))

    # ── Translation ──────────────────────────────────────────────

    def _complete(self, pending: _PendingTest, *, status: str) -> None:
        case, outcome = self._describe(pending, status)
        self._reporter.on_test_complete(case, outcome)

    def _describe(
        self, pending: _PendingTest, status: str
    ) -> tuple[CaseDescriptor, OutcomeDescriptor]:
        relpath, lineno, _domain = pending.location
        parts = pending.nodeid.split("::")
        file_path = str(self._rootpath / relpath) if self._rootpath else relpath

        errors = []
        steps = []
        annotations = []
        for report in pending.phases:
            abandoned = report.failed or report.outcome == "rerun"
            message = _crash_message(report) if abandoned else None
            steps.append(
                {
                    "title": report.when,
                    "category": "test" if report.when == "call" else "hook",
                    "duration": report.duration * _MS_PER_SECOND,
                    "error": message,
                }
            )
            if message is not None:
                errors.append({"message": message, "stack": report.longreprtext})
            if report.skipped:
                annotations.append(_skip_annotation(report))

        case = CaseDescriptor(
            title=parts[-1],
            file=file_path,
            line=lineno + 1 if lineno is not None else None,
            parent_title=parts[-2] if len(parts) >= _MIN_NESTED_NODEID_PARTS else "",
            project=self._project,
            annotations=annotations,
        )
        outcome = OutcomeDescriptor(
            status=status,
            duration=sum(report.duration for report in pending.phases) * _MS_PER_SECOND,
            retry=getattr(pending.phases[-1], "rerun", 0) if pending.phases else 0,
            errors=errors,
            steps=steps,
        )
        return case, outcome


def _final_status(phases: list[Any]) -> str:
    """Fold phase outcomes: any failure wins, then skipped, else passed."""
    if any(report.failed for report in phases):
        return "failed"
    if any(report.skipped for report in phases):
        return "skipped"
    return "passed"


def _overall_status(exitstatus: int) -> str:
    if exitstatus in {_EXIT_OK, _EXIT_NO_TESTS_COLLECTED}:
        return "passed"
    if exitstatus == _EXIT_INTERRUPTED:
        return "interrupted"
    return "failed"


def _crash_message(report: Any) -> str:
    """Short failure message, falling back to the full representation."""
    crash = getattr(report.longrepr, "reprcrash", None)
    message = getattr(crash, "message", None)
    if message:
        return str(message)
    return report.longreprtext or f"{report.when} failed"


def _skip_annotation(report: Any) -> dict[str, str]:
    reason = getattr(report, "wasxfail", None)
    if reason is not None:
        return {"type": "xfail", "description": str(reason)}
    longrepr = report.longrepr
    if isinstance(longrepr, tuple) and len(longrepr) == _SKIP_LONGREPR_LENGTH:
        return {"type": "skip", "description": str(longrepr[2])}
    return {"type": "skip", "description": ""}
