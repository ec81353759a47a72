"""Completion-event descriptors and their normalization into ``ResultRecord``.

Host adapters describe each finished test with a ``CaseDescriptor`` (what
ran) and an ``OutcomeDescriptor`` (how it went).  ``build_record`` turns the
pair into an immutable ``ResultRecord``, substituting defaults for anything
missing or malformed so that reporting never aborts the run being reported.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Any

from runsight.models.result import ErrorDetail, RecordStatus, ResultRecord, StepDetail

logger = logging.getLogger(__name__)

DEFAULT_FILE = "unknown"
DEFAULT_PROJECT = "default"
UNKNOWN_STATUS = "unknown"


@dataclass
class CaseDescriptor:
    """Static description of a test as known to the host runner."""

    title: str = ""
    """Test title."""

    file: str | None = None
    """Full path of the source file defining the test."""

    line: int | None = None
    """Source line of the test definition."""

    parent_title: str | None = None
    """Title of the enclosing group (``describe`` block, test class, ...)."""

    project: str | None = None
    """Named execution context (browser profile, environment, ...)."""

    annotations: Sequence[Any] = ()
    """Opaque key/value metadata, passed through unmodified."""


@dataclass
class OutcomeDescriptor:
    """Outcome of one test attempt."""

    status: str | RecordStatus = ""
    duration: float | None = 0
    """Elapsed time in milliseconds."""

    retry: int | None = 0
    """Retry index of this attempt (0 for the first attempt)."""

    errors: Sequence[Any] = ()
    """Errors as mappings or objects exposing ``message``/``stack``/``snippet``."""

    steps: Sequence[Any] = ()
    """Steps as mappings or objects exposing ``title``/``category``/``duration``/``error``."""


def build_record(case: CaseDescriptor, outcome: OutcomeDescriptor) -> ResultRecord:
    """Normalize a completion event into a ``ResultRecord``.

    Never raises for missing or malformed fields: location, parent group
    and project fall back to their defaults, numbers that cannot be parsed
    become ``0`` and error/step entries keep their emission order.
    """
    file_path = _text(case.file)
    return ResultRecord(
        title=_text(case.title),
        file=_basename(file_path) or DEFAULT_FILE,
        file_path=file_path,
        line=_non_negative_int(case.line),
        suite=_text(case.parent_title),
        project=_text(case.project) or DEFAULT_PROJECT,
        status=_status(outcome.status),
        duration=_non_negative_int(outcome.duration),
        retries=_non_negative_int(outcome.retry),
        errors=tuple(_error(raw) for raw in _items(outcome.errors)),
        steps=tuple(_step(raw) for raw in _items(outcome.steps)),
        annotations=tuple(_items(case.annotations)),
    )


# ── Field helpers ────────────────────────────────────────────────


def _get(obj: Any, name: str, default: Any = None) -> Any:
    """Read *name* from a mapping key or an attribute."""
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _non_negative_int(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = round(float(value))
    except (TypeError, ValueError, OverflowError):
        logger.debug("Ignoring non-numeric value %r", value)
        return 0
    return max(number, 0)


def _items(value: Any) -> list[Any]:
    """Return *value* as a list when it is a real sequence, else ``[]``."""
    if value is None or isinstance(value, (str, bytes, Mapping)):
        return []
    try:
        return list(value)
    except TypeError:
        return []


def _basename(path: str) -> str:
    if not path:
        return ""
    return PurePosixPath(path.replace("\\", "/")).name


def _status(value: Any) -> str:
    if isinstance(value, RecordStatus):
        return value.value
    return _text(value) or UNKNOWN_STATUS


def _error(raw: Any) -> ErrorDetail:
    if isinstance(raw, str):
        return ErrorDetail(message=raw)
    return ErrorDetail(
        message=_text(_get(raw, "message")),
        stack=_text(_get(raw, "stack")),
        snippet=_text(_get(raw, "snippet")),
    )


def _step(raw: Any) -> StepDetail:
    return StepDetail(
        title=_text(_get(raw, "title")),
        category=_text(_get(raw, "category")),
        duration=_non_negative_int(_get(raw, "duration")),
        error=_step_error(_get(raw, "error")),
    )


def _step_error(raw: Any) -> str | None:
    if raw is None:
        return None
    if isinstance(raw, str):
        return raw
    message = _get(raw, "message")
    return _text(message) if message is not None else _text(raw)
