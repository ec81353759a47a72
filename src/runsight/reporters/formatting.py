"""Pure formatting helpers shared by the HTML report and the CLI."""

from __future__ import annotations

import html
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

_MS_PER_SECOND = 1000
_MS_PER_MINUTE = 60_000

_STATUS_ICONS = {
    "passed": "✅",
    "failed": "❌",
    "skipped": "⏭️",
    "timedOut": "⏱️",
    "interrupted": "🚫",
}
_UNKNOWN_ICON = "❓"

_STATUS_CLASSES = {
    "passed": "status-passed",
    "failed": "status-failed",
    "skipped": "status-skipped",
    "timedOut": "status-timeout",
    "interrupted": "status-failed",
}
_UNKNOWN_CLASS = "status-unknown"

# First match wins; order matters for names like "chrome-edge".
_BROWSER_ICONS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("chromium", "chrome"), "🌐"),
    (("firefox",), "🦊"),
    (("webkit", "safari"), "🧭"),
    (("edge",), "🔷"),
)
_GENERIC_BROWSER_ICON = "🖥️"

_ONE_DECIMAL = Decimal("0.1")


def one_decimal(value: float) -> str:
    """Format *value* with one decimal, rounding halves away from zero.

    >>> one_decimal(6.25)
    '6.3'
    >>> one_decimal(1.0)
    '1.0'
    """
    return str(Decimal(value).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def format_duration(ms: float) -> str:
    """Format a millisecond duration for display.

    >>> format_duration(999)
    '999ms'
    >>> format_duration(1500)
    '1.5s'
    >>> format_duration(1250)
    '1.3s'
    >>> format_duration(125000)
    '2m 5s'
    """
    if ms < _MS_PER_SECOND:
        return f"{ms:g}ms" if isinstance(ms, float) else f"{ms}ms"
    if ms < _MS_PER_MINUTE:
        return f"{one_decimal(ms / _MS_PER_SECOND)}s"
    minutes = math.floor(ms / _MS_PER_MINUTE)
    seconds = math.floor((ms % _MS_PER_MINUTE) / _MS_PER_SECOND + 0.5)
    return f"{minutes}m {seconds}s"


def escape_html(text: Any) -> str:
    """Escape ``&``, ``<``, ``>`` and ``"`` for safe embedding in markup."""
    if text is None:
        return ""
    return html.escape(str(text), quote=False).replace('"', "&quot;")


def status_icon(status: str) -> str:
    return _STATUS_ICONS.get(status, _UNKNOWN_ICON)


def status_class(status: str) -> str:
    return _STATUS_CLASSES.get(status, _UNKNOWN_CLASS)


def browser_icon(project: str) -> str:
    """Pick an icon for a project name by browser-engine substring."""
    name = (project or "").lower()
    for fragments, icon in _BROWSER_ICONS:
        if any(fragment in name for fragment in fragments):
            return icon
    return _GENERIC_BROWSER_ICON
