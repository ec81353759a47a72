"""runsight — static HTML reports for test runs."""

from __future__ import annotations

__version__ = "0.1.0"
