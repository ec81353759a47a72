"""Shared fixtures for runsight tests."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pytest

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def playwright_report() -> dict[str, Any]:
    """A small ``--reporter=json`` document: one flaky test on two browsers."""
    return {
        "config": {"rootDir": "/repo/tests"},
        "suites": [
            {
                "title": "cart.spec.ts",
                "file": "cart.spec.ts",
                "specs": [],
                "suites": [
                    {
                        "title": "checkout",
                        "file": "cart.spec.ts",
                        "specs": [
                            {
                                "title": "applies coupon",
                                "file": "cart.spec.ts",
                                "line": 14,
                                "tests": [
                                    {
                                        "projectName": "chromium",
                                        "annotations": [],
                                        "results": [
                                            {
                                                "retry": 0,
                                                "status": "failed",
                                                "duration": 5000,
                                                "startTime": "2026-03-14T09:30:00.000Z",
                                                "errors": [
                                                    {
                                                        "message": "Timeout 5000ms exceeded",
                                                        "stack": "at cart.spec.ts:16",
                                                    }
                                                ],
                                                "steps": [
                                                    {
                                                        "title": "page.click",
                                                        "category": "pw:api",
                                                        "duration": 4990,
                                                        "error": {"message": "Timeout"},
                                                        "steps": [
                                                            {
                                                                "title": "locator.wait",
                                                                "category": "pw:api",
                                                                "duration": 4980,
                                                            }
                                                        ],
                                                    }
                                                ],
                                            },
                                            {
                                                "retry": 1,
                                                "status": "passed",
                                                "duration": 800,
                                                "startTime": "2026-03-14T09:30:06.000Z",
                                                "errors": [],
                                                "steps": [],
                                            },
                                        ],
                                    },
                                    {
                                        "projectName": "firefox",
                                        "annotations": [{"type": "slow"}],
                                        "results": [
                                            {
                                                "retry": 0,
                                                "status": "passed",
                                                "duration": 1200,
                                                "startTime": "2026-03-14T09:30:01.000Z",
                                                "errors": [],
                                                "steps": [],
                                            }
                                        ],
                                    },
                                ],
                            }
                        ],
                    }
                ],
            }
        ],
        "errors": [],
        "stats": {
            "startTime": "2026-03-14T09:29:59.500Z",
            "duration": 7500,
            "expected": 1,
            "unexpected": 0,
            "flaky": 1,
            "skipped": 0,
        },
    }


@pytest.fixture
def playwright_report_file(tmp_path: Path, playwright_report: dict[str, Any]) -> Path:
    path = tmp_path / "results.json"
    path.write_text(json.dumps(playwright_report), encoding="utf-8")
    return path
