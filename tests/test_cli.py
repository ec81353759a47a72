"""Tests for the runsight CLI."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from rich.console import Console

from runsight import __version__
from runsight.cli import cli
from runsight.reporters import terminal

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def wide_console(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep table cells on one line so output assertions stay stable."""
    monkeypatch.setattr(terminal.reporter, "console", Console(width=200))


def test_version() -> None:
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_help() -> None:
    result = CliRunner().invoke(cli, ["--help"])
    assert result.exit_code == 0
    for command in ("render", "show", "config"):
        assert command in result.output


# ── runsight render ──────────────────────────────────────────────


class TestRender:
    def test_writes_report(self, tmp_path: Path, playwright_report_file: Path) -> None:
        output_dir = tmp_path / "out"

        result = CliRunner().invoke(
            cli,
            [
                "render",
                str(playwright_report_file),
                "--root",
                str(tmp_path),
                "--output-dir",
                str(output_dir),
                "--title",
                "CI Run",
            ],
        )

        assert result.exit_code == 0, result.output
        content = (output_dir / "index.html").read_text(encoding="utf-8")
        assert "<title>CI Run</title>" in content
        assert "applies coupon" in content
        assert "HTML report written to" in result.output
        assert "3 test results" in result.output

    def test_uses_configured_output_dir(
        self, tmp_path: Path, playwright_report_file: Path
    ) -> None:
        (tmp_path / ".runsight.yml").write_text(
            "report:\n  output_dir: site/report\n  title: From Config\n", encoding="utf-8"
        )

        result = CliRunner().invoke(
            cli, ["render", str(playwright_report_file), "--root", str(tmp_path)]
        )

        assert result.exit_code == 0, result.output
        content = (tmp_path / "site" / "report" / "index.html").read_text(encoding="utf-8")
        assert "<title>From Config</title>" in content

    def test_missing_report_exits_with_error(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(
            cli, ["render", str(tmp_path / "nope.json"), "--root", str(tmp_path)]
        )

        assert result.exit_code == 1
        assert "Cannot read" in result.output

    def test_invalid_json_exits_with_error(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text("not json", encoding="utf-8")

        result = CliRunner().invoke(cli, ["render", str(bad), "--root", str(tmp_path)])

        assert result.exit_code == 1
        assert "not valid JSON" in result.output

    def test_unwritable_output_exits_with_error(
        self, tmp_path: Path, playwright_report_file: Path
    ) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("x", encoding="utf-8")

        result = CliRunner().invoke(
            cli,
            [
                "render",
                str(playwright_report_file),
                "--root",
                str(tmp_path),
                "--output-dir",
                str(blocker / "html"),
            ],
        )

        assert result.exit_code == 1
        assert "Failed to write HTML report" in result.output

    def test_open_launches_browser(self, tmp_path: Path, playwright_report_file: Path) -> None:
        with patch("runsight.cli.webbrowser.open") as mock_open:
            result = CliRunner().invoke(
                cli,
                [
                    "render",
                    str(playwright_report_file),
                    "--root",
                    str(tmp_path),
                    "--output-dir",
                    str(tmp_path / "out"),
                    "--open",
                ],
            )

        assert result.exit_code == 0, result.output
        mock_open.assert_called_once()
        assert mock_open.call_args.args[0].startswith("file://")


# ── runsight show ────────────────────────────────────────────────


class TestShow:
    def test_lists_all_results(self, playwright_report_file: Path) -> None:
        result = CliRunner().invoke(cli, ["show", str(playwright_report_file)])

        assert result.exit_code == 0, result.output
        assert "Test Results (3 of 3)" in result.output
        assert "66.7%" in result.output
        assert "applies coupon" in result.output

    def test_status_filter(self, playwright_report_file: Path) -> None:
        result = CliRunner().invoke(
            cli, ["show", str(playwright_report_file), "--status", "failed"]
        )

        assert result.exit_code == 0, result.output
        assert "Test Results (1 of 3)" in result.output
        assert "Timeout 5000ms exceeded" in result.output

    def test_project_and_search_filters(self, playwright_report_file: Path) -> None:
        result = CliRunner().invoke(
            cli,
            ["show", str(playwright_report_file), "--project", "firefox", "--search", "coupon"],
        )

        assert result.exit_code == 0, result.output
        assert "Test Results (1 of 3)" in result.output

    def test_no_matches(self, playwright_report_file: Path) -> None:
        result = CliRunner().invoke(
            cli, ["show", str(playwright_report_file), "--search", "does-not-exist"]
        )

        assert result.exit_code == 0
        assert "No test results match the filters." in result.output

    def test_rejects_unknown_status(self, playwright_report_file: Path) -> None:
        result = CliRunner().invoke(
            cli, ["show", str(playwright_report_file), "--status", "exploded"]
        )
        assert result.exit_code == 2


# ── runsight config ──────────────────────────────────────────────


class TestConfig:
    def test_show_json(self, tmp_path: Path) -> None:
        (tmp_path / ".runsight.yml").write_text("pytest:\n  project: api\n", encoding="utf-8")

        result = CliRunner().invoke(cli, ["config", "show", "--root", str(tmp_path), "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["pytest"] == {"project": "api"}
        assert data["report"]["title"] == "Test Run Report"

    def test_show_yaml(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(cli, ["config", "show", "--root", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "output_dir: tests/reports/html-report" in result.output

    def test_validate_ok(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(cli, ["config", "validate", "--root", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "Configuration is valid!" in result.output

    def test_validate_reports_errors(self, tmp_path: Path) -> None:
        (tmp_path / ".runsight.yml").write_text('report:\n  title: ""\n', encoding="utf-8")

        result = CliRunner().invoke(cli, ["config", "validate", "--root", str(tmp_path)])

        assert result.exit_code == 1
        assert "report.title must not be empty" in result.output

    def test_broken_yaml_exits_with_error(self, tmp_path: Path) -> None:
        (tmp_path / ".runsight.yml").write_text("report: [unclosed\n", encoding="utf-8")

        result = CliRunner().invoke(cli, ["config", "validate", "--root", str(tmp_path)])

        assert result.exit_code == 1
        assert "Failed to load configuration" in result.output
