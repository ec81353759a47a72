"""runsight CLI — top-level command group."""

from __future__ import annotations

import json
import logging
import webbrowser
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any

import click
import yaml
from rich.console import Console
from rich.markup import escape

from runsight import __version__
from runsight.adapters.playwright_json import (
    ReportInputError,
    load_playwright_report,
    parse_playwright_report,
    replay_playwright_report,
)
from runsight.config import CONFIG_FILENAME, RunsightConfig, load_config, validate_config
from runsight.models.descriptors import build_record
from runsight.reporters.aggregator import summarize
from runsight.reporters.filtering import ALL, RowFilter, visible_records
from runsight.reporters.sink import HtmlReportSink
from runsight.reporters.terminal import reporter

logger = logging.getLogger(__name__)
console = Console()

_STATUS_CHOICES = (ALL, "passed", "failed", "skipped", "timedOut")

_root_option = click.option(
    "--root",
    "root",
    default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Project root directory (where .runsight.yml lives).",
)


def _load(root: str) -> RunsightConfig:
    try:
        return load_config(root)
    except (OSError, yaml.YAMLError) as e:
        reporter.print_error(f"Failed to load configuration: {escape(str(e))}")
        raise click.Abort from e


def _read_report(report_json: str) -> dict[str, Any]:
    try:
        return load_playwright_report(Path(report_json))
    except ReportInputError as e:
        reporter.print_error(escape(str(e)))
        raise click.Abort from e


def _config_to_dict(config: RunsightConfig) -> dict[str, Any]:
    return {
        "root": config.root,
        "report": asdict(config.report),
        "pytest": asdict(config.pytest),
        "output_path": str(config.output_path),
    }


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.version_option(version=__version__, prog_name="runsight")
@click.pass_context
def cli(ctx: click.Context, *, verbose: bool) -> None:
    """runsight — self-contained HTML reports for test runs."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@cli.command("render")
@click.argument("report_json", type=click.Path(dir_okay=False))
@click.option("--output-dir", default=None, help="Directory receiving index.html.")
@click.option("--title", default=None, help="Report title.")
@_root_option
@click.option("--open", "open_browser", is_flag=True, help="Open the report in a browser.")
def render(
    report_json: str,
    output_dir: str | None,
    title: str | None,
    root: str,
    *,
    open_browser: bool,
) -> None:
    """Render a Playwright JSON report as a self-contained HTML page.

    Example:
      npx playwright test --reporter=json > results.json
      runsight render results.json --open
    """
    config = _load(root)
    data = _read_report(report_json)

    target = Path(output_dir) if output_dir else config.output_path
    sink = HtmlReportSink(target, title=title or config.report.title, quiet=True)
    path = replay_playwright_report(data, sink)
    if path is None:
        reporter.print_error(f"Failed to write HTML report to {escape(str(sink.report_path))}")
        raise click.Abort

    reporter.print_success(f"HTML report written to {escape(str(path.resolve()))}")
    reporter.print_info(f"{len(sink.records)} test results")

    if open_browser or config.report.open_browser:
        webbrowser.open(path.resolve().as_uri())


@cli.command("show")
@click.argument("report_json", type=click.Path(dir_okay=False))
@click.option(
    "--status",
    type=click.Choice(_STATUS_CHOICES),
    default=ALL,
    show_default=True,
    help="Only show results in this outcome bucket.",
)
@click.option("--project", default=ALL, show_default=True, help="Only show this project.")
@click.option("--search", default="", help="Case-insensitive text filter.")
def show(report_json: str, status: str, project: str, search: str) -> None:
    """Print the results of a Playwright JSON report as a table.

    Filters behave like the status buttons, project cards and search box
    of the HTML report.

    Example:
      runsight show results.json --status failed --search checkout
    """
    run = parse_playwright_report(_read_report(report_json))
    records = [build_record(event.case, event.outcome) for event in run.events]

    ended_at = run.ended_at or run.started_at or datetime.now().astimezone()
    summary = summarize(records, run.started_at or ended_at, ended_at, run.overall_status)

    row_filter = RowFilter(status=status, project=project, search=search)
    rows = visible_records(records, row_filter)

    reporter.print_summary(summary)
    if rows:
        reporter.print_records(rows, total=len(records))
    else:
        reporter.print_warning("No test results match the filters.")


@cli.group("config")
def config_group() -> None:
    """Inspect `.runsight.yml` configuration."""


@config_group.command("show")
@_root_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON instead of YAML.")
def config_show(root: str, *, as_json: bool) -> None:
    """Display the resolved configuration.

    Example:
      runsight config show
      runsight config show --json
    """
    config_dict = _config_to_dict(_load(root))

    if as_json:
        click.echo(json.dumps(config_dict, indent=2))
    else:
        console.print()
        console.print("[bold cyan]Configuration:[/bold cyan]")
        console.print()
        click.echo(yaml.safe_dump(config_dict, sort_keys=False, default_flow_style=False))


@config_group.command("validate")
@_root_option
def config_validate(root: str) -> None:
    """Validate `.runsight.yml`.

    Example:
      runsight config validate
    """
    errors = validate_config(_load(root))

    if not errors:
        reporter.print_success("Configuration is valid!")
        return

    reporter.print_error(f"Found {len(errors)} configuration error(s):")
    console.print()
    for idx, error in enumerate(errors, start=1):
        console.print(f"  {idx}. [red]{escape(error)}[/red]")
    console.print()
    console.print(
        f"[dim]Fix these errors in {CONFIG_FILENAME} and run 'runsight config validate' again.[/dim]"
    )
    raise click.Abort


if __name__ == "__main__":
    cli()
