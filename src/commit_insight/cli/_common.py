"""Shared CLI helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..analytics import AnalyticsEngine
from ..config import AnalyticsConfig, load_config
from ..exceptions import CommitInsightError
from ..ingestion import IngestReport, load_file
from ..logging_config import setup_logging

console = Console()

# Exit code for arguments the engine rejects (bad window, bad threshold)
EXIT_USAGE = 2

START_OPTION = typer.Option(None, "--start", "-s", help="Window start timestamp (inclusive)")
END_OPTION = typer.Option(None, "--end", "-e", help="Window end timestamp (inclusive)")
JSON_OPTION = typer.Option(False, "--json", help="Output in machine-readable JSON format")
PATH_ARGUMENT = typer.Argument(
    ...,
    help="Commit file (.jsonl or .csv)",
    exists=True,
    dir_okay=False,
    readable=True,
)


def resolve_config(ctx: typer.Context, **overrides) -> AnalyticsConfig:
    """Build configuration from global CLI options plus command overrides."""
    obj = ctx.obj or {}
    try:
        config = load_config(
            config_file=obj.get("config"),
            verbose=obj.get("verbose", False),
            quiet=obj.get("quiet", False),
            **overrides,
        )
    except CommitInsightError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_USAGE)

    setup_logging(
        verbose=config.verbosity == "verbose",
        quiet=config.verbosity == "quiet",
        log_file=config.log_file,
    )
    return config


def build_engine(
    config: AnalyticsConfig,
    path: Path,
    start: Optional[int],
    end: Optional[int],
    show_rejected: bool = True,
) -> tuple[AnalyticsEngine, IngestReport]:
    """Load ``path`` into a fresh engine and apply the time window, if any."""
    engine = AnalyticsEngine.from_config(config)
    try:
        report = load_file(engine, path)
    except CommitInsightError as e:
        console.print(f"[red]Error reading commits:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if show_rejected and report.rejected:
        console.print(
            f"[yellow]Skipped {len(report.rejected)} malformed "
            f"commit{'s' if len(report.rejected) != 1 else ''}[/yellow] "
            "(run with --verbose for details)"
        )

    if start is not None or end is not None:
        if start is None or end is None:
            console.print("[red]Both --start and --end are required for a time window[/red]")
            raise typer.Exit(EXIT_USAGE)
        if not engine.set_time_window(start, end):
            console.print(f"[red]Invalid time window:[/red] {escape(f'[{start}, {end}]')}")
            raise typer.Exit(EXIT_USAGE)

    return engine, report
