"""Summary command -- ingestion report plus engine counts."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from . import app
from ._common import (
    END_OPTION,
    JSON_OPTION,
    PATH_ARGUMENT,
    START_OPTION,
    build_engine,
    console,
    resolve_config,
)


@app.command()
def summary(
    ctx: typer.Context,
    path: Path = PATH_ARGUMENT,
    start: Optional[int] = START_OPTION,
    end: Optional[int] = END_OPTION,
    json_output: bool = JSON_OPTION,
):
    """Show how many commits were loaded or rejected and what the history contains."""
    config = resolve_config(ctx)
    engine, report = build_engine(config, path, start, end, show_rejected=False)
    stats = engine.summary()

    if json_output:
        data = stats.to_dict()
        data["rejected"] = [{"line": r.line, "reason": r.reason} for r in report.rejected]
        print(json.dumps(data, indent=2))
        return

    table = Table(title=f"Commit history: {path.name}", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Commits loaded", str(report.accepted))
    table.add_row("Commits rejected", str(len(report.rejected)))
    table.add_row("Bug commits", str(stats.bug_commits))
    table.add_row("Feature commits", str(stats.feature_commits))
    if stats.window is not None:
        table.add_row("Window", f"[{stats.window.start}, {stats.window.end}]")
        table.add_row("Commits in window", str(stats.commits_in_scope))
    table.add_row("Developers", str(stats.developers))
    table.add_row("Files", str(stats.files))
    table.add_row("Co-change pairs", str(stats.cochange_edges))
    table.add_row(f"Components (threshold {stats.component_threshold})", str(stats.component_count))

    console.print()
    console.print(table)

    if report.rejected:
        console.print()
        console.print("[yellow]Rejected rows:[/yellow]")
        for r in report.rejected:
            console.print(f"  line {r.line}: {r.reason}", markup=False)
    console.print()
