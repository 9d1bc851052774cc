"""Query commands: components, experts, broad features, repeated bugs, busiest files."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
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


def _threshold_option(help_text: str):
    return typer.Option(None, "--threshold", "-t", help=help_text, min=1)


@app.command()
def components(
    ctx: typer.Context,
    path: Path = PATH_ARGUMENT,
    threshold: Optional[int] = _threshold_option("Minimum co-change count within a component"),
    start: Optional[int] = START_OPTION,
    end: Optional[int] = END_OPTION,
    json_output: bool = JSON_OPTION,
):
    """
    Group files into components by how often they change together.

    [bold cyan]Examples:[/bold cyan]

      commit-insight components commits.jsonl

      commit-insight components commits.csv --threshold 3 --start 100 --end 200
    """
    config = resolve_config(ctx, component_threshold=threshold)
    engine, _ = build_engine(config, path, start, end, show_rejected=not json_output)
    engine.set_component_threshold(config.component_threshold)

    groups = sorted((sorted(c) for c in engine.software_components()), key=lambda g: (-len(g), g))

    if json_output:
        print(json.dumps(groups, indent=2))
        return

    table = Table(title=f"Components (threshold {config.component_threshold})")
    table.add_column("#", style="bold", justify="right")
    table.add_column("Files", justify="right")
    table.add_column("Members", style="cyan")
    for i, group in enumerate(groups, start=1):
        table.add_row(str(i), str(len(group)), escape("\n".join(group)))

    console.print()
    console.print(table)
    console.print()


@app.command()
def experts(
    ctx: typer.Context,
    path: Path = PATH_ARGUMENT,
    threshold: Optional[int] = _threshold_option("Minimum number of components touched"),
    start: Optional[int] = START_OPTION,
    end: Optional[int] = END_OPTION,
    json_output: bool = JSON_OPTION,
):
    """List developers who touched files in at least THRESHOLD components."""
    config = resolve_config(ctx, expert_threshold=threshold)
    engine, _ = build_engine(config, path, start, end, show_rejected=not json_output)
    _print_names(
        sorted(engine.experts_of(config.expert_threshold)),
        f"Experts (≥ {config.expert_threshold} components)",
        json_output,
    )


@app.command("broad-features")
def broad_features(
    ctx: typer.Context,
    path: Path = PATH_ARGUMENT,
    threshold: Optional[int] = _threshold_option("Minimum number of components touched"),
    start: Optional[int] = START_OPTION,
    end: Optional[int] = END_OPTION,
    json_output: bool = JSON_OPTION,
):
    """List feature tasks whose files span at least THRESHOLD components."""
    config = resolve_config(ctx, broad_feature_threshold=threshold)
    engine, _ = build_engine(config, path, start, end, show_rejected=not json_output)
    _print_names(
        sorted(engine.broad_feature_tasks(config.broad_feature_threshold)),
        f"Broad features (≥ {config.broad_feature_threshold} components)",
        json_output,
    )


@app.command("repeated-bugs")
def repeated_bugs(
    ctx: typer.Context,
    path: Path = PATH_ARGUMENT,
    threshold: Optional[int] = _threshold_option("Times one file must recur within a bug task"),
    start: Optional[int] = START_OPTION,
    end: Optional[int] = END_OPTION,
    json_output: bool = JSON_OPTION,
):
    """List bug tasks that touched the same file at least THRESHOLD times."""
    config = resolve_config(ctx, repeated_bug_threshold=threshold)
    engine, _ = build_engine(config, path, start, end, show_rejected=not json_output)
    _print_names(
        sorted(engine.repeated_bug_tasks(config.repeated_bug_threshold)),
        f"Repeated bugs (≥ {config.repeated_bug_threshold} times)",
        json_output,
    )


@app.command()
def busiest(
    ctx: typer.Context,
    path: Path = PATH_ARGUMENT,
    limit: Optional[int] = typer.Option(
        None, "--limit", "-n", help="Number of files (ties at the cut-off are kept)", min=1
    ),
    start: Optional[int] = START_OPTION,
    end: Optional[int] = END_OPTION,
    json_output: bool = JSON_OPTION,
):
    """
    Rank files by how many commits touched them.

    Files tied with the last file in the ranking are included, so the list
    can be longer than --limit.
    """
    config = resolve_config(ctx, busiest_limit=limit)
    engine, _ = build_engine(config, path, start, end, show_rejected=not json_output)
    ranked = engine.busiest_files(config.busiest_limit)
    tallies = engine.file_tallies()

    if json_output:
        print(json.dumps([{"file": f, "commits": tallies[f]} for f in ranked], indent=2))
        return

    table = Table(title="Busiest files")
    table.add_column("Rank", style="bold", justify="right")
    table.add_column("File", style="cyan")
    table.add_column("Commits", justify="right", style="yellow")
    for i, name in enumerate(ranked, start=1):
        table.add_row(str(i), escape(name), str(tallies[name]))

    console.print()
    console.print(table)
    console.print()


def _print_names(names: list[str], title: str, json_output: bool) -> None:
    if json_output:
        print(json.dumps(names, indent=2))
        return

    if not names:
        console.print(f"[yellow]{title}: none[/yellow]")
        return

    console.print(f"[bold]{title}[/bold]")
    for name in names:
        console.print(f"  {escape(name)}")
