"""CLI entry point — registers all subcommands."""

from pathlib import Path
from typing import Optional

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="commit-insight",
    help="Commit Insight - change analytics over a project's commit history",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _version_callback(value: bool):
    if value:
        console.print(f"commit-insight {__version__}")
        raise typer.Exit()


@app.callback()
def _global_options(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="TOML configuration file",
        exists=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version"
    ),
):
    """Options shared by every command."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


def main():
    app()


# Import subcommands to register them
from .queries import (  # noqa: F401, E402
    broad_features as _broad_features,
    busiest as _busiest,
    components as _components,
    experts as _experts,
    repeated_bugs as _repeated_bugs,
)
from .summary import summary as _summary  # noqa: F401, E402
