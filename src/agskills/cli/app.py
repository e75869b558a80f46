"""
Main Typer application for the agskills CLI.

This module defines the root CLI application and registers all command groups.
"""

from typing import Annotated

import typer

from agskills import __version__
from agskills.cli.commands import bundle, links, skills
from agskills.cli.context import AppState
from agskills.cli.output import print_error, print_info
from agskills.config import get_config
from agskills.exceptions import ConfigurationError
from agskills.logging_config import setup_logging

app = typer.Typer(
    name="ags",
    help="Install AI-agent skills into projects as symlinks.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=True,
    pretty_exceptions_show_locals=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        print_info(f"agskills version [green]{__version__}[/green]")
        raise typer.Exit()


# noinspection PyUnusedLocal
@app.callback()
def main_callback(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging and show skip reasons.",
        ),
    ] = False,
    repo: Annotated[
        str | None,
        typer.Option(
            "--repo",
            "-r",
            help="Skills repository root (the directory holding skills/).",
        ),
    ] = None,
    log_file: Annotated[
        str | None,
        typer.Option(
            "--log-file",
            help="Also write log records to this file.",
        ),
    ] = None,
) -> None:
    """
    [bold blue]agskills[/bold blue] - Skill installer for AI agents

    Pick skills or bundles from a skills repository and link them into
    the skills directory of Gemini, Codex or Claude inside a project.
    """
    try:
        config = get_config()
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(1)

    level = "DEBUG" if verbose else config.logging.level
    setup_logging(level, log_file or config.logging.file)
    ctx.obj = AppState(repo=repo, verbose=verbose)


# Register command groups
app.add_typer(skills.app, name="skills")
app.add_typer(bundle.app, name="bundle")
app.add_typer(links.app, name="links")


if __name__ == "__main__":
    app()
