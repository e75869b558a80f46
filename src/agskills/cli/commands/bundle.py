"""
ags bundle - Bundle management commands.

Usage:
    ags bundle list
    ags bundle manage
    ags bundle edit
    ags bundle edit-as-new
    ags bundle delete
    ags bundle install --path ./my-project
"""

from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from agskills.cli.context import get_flows, get_repo_root
from agskills.cli.output import console, print_error
from agskills.exceptions import AgSkillsError
from agskills.skills import BundleStore
from agskills.storage import resolve_project_root

app = typer.Typer(
    name="bundle",
    help="Bundle management.",
)


@app.command("list")
def list_bundles(ctx: typer.Context) -> None:
    """List default and custom bundles."""
    try:
        store = BundleStore.for_repo(get_repo_root(ctx))
    except AgSkillsError as e:
        print_error(str(e))
        raise typer.Exit(1)

    bundles = store.by_name()
    if not bundles:
        console.print("[yellow]No bundles available.[/yellow]")
        console.print("[dim]Create one: ags bundle manage[/dim]")
        return

    table = Table(title="Bundles")
    table.add_column("Name", style="cyan")
    table.add_column("Source", style="dim")
    table.add_column("Skills", justify="right")
    table.add_column("Description")

    for name in sorted(bundles):
        bundle = bundles[name]
        table.add_row(
            escape(bundle.name),
            bundle.source.value,
            str(len(bundle.skills)),
            escape(bundle.description),
        )

    console.print(table)


@app.command()
def manage(ctx: typer.Context) -> None:
    """Open the interactive bundle manager."""
    try:
        get_flows(ctx).manage_bundles()
    except AgSkillsError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command()
def edit(ctx: typer.Context) -> None:
    """Edit a custom bundle in place."""
    try:
        get_flows(ctx).edit_bundle_in_place()
    except AgSkillsError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("edit-as-new")
def edit_as_new(ctx: typer.Context) -> None:
    """Start a new custom bundle from an existing one."""
    try:
        get_flows(ctx).edit_bundle_as_new()
    except AgSkillsError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command()
def delete(ctx: typer.Context) -> None:
    """Delete a custom bundle."""
    try:
        get_flows(ctx).delete_bundle()
    except AgSkillsError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command()
def install(
    ctx: typer.Context,
    path: Annotated[
        str | None,
        typer.Option(
            "--path",
            "-p",
            help="Project root that receives the agent's skills directory.",
        ),
    ] = None,
) -> None:
    """Install a bundle into a project for one agent."""
    try:
        project_root = resolve_project_root(path)
        get_flows(ctx).install_bundle(project_root)
    except AgSkillsError as e:
        print_error(str(e))
        raise typer.Exit(1)
