"""
ags skills - Skill catalog commands.

Usage:
    ags skills list
    ags skills list --verbose
"""

from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from agskills.cli.context import get_repo_root
from agskills.cli.output import console, print_error
from agskills.config import get_config
from agskills.exceptions import AgSkillsError
from agskills.skills import SkillCatalog
from agskills.storage import get_skills_root

app = typer.Typer(
    name="skills",
    help="Skill catalog.",
)

DESCRIPTION_PREVIEW = 60


@app.command("list")
def list_skills(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show full descriptions and paths.",
        ),
    ] = False,
) -> None:
    """List skills available in the repository."""
    config = get_config()
    try:
        repo_root = get_repo_root(ctx, config)
    except AgSkillsError as e:
        print_error(str(e))
        raise typer.Exit(1)

    catalog = SkillCatalog(get_skills_root(repo_root), config.paths.skill_file)
    if not catalog.ids:
        console.print("[yellow]No skills found in repository.[/yellow]")
        console.print(f"[dim]Skills root: {escape(str(catalog.skills_root))}[/dim]")
        return

    table = Table(title="Skills")
    table.add_column("Skill", style="cyan")
    table.add_column("Description")
    if verbose:
        table.add_column("Path", style="dim")

    for skill in catalog.skills():
        description = skill.description
        if not verbose and len(description) > DESCRIPTION_PREVIEW:
            description = description[:DESCRIPTION_PREVIEW] + "..."
        row = [escape(skill.id), escape(description)]
        if verbose:
            row.append(escape(str(skill.path)))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n[dim]Total: {len(catalog)} skill(s)[/dim]")
