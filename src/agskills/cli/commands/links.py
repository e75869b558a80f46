"""
ags links - Skill symlink commands.

Usage:
    ags links manage --path ./my-project
    ags links status --path ./my-project --agent claude
    ags links sync --path ./my-project --agent claude --bundle web --prune
"""

from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from agskills.cli.context import get_flows, get_repo_root, get_state
from agskills.cli.output import (
    console,
    print_error,
    print_info,
    print_reconcile_result,
    print_success,
)
from agskills.config import get_config
from agskills.exceptions import AgSkillsError, UnknownAgentError
from agskills.skills import BundleStore, install_skills, list_link_records, sync_links
from agskills.storage import ensure_agent_target, get_skills_root, resolve_project_root

app = typer.Typer(
    name="links",
    help="Skill symlinks inside a project.",
)

PathOption = Annotated[
    str | None,
    typer.Option(
        "--path",
        "-p",
        help="Project root holding the agents' skills directories.",
    ),
]


@app.command()
def manage(ctx: typer.Context, path: PathOption = None) -> None:
    """Toggle linked skills interactively."""
    try:
        project_root = resolve_project_root(path)
        get_flows(ctx).manage_links(project_root)
    except AgSkillsError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command()
def status(
    ctx: typer.Context,
    path: PathOption = None,
    agent: Annotated[
        str | None,
        typer.Option(
            "--agent",
            "-a",
            help="Only show this agent.",
        ),
    ] = None,
) -> None:
    """Show which skills are linked for each agent."""
    config = get_config()
    try:
        project_root = resolve_project_root(path)
        skills_root = get_skills_root(get_repo_root(ctx, config))
        if agent is not None and agent not in config.agents:
            raise UnknownAgentError(agent, list(config.agents))
    except AgSkillsError as e:
        print_error(str(e))
        raise typer.Exit(1)

    table = Table(title=f"Linked skills in {escape(str(project_root))}")
    table.add_column("Agent", style="cyan")
    table.add_column("Skill")
    table.add_column("Link", style="dim")

    total = 0
    for name in [agent] if agent else list(config.agents):
        records = list_link_records(config.agent_skills_dir(project_root, name), skills_root)
        for record in records:
            table.add_row(name, escape(record.skill_id), escape(str(record.link_path)))
        total += len(records)

    if not total:
        print_info("No linked skills.")
        return

    console.print(table)
    console.print(f"\n[dim]Total: {total} link(s)[/dim]")


@app.command()
def sync(
    ctx: typer.Context,
    path: PathOption = None,
    agent: Annotated[
        str,
        typer.Option(
            "--agent",
            "-a",
            help="Target agent.",
        ),
    ] = "claude",
    bundle: Annotated[
        str | None,
        typer.Option(
            "--bundle",
            "-b",
            help="Bundle whose skills should be linked.",
        ),
    ] = None,
    prune: Annotated[
        bool,
        typer.Option(
            "--prune",
            help="Remove links to skills that are not in the bundle.",
        ),
    ] = False,
) -> None:
    """Link a bundle's skills without opening the selection list."""
    config = get_config()
    try:
        project_root = resolve_project_root(path)
        repo_root = get_repo_root(ctx, config)
        if not bundle:
            raise AgSkillsError("Pass the bundle to sync via --bundle <name>.")
        selected = BundleStore.for_repo(repo_root).get(bundle)
        target = ensure_agent_target(config.agent_skills_dir(project_root, agent))
    except AgSkillsError as e:
        print_error(str(e))
        raise typer.Exit(1)

    skills_root = get_skills_root(repo_root)
    if prune:
        result = sync_links(selected.skills, skills_root, target)
    else:
        result = install_skills(selected.skills, skills_root, target)

    print_success(f'Bundle "{selected.name}" synced for {agent}.')
    print_info(f"Target: {escape(str(target))}")
    print_reconcile_result(result, verbose=get_state(ctx).verbose or bool(result.skipped))
