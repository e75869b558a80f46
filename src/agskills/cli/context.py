"""
Shared command state.

The root callback stores the global options on the Typer context; commands
read them back through these helpers.
"""

from dataclasses import dataclass
from pathlib import Path

import typer

from agskills.config import Config, get_config
from agskills.flows import InteractiveFlows
from agskills.storage import find_repo_root


@dataclass
class AppState:
    """Global options of one invocation."""

    repo: str | None = None
    verbose: bool = False


def get_state(ctx: typer.Context) -> AppState:
    """State stored by the root callback (defaults when run standalone)."""
    root = ctx.find_root()
    if not isinstance(root.obj, AppState):
        root.obj = AppState()
    return root.obj


def get_repo_root(ctx: typer.Context, config: Config | None = None) -> Path:
    """
    Resolve the skills repository for this invocation.

    --repo wins over the configured paths.repo; without either the current
    directory and then the package's parent directory are tried.

    Raises:
        SkillsRootNotFoundError: If no candidate holds a skills/ directory.
    """
    config = config or get_config()
    return find_repo_root(get_state(ctx).repo or config.paths.repo)


def get_flows(ctx: typer.Context) -> InteractiveFlows:
    """Interactive flows bound to this invocation's repository."""
    config = get_config()
    return InteractiveFlows(get_repo_root(ctx, config), config=config)
