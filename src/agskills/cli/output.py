"""
Output formatting utilities for the CLI.

Provides consistent output formatting across all CLI commands and flows.
"""

from rich.console import Console
from rich.markup import escape

from agskills.skills.models import ReconcileResult

# Global console instance
console = Console(highlight=False)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]✗[/red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]![/yellow] {escape(message)}")


def print_info(message: str) -> None:
    """Print an info message (rich markup is rendered)."""
    console.print(f"[blue]i[/blue] {message}")


def print_reconcile_result(result: ReconcileResult, verbose: bool = False) -> None:
    """Print reconciliation counters, and skip reasons when verbose."""
    console.print(
        f"Added: [green]{result.added}[/green], "
        f"Removed: [yellow]{result.removed}[/yellow], "
        f"Skipped: [red]{result.skipped}[/red]"
    )
    if verbose:
        for skill_id, reason in result.skip_reasons:
            console.print(f"  [dim]- {escape(skill_id)}: {escape(reason)}[/dim]")
