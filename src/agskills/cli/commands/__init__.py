"""CLI command modules."""

from agskills.cli.commands import bundle, links, skills

__all__ = ["bundle", "links", "skills"]
