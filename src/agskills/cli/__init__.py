"""Command-line interface for agskills."""
