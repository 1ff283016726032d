"""Command-line interface for droidplan using Typer."""

from droidplan.cli.app import app, main


__all__ = ["app", "main"]
