"""CLI command modules."""

import typer

from . import plugins, resolve


def register_all_commands(app: typer.Typer) -> None:
    """Register every command module with the main app."""
    resolve.register_commands(app)
    plugins.register_commands(app)


__all__ = ["register_all_commands"]
