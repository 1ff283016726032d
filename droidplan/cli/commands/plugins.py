"""Plugin listing command."""

import typer

from droidplan.cli.helpers import print_plugins_table


def plugins() -> None:
    """List the plugin identifiers a manifest may apply."""
    print_plugins_table()


def register_commands(app: typer.Typer) -> None:
    app.command(name="plugins")(plugins)
