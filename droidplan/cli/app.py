"""Main CLI application for droidplan."""

from importlib.metadata import distribution
from typing import Annotated

import typer

from droidplan.cli.commands import register_all_commands
from droidplan.cli.helpers import print_error_message
from droidplan.config import DroidplanSettings, load_settings
from droidplan.core.errors import ConfigError
from droidplan.core.logging import setup_logging


__all__ = ["app", "main", "__version__"]


__version__ = distribution("droidplan").version


class AppContext:
    """Application context for storing shared state."""

    def __init__(
        self,
        settings: DroidplanSettings,
        verbose: int = 0,
        config_file: str | None = None,
    ):
        self.settings = settings
        self.verbose = verbose
        self.config_file = config_file


app = typer.Typer(
    name="droidplan",
    help=f"""droidplan v{__version__}

Resolve declarative Android build manifests into validated build plans.

Common workflows:
  • Resolve a manifest:   droidplan resolve app.yaml --sdk-info local.properties
  • Check for problems:   droidplan validate app.yaml --signing signing.yaml
  • Supported plugins:    droidplan plugins""",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity (-v=INFO, -vv=DEBUG)",
        ),
    ] = 0,
    log_file: Annotated[
        str | None, typer.Option("--log-file", help="Log to file")
    ] = None,
    config_file: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to config file")
    ] = None,
    version: Annotated[
        bool, typer.Option("--version", help="Show version and exit")
    ] = False,
) -> None:
    """droidplan Android build manifest resolver."""
    if version:
        print(f"droidplan v{__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        print(ctx.get_help())
        raise typer.Exit()

    # Settings loading logs too; keep it on stderr until the configured level is known
    setup_logging()
    try:
        settings = load_settings(config_file)
    except ConfigError as e:
        print_error_message(str(e))
        raise typer.Exit(1) from e

    log_level_name = settings.log_level
    if verbose == 1:
        log_level_name = "INFO"
    elif verbose >= 2:
        log_level_name = "DEBUG"

    setup_logging(
        json_logs=settings.json_logs,
        log_level_name=log_level_name,
        log_file=log_file or settings.log_file,
    )

    ctx.obj = AppContext(settings=settings, verbose=verbose, config_file=config_file)


register_all_commands(app)


def main() -> None:
    """Main CLI entry point."""
    app()
