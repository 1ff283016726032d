"""Resolve and validate commands."""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from droidplan.cli.decorators import handle_errors
from droidplan.cli.helpers import (
    print_diagnostics,
    print_plan_table,
    print_success_message,
)
from droidplan.config import DroidplanSettings, load_manifest
from droidplan.core.errors import ConfigError
from droidplan.core.structlog_logger import get_struct_logger
from droidplan.resolution import (
    ChainedSdkInfoProvider,
    InMemorySigningRegistry,
    create_config_resolver,
    create_sdk_info_provider,
    load_signing_registry,
)


logger = get_struct_logger(__name__)


class OutputFormat(str, Enum):
    JSON = "json"
    TABLE = "table"


ManifestArg = Annotated[
    Path, typer.Argument(help="Manifest file (.yaml, .yml or .json)")
]
SdkInfoOption = Annotated[
    list[Path] | None,
    typer.Option(
        "--sdk-info",
        "-s",
        help="YAML or .properties file answering symbolic references (repeatable)",
    ),
]
SetOption = Annotated[
    list[str] | None,
    typer.Option(
        "--set",
        help="Symbol value override, e.g. flutter.compileSdkVersion=34 (repeatable)",
    ),
]
SigningOption = Annotated[
    Path | None,
    typer.Option("--signing", help="YAML file declaring signing configs"),
]
DebugSigningOption = Annotated[
    bool,
    typer.Option(
        "--no-debug-signing",
        help="Do not register the Android debug signing identity",
    ),
]
FormatOption = Annotated[
    OutputFormat, typer.Option("--format", "-f", help="Output format")
]


def _parse_overrides(values: list[str] | None) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for item in values or []:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise ConfigError(f"Invalid --set value {item!r}, expected SYMBOL=VALUE")
        overrides[key.strip()] = value.strip()
    return overrides


def _settings(ctx: typer.Context) -> DroidplanSettings:
    settings = getattr(ctx.obj, "settings", None)
    return settings if settings is not None else DroidplanSettings()


def build_capabilities(
    settings: DroidplanSettings,
    sdk_info: list[Path] | None,
    overrides: list[str] | None,
    signing: Path | None,
    no_debug_signing: bool = False,
) -> tuple[ChainedSdkInfoProvider, InMemorySigningRegistry]:
    """Create the SDK info provider and signing registry for a command.

    Command line values take precedence over settings.
    """
    sdk_paths = list(settings.sdk_info_paths) + list(sdk_info or [])
    provider = create_sdk_info_provider(sdk_paths, _parse_overrides(overrides))
    include_debug = settings.include_debug_signing and not no_debug_signing
    registry = load_signing_registry(
        signing or settings.signing_config_path, include_debug=include_debug
    )
    return provider, registry


@handle_errors
def resolve(
    ctx: typer.Context,
    manifest_file: ManifestArg,
    sdk_info: SdkInfoOption = None,
    overrides: SetOption = None,
    signing: SigningOption = None,
    no_debug_signing: DebugSigningOption = False,
    output_format: FormatOption = OutputFormat.JSON,
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write the plan to a file")
    ] = None,
) -> None:
    """Resolve a manifest into a build plan.

    Bare dotted names such as flutter.versionName are references answered by
    --sdk-info and --set. Write {literal: release.candidate} for a dotted
    version name or NDK version meant literally.
    """
    manifest = load_manifest(manifest_file)
    provider, registry = build_capabilities(
        _settings(ctx), sdk_info, overrides, signing, no_debug_signing
    )
    plan = create_config_resolver().resolve(manifest, provider, registry)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(plan.to_json() + "\n", encoding="utf-8")
        logger.info("plan_written", path=str(output), fingerprint=plan.fingerprint())
        print_success_message(f"Build plan written to {output}")
    elif output_format == OutputFormat.TABLE:
        print_plan_table(plan)
    else:
        typer.echo(plan.to_json())


@handle_errors
def validate(
    ctx: typer.Context,
    manifest_file: ManifestArg,
    sdk_info: SdkInfoOption = None,
    overrides: SetOption = None,
    signing: SigningOption = None,
    no_debug_signing: DebugSigningOption = False,
    output_format: FormatOption = OutputFormat.TABLE,
) -> None:
    """Report every problem in a manifest without producing a plan."""
    manifest = load_manifest(manifest_file)
    provider, registry = build_capabilities(
        _settings(ctx), sdk_info, overrides, signing, no_debug_signing
    )
    errors = create_config_resolver().diagnose(manifest, provider, registry)

    if output_format == OutputFormat.JSON:
        payload = [error.to_dict() for error in errors]
        typer.echo(json.dumps(payload, indent=2, default=str))
    elif errors:
        print_diagnostics(errors)
    else:
        print_success_message(f"{manifest_file} resolves cleanly")

    if errors:
        raise typer.Exit(1)


def register_commands(app: typer.Typer) -> None:
    """Register resolve commands with the main app."""
    app.command(name="resolve")(resolve)
    app.command(name="validate")(validate)
