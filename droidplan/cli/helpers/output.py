"""Helper functions for CLI output formatting with Rich integration."""

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from droidplan.core.errors import ResolutionError
from droidplan.models.plan import ResolvedBuildPlan
from droidplan.models.plugin import PLUGIN_ALIASES, PLUGIN_REQUIREMENTS, PluginKind


def get_console(stderr: bool = False) -> Console:
    return Console(stderr=stderr, soft_wrap=True)


def print_success_message(message: str) -> None:
    get_console().print(f"[green]✓[/green] {escape(message)}")


def print_error_message(message: str) -> None:
    get_console(stderr=True).print(f"[red]✗[/red] {escape(message)}")


def format_resolution_error(error: ResolutionError) -> str:
    """One line description: ``field = 'value': detail (ErrorType)``."""
    line = f"{error.field} = {error.value!r}"
    if error.detail:
        line = f"{line}: {error.detail}"
    return f"{line} ({error.__class__.__name__})"


def print_diagnostics(errors: Sequence[ResolutionError]) -> None:
    console = get_console()
    for error in errors:
        console.print(f"[red]✗[/red] {escape(format_resolution_error(error))}")


def print_plan_table(plan: ResolvedBuildPlan) -> None:
    """Print a resolved plan as Rich tables."""
    console = get_console()

    summary = Table(title=f"Build plan: {plan.application_id}", show_header=False)
    summary.add_column("Setting", style="cyan")
    summary.add_column("Value")
    summary.add_row("namespace", plan.namespace)
    summary.add_row("application id", plan.application_id)
    summary.add_row("compile sdk", str(plan.sdk.compile))
    summary.add_row("min sdk", str(plan.sdk.min))
    summary.add_row("target sdk", str(plan.sdk.target))
    summary.add_row("ndk version", plan.ndk_version or "-")
    summary.add_row("version", f"{plan.version.name} ({plan.version.code})")
    summary.add_row(
        "java",
        f"source {plan.compile_options.source_compatibility}, "
        f"target {plan.compile_options.target_compatibility}, "
        f"jvm {plan.compile_options.jvm_target}",
    )
    summary.add_row("flutter source", plan.flutter_source or "-")
    summary.add_row("plugins", ", ".join(str(p.kind) for p in plan.plugins) or "-")
    console.print(summary)

    if plan.variants:
        variants = Table(title="Build types")
        variants.add_column("Name", style="cyan")
        variants.add_column("Slot")
        variants.add_column("Signing config")
        variants.add_column("Key alias")
        for variant in plan.variants:
            if not variant.signing:
                variants.add_row(variant.name, "-", "-", "-")
            for binding in variant.signing:
                variants.add_row(
                    variant.name,
                    binding.slot,
                    binding.identity.name,
                    binding.identity.key_alias or "-",
                )
        console.print(variants)

    if plan.dependencies:
        dependencies = Table(title="Dependencies")
        dependencies.add_column("Scope", style="cyan")
        dependencies.add_column("Coordinate")
        for dependency in plan.dependencies:
            dependencies.add_row(dependency.scope, dependency.coordinate)
        console.print(dependencies)


def print_plugins_table() -> None:
    table = Table(title="Supported plugins")
    table.add_column("Identifier", style="cyan")
    table.add_column("Aliases")
    table.add_column("Requires one of")
    for kind in PluginKind:
        aliases = [alias for alias, target in PLUGIN_ALIASES.items() if target == kind.value]
        required = PLUGIN_REQUIREMENTS.get(kind, ())
        table.add_row(
            kind.value,
            ", ".join(aliases) or "-",
            ", ".join(k.value for k in required) or "-",
        )
    get_console().print(table)
