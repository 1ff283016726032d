"""Helper functions for CLI commands."""

from .output import (
    format_resolution_error,
    print_diagnostics,
    print_error_message,
    print_plan_table,
    print_plugins_table,
    print_success_message,
)


__all__ = [
    "format_resolution_error",
    "print_diagnostics",
    "print_error_message",
    "print_plan_table",
    "print_plugins_table",
    "print_success_message",
]
