"""CLI command implementations for the cutlist application."""

from cutlist.cli.commands.validate import display_load_error, validate_command

__all__ = ["display_load_error", "validate_command"]
