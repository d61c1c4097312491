"""Validate command for checking project files.

Checks a JSON project file for syntax and schema errors, then checks every
part against its assigned stock.
"""

from pathlib import Path
from typing import Annotated

import typer

from cutlist.application import ValidatePartsCommand, ValidationOutput
from cutlist.application.config import ConfigError, load_project
from cutlist.cli.logging_setup import configure_logging


def validate_command(
    project_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON project file to validate"),
    ],
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Validate that every part can be cut from its assigned stock.

    Exit codes:
        0 - All parts can be cut, no warnings
        1 - Project has errors (file problems or uncuttable parts)
        2 - All parts can be cut but there are warnings

    Example:
        cutlist validate my-project.json
    """
    configure_logging(verbose)
    typer.echo(f"Validating {project_file}...")
    typer.echo()

    try:
        config = load_project(project_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    result = ValidatePartsCommand().execute(config)
    _display_validation_output(result)

    if not result.is_valid:
        raise typer.Exit(code=1)
    if result.warning_issues:
        raise typer.Exit(code=2)
    raise typer.Exit(code=0)


def display_load_error(error: ConfigError) -> None:
    """Display a project loading error on stderr."""
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type == "validation":
        for detail in error.details:
            path = detail.get("path", "unknown")
            message = detail.get("message", "Unknown error")
            typer.echo(f"  {path}: {message}", err=True)
            value = detail.get("value")
            if value is not None:
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)

    typer.echo()
    typer.echo("Validation failed.", err=True)


def _display_validation_output(result: ValidationOutput) -> None:
    for message in result.errors:
        typer.echo(f"  {message}", err=True)

    if result.error_issues:
        typer.echo("Errors:", err=True)
        for issue in result.error_issues:
            typer.echo(f"  {issue.part_name} [{issue.type.value}]: {issue.message}", err=True)
        typer.echo()

    if result.warning_issues:
        typer.echo("Warnings:")
        for issue in result.warning_issues:
            typer.echo(f"  {issue.part_name} [{issue.type.value}]: {issue.message}")
        typer.echo()

    error_count = len(result.error_issues) + len(result.errors)
    warning_count = len(result.warning_issues)
    if error_count:
        typer.echo(
            f"Validation failed: {error_count} error(s), {warning_count} warning(s)",
            err=True,
        )
    elif warning_count:
        typer.echo(f"Validation passed with {warning_count} warning(s)")
    else:
        typer.echo("Validation passed. All parts can be cut from their assigned stock.")
