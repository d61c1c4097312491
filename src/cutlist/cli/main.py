"""Typer CLI for cut list validation and generation."""

from pathlib import Path
from typing import Annotated

import typer

from cutlist.application import (
    CutListTimeoutError,
    GenerateCutListCommand,
    GenerateCutListOutput,
)
from cutlist.application.config import ConfigError, load_project
from cutlist.cli.commands import display_load_error, validate_command
from cutlist.cli.logging_setup import configure_logging
from cutlist.infrastructure import (
    CutListFormatter,
    JsonExporter,
    ValidationReportFormatter,
)

OUTPUT_FORMATS = ("text", "json")

app = typer.Typer(
    name="cutlist",
    help="Validate woodworking parts and generate optimized cut lists.",
)

app.command(name="validate")(validate_command)


@app.command()
def generate(
    project_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON project file"),
    ],
    kerf: Annotated[
        float | None,
        typer.Option("--kerf", "-k", help="Saw kerf in inches (overrides project setting)"),
    ] = None,
    overage: Annotated[
        float | None,
        typer.Option("--overage", help="Overage fraction, e.g. 0.1 (overrides project setting)"),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, json"),
    ] = "text",
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write output to this file instead of stdout"),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Generate even if some parts cannot be cut"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Generate an optimized cut list from a project file.

    Warnings such as grain mismatches are accepted automatically and listed
    as bypassed. Errors stop generation unless --force is given, in which
    case the affected parts are reported as skipped.

    Example:
        cutlist generate my-project.json --kerf 0.125 --format json -o cuts.json
    """
    configure_logging(verbose)

    if output_format not in OUTPUT_FORMATS:
        typer.echo(
            f"Unknown format: {output_format}. Available formats: {', '.join(OUTPUT_FORMATS)}",
            err=True,
        )
        raise typer.Exit(code=1)

    try:
        config = load_project(project_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    try:
        result = GenerateCutListCommand().execute(
            config,
            kerf_width=kerf,
            overage_factor=overage,
            force=force,
        )
    except CutListTimeoutError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    cut_list = result.cut_list
    if cut_list is None or result.errors:
        _display_generation_errors(result)
        raise typer.Exit(code=1)

    if output_format == "json":
        content = JsonExporter().export(cut_list)
    else:
        content = CutListFormatter().format(cut_list)
        if cut_list.bypassed_issues:
            bypassed = ValidationReportFormatter().format(cut_list.bypassed_issues)
            content = f"{content}\n\nBYPASSED ISSUES\n{bypassed}"

    if output_file is not None:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(content + "\n", encoding="utf-8")
        typer.echo(f"Cut list written to {output_file}")
    else:
        typer.echo(content)


def _display_generation_errors(result: GenerateCutListOutput) -> None:
    if result.blocking_issues:
        typer.echo("Cannot generate cut list:", err=True)
        typer.echo(ValidationReportFormatter().format(result.blocking_issues), err=True)
        typer.echo()
        typer.echo("Fix these parts or re-run with --force to skip them.", err=True)
    else:
        for message in result.errors:
            typer.echo(f"Error: {message}", err=True)


if __name__ == "__main__":
    app()
