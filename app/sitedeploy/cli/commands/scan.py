"""Scan command implementation.

Lists potentially unused asset files.
"""

import json
from enum import Enum
from typing import Annotated

import typer

from sitedeploy.cli.types import exit_on_error, load_project
from sitedeploy.core.runner import CommandRunner
from sitedeploy.stages.scanner import UnusedAsset, UnusedAssetScanner
from sitedeploy.utils.formatting import console, print_error, print_success, styled

app = typer.Typer(
    help="Find files that nothing imports.",
    invoke_without_command=True,
)


class OutputFormat(str, Enum):
    """Output format options."""

    TEXT = "text"
    JSON = "json"


@app.callback(invoke_without_command=True)
def scan(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TEXT,
) -> None:
    """Report files in watched directories with no import reference.

    Results are advisory: nothing is deleted.
    """
    project_dir, config = load_project(ctx)
    runner = CommandRunner()
    scanner = UnusedAssetScanner(project_dir, config, runner)

    if not runner.available("grep"):
        print_error("grep not found on PATH.")
        raise typer.Exit(code=1)

    if output_format == OutputFormat.JSON:
        with exit_on_error(), console.capture():
            assets = list(scanner.scan())
        _print_json(assets)
        return

    with exit_on_error():
        assets = list(scanner.scan())
    if not assets:
        print_success("No unused files found.")
        return

    for asset in assets:
        console.print(styled("highlight", f"Potentially unused file: {asset.path}"))
    console.print(f"\n[muted]Found {len(assets)} potentially unused file(s)[/muted]")


def _print_json(assets: list[UnusedAsset]) -> None:
    """Display findings as JSON."""
    data = [{"path": a.path, "name": a.name} for a in assets]
    console.print_json(json.dumps(data))
