"""Clean command implementation.

Removes workspace artifacts without running the rest of the pipeline.
"""

from typing import Annotated

import typer
from rich.table import Table

from sitedeploy.cli.types import load_project, run_guarded
from sitedeploy.core.runner import CommandRunner
from sitedeploy.models.stage import StageName
from sitedeploy.stages.cleaner import Cleaner, classify_pattern
from sitedeploy.utils.formatting import console, print_info, print_success, print_warning

app = typer.Typer(
    help="Remove transient build and test artifacts.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def clean(
    ctx: typer.Context,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be removed."),
    ] = False,
    show_patterns: Annotated[
        bool,
        typer.Option("--patterns", help="List the configured cleanup patterns and exit."),
    ] = False,
) -> None:
    """Remove entries matching the cleanup patterns."""
    project_dir, config = load_project(ctx)

    if show_patterns:
        _print_patterns(config.cleanup.patterns)
        return

    cleaner = Cleaner(project_dir, config, CommandRunner(dry_run=dry_run))
    pipeline = run_guarded([cleaner])
    result = pipeline.get(StageName.CLEAN)
    if result is None:
        return

    if not result.details:
        print_success("Workspace is clean. Nothing to remove.")
    elif not result.success:
        print_warning(result.message or "Some entries could not be removed.")
    elif dry_run:
        print_info(f"Dry-run: {result.message}.")
    else:
        print_success(f"Cleanup complete: {result.message}.")


def _print_patterns(patterns: list[str]) -> None:
    """Display cleanup patterns with their classification."""
    table = Table(
        title="Cleanup Patterns",
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Pattern", style="bold")
    table.add_column("Kind", width=10)

    for pattern in patterns:
        table.add_row(pattern, classify_pattern(pattern).value)

    console.print(table)
