"""Publish command implementation.

Runs the provider deploy command on its own, or lists provider
detection for the project.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from sitedeploy.cli.types import load_project, run_guarded
from sitedeploy.core.runner import CommandRunner
from sitedeploy.stages.deployer import DEFAULT_PROVIDER, PROVIDERS, Deployer, detect_provider
from sitedeploy.utils.formatting import console, print_error, print_success

app = typer.Typer(
    help="Deploy the built site to its hosting provider.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def publish(
    ctx: typer.Context,
    provider: Annotated[
        str | None,
        typer.Option(
            "--provider",
            "-p",
            help="Deploy with this provider instead of detecting it.",
        ),
    ] = None,
    list_providers: Annotated[
        bool,
        typer.Option("--list", "-l", help="Show known providers and which one is detected."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show the deploy command without running it."),
    ] = False,
) -> None:
    """Deploy using the provider whose marker file is present."""
    project_dir, config = load_project(ctx)

    if list_providers:
        _print_providers(project_dir)
        return

    try:
        deployer = Deployer(project_dir, config, CommandRunner(dry_run=dry_run), provider=provider)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    pipeline = run_guarded([deployer])
    if not pipeline.success:
        raise typer.Exit(code=1)

    print_success("Deployment completed.")


def _print_providers(project_dir: Path) -> None:
    """Display the provider table in detection order."""
    detected = detect_provider(project_dir)

    table = Table(
        title="Deployment Providers",
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Provider", style="bold")
    table.add_column("Marker")
    table.add_column("Command", style="muted")
    table.add_column("Status", justify="center")

    for p in PROVIDERS:
        if p == detected:
            status = "[success]detected[/success]"
        elif detected is None and p == DEFAULT_PROVIDER:
            status = "[warning]default[/warning]"
        elif (project_dir / p.marker).exists():
            status = "[muted]present[/muted]"
        else:
            status = ""
        table.add_row(p.name, p.marker, " ".join(p.args), status)

    console.print(table)
