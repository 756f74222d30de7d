"""Deploy command implementation.

Runs the full pipeline: clean, scan, optimize, build and deploy.
"""

from typing import Annotated

import typer

from sitedeploy.cli.display import create_pipeline_table, print_banner
from sitedeploy.cli.types import is_quiet, load_project, run_guarded
from sitedeploy.core.pipeline import build_stages
from sitedeploy.core.runner import CommandRunner
from sitedeploy.models.stage import StageName
from sitedeploy.utils.formatting import console, print_error

app = typer.Typer(
    help="Run the full deployment pipeline.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def deploy(
    ctx: typer.Context,
    skip_clean: Annotated[
        bool,
        typer.Option("--skip-clean", help="Do not remove workspace artifacts."),
    ] = False,
    skip_scan: Annotated[
        bool,
        typer.Option("--skip-scan", help="Do not scan for unused files."),
    ] = False,
    skip_optimize: Annotated[
        bool,
        typer.Option("--skip-optimize", help="Do not optimize images or CSS."),
    ] = False,
    provider: Annotated[
        str | None,
        typer.Option(
            "--provider",
            "-p",
            help="Deploy with this provider instead of detecting it.",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be done without doing it."),
    ] = False,
) -> None:
    """Clean, scan, optimize, build and deploy the site."""
    project_dir, config = load_project(ctx)
    quiet = is_quiet(ctx)

    runner = CommandRunner(dry_run=dry_run)
    try:
        stages = build_stages(project_dir, config, runner, provider=provider)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    skip: set[StageName] = set()
    if skip_clean:
        skip.add(StageName.CLEAN)
    if skip_scan:
        skip.add(StageName.SCAN)
    if skip_optimize:
        skip.add(StageName.OPTIMIZE)

    if not quiet:
        print_banner("DEPLOYMENT PIPELINE")

    pipeline = run_guarded(stages, skip)

    if not quiet:
        console.print()
        console.print(create_pipeline_table(pipeline))

    if not pipeline.success:
        raise typer.Exit(code=1)

    print_banner("SUCCESSFULLY DEPLOYED")
