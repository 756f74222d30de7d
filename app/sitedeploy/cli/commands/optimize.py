"""Optimize command implementation.

Runs the image optimizer and CSS minifier on their own.
"""

from typing import Annotated

import typer

from sitedeploy.cli.types import load_project, run_guarded
from sitedeploy.core.runner import CommandRunner
from sitedeploy.models.stage import StageName
from sitedeploy.stages.optimizer import AssetOptimizer
from sitedeploy.utils.formatting import print_success, print_warning

app = typer.Typer(
    help="Optimize images and minify CSS.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def optimize(
    ctx: typer.Context,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show commands without running them."),
    ] = False,
) -> None:
    """Optimize assets. Failures are reported but never fatal."""
    project_dir, config = load_project(ctx)
    optimizer = AssetOptimizer(project_dir, config, CommandRunner(dry_run=dry_run))

    pipeline = run_guarded([optimizer])
    result = pipeline.get(StageName.OPTIMIZE)
    if result is not None and result.details:
        for failure in result.details:
            print_warning(failure)
        return

    print_success("Asset optimization finished.")
