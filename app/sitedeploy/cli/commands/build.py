"""Build command implementation.

Runs the project's build script on its own.
"""

from typing import Annotated

import typer

from sitedeploy.cli.types import load_project, run_guarded
from sitedeploy.core.runner import CommandRunner
from sitedeploy.stages.builder import Builder
from sitedeploy.utils.formatting import print_success

app = typer.Typer(
    help="Build the project.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def build(
    ctx: typer.Context,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show the build command without running it."),
    ] = False,
) -> None:
    """Run npm build:prod if declared, otherwise npm run build."""
    project_dir, config = load_project(ctx)
    builder = Builder(project_dir, config, CommandRunner(dry_run=dry_run))

    pipeline = run_guarded([builder])
    if not pipeline.success:
        raise typer.Exit(code=1)

    print_success("Build completed.")
