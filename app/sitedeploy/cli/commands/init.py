"""Init command implementation.

Writes a sitedeploy.toml holding the default pipeline settings so
they can be edited per project.
"""

from typing import Annotated

import typer

from sitedeploy.cli.types import get_project_dir
from sitedeploy.core.config import ConfigError, PipelineConfig, save_config
from sitedeploy.core.paths import get_project_config_path
from sitedeploy.utils.formatting import print_error, print_info, print_success

app = typer.Typer(
    help="Create a sitedeploy.toml with default settings.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def init_config(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing sitedeploy.toml."),
    ] = False,
) -> None:
    """Write the default configuration to the project directory."""
    project_dir = get_project_dir(ctx)
    config_path = get_project_config_path(project_dir)

    if config_path.exists() and not force:
        print_error(f"Configuration already exists: {config_path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    if not project_dir.is_dir():
        print_error(f"Project directory not found: {project_dir}")
        raise typer.Exit(code=1)

    try:
        path = save_config(PipelineConfig(), project_dir)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Configuration written to {path}")
