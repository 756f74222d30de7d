"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from sitedeploy import __version__
from sitedeploy.cli.commands import build, clean, deploy, init, optimize, publish, scan
from sitedeploy.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="sitedeploy",
    help="Clean, optimize, build and deploy a static site.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"sitedeploy version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool, quiet: bool) -> None:
    """Route log records to stderr through Rich.

    Args:
        verbose: Show debug records.
        quiet: Show errors only.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False, show_time=verbose)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
    project_dir: Annotated[
        Path,
        typer.Option(
            "--project-dir",
            "-C",
            help="Site project directory.",
            file_okay=False,
        ),
    ] = Path("."),
) -> None:
    """sitedeploy - Static-site deployment pipeline.

    Cleans workspace artifacts, flags unused files, optimizes assets,
    then builds and deploys with the provider detected from the project.
    """
    configure_logging(verbose, quiet)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["project_dir"] = project_dir.resolve()


# Register commands
app.add_typer(init.app, name="init")
app.add_typer(deploy.app, name="deploy")
app.add_typer(clean.app, name="clean")
app.add_typer(scan.app, name="scan")
app.add_typer(optimize.app, name="optimize")
app.add_typer(build.app, name="build")
app.add_typer(publish.app, name="publish")


if __name__ == "__main__":
    app()
