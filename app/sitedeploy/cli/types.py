"""Shared helpers for CLI commands.

This module provides the context accessors and the guarded pipeline
runner used by every command module.
"""

import logging
from collections.abc import Collection, Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

import typer

from sitedeploy.core.config import PipelineConfig, require_config
from sitedeploy.core.pipeline import run_pipeline
from sitedeploy.models.stage import PipelineResult, StageName
from sitedeploy.stages.base import Stage
from sitedeploy.utils.formatting import print_error

logger = logging.getLogger(__name__)


def get_project_dir(ctx: typer.Context) -> Path:
    """Return the project directory selected by the root callback."""
    obj = ctx.obj or {}
    project_dir: Path = obj.get("project_dir") or Path.cwd()
    return project_dir


def is_quiet(ctx: typer.Context) -> bool:
    """Check whether non-essential output was suppressed."""
    obj = ctx.obj or {}
    return bool(obj.get("quiet", False))


def load_project(ctx: typer.Context) -> tuple[Path, PipelineConfig]:
    """Resolve the project directory and load its configuration.

    Raises:
        typer.Exit: If the directory is missing or the config is invalid.
    """
    project_dir = get_project_dir(ctx)
    if not project_dir.is_dir():
        print_error(f"Project directory not found: {project_dir}")
        raise typer.Exit(code=1)
    return project_dir, require_config(project_dir)


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Turn any unexpected exception in the block into exit code 1.

    typer.Exit passes through unchanged.

    Raises:
        typer.Exit: If the block raised an unexpected exception.
    """
    try:
        yield
    except typer.Exit:
        raise
    except Exception as e:
        logger.exception("Unexpected error")
        print_error(f"An unexpected error occurred: {e}")
        raise typer.Exit(code=1) from e


def run_guarded(
    stages: Sequence[Stage],
    skip: Collection[StageName] = (),
) -> PipelineResult:
    """Run stages, converting any unexpected exception into exit code 1.

    Args:
        stages: Stages to run in order.
        skip: Stages to record as skipped.

    Returns:
        PipelineResult of the run.

    Raises:
        typer.Exit: If a stage raised an unexpected exception.
    """
    with exit_on_error():
        return run_pipeline(stages, skip)
