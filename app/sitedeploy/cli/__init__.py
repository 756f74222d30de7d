"""CLI package for sitedeploy.

This package contains the Typer application and all subcommands.
"""

from sitedeploy.cli.main import app

__all__ = ["app"]
