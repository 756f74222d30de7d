"""CLI commands for sitedeploy.

This package contains all subcommand implementations.
"""

from sitedeploy.cli.commands import build, clean, deploy, init, optimize, publish, scan

__all__ = ["build", "clean", "deploy", "init", "optimize", "publish", "scan"]
