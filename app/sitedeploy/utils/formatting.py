"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys
from typing import Literal

from rich.console import Console
from rich.markup import escape

from sitedeploy.core.theme import get_rich_theme

# Semantic tags accepted by styled()
StyleTag = Literal["info", "warning", "error", "success", "muted", "highlight", "stage", "command"]


def _detect_color_system() -> Literal["truecolor"] | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


_theme = get_rich_theme()

# Shared console instances (theme loaded once at import)
console = Console(theme=_theme, color_system=_detect_color_system())
err_console = Console(theme=_theme, stderr=True, color_system=_detect_color_system())


def styled(tag: StyleTag, text: str) -> str:
    """Wrap text in Rich markup for a semantic style tag.

    The text is escaped so paths containing square brackets render literally.

    Args:
        tag: Semantic style name defined by the theme.
        text: Plain text to style.

    Returns:
        Rich markup string.
    """
    return f"[{tag}]{escape(text)}[/{tag}]"


def print_stage(title: str) -> None:
    """Print a pipeline stage heading."""
    console.print()
    console.print(styled("stage", title))


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(styled("info", message))


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(styled("success", message))
