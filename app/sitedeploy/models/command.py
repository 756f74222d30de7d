"""Command descriptor model.

This module defines the typed description of a single external
command run by a pipeline stage.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """Describes one external command to execute.

    This is an immutable data structure built ad hoc by a stage,
    executed once through CommandRunner and then discarded.

    Attributes:
        args: Executable and arguments (no shell interpretation).
        label: Human-readable message reported when the command fails.
        cwd: Working directory for the command. None uses the current directory.
        fatal: Whether a failure of this command halts the pipeline.
    """

    args: tuple[str, ...]
    label: str = "Command failed"
    cwd: Path | None = None
    fatal: bool = False

    def __post_init__(self) -> None:
        """Validate command data after initialization."""
        if not self.args:
            msg = "Command arguments cannot be empty"
            raise ValueError(msg)

    @property
    def display(self) -> str:
        """Return the command as a single printable line."""
        return " ".join(self.args)
