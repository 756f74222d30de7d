"""External command execution.

All stages run their external tools through CommandRunner, so a
pipeline can be exercised in tests with a mocked runner and no
real processes.
"""

import logging

from sitedeploy.models.command import CommandSpec
from sitedeploy.utils.formatting import console, print_error, styled
from sitedeploy.utils.shell import CommandResult, command_exists, run_command, run_interactive

logger = logging.getLogger(__name__)


class CommandRunner:
    """Runs CommandSpec instances and reports their outcome.

    Attributes:
        dry_run: If True, print commands instead of executing them.
    """

    def __init__(self, dry_run: bool = False) -> None:
        """Initialize the runner.

        Args:
            dry_run: If True, only print what would be executed.
        """
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Check if runner is in dry-run mode."""
        return self._dry_run

    def execute(self, spec: CommandSpec) -> bool:
        """Run a command with inherited stdio and report failure.

        Failures never raise: a non-zero exit or a missing executable
        prints the command's label and returns False.

        Args:
            spec: Command to run.

        Returns:
            True if the command exited with code 0.
        """
        if self._dry_run:
            console.print(styled("command", f"Would execute: {spec.display}"))
            return True

        console.print(styled("command", f"Executing: {spec.display}"))
        logger.info("Executing %s (cwd=%s, fatal=%s)", spec.display, spec.cwd, spec.fatal)

        cwd = str(spec.cwd) if spec.cwd is not None else None
        try:
            returncode = run_interactive(list(spec.args), cwd=cwd)
        except OSError as e:
            # FileNotFoundError included: executable missing from PATH
            logger.warning("Could not start %s: %s", spec.args[0], e)
            print_error(spec.label)
            print_error(str(e))
            return False

        if returncode != 0:
            logger.warning("%s exited with code %d", spec.display, returncode)
            print_error(spec.label)
            print_error(f"Command failed: {spec.display} (exit code {returncode})")
            return False

        return True

    def capture(self, spec: CommandSpec) -> CommandResult:
        """Run a command and capture its output.

        Used for probes whose output or exit status must be interpreted,
        such as text searches. Runs even in dry-run mode since captured
        commands do not modify the project.

        Args:
            spec: Command to run.

        Returns:
            CommandResult with stdout, stderr, and returncode.

        Raises:
            FileNotFoundError: If the executable is not found.
            OSError: If the command cannot be executed.
        """
        cwd = str(spec.cwd) if spec.cwd is not None else None
        logger.debug("Capturing %s (cwd=%s)", spec.display, cwd)
        return run_command(list(spec.args), cwd=cwd)

    def available(self, name: str) -> bool:
        """Check if an executable is available on PATH."""
        return command_exists(name)
