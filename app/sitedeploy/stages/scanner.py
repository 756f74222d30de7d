"""Unused-asset scanner.

Flags files in watched directories whose base name never appears in
an import statement elsewhere in the project. The check is a plain
text search, so it is advisory: re-exports and dynamic imports are
missed, and names mentioned in comments count as references.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from sitedeploy.models.command import CommandSpec
from sitedeploy.models.stage import StageName, StageResult
from sitedeploy.stages.base import Stage
from sitedeploy.utils.formatting import console, print_warning, styled

logger = logging.getLogger(__name__)

# Characters with special meaning in POSIX extended regular expressions
_ERE_SPECIAL: frozenset[str] = frozenset(".[]()*+?{}|^$\\")

# grep exit status when nothing matched
_GREP_NO_MATCH = 1


@dataclass(frozen=True, slots=True)
class UnusedAsset:
    """A file with no import-style reference in the project.

    Attributes:
        path: Project-relative path of the file.
        name: Base name (extension stripped) that was searched for.
    """

    path: str
    name: str


def escape_ere(text: str) -> str:
    """Escape text for literal use in a grep -E pattern."""
    return "".join(f"\\{c}" if c in _ERE_SPECIAL else c for c in text)


def reference_pattern(name: str) -> str:
    """Build the import-statement pattern for a base name.

    Matches ``from '<anything><name>'`` with single or double quotes.

    Args:
        name: File base name without extension.

    Returns:
        Extended regular expression for grep -E.
    """
    return f"from ['\"].*{escape_ere(name)}['\"]"


class UnusedAssetScanner(Stage):
    """Reports files in watched directories that nothing imports."""

    @property
    def name(self) -> StageName:
        """Return SCAN as the stage name."""
        return StageName.SCAN

    @property
    def title(self) -> str:
        """Return the scan heading."""
        return "Identifying unused files"

    def run(self) -> StageResult:
        """Scan for unused assets and print each finding."""
        if not self._runner.available("grep"):
            print_warning("grep not found on PATH; skipping unused file scan.")
            return StageResult(stage=self.name, success=False, message="grep not available")

        unused: list[str] = []
        for asset in self.scan():
            console.print(styled("highlight", f"Potentially unused file: {asset.path}"))
            unused.append(asset.path)

        return StageResult(
            stage=self.name,
            success=True,
            message=f"{len(unused)} potentially unused file(s)",
            details=tuple(unused),
        )

    def scan(self) -> Iterator[UnusedAsset]:
        """Yield unused files across all watched directories.

        Directories are visited in configured order and files in sorted
        order, so repeated scans of an unchanged tree yield the same
        sequence. Nothing is modified.

        Yields:
            UnusedAsset for each file with no reference.
        """
        for directory in self._config.scan.directories:
            target = self._project_dir / directory
            if not target.is_dir():
                continue

            console.print(styled("muted", f"Checking directory: {directory}"))
            try:
                entries = sorted(target.iterdir())
            except PermissionError:
                logger.warning("Permission denied scanning directory: %s", target)
                continue

            for entry in entries:
                if not entry.is_file():
                    continue
                name = entry.stem
                if self.is_referenced(name) is False:
                    yield UnusedAsset(path=f"{directory.rstrip('/')}/{entry.name}", name=name)

    def is_referenced(self, name: str) -> bool | None:
        """Search the project for an import of the given base name.

        Args:
            name: File base name without extension.

        Returns:
            True if a reference exists, False if the search found none,
            None if the search itself failed.
        """
        spec = self._search_command(name)
        try:
            result = self._runner.capture(spec)
        except OSError as e:
            logger.warning("Search for %s could not run: %s", name, e)
            return None

        if result.returncode == _GREP_NO_MATCH:
            return False
        if not result.success:
            logger.warning(
                "Search for %s failed with exit code %d: %s",
                name,
                result.returncode,
                result.stderr.strip(),
            )
            return None
        return bool(result.stdout.strip())

    def _search_command(self, name: str) -> CommandSpec:
        """Build the recursive grep invocation for a base name."""
        scan = self._config.scan
        args = ["grep", "-r", "-l", "-E", reference_pattern(name)]
        args.extend(f"--include=*.{ext.lstrip('.')}" for ext in scan.extensions)
        args.extend(f"--exclude-dir={d}" for d in scan.exclude_dirs)
        args.append(".")
        return CommandSpec(
            args=tuple(args),
            label=f"Reference search for {name} failed",
            cwd=self._project_dir,
        )
