"""Workspace artifact cleaner.

Removes transient, test and build artifacts from the project before
it is built. Cleanup is best-effort: each pattern is handled on its
own and a failure is reported without aborting the rest.
"""

import fnmatch
import logging
import posixpath
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from sitedeploy.core.paths import is_within
from sitedeploy.models.stage import StageName, StageResult
from sitedeploy.stages.base import Stage
from sitedeploy.utils.formatting import console, print_warning, styled

logger = logging.getLogger(__name__)


class PatternKind(str, Enum):
    """How a cleanup pattern selects filesystem entries.

    Attributes:
        DIRECTORY: Pattern ends with ``/`` and names a directory.
        GLOB: Pattern contains ``*`` and matches entries of its base directory.
        EXACT: Pattern names a single file or directory.
    """

    DIRECTORY = "directory"
    GLOB = "glob"
    EXACT = "exact"


def classify_pattern(pattern: str) -> PatternKind:
    """Classify a cleanup pattern.

    A trailing separator takes precedence over wildcards, so
    ``build-*/`` is treated as a directory name.

    Args:
        pattern: Cleanup pattern relative to the project directory.

    Returns:
        PatternKind for the pattern.
    """
    if pattern.endswith("/"):
        return PatternKind.DIRECTORY
    if "*" in pattern:
        return PatternKind.GLOB
    return PatternKind.EXACT


@dataclass(frozen=True, slots=True)
class CleanupResult:
    """Result of removing a single filesystem entry.

    Attributes:
        path: Project-relative path that was operated on.
        pattern: Cleanup pattern that selected the path.
        success: Whether the removal completed.
        error: Error message if the removal failed, None otherwise.
        dry_run: Whether this was a dry-run (nothing removed).
    """

    path: str
    pattern: str
    success: bool
    error: str | None = None
    dry_run: bool = False


class Cleaner(Stage):
    """Removes entries matching the configured cleanup patterns."""

    @property
    def name(self) -> StageName:
        """Return CLEAN as the stage name."""
        return StageName.CLEAN

    @property
    def title(self) -> str:
        """Return the cleanup heading."""
        return "Cleaning workspace artifacts"

    def run(self) -> StageResult:
        """Clean the workspace and summarize the outcome."""
        results = self.clean()
        failures = [r for r in results if not r.success]

        if failures:
            return StageResult(
                stage=self.name,
                success=False,
                message=f"{len(failures)} of {len(results)} removal(s) failed",
                details=tuple(f"{r.path}: {r.error}" for r in failures),
            )

        verb = "would be removed" if self.dry_run else "removed"
        return StageResult(
            stage=self.name,
            success=True,
            message=f"{len(results)} entr{'y' if len(results) == 1 else 'ies'} {verb}",
            details=tuple(r.path for r in results),
        )

    def clean(self) -> list[CleanupResult]:
        """Apply every cleanup pattern in order.

        Returns:
            One CleanupResult per matched entry. Patterns matching
            nothing produce no results.
        """
        results: list[CleanupResult] = []
        for pattern in self._config.cleanup.patterns:
            results.extend(self.clean_pattern(pattern))
        return results

    def clean_pattern(self, pattern: str) -> list[CleanupResult]:
        """Remove the entries selected by one pattern.

        Errors are caught and returned as failed results so the
        remaining patterns still run.

        Args:
            pattern: Cleanup pattern relative to the project directory.

        Returns:
            CleanupResult for each entry the pattern selected.
        """
        kind = classify_pattern(pattern)
        try:
            if kind == PatternKind.DIRECTORY:
                return self._clean_directory(pattern)
            if kind == PatternKind.GLOB:
                return self._clean_glob(pattern)
            return self._clean_exact(pattern)
        except OSError as e:
            logger.warning("Error removing %s: %s", pattern, e)
            print_warning(f"Error removing {pattern}: {e}")
            return [CleanupResult(path=pattern, pattern=pattern, success=False, error=str(e))]

    def _clean_directory(self, pattern: str) -> list[CleanupResult]:
        """Remove a directory named by a trailing-separator pattern."""
        rel = pattern.rstrip("/")
        target = self._resolve(rel)
        if target is None:
            return [self._outside(pattern)]
        if not target.is_dir():
            return []

        console.print(styled("muted", f"Removing directory: {rel}"))
        return [self._remove(target, rel, pattern)]

    def _clean_glob(self, pattern: str) -> list[CleanupResult]:
        """Remove entries of the pattern's base directory matching its name part."""
        base, name_pattern = posixpath.split(pattern)
        base_dir = self._resolve(base or ".", allow_root=True)
        if base_dir is None:
            return [self._outside(pattern)]
        if not base_dir.is_dir():
            return []

        results: list[CleanupResult] = []
        for entry in sorted(base_dir.iterdir()):
            if not fnmatch.fnmatchcase(entry.name, name_pattern):
                continue
            rel = posixpath.join(base, entry.name) if base else entry.name
            console.print(styled("muted", f"Removing file: {rel}"))
            results.append(self._remove(entry, rel, pattern))
        return results

    def _clean_exact(self, pattern: str) -> list[CleanupResult]:
        """Remove a single file or directory if present."""
        target = self._resolve(pattern)
        if target is None:
            return [self._outside(pattern)]
        if not (target.exists() or target.is_symlink()):
            return []

        console.print(styled("muted", f"Removing: {pattern}"))
        return [self._remove(target, pattern, pattern)]

    def _remove(self, target: Path, rel: str, pattern: str) -> CleanupResult:
        """Delete one entry, recursing into real directories.

        Args:
            target: Absolute path to delete.
            rel: Project-relative path used for reporting.
            pattern: Pattern that selected the entry.

        Returns:
            CleanupResult for the entry.
        """
        if self.dry_run:
            logger.info("Dry-run: would remove %s", target)
            return CleanupResult(path=rel, pattern=pattern, success=True, dry_run=True)

        try:
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            else:
                target.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Error removing %s: %s", target, e)
            print_warning(f"Error removing {rel}: {e}")
            return CleanupResult(path=rel, pattern=pattern, success=False, error=str(e))

        logger.debug("Removed %s", target)
        return CleanupResult(path=rel, pattern=pattern, success=True)

    def _resolve(self, rel: str, *, allow_root: bool = False) -> Path | None:
        """Return the absolute path for rel, or None if it escapes the project.

        The path must lie strictly below the project directory unless
        allow_root is set. The directory holding the entry is also
        checked after following symlinks, so a linked parent cannot lead
        outside. The entry itself may be a symlink; it is unlinked, not
        followed.
        """
        target = self._project_dir / rel
        if not is_within(target, self._project_dir, allow_root=allow_root):
            return None

        container = target if allow_root else target.parent
        if not is_within(container.resolve(), self._project_dir.resolve(), allow_root=True):
            logger.debug("%s resolves outside %s", container, self._project_dir)
            return None
        return target

    def _outside(self, pattern: str) -> CleanupResult:
        """Build the failure result for a pattern pointing outside the project."""
        msg = f"Pattern points outside the project directory: {pattern}"
        logger.warning(msg)
        print_warning(msg)
        return CleanupResult(path=pattern, pattern=pattern, success=False, error=msg)
