"""Project builder.

Chooses the npm build script declared in the project manifest and
runs it. A failed build halts the pipeline.
"""

import json
import logging
from pathlib import Path
from typing import Any

from sitedeploy.models.command import CommandSpec
from sitedeploy.models.stage import StageName, StageResult
from sitedeploy.stages.base import Stage
from sitedeploy.utils.formatting import print_info, print_warning

logger = logging.getLogger(__name__)

PRODUCTION_SCRIPT = "build:prod"
DEFAULT_SCRIPT = "build"


def read_scripts(manifest_path: Path) -> dict[str, Any]:
    """Read the ``scripts`` table of a package manifest.

    A missing, unreadable or malformed manifest yields an empty table.

    Args:
        manifest_path: Path to package.json.

    Returns:
        Mapping of script name to command.
    """
    if not manifest_path.is_file():
        return {}

    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        logger.warning("Invalid JSON in %s: %s", manifest_path, e)
        print_warning(f"Could not parse {manifest_path.name}: {e}")
        return {}
    except OSError as e:
        logger.warning("Failed to read %s: %s", manifest_path, e)
        print_warning(f"Could not read {manifest_path.name}: {e}")
        return {}

    scripts = data.get("scripts") if isinstance(data, dict) else None
    if not isinstance(scripts, dict):
        return {}
    return scripts


def select_build_script(scripts: dict[str, Any]) -> str:
    """Choose which npm script builds the site.

    ``build:prod`` wins when declared. Otherwise ``build`` is used,
    even if the manifest does not declare it.

    Args:
        scripts: Scripts table from package.json.

    Returns:
        Script name to pass to ``npm run``.
    """
    if PRODUCTION_SCRIPT in scripts:
        return PRODUCTION_SCRIPT
    return DEFAULT_SCRIPT


class Builder(Stage):
    """Runs the project's npm build script."""

    @property
    def name(self) -> StageName:
        """Return BUILD as the stage name."""
        return StageName.BUILD

    @property
    def title(self) -> str:
        """Return the build heading."""
        return "Building the project"

    def build_command(self) -> CommandSpec:
        """Build the command descriptor for the selected script."""
        scripts = read_scripts(self._project_dir / self._config.build.manifest)
        script = select_build_script(scripts)
        if script not in scripts:
            print_info(f"No '{script}' script declared; trying 'npm run {script}' anyway.")

        return CommandSpec(
            args=("npm", "run", script),
            label="Build failed",
            cwd=self._project_dir,
            fatal=True,
        )

    def run(self) -> StageResult:
        """Run the build command."""
        spec = self.build_command()
        if self._runner.execute(spec):
            return StageResult(stage=self.name, success=True, message=spec.display)
        return StageResult(stage=self.name, success=False, message=spec.label)
