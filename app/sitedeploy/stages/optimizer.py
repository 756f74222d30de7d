"""Asset optimizer.

Optimizes images in place and minifies stylesheets when their input
directories exist. Both branches are optional polish: failures are
reported and the pipeline moves on.
"""

import logging
import os
from pathlib import Path

from sitedeploy.models.command import CommandSpec
from sitedeploy.models.stage import StageName, StageResult
from sitedeploy.stages.base import Stage
from sitedeploy.utils.formatting import print_info

logger = logging.getLogger(__name__)


class AssetOptimizer(Stage):
    """Runs the image optimizer and CSS minifier."""

    @property
    def name(self) -> StageName:
        """Return OPTIMIZE as the stage name."""
        return StageName.OPTIMIZE

    @property
    def title(self) -> str:
        """Return the optimizer heading."""
        return "Optimizing assets"

    def run(self) -> StageResult:
        """Run both optimization branches.

        The stage always succeeds; failed commands are listed in the
        result details.
        """
        failures: list[str] = []
        failures.extend(self.optimize_images())
        failures.extend(self.minify_css())

        message = f"{len(failures)} optimization step(s) failed" if failures else None
        return StageResult(
            stage=self.name,
            success=True,
            message=message,
            details=tuple(failures),
        )

    def optimize_images(self) -> list[str]:
        """Install the image tool if needed and optimize images in place.

        Returns:
            Labels of the commands that failed.
        """
        settings = self._config.optimize
        failures: list[str] = []

        if not self._runner.available(settings.image_tool):
            print_info(f"Installing {settings.image_tool} for image optimization...")
            install = CommandSpec(
                args=tuple(settings.install_command),
                label=f"Failed to install {settings.image_tool}",
                cwd=self._project_dir,
            )
            if not self._runner.execute(install):
                failures.append(install.label)

        image_dir = self._project_dir / settings.image_dir
        if not image_dir.is_dir():
            return failures

        images = self._list_files(image_dir)
        if not images:
            logger.debug("No images found in %s", image_dir)
            return failures

        print_info("Optimizing images...")
        optimize = CommandSpec(
            args=(
                settings.image_tool,
                *(f"{settings.image_dir}/{p.name}" for p in images),
                f"--out-dir={settings.image_dir}",
            ),
            label="Image optimization failed",
            cwd=self._project_dir,
        )
        if not self._runner.execute(optimize):
            failures.append(optimize.label)
        return failures

    def minify_css(self) -> list[str]:
        """Minify stylesheets into the ``min`` subdirectory.

        Skipped when the skip environment variable holds any non-empty value.

        Returns:
            Labels of the commands that failed.
        """
        settings = self._config.optimize
        styles_dir = self._project_dir / settings.styles_dir
        if not styles_dir.is_dir():
            return []

        if os.environ.get(settings.skip_css_env):
            logger.info("%s is set, skipping CSS minification", settings.skip_css_env)
            return []

        stylesheets = self._list_files(styles_dir, "*.css")
        if not stylesheets:
            logger.debug("No stylesheets found in %s", styles_dir)
            return []

        print_info("Minifying CSS...")
        minify = CommandSpec(
            args=(
                "npx",
                "postcss",
                *(f"{settings.styles_dir}/{p.name}" for p in stylesheets),
                "--use",
                "cssnano",
                "--dir",
                f"{settings.styles_dir}/min",
            ),
            label="CSS minification failed",
            cwd=self._project_dir,
        )
        if not self._runner.execute(minify):
            return [minify.label]
        return []

    @staticmethod
    def _list_files(directory: Path, pattern: str = "*") -> list[Path]:
        """List visible regular files directly inside a directory, sorted by name."""
        return sorted(
            p for p in directory.glob(pattern) if p.is_file() and not p.name.startswith(".")
        )
