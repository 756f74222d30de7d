"""Abstract base class for pipeline stages.

This module defines the Stage interface that every step of the
deployment pipeline implements.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from sitedeploy.core.config import PipelineConfig
from sitedeploy.core.runner import CommandRunner
from sitedeploy.models.stage import StageName, StageResult


class Stage(ABC):
    """Abstract base class for all pipeline stages.

    A stage performs one step of the deployment against a project
    directory and reports the outcome as a StageResult. Advisory stages
    catch and report their own failures; fatal stages report failure
    through ``StageResult.success`` and let the pipeline halt.

    Example:
        >>> stage = Builder(Path("."), PipelineConfig(), CommandRunner())
        >>> result = stage.run()
        >>> if result.halts:
        ...     print("build failed")
    """

    def __init__(
        self,
        project_dir: Path,
        config: PipelineConfig,
        runner: CommandRunner,
    ) -> None:
        """Initialize the stage.

        Args:
            project_dir: Root directory of the site project.
            config: Pipeline configuration.
            runner: Command runner used for every external command.
        """
        self._project_dir = project_dir
        self._config = config
        self._runner = runner

    @property
    def project_dir(self) -> Path:
        """Return the project directory this stage operates on."""
        return self._project_dir

    @property
    def dry_run(self) -> bool:
        """Check if the stage should avoid modifying anything."""
        return self._runner.dry_run

    @property
    @abstractmethod
    def name(self) -> StageName:
        """Return the pipeline stage this class implements."""

    @property
    @abstractmethod
    def title(self) -> str:
        """Return the heading printed before the stage runs."""

    @abstractmethod
    def run(self) -> StageResult:
        """Run the stage.

        Returns:
            StageResult describing the outcome.
        """
