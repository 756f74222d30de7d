"""Stage and pipeline result models.

This module defines the pipeline stage identifiers and the data
structures returned by each stage and by a whole pipeline run.
"""

from dataclasses import dataclass, field
from enum import Enum


class StageName(str, Enum):
    """Pipeline stages in execution order.

    Attributes:
        CLEAN: Remove transient build and test artifacts.
        SCAN: Flag assets with no import reference.
        OPTIMIZE: Optimize images and minify CSS.
        BUILD: Run the project build script.
        DEPLOY: Run the provider deploy command.
    """

    CLEAN = "clean"
    SCAN = "scan"
    OPTIMIZE = "optimize"
    BUILD = "build"
    DEPLOY = "deploy"


# Stages whose failure halts the pipeline
FATAL_STAGES: frozenset[StageName] = frozenset({StageName.BUILD, StageName.DEPLOY})


@dataclass(frozen=True, slots=True)
class StageResult:
    """Outcome of running a single pipeline stage.

    Attributes:
        stage: Which stage produced this result.
        success: Whether the stage completed its work.
        message: Optional summary or error message.
        details: Individual findings or failures reported by the stage.
        skipped: Whether the stage was skipped on request.
    """

    stage: StageName
    success: bool
    message: str | None = None
    details: tuple[str, ...] = ()
    skipped: bool = False

    @property
    def fatal(self) -> bool:
        """Check if this stage is a hard gate for the pipeline."""
        return self.stage in FATAL_STAGES

    @property
    def halts(self) -> bool:
        """Check if this result stops the pipeline."""
        return self.fatal and not self.success and not self.skipped


@dataclass(slots=True)
class PipelineResult:
    """Accumulated outcome of a pipeline run.

    Attributes:
        results: Stage results in execution order.
        halted_at: Stage that stopped the run, or None if it ran to completion.
    """

    results: list[StageResult] = field(default_factory=list)
    halted_at: StageName | None = None

    @property
    def success(self) -> bool:
        """Check if the pipeline completed without a fatal failure."""
        return self.halted_at is None

    def get(self, stage: StageName) -> StageResult | None:
        """Return the result for a stage, or None if it never ran."""
        for result in self.results:
            if result.stage == stage:
                return result
        return None
