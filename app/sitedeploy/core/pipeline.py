"""Deployment pipeline orchestration.

Builds the ordered list of stages and runs them one after another.
Advisory stages (clean, scan, optimize) never stop the run; the build
and deploy stages are hard gates.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from typing import TYPE_CHECKING

from sitedeploy.models.stage import PipelineResult, StageName, StageResult
from sitedeploy.stages.builder import Builder
from sitedeploy.stages.cleaner import Cleaner
from sitedeploy.stages.deployer import Deployer
from sitedeploy.stages.optimizer import AssetOptimizer
from sitedeploy.stages.scanner import UnusedAssetScanner
from sitedeploy.utils.formatting import print_error, print_stage

if TYPE_CHECKING:
    from pathlib import Path

    from sitedeploy.core.config import PipelineConfig
    from sitedeploy.core.runner import CommandRunner
    from sitedeploy.stages.base import Stage

logger = logging.getLogger(__name__)


def build_stages(
    project_dir: Path,
    config: PipelineConfig,
    runner: CommandRunner,
    provider: str | None = None,
) -> list[Stage]:
    """Create the five pipeline stages in execution order.

    Args:
        project_dir: Root directory of the site project.
        config: Pipeline configuration.
        runner: Command runner shared by all stages.
        provider: Optional provider name overriding marker detection.

    Returns:
        Stages ordered clean, scan, optimize, build, deploy.

    Raises:
        ValueError: If provider names no known provider.
    """
    return [
        Cleaner(project_dir, config, runner),
        UnusedAssetScanner(project_dir, config, runner),
        AssetOptimizer(project_dir, config, runner),
        Builder(project_dir, config, runner),
        Deployer(project_dir, config, runner, provider=provider),
    ]


def run_pipeline(
    stages: Sequence[Stage],
    skip: Collection[StageName] = (),
) -> PipelineResult:
    """Run stages in order until one of the hard gates fails.

    Exceptions raised by a stage are not caught here; the CLI turns
    them into exit code 1.

    Args:
        stages: Stages to run, in order.
        skip: Stages to record as skipped without running.

    Returns:
        PipelineResult with one StageResult per visited stage.
    """
    pipeline = PipelineResult()

    for stage in stages:
        if stage.name in skip:
            logger.info("Skipping %s stage", stage.name.value)
            pipeline.results.append(
                StageResult(stage=stage.name, success=True, message="Skipped", skipped=True)
            )
            continue

        print_stage(stage.title)
        result = stage.run()
        pipeline.results.append(result)
        logger.debug("Stage %s finished: success=%s", stage.name.value, result.success)

        if result.halts:
            pipeline.halted_at = stage.name
            if stage.name == StageName.BUILD:
                print_error("Build failed. Deployment aborted.")
            else:
                print_error(f"{stage.name.value.capitalize()} failed.")
            break

    return pipeline
