"""Unit tests for pipeline orchestration.

Tests stage ordering, hard gates, skipping and exception propagation.
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from sitedeploy.core.config import PipelineConfig
from sitedeploy.core.pipeline import build_stages, run_pipeline
from sitedeploy.models.stage import StageName, StageResult
from sitedeploy.stages.base import Stage
from sitedeploy.stages.builder import Builder
from sitedeploy.stages.cleaner import Cleaner
from sitedeploy.stages.deployer import Deployer
from sitedeploy.stages.optimizer import AssetOptimizer
from sitedeploy.stages.scanner import UnusedAssetScanner


def _make_stage(name: StageName, success: bool = True) -> MagicMock:
    """Create a mock Stage returning a fixed result."""
    stage = MagicMock(spec=Stage)
    stage.name = name
    stage.title = f"{name.value} stage"
    stage.run.return_value = StageResult(stage=name, success=success)
    return stage


def _make_pipeline(**failures: bool) -> list[MagicMock]:
    """Create mock stages for all five steps; kwargs name failing stages."""
    return [_make_stage(name, success=not failures.get(name.value, False)) for name in StageName]


class TestBuildStages:
    """Tests for build_stages."""

    def test_order(self, project_dir: Path, runner: MagicMock) -> None:
        """Stages are created in pipeline order."""
        stages = build_stages(project_dir, PipelineConfig(), runner)

        assert [type(s) for s in stages] == [
            Cleaner,
            UnusedAssetScanner,
            AssetOptimizer,
            Builder,
            Deployer,
        ]
        assert [s.name for s in stages] == list(StageName)

    def test_unknown_provider(self, project_dir: Path, runner: MagicMock) -> None:
        """An unknown provider is rejected before anything runs."""
        with pytest.raises(ValueError):
            build_stages(project_dir, PipelineConfig(), runner, provider="gh-pages")


class TestRunPipeline:
    """Tests for run_pipeline."""

    def test_all_stages_succeed(self) -> None:
        """Every stage runs once, in order."""
        stages = _make_pipeline()

        result = run_pipeline(stages)

        assert result.success is True
        assert result.halted_at is None
        assert [r.stage for r in result.results] == list(StageName)
        for stage in stages:
            stage.run.assert_called_once()

    def test_build_failure_skips_deploy(self) -> None:
        """A failed build halts the run; deploy is never invoked."""
        stages = _make_pipeline(build=True)

        result = run_pipeline(stages)

        assert result.success is False
        assert result.halted_at == StageName.BUILD
        stages[-1].run.assert_not_called()
        assert result.get(StageName.DEPLOY) is None

    def test_deploy_failure(self) -> None:
        """A failed deploy fails the run."""
        result = run_pipeline(_make_pipeline(deploy=True))

        assert result.success is False
        assert result.halted_at == StageName.DEPLOY

    def test_advisory_failures_continue(self) -> None:
        """Failed clean, scan and optimize stages never halt the run."""
        stages = _make_pipeline(clean=True, scan=True, optimize=True)

        result = run_pipeline(stages)

        assert result.success is True
        for stage in stages:
            stage.run.assert_called_once()

    def test_skip(self) -> None:
        """Skipped stages are recorded but not run."""
        stages = _make_pipeline()

        result = run_pipeline(stages, skip={StageName.CLEAN, StageName.SCAN})

        stages[0].run.assert_not_called()
        stages[1].run.assert_not_called()
        clean = result.get(StageName.CLEAN)
        assert clean is not None
        assert clean.skipped is True
        assert result.success is True

    def test_exceptions_propagate(self) -> None:
        """Unexpected exceptions are left for the caller to handle."""
        stages = _make_pipeline()
        stages[2].run.side_effect = RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            run_pipeline(stages)

        stages[3].run.assert_not_called()
