"""Data models for sitedeploy.

This module exports the command descriptor and stage result models.
"""

from sitedeploy.models.command import CommandSpec
from sitedeploy.models.stage import FATAL_STAGES, PipelineResult, StageName, StageResult

__all__ = [
    "FATAL_STAGES",
    "CommandSpec",
    "PipelineResult",
    "StageName",
    "StageResult",
]
