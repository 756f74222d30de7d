"""Pipeline stages.

This module exports the stage base class and the five stages of the
deployment pipeline.
"""

from sitedeploy.stages.base import Stage
from sitedeploy.stages.builder import Builder
from sitedeploy.stages.cleaner import Cleaner, CleanupResult, PatternKind, classify_pattern
from sitedeploy.stages.deployer import PROVIDERS, Deployer, Provider, detect_provider
from sitedeploy.stages.optimizer import AssetOptimizer
from sitedeploy.stages.scanner import UnusedAsset, UnusedAssetScanner

__all__ = [
    "PROVIDERS",
    "AssetOptimizer",
    "Builder",
    "Cleaner",
    "CleanupResult",
    "Deployer",
    "PatternKind",
    "Provider",
    "Stage",
    "UnusedAsset",
    "UnusedAssetScanner",
    "classify_pattern",
    "detect_provider",
]
