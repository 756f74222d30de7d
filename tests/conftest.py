"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from sitedeploy.core.config import PipelineConfig
from sitedeploy.core.runner import CommandRunner
from sitedeploy.utils.shell import CommandResult


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Empty site project directory."""
    project = tmp_path / "site"
    project.mkdir()
    return project


@pytest.fixture
def config() -> PipelineConfig:
    """Default pipeline configuration."""
    return PipelineConfig()


@pytest.fixture
def runner() -> MagicMock:
    """CommandRunner mock where every command succeeds and every tool exists."""
    mock = MagicMock(spec=CommandRunner)
    mock.dry_run = False
    mock.execute.return_value = True
    mock.available.return_value = True
    mock.capture.return_value = CommandResult(stdout="", stderr="", returncode=1)
    return mock


@pytest.fixture
def package_json() -> str:
    """Sample package.json declaring both build scripts."""
    return """{
  "name": "magnolia-site",
  "scripts": {
    "dev": "vite",
    "build": "vite build",
    "build:prod": "vite build --mode production"
  }
}"""
