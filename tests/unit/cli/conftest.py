"""Fixtures shared by CLI command tests."""

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from sitedeploy.utils.shell import CommandResult


@pytest.fixture
def mock_run() -> Iterator[MagicMock]:
    """Patch interactive command execution; every command exits 0."""
    with patch("sitedeploy.core.runner.run_interactive", return_value=0) as mock:
        yield mock


@pytest.fixture
def mock_grep() -> Iterator[MagicMock]:
    """Patch captured command execution; searches find nothing."""
    with patch("sitedeploy.core.runner.run_command") as mock:
        mock.return_value = CommandResult(stdout="", stderr="", returncode=1)
        yield mock


@pytest.fixture(autouse=True)
def tools_on_path() -> Iterator[MagicMock]:
    """Pretend every external tool is installed."""
    with patch("sitedeploy.core.runner.command_exists", return_value=True) as mock:
        yield mock


@pytest.fixture
def site(project_dir: Path, package_json: str) -> Path:
    """Project with a package manifest and a Netlify marker."""
    (project_dir / "package.json").write_text(package_json)
    (project_dir / "netlify.toml").write_text("[build]\n")
    return project_dir
