"""Unit tests for the init command."""

import tomllib
from pathlib import Path

from sitedeploy.cli.main import app
from sitedeploy.core.config import DEFAULT_CLEANUP_PATTERNS
from typer.testing import CliRunner

runner = CliRunner()


class TestInitCommand:
    """Tests for sitedeploy init."""

    def test_writes_defaults(self, project_dir: Path) -> None:
        """init writes sitedeploy.toml with the default settings."""
        result = runner.invoke(app, ["-C", str(project_dir), "init"])

        assert result.exit_code == 0
        with open(project_dir / "sitedeploy.toml", "rb") as f:
            data = tomllib.load(f)
        assert data["cleanup"]["patterns"] == list(DEFAULT_CLEANUP_PATTERNS)
        assert data["optimize"]["image_tool"] == "imagemin"

    def test_refuses_to_overwrite(self, project_dir: Path) -> None:
        """An existing config is kept unless --force is given."""
        config_path = project_dir / "sitedeploy.toml"
        config_path.write_text('[build]\nmanifest = "site.json"\n')

        result = runner.invoke(app, ["-C", str(project_dir), "init"])

        assert result.exit_code == 1
        assert "already exists" in result.output
        assert "site.json" in config_path.read_text()

    def test_force_overwrites(self, project_dir: Path) -> None:
        """--force replaces an existing config."""
        config_path = project_dir / "sitedeploy.toml"
        config_path.write_text('[build]\nmanifest = "site.json"\n')

        result = runner.invoke(app, ["-C", str(project_dir), "init", "--force"])

        assert result.exit_code == 0
        assert "package.json" in config_path.read_text()

    def test_missing_directory(self, tmp_path: Path) -> None:
        """init refuses to create the project directory."""
        result = runner.invoke(app, ["-C", str(tmp_path / "missing"), "init"])

        assert result.exit_code == 1
        assert not (tmp_path / "missing").exists()
