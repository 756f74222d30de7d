"""Unit tests for the root CLI application."""

from pathlib import Path

from sitedeploy import __version__
from sitedeploy.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestMain:
    """Tests for global options."""

    def test_version(self) -> None:
        """--version prints the version and exits 0."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"sitedeploy version {__version__}" in result.output

    def test_help_lists_commands(self) -> None:
        """--help lists every command."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("init", "deploy", "clean", "scan", "optimize", "build", "publish"):
            assert command in result.output

    def test_missing_project_directory(self, tmp_path: Path) -> None:
        """A project directory that does not exist exits 1."""
        result = runner.invoke(app, ["-C", str(tmp_path / "nope"), "build"])

        assert result.exit_code == 1
        assert "Project directory not found" in result.output

    def test_invalid_config(self, project_dir: Path) -> None:
        """An unreadable sitedeploy.toml exits 1 before any stage runs."""
        (project_dir / "sitedeploy.toml").write_text("[cleanup\n")

        result = runner.invoke(app, ["-C", str(project_dir), "deploy"])

        assert result.exit_code == 1
        assert "Invalid TOML syntax" in result.output
