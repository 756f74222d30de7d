"""Unit tests for the unused-asset scanner.

Tests grep pattern construction, result interpretation and the
read-only, deterministic nature of the scan.
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from sitedeploy.core.config import PipelineConfig, ScanConfig
from sitedeploy.models.command import CommandSpec
from sitedeploy.models.stage import StageName
from sitedeploy.stages.scanner import (
    UnusedAsset,
    UnusedAssetScanner,
    escape_ere,
    reference_pattern,
)
from sitedeploy.utils.shell import CommandResult

NO_MATCH = CommandResult(stdout="", stderr="", returncode=1)


def _found(path: str = "./src/App.jsx") -> CommandResult:
    """Create a grep result with one matching file."""
    return CommandResult(stdout=f"{path}\n", stderr="", returncode=0)


def _snapshot(root: Path) -> dict[str, bytes]:
    """Map every file under root to its content."""
    return {str(p.relative_to(root)): p.read_bytes() for p in root.rglob("*") if p.is_file()}


@pytest.fixture
def site(project_dir: Path) -> Path:
    """Project with components and images."""
    components = project_dir / "src" / "components"
    components.mkdir(parents=True)
    (components / "Header.jsx").write_text("export default function Header() {}")
    (components / "Footer.jsx").write_text("export default function Footer() {}")
    (components / "legacy").mkdir()

    images = project_dir / "public" / "images"
    images.mkdir(parents=True)
    (images / "logo.png").write_bytes(b"\x89PNG")

    (project_dir / "src" / "App.jsx").write_text("import Header from './components/Header'\n")
    return project_dir


def _search_name(spec: CommandSpec) -> str:
    """Extract the searched base name from a grep CommandSpec."""
    pattern = spec.args[4]
    return pattern[len("from ['\"].*") : -len("['\"]")]


class TestPatterns:
    """Tests for grep pattern helpers."""

    def test_escape_ere_plain(self) -> None:
        """Plain names are unchanged."""
        assert escape_ere("Header") == "Header"

    def test_escape_ere_special(self) -> None:
        """Regex metacharacters are backslash-escaped."""
        assert escape_ere("icon.min") == "icon\\.min"
        assert escape_ere("a(b)+c") == "a\\(b\\)\\+c"

    def test_escape_ere_keeps_dashes(self) -> None:
        """Dashes and underscores need no escaping."""
        assert escape_ere("hero-banner_2x") == "hero-banner_2x"

    def test_reference_pattern(self) -> None:
        """The pattern matches import-from statements with either quote."""
        assert reference_pattern("Header") == "from ['\"].*Header['\"]"


class TestScan:
    """Tests for UnusedAssetScanner.scan."""

    def test_reports_files_without_references(self, site: Path, runner: MagicMock) -> None:
        """Files whose search finds nothing are reported."""
        runner.capture.side_effect = lambda spec: (
            _found() if _search_name(spec) == "Header" else NO_MATCH
        )

        assets = list(UnusedAssetScanner(site, PipelineConfig(), runner).scan())

        assert assets == [
            UnusedAsset(path="public/images/logo.png", name="logo"),
            UnusedAsset(path="src/components/Footer.jsx", name="Footer"),
        ]

    def test_skips_subdirectories(self, site: Path, runner: MagicMock) -> None:
        """Only regular files directly inside watched directories are checked."""
        runner.capture.return_value = NO_MATCH

        assets = list(UnusedAssetScanner(site, PipelineConfig(), runner).scan())

        assert all("legacy" not in a.path for a in assets)

    def test_empty_output_with_success_counts_as_unused(
        self, site: Path, runner: MagicMock
    ) -> None:
        """A successful search with no output means no reference."""
        runner.capture.return_value = CommandResult(stdout="", stderr="", returncode=0)

        assets = list(UnusedAssetScanner(site, PipelineConfig(), runner).scan())

        assert len(assets) == 3

    def test_search_error_is_not_reported(self, site: Path, runner: MagicMock) -> None:
        """A genuine grep error is not mistaken for 'no matches'."""
        runner.capture.return_value = CommandResult(
            stdout="", stderr="grep: invalid option", returncode=2
        )

        assets = list(UnusedAssetScanner(site, PipelineConfig(), runner).scan())

        assert assets == []

    def test_search_that_cannot_start(self, site: Path, runner: MagicMock) -> None:
        """An OSError from the search is logged, not reported as unused."""
        runner.capture.side_effect = FileNotFoundError("grep")

        assets = list(UnusedAssetScanner(site, PipelineConfig(), runner).scan())

        assert assets == []

    def test_missing_directories_are_skipped(self, project_dir: Path, runner: MagicMock) -> None:
        """Absent watched directories produce no searches."""
        assets = list(UnusedAssetScanner(project_dir, PipelineConfig(), runner).scan())

        assert assets == []
        runner.capture.assert_not_called()

    def test_search_command(self, site: Path, runner: MagicMock) -> None:
        """grep runs recursively in the project with include and exclude filters."""
        config = PipelineConfig(
            scan=ScanConfig(directories=["src/components"], extensions=["js", ".tsx"])
        )
        runner.capture.return_value = NO_MATCH

        list(UnusedAssetScanner(site, config, runner).scan())

        spec = runner.capture.call_args_list[0].args[0]
        assert spec.args[:4] == ("grep", "-r", "-l", "-E")
        assert spec.args[4] == reference_pattern("Footer")
        assert "--include=*.js" in spec.args
        assert "--include=*.tsx" in spec.args
        assert "--exclude-dir=node_modules" in spec.args
        assert spec.args[-1] == "."
        assert spec.cwd == site

    def test_stripped_name_uses_last_extension(self, project_dir: Path, runner: MagicMock) -> None:
        """Only the final extension is stripped from the base name."""
        styles = project_dir / "src" / "styles"
        styles.mkdir(parents=True)
        (styles / "theme.module.css").write_text(".a{}")
        runner.capture.return_value = NO_MATCH

        assets = list(UnusedAssetScanner(project_dir, PipelineConfig(), runner).scan())

        assert assets == [UnusedAsset(path="src/styles/theme.module.css", name="theme.module")]

    def test_scan_is_read_only_and_repeatable(self, site: Path, runner: MagicMock) -> None:
        """Two scans of an unchanged tree agree and modify nothing."""
        runner.capture.return_value = NO_MATCH
        before = _snapshot(site)

        scanner = UnusedAssetScanner(site, PipelineConfig(), runner)
        first = list(scanner.scan())
        second = list(scanner.scan())

        assert first == second
        assert _snapshot(site) == before


class TestRun:
    """Tests for UnusedAssetScanner.run."""

    def test_run_reports_details(self, site: Path, runner: MagicMock) -> None:
        """run() lists every unused path and always succeeds."""
        runner.capture.return_value = NO_MATCH

        result = UnusedAssetScanner(site, PipelineConfig(), runner).run()

        assert result.stage == StageName.SCAN
        assert result.success is True
        assert "public/images/logo.png" in result.details
        assert result.halts is False

    def test_run_without_grep(self, site: Path, runner: MagicMock) -> None:
        """Missing grep is an advisory failure."""
        runner.available.return_value = False

        result = UnusedAssetScanner(site, PipelineConfig(), runner).run()

        assert result.success is False
        assert result.halts is False
        runner.capture.assert_not_called()
