"""Unit tests for console formatting helpers."""

import pytest
from sitedeploy.utils.formatting import console, print_error, print_warning, styled


class TestStyled:
    """Tests for the styled helper."""

    @pytest.mark.parametrize("tag", ["info", "warning", "error", "success", "muted"])
    def test_wraps_text_in_tag(self, tag: str) -> None:
        """Text is wrapped in opening and closing tags."""
        assert styled(tag, "hello") == f"[{tag}]hello[/{tag}]"  # type: ignore[arg-type]

    def test_escapes_markup(self) -> None:
        """Square brackets in text are escaped."""
        assert styled("info", "pages/[slug].jsx") == "[info]pages/\\[slug].jsx[/info]"

    def test_renders_plain_text(self) -> None:
        """Styled output renders as the unescaped text."""
        with console.capture() as capture:
            console.print(styled("success", "Deployed [ok]"))

        assert capture.get().strip() == "Deployed [ok]"


class TestStderrHelpers:
    """Tests for warning and error printers."""

    def test_warning_prefix(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Warnings go to stderr with a prefix."""
        print_warning("no marker")

        assert "Warning: no marker" in capsys.readouterr().err

    def test_error_prefix(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Errors go to stderr with a prefix."""
        print_error("Build failed")

        assert "Error: Build failed" in capsys.readouterr().err
