"""Unit tests for output colors."""

from pathlib import Path
from unittest.mock import patch

import llamalink.core.theme as theme_module
import pytest
from llamalink.cli.display import _DECISION_STYLES
from llamalink.core.theme import ThemeColors, get_theme, load_theme, read_colors
from pydantic import ValidationError


@pytest.fixture
def user_theme(tmp_path: Path):
    """Point the user override at a file under tmp_path."""
    path = tmp_path / "theme.toml"
    with patch("llamalink.core.theme.get_user_theme_path", return_value=path):
        yield path


class TestThemeColors:
    """Tests for ThemeColors."""

    @pytest.mark.parametrize("color", ["#c1ff62", "#ABC", " #0e8ac8 "])
    def test_accepts_hex(self, color: str) -> None:
        assert ThemeColors(linked=color).linked == color.strip()

    @pytest.mark.parametrize("color", ["c1ff62", "#c1ff6", "#zzzzzz", "green"])
    def test_rejects_non_hex(self, color: str) -> None:
        with pytest.raises(ValidationError, match="not a hex color"):
            ThemeColors(linked=color)

    def test_unknown_color_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ThemeColors(deduped="#ffffff")  # type: ignore[call-arg]

    def test_every_decision_has_a_style(self) -> None:
        styles = ThemeColors().styles()

        for _label, style in _DECISION_STYLES.values():
            assert style in styles

    def test_errors_are_bold(self) -> None:
        assert ThemeColors(error="#ff0000").styles()["error"] == "bold #ff0000"


class TestReadColors:
    """Tests for read_colors."""

    def test_reads_colors_table(self, tmp_path: Path) -> None:
        path = tmp_path / "theme.toml"
        path.write_text('[colors]\nskipped = "#123456"\nnote = 3\n')

        assert read_colors(path) == {"skipped": "#123456"}

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        assert read_colors(tmp_path / "absent.toml") == {}

    def test_malformed_file_is_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "theme.toml"
        path.write_text("[colors\n")

        assert read_colors(path) == {}

    def test_colors_must_be_a_table(self, tmp_path: Path) -> None:
        path = tmp_path / "theme.toml"
        path.write_text('colors = "#ffffff"\n')

        assert read_colors(path) == {}


class TestLoadTheme:
    """Tests for load_theme."""

    def test_bundled_colors_without_override(self, user_theme: Path) -> None:
        colors = load_theme()

        assert colors.repaired == "#0e8ac8"
        assert colors.removed == "#f53263"

    def test_user_overrides_single_color(self, user_theme: Path) -> None:
        user_theme.write_text('[colors]\nremoved = "#ff8800"\n')

        colors = load_theme()

        assert colors.removed == "#ff8800"
        assert colors.linked == "#c1ff62"

    def test_invalid_override_uses_defaults(self, user_theme: Path) -> None:
        user_theme.write_text('[colors]\nlinked = "lime"\n')

        assert load_theme() == ThemeColors()


class TestGetTheme:
    """Tests for get_theme."""

    def test_loaded_once(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(theme_module, "_cached_theme", None)

        first = get_theme()

        assert get_theme() is first
        assert "repaired" in first.styles
