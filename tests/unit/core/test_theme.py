"""Unit tests for theme loading."""

from pathlib import Path

import pytest
from pkgsets.core.theme import ThemeColors, get_rich_theme, load_theme


class TestThemeColors:
    """Tests for ThemeColors validation."""

    def test_expands_short_hex(self) -> None:
        """#RGB colors are accepted and stored as #rrggbb."""
        assert ThemeColors(info="#ABC").info == "#aabbcc"

    @pytest.mark.parametrize("value", ["red", "#12", "#gggggg", 42])
    def test_rejects_invalid_colors(self, value: object) -> None:
        """Non-hex values are rejected."""
        with pytest.raises(ValueError):
            ThemeColors(info=value)


class TestLoadTheme:
    """Tests for load_theme function."""

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        """Defaults are used without a theme file."""
        assert load_theme(tmp_path / "theme.toml") == ThemeColors()

    def test_user_override(self, tmp_path: Path) -> None:
        """Colors from the user file override defaults."""
        path = tmp_path / "theme.toml"
        path.write_text('[colors]\ninstalled = "#000000"\n')

        colors = load_theme(path)

        assert colors.installed == "#000000"
        assert colors.success == ThemeColors().success

    def test_invalid_override_falls_back(self, tmp_path: Path) -> None:
        """Invalid colors fall back to defaults."""
        path = tmp_path / "theme.toml"
        path.write_text('[colors]\ninstalled = "green"\n')

        assert load_theme(path) == ThemeColors()

    def test_rich_theme_has_status_styles(self) -> None:
        """The Rich theme defines the styles used by the CLI."""
        theme = get_rich_theme(ThemeColors())

        for style in ("installed", "uninstalled", "error", "bold_header", "set.name"):
            assert style in theme.styles
