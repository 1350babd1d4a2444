"""Terminal colors for pkgsets output.

Defaults can be overridden per color in ~/.config/pkgsets/theme.toml:

    [colors]
    installed = "#03b971"
    uninstalled = "#888"
"""

import logging
import tomllib
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from pkgsets.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)


class ThemeColors(BaseModel):
    """Hex colors (#RGB or #RRGGBB) used by the CLI."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # package changes
    added: str = "#c1ff62"
    removed: str = "#f53263"

    # set status
    installed: str = "#69B9A1"
    uninstalled: str = "#226666"

    @field_validator("*", mode="before")
    @classmethod
    def _hex_color(cls, value: object) -> str:
        if not isinstance(value, str):
            raise ValueError("color must be a string")
        color = value.strip()
        digits = color.removeprefix("#")
        if color == digits or len(digits) not in (3, 6):
            raise ValueError(f"expected #RGB or #RRGGBB, got {value!r}")
        try:
            int(digits, 16)
        except ValueError:
            raise ValueError(f"not a hex color: {value!r}") from None
        # Rich only parses #RRGGBB
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        return f"#{digits.lower()}"


def _read_overrides(path: Path) -> dict[str, object]:
    """Return the [colors] table of a theme file, or {} if unusable."""
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: [colors] must be a table", path)
        return {}
    return colors


def load_theme(path: Path | None = None) -> ThemeColors:
    """Load colors, applying the user's overrides when they are valid.

    Args:
        path: Theme file. Defaults to ~/.config/pkgsets/theme.toml.

    Returns:
        The overridden colors, or the defaults if the file is missing or
        any override is invalid.
    """
    theme_path = path or get_user_theme_path()
    overrides = _read_overrides(theme_path)
    if not overrides:
        return ThemeColors()
    try:
        return ThemeColors.model_validate(overrides)
    except ValidationError as e:
        logger.warning("Invalid colors in %s, using defaults: %s", theme_path, e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme with the style names used by the CLI."""
    c = colors or load_theme()
    styles = c.model_dump()
    styles.update(
        {
            "error": f"bold {c.error}",
            "installed": f"bold {c.installed}",
            "bold_header": f"bold {c.header}",
            "set.name": f"bold {c.text}",
            "package.name": c.text,
        }
    )
    return Theme(styles)


@lru_cache(maxsize=1)
def get_theme() -> Theme:
    """Rich theme for the shared consoles, loaded once per process."""
    return get_rich_theme()
