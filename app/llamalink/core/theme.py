"""Colors for llamalink output.

The bundled ``data/theme.toml`` defines every color; a ``[colors]`` table
in ``~/.config/llamalink/theme.toml`` may override any of them. Each link
decision has its own style so the link, report and cleanup output read
the same way.
"""

import logging
import re
import tomllib
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from llamalink.core.paths import get_config_dir

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")


class ThemeColors(BaseModel):
    """Hex colors (#RGB or #RRGGBB) used by the console styles."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # One per link decision
    linked: str = "#c1ff62"
    skipped: str = "#7f8c8d"
    removed: str = "#f53263"
    repaired: str = "#0e8ac8"

    @field_validator("*")
    @classmethod
    def check_hex(cls, value: str) -> str:
        color = value.strip()
        if not _HEX_COLOR.fullmatch(color):
            msg = f"not a hex color: {value!r}"
            raise ValueError(msg)
        return color

    def styles(self) -> dict[str, str]:
        """Map Rich style names to style definitions."""
        styles = self.model_dump()
        styles["error"] = f"bold {self.error}"
        styles["bold_header"] = f"bold {self.header}"
        styles["dim"] = self.muted
        styles["model.name"] = f"bold {self.text}"
        styles["model.size"] = self.info
        return styles


def get_user_theme_path() -> Path:
    """Path of the optional user override file."""
    return get_config_dir() / "theme.toml"


def read_colors(path: Path) -> dict[str, str]:
    """Read the ``[colors]`` table of a theme file.

    A missing file gives an empty table. An unreadable or malformed one is
    logged and also gives an empty table, so a bad override never stops the
    CLI from starting.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return {}
    return {str(k): v for k, v in colors.items() if isinstance(v, str)}


def load_theme() -> ThemeColors:
    """Merge the bundled colors with the user's overrides.

    Falls back to the built-in defaults if the merged colors are invalid.
    """
    bundled = resources.files("llamalink.data").joinpath("theme.toml")
    colors = read_colors(Path(str(bundled)))
    colors.update(read_colors(get_user_theme_path()))

    try:
        return ThemeColors(**colors)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Return the Rich theme, loading it on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = Theme(load_theme().styles())
    return _cached_theme
