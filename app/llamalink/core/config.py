"""User preferences and run settings.

Preferences are stored in ~/.config/llamalink/config.toml and describe
how the user normally runs llamalink (store locations, preset syncing,
cleanup behaviour). A run itself only ever sees an explicit
:class:`LinkSettings` value built from those preferences and the
command-line flags.
"""

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
import tomllib
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from llamalink.core.paths import (
    get_config_path,
    get_default_lmstudio_dir,
    get_default_ollama_dir,
)

logger = logging.getLogger(__name__)

# Extension LM Studio scans for, applied to every destination link
MODEL_EXTENSION = ".gguf"

# Marker appended to every per-model destination directory
DIR_SUFFIX = "-GGUF"


class LlamaLinkConfig(BaseModel):
    """Persisted llamalink preferences.

    Attributes:
        ollama_dir: Ollama models directory (None = default location).
        lmstudio_dir: LM Studio models directory (None = default location).
        skip_config_presets: Do not touch LM Studio's preset map.
        overwrite_config_presets: Rewrite preset files that already exist.
        cleanup: Run the cleanup walker at the end of each link run.
        command_timeout: Seconds to wait for each ollama invocation.
        last_sync_time: When the last non-dry-run link run finished.
    """

    model_config = ConfigDict(extra="forbid")

    ollama_dir: Annotated[
        Path | None,
        Field(description="Ollama models directory"),
    ] = None
    lmstudio_dir: Annotated[
        Path | None,
        Field(description="LM Studio models directory"),
    ] = None
    skip_config_presets: bool = False
    overwrite_config_presets: bool = False
    cleanup: bool = True
    command_timeout: Annotated[
        int,
        Field(ge=1, le=3600, description="Timeout in seconds (1-3600)"),
    ] = 60
    last_sync_time: datetime | None = None

    @property
    def effective_ollama_dir(self) -> Path:
        """Configured Ollama directory, or the default one."""
        return (self.ollama_dir or get_default_ollama_dir()).expanduser()

    @property
    def effective_lmstudio_dir(self) -> Path:
        """Configured LM Studio directory, or the default one."""
        return (self.lmstudio_dir or get_default_lmstudio_dir()).expanduser()


class ConfigError(Exception):
    """Base exception for preference file errors."""


class ConfigParseError(ConfigError):
    """Raised when the preference file cannot be parsed."""


@dataclass(frozen=True, slots=True)
class LinkSettings:
    """Explicit settings shared by every reconciliation component.

    Attributes:
        source_root: Root of the Ollama store (read-only ground truth).
        dest_root: Root of the LM Studio models tree.
        extension: File extension every destination link must carry.
        dir_suffix: Marker appended to per-model destination directories.
    """

    source_root: Path
    dest_root: Path
    extension: str = MODEL_EXTENSION
    dir_suffix: str = DIR_SUFFIX

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if not self.extension.startswith("."):
            msg = f"Extension must start with '.', got {self.extension!r}"
            raise ValueError(msg)

    @classmethod
    def from_config(
        cls,
        config: LlamaLinkConfig,
        *,
        ollama_dir: Path | None = None,
        lmstudio_dir: Path | None = None,
    ) -> "LinkSettings":
        """Build settings from preferences, letting CLI flags win.

        Args:
            config: Loaded preferences.
            ollama_dir: Ollama directory override from the command line.
            lmstudio_dir: LM Studio directory override from the command line.

        Returns:
            LinkSettings with absolute store paths.
        """
        source = ollama_dir.expanduser() if ollama_dir else config.effective_ollama_dir
        dest = lmstudio_dir.expanduser() if lmstudio_dir else config.effective_lmstudio_dir
        return cls(source_root=source.absolute(), dest_root=dest.absolute())


def load_config(path: Path | None = None) -> LlamaLinkConfig:
    """Load preferences from a TOML file.

    A missing file is not an error: defaults are returned.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated LlamaLinkConfig object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config at %s, using defaults", config_path)
        return LlamaLinkConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return LlamaLinkConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def save_config(config: LlamaLinkConfig, path: Path | None = None) -> Path:
    """Save preferences to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The LlamaLinkConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    # TOML has no null, so unset values are left out
    data = config.model_dump(mode="json", exclude_none=True)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def update_config(key: str, value: str, path: Path | None = None) -> LlamaLinkConfig:
    """Set a single preference from its string form and save it.

    Values are validated by the config model, so "true"/"false" work for
    flags and plain paths for directories.

    Args:
        key: Preference name.
        value: New value as typed on the command line.
        path: Config file path. If None, uses the default config path.

    Returns:
        The saved LlamaLinkConfig.

    Raises:
        ConfigError: If the key is unknown or the value is invalid.
    """
    if key not in LlamaLinkConfig.model_fields:
        raise ConfigError(f"Unknown config key: {key}")

    config = load_config(path)
    data = config.model_dump()
    data[key] = value
    try:
        updated = LlamaLinkConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid value for {key}: {e}") from e

    save_config(updated, path)
    return updated
