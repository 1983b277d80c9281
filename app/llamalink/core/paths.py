"""XDG-compliant path management for llamalink.

This module provides standardized paths for llamalink's own configuration
and the default locations of the two model stores it reconciles.

Defaults:
- Config: ~/.config/llamalink/
- Ollama models: ~/.ollama/models (or $OLLAMA_MODELS)
- LM Studio models: ~/.cache/lm-studio/models
- LM Studio config presets: ~/.cache/lm-studio/config-presets
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "llamalink"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/llamalink/ (or XDG_CONFIG_HOME/llamalink/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the preferences file path.

    Returns:
        Path to ~/.config/llamalink/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_default_ollama_dir() -> Path:
    """Get the default Ollama models directory.

    Ollama honours ``OLLAMA_MODELS`` for relocating its store, so the
    same variable is respected here.

    Returns:
        Path to $OLLAMA_MODELS or ~/.ollama/models.
    """
    override = os.environ.get("OLLAMA_MODELS")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".ollama" / "models"


def get_default_lmstudio_dir() -> Path:
    """Get the default LM Studio models directory.

    Returns:
        Path to ~/.cache/lm-studio/models.
    """
    return Path.home() / ".cache" / "lm-studio" / "models"


def get_lmstudio_presets_dir() -> Path:
    """Get the LM Studio config presets directory.

    Returns:
        Path to ~/.cache/lm-studio/config-presets.
    """
    return Path.home() / ".cache" / "lm-studio" / "config-presets"


def _ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Returns:
        Path to the configuration directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_config_dir(), "config")


def ensure_lmstudio_dir(path: Path) -> Path:
    """Create the LM Studio models directory if it doesn't exist.

    Args:
        path: LM Studio models directory in use.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(path, "LM Studio models")
