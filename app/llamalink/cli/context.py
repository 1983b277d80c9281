"""Shared helpers for CLI commands.

Turns the global options stored on the Typer context and the user's
preferences into the explicit objects the engine needs.
"""

from pathlib import Path

import typer

from llamalink.core.config import ConfigError, LinkSettings, LlamaLinkConfig, load_config
from llamalink.models.model import parse_size_option
from llamalink.sources.base import EnumerationError
from llamalink.sources.ollama import OllamaSource
from llamalink.utils.formatting import console, print_error


def is_quiet(ctx: typer.Context) -> bool:
    """Check the global --quiet flag."""
    obj = ctx.find_root().obj or {}
    return bool(obj.get("quiet", False))


def load_preferences() -> LlamaLinkConfig:
    """Load preferences, exiting with an error if the file is broken."""
    try:
        return load_config()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def build_settings(ctx: typer.Context, config: LlamaLinkConfig) -> LinkSettings:
    """Build run settings from preferences and global directory flags.

    Args:
        ctx: Typer context carrying the global options.
        config: Loaded preferences.

    Returns:
        LinkSettings for this invocation.
    """
    obj = ctx.find_root().obj or {}
    ollama_dir: Path | None = obj.get("ollama_dir")
    lmstudio_dir: Path | None = obj.get("lmstudio_dir")
    return LinkSettings.from_config(config, ollama_dir=ollama_dir, lmstudio_dir=lmstudio_dir)


def get_source(config: LlamaLinkConfig) -> OllamaSource:
    """Create the ollama source using the configured timeout."""
    return OllamaSource(timeout=float(config.command_timeout))


def parse_size_range(
    min_size: str | None,
    max_size: str | None,
) -> tuple[int | None, int | None]:
    """Parse --min-size/--max-size into byte bounds.

    Raises:
        typer.BadParameter: If a value is not a valid size or the range is empty.
    """
    try:
        min_bytes = parse_size_option(min_size) if min_size else None
        max_bytes = parse_size_option(max_size) if max_size else None
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e

    if min_bytes and max_bytes and min_bytes > max_bytes:
        raise typer.BadParameter("--min-size is larger than --max-size")
    return min_bytes, max_bytes


def enumeration_failed(error: EnumerationError) -> typer.Exit:
    """Report a fatal enumeration error and return the exit to raise."""
    print_error(f"Error getting model list: {error}")
    return typer.Exit(code=1)


def print_model_paths(settings: LinkSettings) -> None:
    """Print the two store locations in use."""
    console.print(f"[bold]Ollama models directory:[/bold] {settings.source_root}")
    console.print(f"[bold]LM Studio models directory:[/bold] {settings.dest_root}\n")
