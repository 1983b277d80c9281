"""Preset command implementation.

Inspects and syncs LM Studio config presets for Ollama models.
"""

import json
from typing import Annotated

import typer

from llamalink.cli.context import enumeration_failed, get_source, load_preferences
from llamalink.core.paths import get_lmstudio_presets_dir
from llamalink.presets.sync import PresetError, PresetSync
from llamalink.sources.base import EnumerationError
from llamalink.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Manage LM Studio config presets.",
    no_args_is_help=True,
)


@app.command()
def show(
    model: Annotated[str, typer.Argument(help="Model name, e.g. codellama:7b.")],
) -> None:
    """Show the config preset LM Studio uses for a model."""
    try:
        preset = PresetSync(get_lmstudio_presets_dir()).show(model)
    except PresetError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if preset is None:
        print_info(f"No config preset found for {model}.")
        return

    console.print_json(json.dumps(preset))


@app.command()
def sync(
    overwrite: Annotated[
        bool,
        typer.Option("--overwrite", help="Overwrite existing preset files."),
    ] = False,
) -> None:
    """Map every Ollama model from a known family to its preset."""
    config = load_preferences()

    try:
        models = get_source(config).list_models()
    except EnumerationError as e:
        raise enumeration_failed(e) from e

    presets = PresetSync(
        get_lmstudio_presets_dir(),
        overwrite=overwrite or config.overwrite_config_presets,
    )
    try:
        assignments = presets.sync(m.name for m in models)
    except PresetError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    for a in assignments:
        note = " [muted](created)[/muted]" if a.created else ""
        console.print(f"[model.name]{a.model}[/] -> {a.preset_file}{note}")
    print_success(f"Config presets synced for {len(assignments)} model(s).")
