"""Config command implementation.

Shows and edits the persisted preferences.
"""

from typing import Annotated

import typer
from rich.table import Table

from llamalink.cli.context import load_preferences
from llamalink.core.config import ConfigError, LlamaLinkConfig, update_config
from llamalink.core.paths import get_config_path
from llamalink.utils.formatting import console, print_error, print_success

app = typer.Typer(
    help="Show and edit preferences.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show current preferences and the effective directories."""
    config = load_preferences()

    table = Table(
        title="Preferences",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Key", style="bold")
    table.add_column("Value")

    for key in LlamaLinkConfig.model_fields:
        value = getattr(config, key)
        table.add_row(key, "[muted]-[/muted]" if value is None else str(value))

    console.print(table)
    console.print(f"\n[bold]Ollama models directory:[/bold] {config.effective_ollama_dir}")
    console.print(f"[bold]LM Studio models directory:[/bold] {config.effective_lmstudio_dir}")


@app.command("set")
def set_value(
    key: Annotated[str, typer.Argument(help="Preference name, e.g. cleanup.")],
    value: Annotated[str, typer.Argument(help="New value.")],
) -> None:
    """Set a preference and save it."""
    try:
        update_config(key, value)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Set {key} = {value}")


@app.command()
def path() -> None:
    """Print the preferences file location."""
    typer.echo(str(get_config_path()))
