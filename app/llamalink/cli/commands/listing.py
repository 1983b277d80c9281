"""List command implementation.

Shows the models Ollama reports, optionally filtered by size.
"""

import json
from enum import Enum
from typing import Annotated

import typer

from llamalink.cli.context import enumeration_failed, get_source, load_preferences, parse_size_range
from llamalink.models.model import filter_by_size
from llamalink.sources.base import EnumerationError
from llamalink.utils.formatting import console, create_model_table, print_info

app = typer.Typer(
    help="List the models available in Ollama.",
    invoke_without_command=True,
)


class OutputFormat(str, Enum):
    """Output format options for list."""

    TABLE = "table"
    JSON = "json"


@app.callback(invoke_without_command=True)
def list_models(
    ctx: typer.Context,
    min_size: Annotated[
        str | None,
        typer.Option("--min-size", help="Include only models of at least this size (GB or MB)."),
    ] = None,
    max_size: Annotated[
        str | None,
        typer.Option("--max-size", help="Include only models of at most this size (GB or MB)."),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """List Ollama models with their sizes."""
    if ctx.invoked_subcommand is not None:
        return

    config = load_preferences()
    min_bytes, max_bytes = parse_size_range(min_size, max_size)

    try:
        models = filter_by_size(get_source(config).list_models(), min_bytes, max_bytes)
    except EnumerationError as e:
        raise enumeration_failed(e) from e

    if output_format == OutputFormat.JSON:
        data = [{"name": m.name, "size_bytes": m.size_bytes} for m in models]
        console.print_json(json.dumps(data))
        return

    if not models:
        print_info("No Ollama models found.")
        return

    table = create_model_table()
    for i, model in enumerate(models, start=1):
        table.add_row(str(i), model.name, model.size_human)
    console.print(table)
