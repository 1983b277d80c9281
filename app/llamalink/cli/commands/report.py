"""Report command implementation.

Shows what a link run would do without touching the filesystem.
"""

from typing import Annotated

import typer

from llamalink.cli.context import (
    build_settings,
    enumeration_failed,
    get_source,
    load_preferences,
    parse_size_range,
    print_model_paths,
)
from llamalink.cli.display import create_results_table
from llamalink.linking.report import build_report
from llamalink.models.model import filter_by_size
from llamalink.sources.base import EnumerationError
from llamalink.utils.formatting import console, print_info, print_success, print_warning

app = typer.Typer(
    help="Report the state of the LM Studio tree.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def report_state(
    ctx: typer.Context,
    min_size: Annotated[
        str | None,
        typer.Option("--min-size", help="Include only models of at least this size (GB or MB)."),
    ] = None,
    max_size: Annotated[
        str | None,
        typer.Option("--max-size", help="Include only models of at most this size (GB or MB)."),
    ] = None,
) -> None:
    """Compare the LM Studio tree with Ollama's models.

    Lists the decision a link run would take for every model, model
    files in the tree that are not links, and links that cleanup would
    remove. Nothing is modified.
    """
    if ctx.invoked_subcommand is not None:
        return

    config = load_preferences()
    settings = build_settings(ctx, config)
    min_bytes, max_bytes = parse_size_range(min_size, max_size)
    source = get_source(config)

    print_model_paths(settings)

    try:
        models = filter_by_size(source.list_models(), min_bytes, max_bytes)
    except EnumerationError as e:
        raise enumeration_failed(e) from e

    state = build_report(settings, source, models)

    if state.results:
        console.print(create_results_table(list(state.results), dry_run=True))
    else:
        print_info("No Ollama models found.")

    for path in state.unlinked_files:
        print_warning(f"Model file is not a link: {path}")
    for path in state.broken_links:
        print_warning(f"Broken link: {path}")

    pending = len(state.pending)
    if pending or state.broken_links:
        print_info(
            f"\n{pending} model(s) pending, {len(state.broken_links)} broken link(s). "
            "Run 'llamalink link' to reconcile."
        )
    else:
        print_success("LM Studio is in sync with Ollama.")
