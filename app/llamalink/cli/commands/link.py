"""Link command implementation.

Links Ollama models into the LM Studio models directory.
"""

from datetime import UTC, datetime
from typing import Annotated

import typer

from llamalink.cli.context import (
    build_settings,
    enumeration_failed,
    get_source,
    is_quiet,
    load_preferences,
    parse_size_range,
    print_model_paths,
)
from llamalink.cli.display import (
    create_cleanup_table,
    format_result_line,
    print_cleanup_summary,
    print_results_summary,
)
from llamalink.core.config import ConfigError, save_config
from llamalink.core.paths import ensure_lmstudio_dir, get_lmstudio_presets_dir
from llamalink.linking.reconcile import Reconciler
from llamalink.models.decision import LinkResult
from llamalink.models.model import Model
from llamalink.presets.sync import PresetError, PresetSync
from llamalink.sources.base import EnumerationError
from llamalink.utils.formatting import (
    console,
    create_model_table,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Link Ollama models into LM Studio.",
    invoke_without_command=True,
)


def parse_selection(text: str, count: int) -> list[int]:
    """Parse a comma-separated list of 1-based model numbers.

    Numbers out of range and entries that are not numbers are ignored;
    duplicates are kept once, in the order first given. Empty input
    selects every model.

    Args:
        text: User input, e.g. "1, 3,4".
        count: Number of models offered.

    Returns:
        Zero-based indices of the selected models.
    """
    if not text.strip():
        return list(range(count))

    selected: list[int] = []
    for part in text.split(","):
        try:
            number = int(part.strip())
        except ValueError:
            continue
        if 1 <= number <= count and number - 1 not in selected:
            selected.append(number - 1)
    return selected


def _select_models(
    models: list[Model],
    *,
    link_all: bool,
    names: list[str] | None,
    quiet: bool,
) -> list[Model]:
    """Pick the models to link from flags or an interactive prompt."""
    if names:
        by_name = {m.name: m for m in models}
        selected: list[Model] = []
        for name in names:
            if name in by_name:
                selected.append(by_name[name])
            else:
                print_warning(f"Model not found in Ollama: {name}")
        return selected

    if link_all or quiet:
        return models

    table = create_model_table("Select the models to link to LM Studio")
    for i, model in enumerate(models, start=1):
        table.add_row(str(i), model.name, model.size_human)
    console.print(table)

    answer = typer.prompt(
        "\nEnter the model numbers (comma-separated), or press Enter to link all",
        default="",
        show_default=False,
    )
    return [models[i] for i in parse_selection(answer, len(models))]


@app.callback(invoke_without_command=True)
def link_models(
    ctx: typer.Context,
    link_all: Annotated[
        bool,
        typer.Option("--all", "-a", help="Link all available models without prompting."),
    ] = False,
    names: Annotated[
        list[str] | None,
        typer.Option("--model", "-m", help="Link only this model (repeatable)."),
    ] = None,
    min_size: Annotated[
        str | None,
        typer.Option("--min-size", help="Include only models of at least this size (GB or MB)."),
    ] = None,
    max_size: Annotated[
        str | None,
        typer.Option("--max-size", help="Include only models of at most this size (GB or MB)."),
    ] = None,
    no_cleanup: Annotated[
        bool,
        typer.Option("--no-cleanup", help="Don't clean up broken links and empty directories."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Show what would be done without making changes."),
    ] = False,
    skip_config_presets: Annotated[
        bool,
        typer.Option("--skip-config-presets", help="Skip syncing LM Studio config presets."),
    ] = False,
    overwrite_config_presets: Annotated[
        bool,
        typer.Option("--overwrite-config-presets", help="Overwrite existing config presets."),
    ] = False,
) -> None:
    """Link Ollama models into the LM Studio models directory.

    Each selected model gets a symbolic link at
    <lm-dir>/<author>/<model>-GGUF/<model>.gguf pointing at its Ollama
    blob. Models already linked are skipped; stale links are repaired;
    a blob already linked elsewhere is not linked twice.

    Examples:
        llamalink link --all              # Link everything
        llamalink link -m llama3:8b       # Link one model
        llamalink link --min-size 4GB     # Only models of 4 GB or more
        llamalink link --dry-run          # Preview
    """
    if ctx.invoked_subcommand is not None:
        return

    quiet = is_quiet(ctx)
    config = load_preferences()
    settings = build_settings(ctx, config)
    min_bytes, max_bytes = parse_size_range(min_size, max_size)
    cleanup = config.cleanup and not no_cleanup

    if not quiet:
        print_model_paths(settings)

    reconciler = Reconciler(settings, get_source(config), dry_run=dry_run, cleanup=cleanup)

    try:
        models = reconciler.list_models(min_bytes, max_bytes)
    except EnumerationError as e:
        raise enumeration_failed(e) from e

    if not models:
        if not quiet:
            print_warning("No Ollama models found.")
        return

    selected = _select_models(models, link_all=link_all, names=names, quiet=quiet)
    if not selected:
        if not quiet:
            print_info("No models selected.")
        return

    if not dry_run:
        try:
            ensure_lmstudio_dir(settings.dest_root)
        except RuntimeError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e

    def show(result: LinkResult) -> None:
        if not quiet:
            console.print(format_result_line(result))

    try:
        report = reconciler.run(selected, on_result=show)
    except KeyboardInterrupt:
        print_warning("Interrupted.")
        raise typer.Exit(code=130) from None

    if not quiet:
        if report.cleanup:
            console.print(create_cleanup_table(report.cleanup))
            print_cleanup_summary(report.cleanup)
        print_results_summary(report.results)

    if dry_run:
        if not quiet:
            print_info("\nDry-run mode: No changes were made.")
        return

    if not (config.skip_config_presets or skip_config_presets):
        overwrite = config.overwrite_config_presets or overwrite_config_presets
        sync = PresetSync(get_lmstudio_presets_dir(), overwrite=overwrite)
        try:
            assignments = sync.sync(m.name for m in models)
        except PresetError as e:
            print_warning(f"Config presets not synced: {e}")
        else:
            if assignments and not quiet:
                print_success(f"Config presets synced for {len(assignments)} model(s).")

    try:
        save_config(config.model_copy(update={"last_sync_time": datetime.now(UTC)}))
    except ConfigError as e:
        print_warning(f"Could not record sync time: {e}")
