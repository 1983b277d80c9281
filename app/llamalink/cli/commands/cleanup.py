"""Cleanup command implementation.

Removes broken links and empty directories from the LM Studio tree.
"""

from typing import Annotated

import typer

from llamalink.cli.context import build_settings, is_quiet, load_preferences
from llamalink.cli.display import create_cleanup_table, print_cleanup_summary
from llamalink.linking.cleanup import CleanupWalker
from llamalink.utils.formatting import console, print_info

app = typer.Typer(
    help="Clean up the LM Studio models directory.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def cleanup_tree(
    ctx: typer.Context,
    remove_all: Annotated[
        bool,
        typer.Option("--all", help="Remove every link, valid or not."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Show what would be removed without removing."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt for --all."),
    ] = False,
) -> None:
    """Remove broken links and empty directories.

    With --all, every link is removed so the next link run starts from
    an empty tree. Regular files are never touched.
    """
    if ctx.invoked_subcommand is not None:
        return

    quiet = is_quiet(ctx)
    settings = build_settings(ctx, load_preferences())
    walker = CleanupWalker(settings, dry_run=dry_run)

    if remove_all:
        if not dry_run and not yes:
            typer.confirm(
                f"Remove every link under {settings.dest_root}?",
                abort=True,
            )
        results = walker.reset()
    else:
        results = walker.cleanup()

    if quiet:
        return

    if results:
        console.print(create_cleanup_table(results))
    print_cleanup_summary(results)
    if dry_run:
        print_info("\nDry-run mode: No changes were made.")
