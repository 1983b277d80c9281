"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from llamalink import __version__
from llamalink.cli.commands import cleanup, config, link, listing, preset, report
from llamalink.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="llamalink",
    help="Link Ollama models into LM Studio.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"llamalink version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records to stderr through Rich.

    Args:
        verbose: Show debug records; otherwise only warnings and errors.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)

    handler = RichHandler(console=err_console, show_path=False, show_time=verbose)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
    ollama_dir: Annotated[
        Path | None,
        typer.Option(
            "--ollama-dir",
            help="Ollama models directory (overrides preferences).",
        ),
    ] = None,
    lmstudio_dir: Annotated[
        Path | None,
        typer.Option(
            "--lm-dir",
            help="LM Studio models directory (overrides preferences).",
        ),
    ] = None,
) -> None:
    """llamalink - Link Ollama models into LM Studio.

    Keeps a tree of symbolic links in the LM Studio models directory in
    step with the models Ollama has downloaded, without copying any data.
    """
    configure_logging(verbose)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["ollama_dir"] = ollama_dir
    ctx.obj["lmstudio_dir"] = lmstudio_dir


# Register commands
app.add_typer(link.app, name="link")
app.add_typer(listing.app, name="list")
app.add_typer(report.app, name="report")
app.add_typer(cleanup.app, name="cleanup")
app.add_typer(preset.app, name="preset")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
