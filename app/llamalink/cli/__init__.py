"""CLI package for llamalink.

This package contains the Typer application and all subcommands.
"""

from llamalink.cli.main import app

__all__ = ["app"]
