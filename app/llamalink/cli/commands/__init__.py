"""CLI commands for llamalink.

This package contains all subcommand implementations.
"""

from llamalink.cli.commands import cleanup, config, link, listing, preset, report

__all__ = ["cleanup", "config", "link", "listing", "preset", "report"]
