"""Utility modules for llamalink.

This module exports commonly used utility functions.
"""

from llamalink.utils.formatting import (
    console,
    create_model_table,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from llamalink.utils.shell import CommandResult, command_exists, run_command

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "create_model_table",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
]
