"""Running the external tools llamalink reads models from."""

import logging
import shutil
import subprocess
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured output and exit code of one command."""

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def detail(self) -> str:
        """Short failure description: stderr if any, else the exit code."""
        return self.stderr.strip() or f"exit code {self.returncode}"


def run_command(args: list[str], *, timeout: float | None = 60.0) -> CommandResult:
    """Run a command with captured text output.

    A non-zero exit is returned, not raised; callers decide what it means.

    Raises:
        subprocess.TimeoutExpired: If the command runs longer than ``timeout``.
        FileNotFoundError: If the executable is not on PATH.
    """
    logger.debug("Running: %s", " ".join(args))
    completed = subprocess.run(args, capture_output=True, text=True, timeout=timeout)
    return CommandResult(completed.stdout, completed.stderr, completed.returncode)


def command_exists(name: str) -> bool:
    """Check whether ``name`` is on PATH."""
    return shutil.which(name) is not None
