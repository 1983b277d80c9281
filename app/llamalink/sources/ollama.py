"""Ollama model source implementation.

Enumerates models with ``ollama list`` and resolves backing blobs with
``ollama show --modelfile``.
"""

import logging
import subprocess
from pathlib import Path

from llamalink.models.model import Model, parse_listing_size
from llamalink.sources.base import EnumerationError, ModelSource, ResolutionError
from llamalink.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)

# Modelfile line that carries the backing blob path
_FROM_PREFIX = "FROM "


class OllamaSource(ModelSource):
    """Model source backed by the ollama CLI.

    Args:
        executable: Name or path of the ollama binary.
        timeout: Seconds to wait for each ollama invocation.
    """

    def __init__(self, executable: str = "ollama", timeout: float | None = 60.0) -> None:
        self._executable = executable
        self._timeout = timeout

    @property
    def name(self) -> str:
        """Return 'ollama' as the source name."""
        return "ollama"

    def is_available(self) -> bool:
        """Check if the ollama CLI is available."""
        return command_exists(self._executable)

    def list_models(self) -> list[Model]:
        """List installed models via ``ollama list``.

        The first output line is a header and is discarded; remaining
        lines are whitespace-delimited with the model name first.

        Returns:
            Models in listing order.

        Raises:
            EnumerationError: If ollama is missing, fails or times out.
        """
        if not self.is_available():
            raise EnumerationError(f"{self._executable} not found in PATH")

        try:
            result = run_command([self._executable, "list"], timeout=self._timeout)
        except FileNotFoundError as e:
            raise EnumerationError(f"{self._executable} not found in PATH") from e
        except subprocess.TimeoutExpired as e:
            raise EnumerationError(f"ollama list timed out after {self._timeout}s") from e
        except OSError as e:
            raise EnumerationError(f"Cannot run ollama list: {e}") from e

        if not result.success:
            raise EnumerationError(f"ollama list failed: {result.detail}")

        return self._parse_listing(result.stdout)

    def _parse_listing(self, output: str) -> list[Model]:
        """Parse ``ollama list`` output into models.

        Args:
            output: Raw stdout, header line included.

        Returns:
            Parsed models; blank lines are skipped.
        """
        lines = output.strip().split("\n")
        models: list[Model] = []

        # Skip header line ("NAME  ID  SIZE  MODIFIED")
        for line in lines[1:]:
            fields = line.split()
            if not fields:
                continue
            size = parse_listing_size(fields[1:])
            if size is None:
                logger.debug("No size found for %s in line %r", fields[0], line[:100])
            models.append(Model(name=fields[0], size_bytes=size))

        return models

    def resolve(self, name: str) -> Path:
        """Resolve a model to its blob via ``ollama show --modelfile``.

        Args:
            name: Model identifier.

        Returns:
            Path taken from the first ``FROM`` line of the modelfile.

        Raises:
            ResolutionError: If ollama fails or the modelfile has no FROM line.
        """
        args = [self._executable, "show", "--modelfile", name]
        try:
            result = run_command(args, timeout=self._timeout)
        except FileNotFoundError as e:
            raise ResolutionError(f"{self._executable} not found in PATH") from e
        except subprocess.TimeoutExpired as e:
            raise ResolutionError(f"ollama show timed out for {name}") from e
        except OSError as e:
            raise ResolutionError(f"Cannot run ollama show for {name}: {e}") from e

        if not result.success:
            logger.debug("ollama show output for %s: %s", name, result.stdout + result.stderr)
            raise ResolutionError(f"ollama show failed for {name}: {result.detail}")

        for line in result.stdout.strip().split("\n"):
            if line.startswith(_FROM_PREFIX):
                path = line[len(_FROM_PREFIX) :].strip()
                if path:
                    logger.debug("Model path for %s: %s", name, path)
                    return Path(path).expanduser()

        raise ResolutionError(f"Model path not found for {name}")
