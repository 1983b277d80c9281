"""Abstract base class for model sources.

This module defines the ModelSource interface the reconciliation engine
uses to learn which models exist and where their backing files live.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from llamalink.models.model import Model


class SourceError(Exception):
    """Base exception for model source errors."""


class EnumerationError(SourceError):
    """Raised when the model list cannot be obtained or parsed.

    Fatal to a run: without a model list nothing can safely proceed.
    """


class ResolutionError(SourceError):
    """Raised when a model's backing file path cannot be determined.

    Only the affected model is rejected; the run continues.
    """


class ModelSource(ABC):
    """Abstract base class for all model sources.

    Sources are the read-only ground truth: they enumerate models and
    resolve each one to the absolute path of its backing file.

    Example:
        >>> source = OllamaSource()
        >>> if source.is_available():
        ...     for model in source.list_models():
        ...         print(model.name, source.resolve(model.name))
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return a short name for diagnostics (e.g., 'ollama')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this source can be queried on the system.

        Returns:
            True if the source can be used, False otherwise.
        """

    @abstractmethod
    def list_models(self) -> list[Model]:
        """Return all models known to the source, in source order.

        Raises:
            EnumerationError: If the listing fails or cannot be parsed.
        """

    @abstractmethod
    def resolve(self, name: str) -> Path:
        """Resolve a model identifier to its backing file path.

        Args:
            name: Model identifier as returned by list_models().

        Returns:
            Absolute path of the backing file (existence not checked).

        Raises:
            ResolutionError: If no path can be determined.
        """
