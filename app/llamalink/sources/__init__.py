"""Model sources for llamalink.

This module exports the source interface and its ollama implementation.
"""

from llamalink.sources.base import EnumerationError, ModelSource, ResolutionError, SourceError
from llamalink.sources.ollama import OllamaSource

__all__ = [
    "EnumerationError",
    "ModelSource",
    "OllamaSource",
    "ResolutionError",
    "SourceError",
]
