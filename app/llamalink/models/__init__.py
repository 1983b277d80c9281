"""Data models for llamalink.

This module exports the core data structures used throughout the application.
"""

from llamalink.models.decision import (
    CleanupKind,
    CleanupResult,
    LinkDecision,
    LinkPlan,
    LinkResult,
)
from llamalink.models.model import (
    Model,
    filter_by_size,
    format_size,
    parse_listing_size,
    parse_size,
    parse_size_option,
)

__all__ = [
    "CleanupKind",
    "CleanupResult",
    "LinkDecision",
    "LinkPlan",
    "LinkResult",
    "Model",
    "filter_by_size",
    "format_size",
    "parse_listing_size",
    "parse_size",
    "parse_size_option",
]
