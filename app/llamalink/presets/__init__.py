"""LM Studio config preset syncing."""

from llamalink.presets.sync import (
    DEFAULT_PRESET,
    DEFAULT_PRESET_RULES,
    PresetAssignment,
    PresetError,
    PresetSync,
)

__all__ = [
    "DEFAULT_PRESET",
    "DEFAULT_PRESET_RULES",
    "PresetAssignment",
    "PresetError",
    "PresetSync",
]
