"""Model records and size handling.

This module defines the immutable snapshot of a model known to the
source store, together with the size parsing and size-range filtering
used when enumerating models.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

# Binary multipliers, matching how ollama reports sizes
SIZE_UNITS: dict[str, int] = {
    "B": 1,
    "KB": 1024,
    "MB": 1024**2,
    "GB": 1024**3,
    "TB": 1024**4,
}

_SIZE_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)\s*([KMGT]?B)$", re.IGNORECASE)
_NUMBER_PATTERN = re.compile(r"^\d+(?:\.\d+)?$")


@dataclass(frozen=True, slots=True)
class Model:
    """A model known to the source store.

    Only the identifier and approximate size come from enumeration; the
    backing file path is resolved lazily by the model source.

    Attributes:
        name: Model identifier (e.g., 'acme/foo:7b').
        size_bytes: Approximate size in bytes (None if not reported).
    """

    name: str
    size_bytes: int | None = field(default=None)

    def __post_init__(self) -> None:
        """Validate model data after initialization."""
        if not self.name or not self.name.strip():
            msg = "Model name cannot be empty"
            raise ValueError(msg)
        if self.size_bytes is not None and self.size_bytes < 0:
            msg = f"Model size cannot be negative, got {self.size_bytes}"
            raise ValueError(msg)

    @property
    def size_human(self) -> str:
        """Return human-readable size string."""
        return format_size(self.size_bytes)


def format_size(size_bytes: int | None) -> str:
    """Format byte count as human-readable string."""
    if size_bytes is None:
        return "unknown"

    size = float(size_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024:
            return f"{size:.1f} {unit}" if unit != "B" else f"{int(size)} B"
        size /= 1024
    return f"{size:.1f} TB"


def parse_size(text: str) -> int | None:
    """Parse a size such as '4.7 GB' or '700MB' into bytes.

    Args:
        text: Size with a unit suffix, optionally space-separated.

    Returns:
        Size in bytes, or None if the text is not a size.
    """
    match = _SIZE_PATTERN.match(text.strip())
    if match is None:
        return None
    number, unit = match.groups()
    return int(float(number) * SIZE_UNITS[unit.upper()])


def parse_listing_size(fields: list[str]) -> int | None:
    """Find the size column in a whitespace-split listing row.

    Listing rows carry the size either as two fields ('4.7', 'GB') or
    fused ('4.7GB'); the first field that forms a size wins.

    Args:
        fields: Row fields after the model name.

    Returns:
        Size in bytes, or None if no field looks like a size.
    """
    for i, current in enumerate(fields):
        fused = parse_size(current)
        if fused is not None:
            return fused
        if _NUMBER_PATTERN.match(current) and i + 1 < len(fields):
            paired = parse_size(f"{current} {fields[i + 1]}")
            if paired is not None:
                return paired
    return None


def parse_size_option(text: str) -> int:
    """Parse a --min-size/--max-size value into bytes.

    Bare numbers are gigabytes; explicit units ('MB', 'GB', ...) are honoured.

    Args:
        text: Value typed on the command line.

    Returns:
        Size in bytes.

    Raises:
        ValueError: If the value is not a valid size.
    """
    value = text.strip()
    if _NUMBER_PATTERN.match(value):
        return int(float(value) * SIZE_UNITS["GB"])
    parsed = parse_size(value)
    if parsed is None:
        msg = f"Invalid size: {text!r} (expected e.g. 4, 4.5GB or 700MB)"
        raise ValueError(msg)
    return parsed


def filter_by_size(
    models: Iterable[Model],
    min_bytes: int | None = None,
    max_bytes: int | None = None,
) -> list[Model]:
    """Keep models whose size falls inside the requested range.

    Without a range every model is kept. With a range, models whose size
    is unknown are dropped because they cannot be shown to match.

    Args:
        models: Models in enumeration order.
        min_bytes: Inclusive lower bound (None or 0 = no bound).
        max_bytes: Inclusive upper bound (None or 0 = no bound).

    Returns:
        Matching models, order preserved.
    """
    if not min_bytes and not max_bytes:
        return list(models)

    selected: list[Model] = []
    for model in models:
        if model.size_bytes is None:
            continue
        if min_bytes and model.size_bytes < min_bytes:
            continue
        if max_bytes and model.size_bytes > max_bytes:
            continue
        selected.append(model)
    return selected
