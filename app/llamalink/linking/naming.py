"""Translate Ollama model identifiers into LM Studio's layout.

LM Studio expects ``<author>/<model-dir>/<file>.gguf``. Identifiers such
as ``acme/foo:7b`` are split into an author namespace and a model part;
``:``, ``_`` and any ``/`` left in the model part become ``-``.
"""

from dataclasses import dataclass

from llamalink.core.config import DIR_SUFFIX

# Author used when the identifier carries no namespace
UNKNOWN_AUTHOR = "unknown"


@dataclass(frozen=True, slots=True)
class MappedName:
    """Destination names for one model identifier.

    Attributes:
        author: Namespace directory directly under the destination root.
        dir_name: Per-model directory name, suffix marker included.
        file_base: Link file name without extension.
    """

    author: str
    dir_name: str
    file_base: str


def _normalize(value: str) -> str:
    return value.replace(":", "-").replace("_", "-").replace("/", "-")


def map_model_name(name: str, dir_suffix: str = DIR_SUFFIX) -> MappedName:
    """Map a model identifier to destination directory and file names.

    A ``/`` that appears before the tag separator ``:`` marks a namespace;
    everything before the last such ``/`` becomes the author, with any
    remaining ``/`` replaced by ``-``. Without a namespace the author is
    ``unknown``.

    Args:
        name: Model identifier (e.g., 'acme/foo:7b').
        dir_suffix: Marker appended to the model directory.

    Returns:
        MappedName; e.g. ``acme/foo:7b`` maps to author ``acme``,
        dir ``foo-7b-GGUF`` and file base ``foo-7b``.
    """
    repository, sep, tag = name.partition(":")

    author = UNKNOWN_AUTHOR
    model_part = name
    if "/" in repository:
        namespace, _, base = repository.rpartition("/")
        author = namespace.replace("/", "-") or UNKNOWN_AUTHOR
        model_part = f"{base}{sep}{tag}"

    file_base = _normalize(model_part)
    return MappedName(
        author=author,
        dir_name=f"{file_base}{dir_suffix}" if file_base else "",
        file_base=file_base,
    )
