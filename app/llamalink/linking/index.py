"""Run-scoped index of valid destination links.

The index answers one question for the planner: does some *other*
destination path already link this backing file? It is keyed by the
normalised target path, never by model name, because two identifiers
can resolve to the same blob.

Canonical link policy: the first link recorded for a target wins.
Existing links are recorded in lexical traversal order when the index
is built; links created during the run are appended as they appear.
"""

import logging
import os
from pathlib import Path

from llamalink.core.config import MODEL_EXTENSION
from llamalink.linking.tree import iter_links
from llamalink.linking.validator import is_valid_link, read_link_target

logger = logging.getLogger(__name__)


def _key(path: Path) -> Path:
    return Path(os.path.normpath(path))


class LinkIndex:
    """Valid destination links grouped by target path."""

    def __init__(self) -> None:
        self._by_target: dict[Path, list[Path]] = {}

    @classmethod
    def build(cls, dest_root: Path, extension: str = MODEL_EXTENSION) -> "LinkIndex":
        """Walk the destination tree once and index every valid link.

        Args:
            dest_root: Root of the destination tree.
            extension: Required link extension.

        Returns:
            Populated LinkIndex.
        """
        index = cls()
        for link_path in iter_links(dest_root):
            target = read_link_target(link_path)
            if target is not None and is_valid_link(link_path, target, extension):
                index.add(target, link_path)
        logger.debug("Indexed %d linked target(s) under %s", len(index), dest_root)
        return index

    def __len__(self) -> int:
        return len(self._by_target)

    def add(self, target: Path, link_path: Path) -> None:
        """Record a valid link to ``target``."""
        links = self._by_target.setdefault(_key(target), [])
        if link_path not in links:
            links.append(link_path)

    def links_to(self, target: Path) -> list[Path]:
        """Return every recorded link to ``target``, canonical first."""
        return list(self._by_target.get(_key(target), []))

    def canonical(self, target: Path) -> Path | None:
        """Return the canonical link for ``target``, if any."""
        links = self._by_target.get(_key(target))
        return links[0] if links else None

    def discard(self, link_path: Path) -> None:
        """Forget a link that has been removed or replaced."""
        for target in list(self._by_target):
            links = self._by_target[target]
            if link_path in links:
                links.remove(link_path)
            if not links:
                del self._by_target[target]

    def discard_under(self, directory: Path) -> None:
        """Forget every link located inside a removed directory."""
        for target in list(self._by_target):
            remaining = [p for p in self._by_target[target] if not p.is_relative_to(directory)]
            if remaining:
                self._by_target[target] = remaining
            else:
                del self._by_target[target]
