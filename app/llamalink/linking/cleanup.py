"""Destination tree cleanup.

Restores the LM Studio tree to a minimal state: no broken links and no
empty directories. The destination root itself is never removed.
Failures are recorded per entry and never stop the walk.
"""

import logging
import os
from pathlib import Path

from llamalink.core.config import LinkSettings
from llamalink.linking.tree import iter_dirs_bottom_up, iter_links
from llamalink.linking.validator import is_valid_link_at
from llamalink.models.decision import CleanupKind, CleanupResult

logger = logging.getLogger(__name__)


class CleanupWalker:
    """Removes broken links and empty directories from the destination tree.

    Args:
        settings: Store locations and naming settings.
        dry_run: If True, report what would be removed without removing.
    """

    def __init__(self, settings: LinkSettings, *, dry_run: bool = False) -> None:
        self._settings = settings
        self._dry_run = dry_run

    @property
    def root(self) -> Path:
        """Destination root being cleaned."""
        return self._settings.dest_root

    def cleanup(self) -> list[CleanupResult]:
        """Remove broken links, then empty directories to fixpoint.

        Returns:
            One CleanupResult per removal attempted.
        """
        results = self.remove_broken_links()
        results.extend(self.remove_empty_dirs(_simulated(results)))
        return results

    def reset(self) -> list[CleanupResult]:
        """Remove every symbolic link, valid or not, then empty directories.

        This is the explicit "wipe and start over" operation; nothing
        calls it implicitly.

        Returns:
            One CleanupResult per removal attempted.
        """
        links = list(iter_links(self.root))
        results = [self._remove_link(link, CleanupKind.LINK) for link in links]
        results.extend(self.remove_empty_dirs(_simulated(results)))
        return results

    def remove_broken_links(self) -> list[CleanupResult]:
        """Remove every link that fails the validity policy.

        Returns:
            One CleanupResult per broken link found.
        """
        results: list[CleanupResult] = []
        for link in list(iter_links(self.root)):
            if is_valid_link_at(link, self._settings.extension):
                continue
            results.append(self._remove_link(link, CleanupKind.BROKEN_LINK))
        return results

    def remove_empty_dirs(self, removed_links: set[Path] | None = None) -> list[CleanupResult]:
        """Remove empty directories until a full pass removes nothing.

        Each pass is bottom-up and re-reads every directory right before
        deciding, so a parent emptied by its children's removal goes in
        the same pass; the outer loop guarantees the fixpoint. In dry-run
        mode, directories that would become empty are reported too.

        Args:
            removed_links: Entries a dry run pretended to remove already.

        Returns:
            One CleanupResult per directory removal attempted.
        """
        results: list[CleanupResult] = []
        failed: set[Path] = set()
        gone: set[Path] = set(removed_links or ())

        while True:
            removed = 0
            for directory in iter_dirs_bottom_up(self.root):
                if directory in failed or directory in gone:
                    continue
                if not self._is_empty(directory, gone):
                    continue

                result = self._remove_dir(directory)
                results.append(result)
                if result.success:
                    gone.add(directory)
                    removed += 1
                else:
                    failed.add(directory)

            if removed == 0:
                break

        return results

    def _is_empty(self, directory: Path, gone: set[Path]) -> bool:
        """Check emptiness, treating dry-run removals as already done."""
        try:
            with os.scandir(directory) as it:
                return all(Path(entry.path) in gone for entry in it)
        except OSError as e:
            logger.warning("Cannot read directory %s: %s", directory, e)
            return False

    def _remove_link(self, link: Path, kind: CleanupKind) -> CleanupResult:
        if self._dry_run:
            logger.info("Dry-run: would remove %s", link)
            return CleanupResult(path=str(link), kind=kind, success=True, dry_run=True)
        try:
            link.unlink()
        except OSError as e:
            logger.warning("Failed to remove link %s: %s", link, e)
            return CleanupResult(path=str(link), kind=kind, success=False, error=str(e))
        logger.info("Removed %s: %s", kind.value.replace("_", " "), link)
        return CleanupResult(path=str(link), kind=kind, success=True)

    def _remove_dir(self, directory: Path) -> CleanupResult:
        kind = CleanupKind.EMPTY_DIR
        if self._dry_run:
            logger.info("Dry-run: would remove empty directory %s", directory)
            return CleanupResult(path=str(directory), kind=kind, success=True, dry_run=True)
        try:
            directory.rmdir()
        except OSError as e:
            logger.warning("Failed to remove directory %s: %s", directory, e)
            return CleanupResult(path=str(directory), kind=kind, success=False, error=str(e))
        logger.info("Removed empty directory: %s", directory)
        return CleanupResult(path=str(directory), kind=kind, success=True)


def _simulated(results: list[CleanupResult]) -> set[Path]:
    """Paths a dry run reported as removed."""
    return {Path(r.path) for r in results if r.dry_run}
