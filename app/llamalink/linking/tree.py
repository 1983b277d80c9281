"""Lexical traversal of the destination tree.

The walk never follows symbolic links, so a link to a directory is
reported as a link and its contents are not visited.
"""

import logging
import os
from collections.abc import Iterator
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)


class EntryType(str, Enum):
    """Type of destination tree entry."""

    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"


def iter_tree(root: Path) -> Iterator[tuple[Path, EntryType]]:
    """Yield every entry below ``root`` in lexical depth-first order.

    Directories are yielded before their contents. Unreadable
    directories are logged and skipped. The root itself is not yielded.

    Args:
        root: Directory to walk.

    Yields:
        (path, entry type) pairs.
    """
    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda e: e.name)
    except FileNotFoundError:
        return
    except OSError as e:
        logger.warning("Cannot read directory %s: %s", root, e)
        return

    for entry in entries:
        path = Path(entry.path)
        try:
            if entry.is_symlink():
                yield path, EntryType.SYMLINK
            elif entry.is_dir(follow_symlinks=False):
                yield path, EntryType.DIRECTORY
                yield from iter_tree(path)
            else:
                yield path, EntryType.FILE
        except OSError:
            logger.warning("Cannot determine type of: %s", path)


def iter_links(root: Path) -> Iterator[Path]:
    """Yield every symbolic link below ``root`` in lexical order."""
    for path, entry_type in iter_tree(root):
        if entry_type == EntryType.SYMLINK:
            yield path


def iter_dirs_bottom_up(root: Path) -> Iterator[Path]:
    """Yield every real directory below ``root``, children before parents.

    Each directory is yielded after its whole subtree, so callers see a
    directory only once everything inside it has been handled.
    """
    try:
        with os.scandir(root) as it:
            subdirs = sorted(
                Path(e.path) for e in it if e.is_dir(follow_symlinks=False)
            )
    except FileNotFoundError:
        return
    except OSError as e:
        logger.warning("Cannot read directory %s: %s", root, e)
        return

    for subdir in subdirs:
        yield from iter_dirs_bottom_up(subdir)
        yield subdir
