"""Symbolic link validity policy.

A destination link is valid only when its name carries the model
extension and it points, in one hop, at an existing regular file.
Anything else is broken and subject to cleanup.
"""

import logging
import os
import stat
from pathlib import Path

from llamalink.core.config import MODEL_EXTENSION

logger = logging.getLogger(__name__)


def read_link_target(link_path: Path) -> Path | None:
    """Return the absolute, normalised target of a symbolic link.

    Relative targets are interpreted against the link's own directory,
    the way the kernel resolves them.

    Args:
        link_path: Path of the link itself.

    Returns:
        Target path, or None if link_path is not a readable link.
    """
    try:
        raw = os.readlink(link_path)
    except OSError:
        return None
    return Path(os.path.normpath(os.path.join(os.path.dirname(link_path), raw)))


def is_valid_link(
    link_path: Path,
    target_path: Path,
    extension: str = MODEL_EXTENSION,
) -> bool:
    """Check a link against the validity policy.

    All of the following must hold:
    1. The link's file name ends with ``extension``.
    2. The target exists (stat, following links).
    3. The target itself is neither a directory nor another link.

    Filesystem errors count as "does not exist". Never raises.

    Args:
        link_path: Location of the link in the destination tree.
        target_path: Path the link resolves to.
        extension: Required file extension.

    Returns:
        True if the link is valid.
    """
    if not link_path.name.endswith(extension):
        return False

    try:
        os.stat(target_path)
        target_stat = os.lstat(target_path)
    except OSError:
        return False

    if stat.S_ISLNK(target_stat.st_mode) or stat.S_ISDIR(target_stat.st_mode):
        logger.debug("Link %s targets a directory or link: %s", link_path, target_path)
        return False

    return True


def is_valid_link_at(link_path: Path, extension: str = MODEL_EXTENSION) -> bool:
    """Check the link at ``link_path`` against its own current target.

    Args:
        link_path: Location of the link in the destination tree.
        extension: Required file extension.

    Returns:
        True if link_path is a link and is valid.
    """
    target = read_link_target(link_path)
    if target is None:
        return False
    return is_valid_link(link_path, target, extension)
