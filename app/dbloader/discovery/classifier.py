"""Filesystem entry classification."""

import stat
from pathlib import Path

from dbloader.discovery.models import EntryType


def classify(path: Path) -> EntryType:
    """Classify a path by its ``lstat`` mode without following it.

    Reports exactly what the platform returned. Some platforms mask a
    permission failure on an ancestor directory as a successful call with
    an indeterminate type; that surfaces here as ``EntryType.UNKNOWN`` and
    is left to the caller to interpret.

    Args:
        path: Path to classify.

    Returns:
        EntryType for the path.

    Raises:
        OSError: If the metadata call itself fails.
    """
    mode = path.lstat().st_mode
    if stat.S_ISLNK(mode):
        return EntryType.SYMLINK
    if stat.S_ISDIR(mode):
        return EntryType.DIRECTORY
    if stat.S_ISREG(mode):
        return EntryType.REGULAR
    return EntryType.UNKNOWN
