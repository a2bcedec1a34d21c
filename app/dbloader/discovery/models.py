"""Discovery domain models.

This module defines the data structures passed between the root
resolution layer, the tree walker and the downstream parser: search
roots, entry classifications and discovered files.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class EntryType(str, Enum):
    """Filesystem type of a single entry, as reported by ``lstat``.

    Attributes:
        REGULAR: Regular file.
        DIRECTORY: Directory.
        SYMLINK: Symbolic link (not followed).
        UNKNOWN: Anything else, including types the platform could not
            determine.
    """

    REGULAR = "regular"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class RootSpec:
    """A search location for database files.

    Attributes:
        path: Directory (or single file) to walk. Stored absolute, with
            ``~`` expanded and symlinks left unresolved.
        tolerate_missing: If True, an absent or unreadable root degrades to
            a warning and contributes no files instead of failing the load.
        label: Optional short name used for display (e.g., "system", "user").
    """

    path: str
    tolerate_missing: bool = False
    label: str | None = None

    def __post_init__(self) -> None:
        """Validate root data after initialization."""
        if not self.path:
            msg = "Root path cannot be empty"
            raise ValueError(msg)
        # Discovered paths are built from this value and must stay under it.
        object.__setattr__(self, "path", str(Path(self.path).expanduser().absolute()))


@dataclass(frozen=True, slots=True)
class DiscoveredFile:
    """A file found under a root that the downstream parser should read.

    Attributes:
        path: Absolute path to the file, lexically inside ``root.path``.
        root: The root this file was discovered under.
    """

    path: str
    root: RootSpec

    def __post_init__(self) -> None:
        """Validate discovered file data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
