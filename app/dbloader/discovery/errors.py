"""Load error taxonomy for the discovery walker.

Every error carries the offending path verbatim so that callers can
report permission problems without guesswork.
"""

from enum import Enum


class LoadErrorKind(str, Enum):
    """Category of a load failure.

    Attributes:
        NOT_ACCESSIBLE: The path could not be classified or listed.
        UNEXPECTED_TYPE: The path was classified but has a type the walker
            cannot handle (including symlink cycles).
        UNDERLYING: Any other filesystem call failure, wrapped verbatim.
    """

    NOT_ACCESSIBLE = "not_accessible"
    UNEXPECTED_TYPE = "unexpected_type"
    UNDERLYING = "underlying"


class LoadError(Exception):
    """Base exception for discovery failures."""

    kind: LoadErrorKind

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(message)


class NotAccessibleError(LoadError):
    """Path could not be read by the current process."""

    kind = LoadErrorKind.NOT_ACCESSIBLE

    def __init__(self, path: str) -> None:
        super().__init__(path, f"Can't read path {path}")


class UnexpectedTypeError(LoadError):
    """Path has a filesystem type the walker cannot handle."""

    kind = LoadErrorKind.UNEXPECTED_TYPE

    def __init__(self, path: str) -> None:
        super().__init__(path, f"Unexpected file type for path {path}")


class UnderlyingError(LoadError):
    """Wraps a filesystem call failure that has no dedicated category."""

    kind = LoadErrorKind.UNDERLYING

    def __init__(self, path: str, cause: OSError, operation: str = "access") -> None:
        self.cause = cause
        self.operation = operation
        super().__init__(path, f"Failed to {operation} path {path}: {cause}")
