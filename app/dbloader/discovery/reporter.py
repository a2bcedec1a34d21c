"""Diagnostic reporting for the discovery walker.

Warnings are emitted on the ``dbloader.discovery`` logger and retained on
the reporter so that surrounding tooling can present them. Fatal
conditions are built into LoadError values; the reporter never decides
control flow.
"""

import logging

from dbloader.discovery.errors import (
    LoadError,
    LoadErrorKind,
    NotAccessibleError,
    UnderlyingError,
    UnexpectedTypeError,
)

LOG_DOMAIN = "dbloader.discovery"

logger = logging.getLogger(LOG_DOMAIN)


class DiagnosticReporter:
    """Routes walker anomalies to the warning channel or into errors.

    Args:
        log: If False, warnings are only collected and not logged. Used for
            buffers whose contents are merged into another reporter later.

    Attributes:
        warnings: Messages emitted through ``warn`` in emission order.
    """

    def __init__(self, *, log: bool = True) -> None:
        self.warnings: list[str] = []
        self._log = log

    def warn(self, message: str) -> None:
        """Emit a non-fatal warning."""
        self.warnings.append(message)
        if self._log:
            logger.warning("%s", message)

    def merge(self, other: "DiagnosticReporter") -> None:
        """Re-emit another reporter's warnings through this one, in order."""
        for message in other.warnings:
            self.warn(message)

    def skip(self, path: str, reason: str) -> None:
        """Warn that a path is being skipped.

        Args:
            path: Offending path, included verbatim.
            reason: Short human-readable reason.
        """
        self.warn(f"Skipping path {path}: {reason}")

    def fail(
        self,
        kind: LoadErrorKind,
        path: str,
        cause: OSError | None = None,
        *,
        operation: str = "access",
    ) -> LoadError:
        """Build the LoadError for a failure. Performs no I/O.

        Args:
            kind: Category of the failure.
            path: Offending path, included verbatim in the message.
            cause: Original OSError, required for ``UNDERLYING``.
            operation: Verb describing the failed call (``UNDERLYING`` only).

        Returns:
            LoadError subclass instance matching ``kind``.
        """
        if kind == LoadErrorKind.NOT_ACCESSIBLE:
            return NotAccessibleError(path)
        if kind == LoadErrorKind.UNEXPECTED_TYPE:
            return UnexpectedTypeError(path)
        if cause is None:
            msg = "Underlying errors require a cause"
            raise ValueError(msg)
        return UnderlyingError(path, cause, operation)

    def clear(self) -> None:
        """Forget previously emitted warnings."""
        self.warnings = []
