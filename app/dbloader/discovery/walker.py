"""Recursive discovery of database files under a single root.

The walker visits a root depth-first in sorted order, classifying each
entry with ``lstat`` and applying the root's tolerate-missing policy to
anything it cannot read or cannot make sense of.

Platform quirk: a permission failure on an ancestor directory is not
always reported as an error. Some platforms return a successful metadata
call with an indeterminate type instead. The walker treats both outcomes
identically under a tolerant root, so an optional directory that an
administrator restricted is skipped rather than failing the load.
"""

import logging
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

from dbloader.discovery.classifier import classify
from dbloader.discovery.errors import LoadErrorKind
from dbloader.discovery.models import DiscoveredFile, EntryType, RootSpec
from dbloader.discovery.reporter import DiagnosticReporter

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: tuple[str, ...] = (".xml",)
DEFAULT_MAX_LINK_DEPTH: int = 8

FileMatcher = Callable[[Path], bool]

# Open directory: its (st_dev, st_ino) key and the children still to visit.
_Frame = tuple[tuple[int, int], Iterator[Path]]


def suffix_matcher(extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> FileMatcher:
    """Build a predicate accepting files with one of the given suffixes.

    Args:
        extensions: Dot-prefixed suffixes, compared case-insensitively.

    Returns:
        Predicate for use as a TreeWalker matcher.
    """
    wanted = frozenset(ext.lower() for ext in extensions)

    def _matches(path: Path) -> bool:
        return path.suffix.lower() in wanted

    return _matches


def _describe(error: OSError) -> str:
    return error.strerror or str(error)


class TreeWalker:
    """Walks one root and collects the files accepted by a matcher.

    Args:
        matcher: Predicate selecting regular files of interest. Defaults to
            files ending in ``.xml``.
        reporter: Diagnostic sink for warnings and error construction.
        max_link_depth: Maximum number of symlink hops followed for a
            single entry before it is treated as a cycle.
    """

    def __init__(
        self,
        matcher: FileMatcher | None = None,
        *,
        reporter: DiagnosticReporter | None = None,
        max_link_depth: int = DEFAULT_MAX_LINK_DEPTH,
    ) -> None:
        if max_link_depth < 1:
            msg = f"max_link_depth must be at least 1, got {max_link_depth}"
            raise ValueError(msg)
        self._matcher = matcher or suffix_matcher()
        self._reporter = reporter or DiagnosticReporter()
        self._max_link_depth = max_link_depth

    @property
    def reporter(self) -> DiagnosticReporter:
        """Diagnostic reporter used by this walker."""
        return self._reporter

    def walk(
        self, root: RootSpec, reporter: DiagnosticReporter | None = None
    ) -> list[DiscoveredFile]:
        """Collect matching files under a root.

        The walk keeps an explicit stack of open directories, so tree depth
        is bounded by memory rather than by the interpreter's call stack.

        Args:
            root: Root to walk.
            reporter: Reporter for this walk only. Defaults to the walker's
                own reporter.

        Returns:
            Discovered files in deterministic depth-first order. Empty if the
            root is tolerant and could not be read.

        Raises:
            LoadError: On the first fatal anomaly anywhere in the subtree.
                No partial result is returned in that case.
        """
        reporter = reporter or self._reporter
        root_path = Path(root.path)
        results: list[DiscoveredFile] = []
        active: set[tuple[int, int]] = set()
        stack: list[_Frame] = []

        frame = self._visit(root_path, root, results, active, reporter)
        if frame is not None:
            stack.append(frame)

        while stack:
            key, children = stack[-1]
            child = next(children, None)
            if child is None:
                stack.pop()
                active.discard(key)
                continue
            frame = self._visit(child, root, results, active, reporter)
            if frame is not None:
                stack.append(frame)

        logger.debug("Found %d file(s) under %s", len(results), root_path)
        return results

    def _visit(
        self,
        path: Path,
        root: RootSpec,
        results: list[DiscoveredFile],
        active: set[tuple[int, int]],
        reporter: DiagnosticReporter,
    ) -> _Frame | None:
        """Classify one entry and dispatch on its type.

        Returns:
            A frame for a directory whose children still have to be visited,
            None otherwise.
        """
        try:
            entry_type = classify(path)
        except OSError as e:
            self._anomaly(LoadErrorKind.NOT_ACCESSIBLE, path, root, reporter, _describe(e), e)
            return None

        if entry_type == EntryType.SYMLINK:
            try:
                entry_type = self._resolve_link(path, reporter)
            except OSError as e:
                self._anomaly(
                    LoadErrorKind.NOT_ACCESSIBLE,
                    path,
                    root,
                    reporter,
                    f"link target unreadable ({_describe(e)})",
                    e,
                )
                return None

        if entry_type == EntryType.DIRECTORY:
            return self._open_directory(path, root, active, reporter)
        if entry_type == EntryType.REGULAR:
            if self._matcher(path):
                results.append(DiscoveredFile(path=str(path), root=root))
        else:
            self._anomaly(
                LoadErrorKind.UNEXPECTED_TYPE, path, root, reporter, "unexpected file type"
            )
        return None

    def _resolve_link(self, path: Path, reporter: DiagnosticReporter) -> EntryType:
        """Follow a symlink chain one hop at a time.

        Returns:
            EntryType of the first non-link target.

        Raises:
            OSError: If a target in the chain cannot be classified.
            LoadError: If a link cannot be read, or the chain is longer than
                ``max_link_depth`` (treated as a cycle).
        """
        current = path
        for _ in range(self._max_link_depth):
            try:
                target = current.readlink()
            except OSError as e:
                raise reporter.fail(
                    LoadErrorKind.UNDERLYING, str(path), e, operation="read link"
                ) from e
            current = current.parent / target
            entry_type = classify(current)
            if entry_type != EntryType.SYMLINK:
                return entry_type

        logger.debug("Symlink chain at %s exceeds %d hops", path, self._max_link_depth)
        raise reporter.fail(LoadErrorKind.UNEXPECTED_TYPE, str(path))

    def _open_directory(
        self,
        path: Path,
        root: RootSpec,
        active: set[tuple[int, int]],
        reporter: DiagnosticReporter,
    ) -> _Frame | None:
        """List a directory and mark it active on the current descent path."""
        try:
            st = path.stat()
            children = sorted(path.iterdir())
        except PermissionError as e:
            self._anomaly(LoadErrorKind.NOT_ACCESSIBLE, path, root, reporter, _describe(e), e)
            return None
        except OSError as e:
            raise reporter.fail(LoadErrorKind.UNDERLYING, str(path), e, operation="list") from e

        # Directory reached again through a link on the current descent path.
        key = (st.st_dev, st.st_ino)
        if key in active:
            logger.debug("Directory cycle detected at %s", path)
            raise reporter.fail(LoadErrorKind.UNEXPECTED_TYPE, str(path))

        active.add(key)
        return key, iter(children)

    def _anomaly(
        self,
        kind: LoadErrorKind,
        path: Path,
        root: RootSpec,
        reporter: DiagnosticReporter,
        reason: str,
        cause: OSError | None = None,
    ) -> None:
        """Apply the root's policy to an unreadable or ambiguous entry.

        Raises:
            LoadError: If the root does not tolerate missing entries.
        """
        if root.tolerate_missing:
            reporter.skip(str(path), reason)
            return
        raise reporter.fail(kind, str(path)) from cause
