"""Load coordination across multiple roots.

Walks each configured root in caller order and merges the results. The
first fatal error from any root aborts the whole load.
"""

import logging
import threading
from collections.abc import Sequence
from concurrent.futures import Future, ThreadPoolExecutor

from dbloader.discovery.errors import LoadError
from dbloader.discovery.models import DiscoveredFile, RootSpec
from dbloader.discovery.reporter import DiagnosticReporter
from dbloader.discovery.walker import TreeWalker

logger = logging.getLogger(__name__)

# Per-root result of a concurrent walk.
_Outcome = tuple[list[DiscoveredFile], DiagnosticReporter, LoadError | None]


class LoadCoordinator:
    """Drives a TreeWalker over every root and aggregates the files.

    Args:
        walker: Walker used for every root. A default walker is created
            if None.
        max_workers: Number of roots walked concurrently. With 1 (the
            default) roots are walked one after another in the caller's
            thread.
    """

    def __init__(self, walker: TreeWalker | None = None, *, max_workers: int = 1) -> None:
        if max_workers < 1:
            msg = f"max_workers must be at least 1, got {max_workers}"
            raise ValueError(msg)
        self._walker = walker or TreeWalker()
        self._max_workers = max_workers

    @property
    def walker(self) -> TreeWalker:
        """Walker used for every root."""
        return self._walker

    def load_all(self, roots: Sequence[RootSpec]) -> list[DiscoveredFile]:
        """Walk every root and return the discovered files in root order.

        Args:
            roots: Roots to walk, in priority order.

        Returns:
            Files from all roots. Tolerated roots that could not be read
            contribute nothing.

        Raises:
            LoadError: The first fatal error, in root order. Remaining roots
                are not walked and no files are returned.
        """
        if self._max_workers == 1 or len(roots) <= 1:
            files: list[DiscoveredFile] = []
            for root in roots:
                files.extend(self._walk_root(root))
            return files

        return self._load_concurrently(roots)

    def _load_concurrently(self, roots: Sequence[RootSpec]) -> list[DiscoveredFile]:
        """Walk roots on a thread pool, merging results in root order.

        Each root collects warnings into its own buffer. Buffers are merged
        into the walker's reporter in root order up to and including the
        first failing root, so the outcome matches a sequential load. Roots
        after a known failure are not started.
        """
        failed_at = len(roots)
        lock = threading.Lock()

        def _task(index: int, root: RootSpec) -> _Outcome:
            nonlocal failed_at
            buffer = DiagnosticReporter(log=False)
            with lock:
                if index > failed_at:
                    return [], buffer, None
            try:
                return self._walk_root(root, buffer), buffer, None
            except LoadError as e:
                with lock:
                    failed_at = min(failed_at, index)
                return [], buffer, e

        files: list[DiscoveredFile] = []
        pool = ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="dbloader")
        try:
            futures: list[Future[_Outcome]] = [
                pool.submit(_task, index, root) for index, root in enumerate(roots)
            ]
            for future in futures:
                found, buffer, error = future.result()
                self._walker.reporter.merge(buffer)
                if error is not None:
                    raise error
                files.extend(found)
        finally:
            pool.shutdown(wait=True, cancel_futures=True)
        return files

    def _walk_root(
        self, root: RootSpec, reporter: DiagnosticReporter | None = None
    ) -> list[DiscoveredFile]:
        found = self._walker.walk(root, reporter)
        logger.debug("Root %s contributed %d file(s)", root.path, len(found))
        return found
