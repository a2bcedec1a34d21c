"""Tests for LoadCoordinator multi-root loading."""

import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from dbloader.discovery.coordinator import LoadCoordinator
from dbloader.discovery.errors import NotAccessibleError
from dbloader.discovery.models import DiscoveredFile, RootSpec
from dbloader.discovery.reporter import DiagnosticReporter
from dbloader.discovery.walker import TreeWalker


def _make_root(base: Path, name: str, files: tuple[str, ...]) -> Path:
    """Create a root directory holding the given relative files."""
    root = base / name
    root.mkdir(parents=True)
    for rel in files:
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("")
    return root


@pytest.fixture
def three_roots(tmp_path: Path) -> list[RootSpec]:
    """System, local and user roots, each with distinct files."""
    system = _make_root(tmp_path, "system", ("os/fedora.xml", "os/debian.xml"))
    local = _make_root(tmp_path, "local", ("os/custom.xml",))
    user = _make_root(tmp_path, "user", ("platform/qemu.xml",))
    return [
        RootSpec(str(system), tolerate_missing=True, label="system"),
        RootSpec(str(local), tolerate_missing=True, label="local"),
        RootSpec(str(user), tolerate_missing=True, label="user"),
    ]


def _names(files: list[DiscoveredFile]) -> list[str]:
    return [Path(f.path).name for f in files]


class TestLoadAll:
    """Tests for sequential loading."""

    def test_preserves_root_order(self, three_roots: list[RootSpec]) -> None:
        """Files are grouped by root in the order roots were given."""
        files = LoadCoordinator().load_all(three_roots)

        assert _names(files) == ["debian.xml", "fedora.xml", "custom.xml", "qemu.xml"]
        assert [f.root.label for f in files] == ["system", "system", "local", "user"]

    def test_reversed_roots_reverse_groups(self, three_roots: list[RootSpec]) -> None:
        """Root order, not path order, decides result order."""
        files = LoadCoordinator().load_all(list(reversed(three_roots)))
        assert [f.root.label for f in files] == ["user", "local", "system", "system"]

    def test_empty_roots(self) -> None:
        """No roots means no files."""
        assert LoadCoordinator().load_all([]) == []

    def test_idempotent(self, three_roots: list[RootSpec]) -> None:
        """Two loads over an unchanged filesystem are identical."""
        coordinator = LoadCoordinator()
        assert coordinator.load_all(three_roots) == coordinator.load_all(three_roots)

    def test_missing_tolerant_root_skipped(
        self, three_roots: list[RootSpec], tmp_path: Path
    ) -> None:
        """A missing tolerant root adds one warning and no files."""
        reporter = DiagnosticReporter()
        coordinator = LoadCoordinator(TreeWalker(reporter=reporter))
        missing = tmp_path / "home" / "u" / ".config" / "app"
        roots = [three_roots[0], RootSpec(str(missing), tolerate_missing=True)]

        files = coordinator.load_all(roots)

        assert _names(files) == ["debian.xml", "fedora.xml"]
        assert len(reporter.warnings) == 1
        assert str(missing) in reporter.warnings[0]

    def test_missing_required_root_fails_whole_load(
        self, three_roots: list[RootSpec], tmp_path: Path
    ) -> None:
        """A missing required root aborts the load and names the path."""
        missing = tmp_path / "required"
        roots = [three_roots[0], RootSpec(str(missing), tolerate_missing=False), three_roots[2]]

        with pytest.raises(NotAccessibleError) as exc_info:
            LoadCoordinator().load_all(roots)

        assert exc_info.value.path == str(missing)

    def test_first_error_stops_remaining_roots(self) -> None:
        """Roots after the first fatal error are not walked."""
        walker = MagicMock(spec=TreeWalker)
        ok = DiscoveredFile(path="/a/x.xml", root=RootSpec("/a"))
        walker.walk.side_effect = [[ok], NotAccessibleError("/b"), [ok]]
        roots = [RootSpec("/a"), RootSpec("/b"), RootSpec("/c")]

        with pytest.raises(NotAccessibleError):
            LoadCoordinator(walker).load_all(roots)

        assert walker.walk.call_count == 2

    def test_logs_per_root_count(
        self, three_roots: list[RootSpec], caplog: pytest.LogCaptureFixture
    ) -> None:
        """Each root's contribution is logged at debug level."""
        with caplog.at_level(logging.DEBUG, logger="dbloader.discovery.coordinator"):
            LoadCoordinator().load_all(three_roots)

        assert "contributed 2 file(s)" in caplog.text

    def test_rejects_invalid_worker_count(self) -> None:
        """max_workers must be positive."""
        with pytest.raises(ValueError, match="max_workers"):
            LoadCoordinator(max_workers=0)


class TestConcurrentLoad:
    """Tests for loading roots on a thread pool."""

    def test_matches_sequential_result(self, three_roots: list[RootSpec]) -> None:
        """Concurrent loading yields the same ordered result as sequential."""
        sequential = LoadCoordinator().load_all(three_roots)
        concurrent = LoadCoordinator(max_workers=3).load_all(three_roots)
        assert concurrent == sequential

    def test_first_failing_root_in_order_wins(self, tmp_path: Path) -> None:
        """With several failing roots, the earliest one is reported."""
        first = tmp_path / "first-missing"
        second = tmp_path / "second-missing"
        roots = [RootSpec(str(first)), RootSpec(str(second))]

        with pytest.raises(NotAccessibleError) as exc_info:
            LoadCoordinator(max_workers=2).load_all(roots)

        assert exc_info.value.path == str(first)

    def test_tolerant_roots_warn_concurrently(
        self, three_roots: list[RootSpec], tmp_path: Path
    ) -> None:
        """Warnings from tolerated roots are kept when walking in parallel."""
        reporter = DiagnosticReporter()
        coordinator = LoadCoordinator(TreeWalker(reporter=reporter), max_workers=4)
        roots = [*three_roots, RootSpec(str(tmp_path / "gone"), tolerate_missing=True)]

        files = coordinator.load_all(roots)

        assert len(files) == 4
        assert len(reporter.warnings) == 1

    def test_no_warnings_from_roots_after_failure(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Roots after the failing one leave no warnings, as in a sequential load."""
        reporter = DiagnosticReporter()
        coordinator = LoadCoordinator(TreeWalker(reporter=reporter), max_workers=2)
        roots = [
            RootSpec(str(tmp_path / "required-missing")),
            RootSpec(str(tmp_path / "tolerant-missing"), tolerate_missing=True),
        ]

        with (
            caplog.at_level(logging.WARNING, logger="dbloader.discovery"),
            pytest.raises(NotAccessibleError),
        ):
            coordinator.load_all(roots)

        assert reporter.warnings == []
        assert "tolerant-missing" not in caplog.text

    def test_warnings_before_failure_kept(self, tmp_path: Path) -> None:
        """Warnings from roots ahead of the failing one are still reported."""
        reporter = DiagnosticReporter()
        coordinator = LoadCoordinator(TreeWalker(reporter=reporter), max_workers=3)
        roots = [
            RootSpec(str(tmp_path / "early"), tolerate_missing=True),
            RootSpec(str(tmp_path / "required")),
            RootSpec(str(tmp_path / "late"), tolerate_missing=True),
        ]

        with pytest.raises(NotAccessibleError):
            coordinator.load_all(roots)

        assert len(reporter.warnings) == 1
        assert str(tmp_path / "early") in reporter.warnings[0]

    def test_warnings_merged_in_root_order(self, tmp_path: Path) -> None:
        """Warnings appear in root order whatever order the walks finish in."""
        reporter = DiagnosticReporter()
        coordinator = LoadCoordinator(TreeWalker(reporter=reporter), max_workers=4)
        names = ["d", "c", "b", "a"]
        roots = [RootSpec(str(tmp_path / name), tolerate_missing=True) for name in names]

        assert coordinator.load_all(roots) == []
        assert len(reporter.warnings) == len(names)
        for warning, name in zip(reporter.warnings, names, strict=True):
            assert warning.startswith(f"Skipping path {tmp_path / name}:")
