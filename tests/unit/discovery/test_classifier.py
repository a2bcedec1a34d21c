"""Tests for filesystem entry classification."""

import os
from pathlib import Path

import pytest
from dbloader.discovery.classifier import classify
from dbloader.discovery.models import EntryType


class TestClassify:
    """Tests for classify()."""

    def test_regular_file(self, tmp_path: Path) -> None:
        """Regular files are classified as REGULAR."""
        f = tmp_path / "entry.xml"
        f.write_text("<os/>")
        assert classify(f) == EntryType.REGULAR

    def test_directory(self, tmp_path: Path) -> None:
        """Directories are classified as DIRECTORY."""
        assert classify(tmp_path) == EntryType.DIRECTORY

    def test_symlink_not_followed(self, tmp_path: Path) -> None:
        """A link to a directory is reported as SYMLINK, not DIRECTORY."""
        link = tmp_path / "link"
        link.symlink_to(tmp_path)
        assert classify(link) == EntryType.SYMLINK

    def test_dangling_symlink(self, tmp_path: Path) -> None:
        """A dangling link is still classified without error."""
        link = tmp_path / "broken"
        link.symlink_to(tmp_path / "missing")
        assert classify(link) == EntryType.SYMLINK

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="requires mkfifo")
    def test_fifo_is_unknown(self, tmp_path: Path) -> None:
        """Types other than file, directory and link are UNKNOWN."""
        fifo = tmp_path / "pipe"
        os.mkfifo(fifo)
        assert classify(fifo) == EntryType.UNKNOWN

    def test_missing_path_raises(self, tmp_path: Path) -> None:
        """A failed metadata call propagates as OSError."""
        with pytest.raises(FileNotFoundError):
            classify(tmp_path / "missing")

    def test_not_a_directory_raises(self, tmp_path: Path) -> None:
        """A file used as a path component propagates the OSError."""
        f = tmp_path / "file.xml"
        f.write_text("")
        with pytest.raises(NotADirectoryError):
            classify(f / "child")
