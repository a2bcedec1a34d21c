"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_roots(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point every standard root and the config dir into a temp directory.

    Keeps tests away from the real /usr/share, /etc and ~/.config.

    Returns:
        Base directory holding the isolated locations.
    """
    base = tmp_path / "env"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(base / "xdg"))
    monkeypatch.setenv("DBLOADER_SYSTEM_DIR", str(base / "system"))
    monkeypatch.setenv("DBLOADER_LOCAL_DIR", str(base / "local"))
    monkeypatch.delenv("DBLOADER_USER_DIR", raising=False)
    return base


@pytest.fixture
def db_tree(tmp_path: Path) -> Path:
    """A database root with os/ and platform/ each holding one entry.

    Layout::

        db/
          os/fedora.xml
          platform/qemu.xml
          README.txt
    """
    root = tmp_path / "db"
    (root / "os").mkdir(parents=True)
    (root / "platform").mkdir()
    (root / "os" / "fedora.xml").write_text("<os/>")
    (root / "platform" / "qemu.xml").write_text("<platform/>")
    (root / "README.txt").write_text("not a database file")
    return root
