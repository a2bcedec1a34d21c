"""XDG-compliant path management for dbloader.

This module provides the configuration file location and the standard
database roots, each overridable from the environment.

Defaults:
- Config: ~/.config/dbloader/loader.toml
- System root: /usr/share/dbloader
- Local root: /etc/dbloader
- User root: ~/.config/dbloader/db
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "dbloader"

SYSTEM_DIR_ENV = "DBLOADER_SYSTEM_DIR"
LOCAL_DIR_ENV = "DBLOADER_LOCAL_DIR"
USER_DIR_ENV = "DBLOADER_USER_DIR"

DEFAULT_SYSTEM_DIR = Path("/usr/share") / APP_NAME
DEFAULT_LOCAL_DIR = Path("/etc") / APP_NAME


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def _get_env_dir(env_var: str, default: Path) -> Path:
    value = os.environ.get(env_var)
    if value:
        return Path(value)
    return default


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/dbloader/ (or XDG_CONFIG_HOME/dbloader/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_loader_config_path() -> Path:
    """Get the loader configuration file path.

    Returns:
        Path to ~/.config/dbloader/loader.toml.
    """
    return get_config_dir() / "loader.toml"


def get_system_dir() -> Path:
    """Get the system-wide database root.

    Returns:
        Path from DBLOADER_SYSTEM_DIR, or /usr/share/dbloader.
    """
    return _get_env_dir(SYSTEM_DIR_ENV, DEFAULT_SYSTEM_DIR)


def get_local_dir() -> Path:
    """Get the host-local database root for administrator overrides.

    Returns:
        Path from DBLOADER_LOCAL_DIR, or /etc/dbloader.
    """
    return _get_env_dir(LOCAL_DIR_ENV, DEFAULT_LOCAL_DIR)


def get_user_dir() -> Path:
    """Get the per-user database root.

    Returns:
        Path from DBLOADER_USER_DIR, or ~/.config/dbloader/db
        (XDG_CONFIG_HOME respected).
    """
    value = os.environ.get(USER_DIR_ENV)
    if value:
        return Path(value)
    return get_config_dir() / "db"
