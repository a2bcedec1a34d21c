"""Shared helpers for CLI commands.

This module provides helper functions used across multiple CLI
command modules to avoid code duplication.
"""

from pathlib import Path

import typer

from dbloader.core.config import LoaderConfig, LoaderConfigError, get_effective_config
from dbloader.utils.formatting import print_error


def load_config_or_exit(path: Path | None = None) -> LoaderConfig:
    """Load the effective loader config or exit with an error.

    Args:
        path: Explicit config file. If given, it must exist.

    Returns:
        LoaderConfig from file, or defaults if no default file exists.

    Raises:
        typer.Exit: If the config cannot be loaded.
    """
    if path is not None and not path.exists():
        print_error(f"Loader config not found: {path}")
        raise typer.Exit(code=1)

    try:
        return get_effective_config(path)
    except LoaderConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
