"""Loader configuration and settings.

This module provides the configuration model and I/O functions for the
database loader: which standard roots to search, which extra roots to
add, which files count as database files and how the walk behaves.

Configuration is stored in ~/.config/dbloader/loader.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from dbloader.core.paths import get_loader_config_path

logger = logging.getLogger(__name__)


class LoaderConfig(BaseModel):
    """Configuration for a load pass.

    Attributes:
        extensions: File suffixes accepted as database files.
        max_link_depth: Symlink hops followed per entry before it is
            treated as a cycle.
        max_workers: Number of roots walked concurrently.
        include_system: Search the system-wide root.
        include_local: Search the host-local override root.
        include_user: Search the per-user root.
        extra_roots: Additional roots searched after the standard ones.
            These must be readable; any anomaly under them fails the load.
    """

    model_config = ConfigDict(extra="forbid")

    extensions: Annotated[
        list[str],
        Field(min_length=1, description="Accepted file suffixes"),
    ] = [".xml"]
    max_link_depth: Annotated[
        int,
        Field(ge=1, le=40, description="Symlink hops per entry (1-40)"),
    ] = 8
    max_workers: Annotated[
        int,
        Field(ge=1, le=32, description="Roots walked concurrently (1-32)"),
    ] = 1
    include_system: Annotated[bool, Field(description="Search the system root")] = True
    include_local: Annotated[bool, Field(description="Search the local root")] = True
    include_user: Annotated[bool, Field(description="Search the user root")] = True
    extra_roots: Annotated[
        list[str],
        Field(default_factory=list, description="Additional required roots"),
    ]

    @field_validator("extensions")
    @classmethod
    def validate_extensions(cls, v: list[str]) -> list[str]:
        """Validate that every extension is a dot-prefixed suffix."""
        for ext in v:
            if not ext.startswith(".") or len(ext) < 2:
                msg = f"Extension must start with '.', got '{ext}'"
                raise ValueError(msg)
            # Matching compares against Path.suffix, which holds one dot only.
            if ext.count(".") != 1:
                msg = f"Extension must be a single suffix such as '.xml', got '{ext}'"
                raise ValueError(msg)
        return v


class LoaderConfigError(Exception):
    """Base exception for loader configuration errors."""


class LoaderConfigNotFoundError(LoaderConfigError):
    """Raised when the loader config file is not found."""


class LoaderConfigParseError(LoaderConfigError):
    """Raised when the loader config file cannot be parsed."""


def load_loader_config(path: Path | None = None) -> LoaderConfig:
    """Load loader configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default path.

    Returns:
        Validated LoaderConfig object.

    Raises:
        LoaderConfigNotFoundError: If the config file doesn't exist.
        LoaderConfigParseError: If the TOML syntax is invalid.
        LoaderConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_loader_config_path()

    if not config_path.exists():
        raise LoaderConfigNotFoundError(f"Loader config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise LoaderConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise LoaderConfigError(f"Failed to read loader config: {e}") from e

    try:
        return LoaderConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise LoaderConfigError(f"Invalid loader config content: {e}") from e


def get_effective_config(path: Path | None = None) -> LoaderConfig:
    """Load the loader config, falling back to defaults if none exists.

    Args:
        path: Path to the config file. If None, uses the default path.

    Returns:
        LoaderConfig from file, or default values.

    Raises:
        LoaderConfigError: If the file exists but is invalid.
    """
    try:
        return load_loader_config(path)
    except LoaderConfigNotFoundError:
        logger.debug("No loader config found, using defaults")
        return LoaderConfig()


def save_loader_config(config: LoaderConfig, path: Path | None = None) -> Path:
    """Save loader configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The LoaderConfig object to save.
        path: Path to save the config. If None, uses the default path.

    Returns:
        Path where the config was saved.

    Raises:
        LoaderConfigError: If the file cannot be written.
    """
    config_path = path or get_loader_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config.model_dump(), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise LoaderConfigError(f"Failed to write loader config: {e}") from e

    return config_path
