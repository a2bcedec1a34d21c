"""Root resolution for load passes.

Builds the ordered list of RootSpec values from the loader config and
the environment, and wires a LoadCoordinator for that config.
"""

from collections.abc import Sequence

from dbloader.core.config import LoaderConfig
from dbloader.core.paths import get_local_dir, get_system_dir, get_user_dir
from dbloader.discovery.coordinator import LoadCoordinator
from dbloader.discovery.models import RootSpec
from dbloader.discovery.reporter import DiagnosticReporter
from dbloader.discovery.walker import TreeWalker, suffix_matcher


def get_standard_roots(config: LoaderConfig | None = None) -> list[RootSpec]:
    """Get the standard roots enabled in the config.

    Standard roots are optional: an absent or unreadable one is skipped
    with a warning. Order is system, local, user so that later roots
    can override earlier ones downstream.

    Args:
        config: Loader config. Defaults are used if None.

    Returns:
        Enabled standard roots in priority order.
    """
    config = config or LoaderConfig()
    roots: list[RootSpec] = []

    if config.include_system:
        roots.append(RootSpec(str(get_system_dir()), tolerate_missing=True, label="system"))
    if config.include_local:
        roots.append(RootSpec(str(get_local_dir()), tolerate_missing=True, label="local"))
    if config.include_user:
        roots.append(RootSpec(str(get_user_dir()), tolerate_missing=True, label="user"))

    return roots


def get_explicit_roots(paths: Sequence[str]) -> list[RootSpec]:
    """Build required roots from caller-supplied paths.

    Args:
        paths: Paths that must be readable.

    Returns:
        One intolerant RootSpec per path, in the given order.
    """
    return [RootSpec(path, tolerate_missing=False, label="explicit") for path in paths]


def get_configured_roots(config: LoaderConfig | None = None) -> list[RootSpec]:
    """Get the standard roots followed by the config's extra roots.

    Args:
        config: Loader config. Defaults are used if None.

    Returns:
        All roots to walk for this config, in priority order.
    """
    config = config or LoaderConfig()
    return [*get_standard_roots(config), *get_explicit_roots(config.extra_roots)]


def build_coordinator(
    config: LoaderConfig | None = None,
    *,
    reporter: DiagnosticReporter | None = None,
) -> LoadCoordinator:
    """Create a LoadCoordinator configured from a LoaderConfig.

    Args:
        config: Loader config. Defaults are used if None.
        reporter: Diagnostic reporter shared by the walker.

    Returns:
        Ready-to-use LoadCoordinator.
    """
    config = config or LoaderConfig()
    walker = TreeWalker(
        suffix_matcher(config.extensions),
        reporter=reporter,
        max_link_depth=config.max_link_depth,
    )
    return LoadCoordinator(walker, max_workers=config.max_workers)
