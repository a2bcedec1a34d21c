"""Database file discovery.

This module provides path classification, the recursive tree walker,
multi-root load coordination and the diagnostic reporter used for
warnings and load errors.
"""

from dbloader.discovery.classifier import classify
from dbloader.discovery.coordinator import LoadCoordinator
from dbloader.discovery.errors import (
    LoadError,
    LoadErrorKind,
    NotAccessibleError,
    UnderlyingError,
    UnexpectedTypeError,
)
from dbloader.discovery.models import DiscoveredFile, EntryType, RootSpec
from dbloader.discovery.reporter import LOG_DOMAIN, DiagnosticReporter
from dbloader.discovery.walker import TreeWalker, suffix_matcher

__all__ = [
    "LOG_DOMAIN",
    "DiagnosticReporter",
    "DiscoveredFile",
    "EntryType",
    "LoadCoordinator",
    "LoadError",
    "LoadErrorKind",
    "NotAccessibleError",
    "RootSpec",
    "TreeWalker",
    "UnderlyingError",
    "UnexpectedTypeError",
    "classify",
    "suffix_matcher",
]
