"""
Core utilities and cross-cutting concerns for the OWL content importer.

This module provides shared infrastructure used by the OWL transformation
engine and the CLI:

- Content model errors (ContentModelError and subclasses)
- Import configuration (ImportConfig)
- Input validation (InputValidator)
- Content sinks (ContentStore, JSONContentStore, sink protocols)

Usage:
    from core import ImportConfig, InputValidator, JSONContentStore
    from core.exceptions import ContentModelError
"""

from .config import ImportConfig
from .exceptions import (
    ClassHierarchyCycleError,
    ContentModelError,
    MissingArgumentError,
    MissingFieldOverrideError,
    MixedReferenceKindsError,
    UnmappableReferenceError,
    UnresolvedBundleError,
    UnresolvedNodeReferenceError,
    UnsupportedReferenceError,
    VocabularyConflictError,
)
from .store import (
    ContentStore,
    JSONContentStore,
    NodeSinkProtocol,
    VocabularySinkProtocol,
)
from .validators import InputValidator

__all__ = [
    # Configuration
    "ImportConfig",
    # Errors
    "ContentModelError",
    "MissingArgumentError",
    "ClassHierarchyCycleError",
    "UnresolvedBundleError",
    "UnmappableReferenceError",
    "UnsupportedReferenceError",
    "MixedReferenceKindsError",
    "MissingFieldOverrideError",
    "VocabularyConflictError",
    "UnresolvedNodeReferenceError",
    # Content sinks
    "ContentStore",
    "JSONContentStore",
    "VocabularySinkProtocol",
    "NodeSinkProtocol",
    # Input validation
    "InputValidator",
]
