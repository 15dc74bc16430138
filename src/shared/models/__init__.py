"""
Shared data models for the OWL content importer.

This module contains the data classes that describe the generated content
model (vocabularies, tags, nodes, fields) and the conversion result.

Usage:
    from shared.models import VocabularySpec, NodeSpec, ConversionResult
"""

from .content_types import (
    FieldSpec,
    FieldValue,
    NodeSpec,
    ReferenceKind,
    TagSpec,
    VocabularySpec,
)
from .conversion import ConversionResult

__all__ = [
    # Content model
    "TagSpec",
    "VocabularySpec",
    "FieldSpec",
    "FieldValue",
    "NodeSpec",
    "ReferenceKind",
    # Conversion results
    "ConversionResult",
]
