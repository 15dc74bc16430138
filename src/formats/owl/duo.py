"""
DUO ontology convention.

The importer only understands ontologies that follow the DUO schema: two
anchor classes (Vocabulary and Node), a family of marker classes used to
dispatch referenced resources, and a set of annotation properties carrying
titles, aliases, body text, ordering keys and field overrides.
"""

from enum import Enum
from typing import Dict, Optional

from rdflib import OWL, Namespace, URIRef

DUO = Namespace("http://www.lha.org/duo#")

# Anchor classes
VOCABULARY = DUO.Vocabulary
NODE = DUO.Node

# Marker classes for target-kind dispatch
IMG = DUO.Img
FILE = DUO.File
DOC = DUO.Doc
ENTITY = DUO.Entity

# Node properties
TITLE = DUO.title
ALIAS = DUO.alias
CONTENT = DUO.content
SUMMARY = DUO.summary
URI = DUO.uri
ALT = DUO.alt

# Axiom annotations
REF_NUM = DUO.ref_num

# Field markers (super-properties of routed properties)
ANNOTATION_FIELD = DUO.field
DATATYPE_FIELD = DUO.literal_field
OBJECT_FIELD = DUO.reference_field


class PropertyKind(str, Enum):
    """Field category of a routed ontology property."""
    ANNOTATION_FIELD = "annotation"
    DATATYPE_FIELD = "datatype"
    OBJECT_FIELD = "object"

    def __str__(self) -> str:
        return self.value

    @property
    def marker(self) -> URIRef:
        """DUO super-property that routes properties of this kind."""
        return _KIND_MARKERS[self]

    @property
    def declaration(self) -> URIRef:
        """OWL property type under which properties of this kind are declared."""
        return _KIND_DECLARATIONS[self]

    @classmethod
    def from_marker(cls, marker: URIRef) -> Optional["PropertyKind"]:
        for kind, kind_marker in _KIND_MARKERS.items():
            if kind_marker == marker:
                return kind
        return None


_KIND_MARKERS: Dict[PropertyKind, URIRef] = {
    PropertyKind.ANNOTATION_FIELD: ANNOTATION_FIELD,
    PropertyKind.DATATYPE_FIELD: DATATYPE_FIELD,
    PropertyKind.OBJECT_FIELD: OBJECT_FIELD,
}

_KIND_DECLARATIONS: Dict[PropertyKind, URIRef] = {
    PropertyKind.ANNOTATION_FIELD: OWL.AnnotationProperty,
    PropertyKind.DATATYPE_FIELD: OWL.DatatypeProperty,
    PropertyKind.OBJECT_FIELD: OWL.ObjectProperty,
}

FIELD_MARKERS = frozenset(_KIND_MARKERS.values())
