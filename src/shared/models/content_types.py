"""
Content model data types.

This module defines the structures produced by the OWL importer: vocabularies
with hierarchical tags, and nodes with typed, possibly-referencing fields.
They are derived fresh for every import run and handed to persistence sinks.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

FieldValue = Union[None, str, Dict[str, Optional[str]]]


class ReferenceKind(str, Enum):
    """What the values of a reference field point at."""
    NODE = "node"
    TAXONOMY_TERM = "taxonomy_term"
    FILE = "file"

    def __str__(self) -> str:
        return self.value


@dataclass
class TagSpec:
    """
    A taxonomy term inside a vocabulary.

    Attributes:
        name: Local name of the tag class.
        parents: Names of parent tags in the same vocabulary. The vocabulary's
            own root class is never listed.

    Example:
        >>> TagSpec(name="Closed", parents=["Open"]).to_dict()
        {'name': 'Closed', 'parents': ['Open']}
    """
    name: str
    parents: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "parents": list(self.parents)}


@dataclass
class VocabularySpec:
    """
    A vocabulary derived from a direct subclass of duo:Vocabulary.

    Attributes:
        vid: Vocabulary identifier (local name of the class).
        name: Display name.
        tags: Tags in discovery order, parents before their children.
    """
    vid: str
    name: str
    tags: List[TagSpec] = field(default_factory=list)

    def tag_names(self) -> List[str]:
        return [tag.name for tag in self.tags]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vid": self.vid,
            "name": self.name,
            "tags": [tag.to_dict() for tag in self.tags],
        }


@dataclass
class FieldSpec:
    """
    A single field of a node.

    Attributes:
        field_name: Local name of the source property, or a fixed name
            ("body", "field_tags").
        values: One entry per literal or referenced resource, in source order.
        reference_kind: Set when the values reference nodes, tags or files.
        is_entity: True when each value describes a file entity to create.
    """
    field_name: str
    values: List[FieldValue] = field(default_factory=list)
    reference_kind: Optional[ReferenceKind] = None
    is_entity: bool = False

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "field_name": self.field_name,
            "value": list(self.values),
        }
        if self.reference_kind:
            result["references"] = self.reference_kind.value
        if self.is_entity:
            result["entity"] = "file"
        return result


@dataclass
class NodeSpec:
    """
    A content item derived from an individual (or class) under duo:Node.

    Attributes:
        title: duo:title, falling back to the local name.
        bundle: Normalized local name of the matching direct Node subclass.
        alias: duo:alias, if any.
        fields: Body, tags and routed property fields.
        uri: IRI of the source resource, for error reporting.
    """
    title: str
    bundle: str
    alias: Optional[str] = None
    fields: List[FieldSpec] = field(default_factory=list)
    uri: Optional[str] = None

    def get_field(self, field_name: str) -> Optional[FieldSpec]:
        for node_field in self.fields:
            if node_field.field_name == field_name:
                return node_field
        return None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "title": self.title,
            "type": self.bundle,
            "alias": self.alias,
            "fields": [f.to_dict() for f in self.fields],
        }
        if self.uri:
            result["uri"] = self.uri
        return result
