"""
Protocol definitions for content sinks.

A sink receives the generated content model in dependency order:
vocabularies, their tags, tag parents, then nodes, then the node-to-node
references that could only be resolved once every node exists.

Protocols:
    VocabularySinkProtocol: Persist vocabularies and tags
    NodeSinkProtocol: Persist nodes and their references
"""

from typing import Any, List, Protocol, runtime_checkable

from shared.models import NodeSpec, TagSpec

__all__ = [
    "VocabularySinkProtocol",
    "NodeSinkProtocol",
    "is_vocabulary_sink",
    "is_node_sink",
]


@runtime_checkable
class VocabularySinkProtocol(Protocol):
    """
    Protocol for persisting vocabularies and their tags.

    Tags are created before any parent links so that every parent name can
    be resolved inside its vocabulary.
    """

    def create_vocabulary(self, vid: str, name: str) -> None:
        """
        Create a vocabulary.

        Raises:
            VocabularyConflictError: If `vid` exists and overwriting is disabled.
        """
        ...

    def create_tag(self, vid: str, name: str) -> int:
        """Create a tag in vocabulary `vid` and return its id."""
        ...

    def set_tag_parents(self, vid: str, tags: List[TagSpec]) -> None:
        """Link every tag of `vid` to its parent tags."""
        ...

    def rollback(self) -> None:
        """Remove everything created since the sink was opened."""
        ...


@runtime_checkable
class NodeSinkProtocol(Protocol):
    """Protocol for persisting nodes."""

    def create_node(self, node: NodeSpec) -> int:
        """Create a node and return its id. Node references are deferred."""
        ...

    def insert_node_references(self) -> None:
        """
        Resolve deferred node references by title.

        Raises:
            UnresolvedNodeReferenceError: If a referenced title has no node.
        """
        ...

    def rollback(self) -> None:
        """Remove everything created since the sink was opened."""
        ...


def is_vocabulary_sink(obj: Any) -> bool:
    """Check if object implements VocabularySinkProtocol."""
    return isinstance(obj, VocabularySinkProtocol)


def is_node_sink(obj: Any) -> bool:
    """Check if object implements NodeSinkProtocol."""
    return isinstance(obj, NodeSinkProtocol)
