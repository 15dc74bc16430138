"""
Content sinks.

Usage:
    from core.store import JSONContentStore

    store = JSONContentStore("content.json", overwrite=True)
"""

from .content_store import ContentStore, JSONContentStore
from .protocols import (
    NodeSinkProtocol,
    VocabularySinkProtocol,
    is_node_sink,
    is_vocabulary_sink,
)

__all__ = [
    "ContentStore",
    "JSONContentStore",
    "VocabularySinkProtocol",
    "NodeSinkProtocol",
    "is_vocabulary_sink",
    "is_node_sink",
]
