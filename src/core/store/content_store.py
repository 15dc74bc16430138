"""
Content stores.

ContentStore keeps vocabularies, tags, nodes and file entities in memory and
implements both sink protocols. JSONContentStore persists the same snapshot
to a JSON file so that vocabulary conflicts and overwrites behave the same
across runs.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from core.exceptions import (
    MissingArgumentError,
    UnresolvedNodeReferenceError,
    VocabularyConflictError,
)
from shared.models import FieldSpec, NodeSpec, ReferenceKind, TagSpec

logger = logging.getLogger(__name__)


class ContentStore:
    """
    In-memory content store.

    Every entity created through the sink methods is tracked so that
    rollback() can remove it again. Vocabularies that existed before the run
    are never removed by a rollback; with `overwrite` their tags are cleared
    when the vocabulary is recreated.
    """

    ENTITY_TYPES = ("vocabulary", "tag", "node", "file")

    def __init__(self, overwrite: bool = False):
        self.overwrite = overwrite
        self.vocabularies: Dict[str, Dict[str, Any]] = {}
        self.tags: Dict[int, Dict[str, Any]] = {}
        self.nodes: Dict[int, Dict[str, Any]] = {}
        self.files: Dict[int, Dict[str, Any]] = {}
        self._created: Dict[str, List[Any]] = {entity_type: [] for entity_type in self.ENTITY_TYPES}
        self._pending_references: List[Tuple[int, str, List[Optional[str]]]] = []
        self._next_ids: Dict[str, int] = {"tag": 1, "node": 1, "file": 1}

    # ------------------------------------------------------------------
    # Counters
    # ------------------------------------------------------------------

    def count_created_vocabularies(self) -> int:
        return len(self._created["vocabulary"])

    def count_created_tags(self) -> int:
        return len(self._created["tag"])

    def count_created_nodes(self) -> int:
        return len(self._created["node"])

    def count_created_files(self) -> int:
        return len(self._created["file"])

    def _next_id(self, entity_type: str) -> int:
        entity_id = self._next_ids[entity_type]
        self._next_ids[entity_type] = entity_id + 1
        return entity_id

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def vocabulary_exists(self, vid: str) -> bool:
        if vid is None:
            raise MissingArgumentError("vid")
        return vid in self.vocabularies

    def search_tag_id(self, vid: str, name: str) -> Optional[int]:
        """Return the id of tag `name` in vocabulary `vid`, or None."""
        if vid is None:
            raise MissingArgumentError("vid")
        if name is None:
            raise MissingArgumentError("name")
        for tid, tag in self.tags.items():
            if tag["vid"] == vid and tag["name"] == name:
                return tid
        return None

    def search_node_id(self, title: str) -> Optional[int]:
        """Return the id of the node titled `title`, preferring nodes created in this run."""
        created = [nid for nid in self._created["node"] if self.nodes[nid]["title"] == title]
        if created:
            return created[0]
        for nid, node in self.nodes.items():
            if node["title"] == title:
                return nid
        return None

    # ------------------------------------------------------------------
    # Vocabulary sink
    # ------------------------------------------------------------------

    def create_vocabulary(self, vid: str, name: str) -> None:
        if vid is None:
            raise MissingArgumentError("vid")
        if name is None:
            raise MissingArgumentError("name")

        if self.vocabulary_exists(vid):
            if not self.overwrite:
                raise VocabularyConflictError(vid)
            self._clear_vocabulary(vid)
            return

        self.vocabularies[vid] = {"vid": vid, "name": name}
        self._created["vocabulary"].append(vid)
        logger.debug(f"Created vocabulary {vid}")

    def _clear_vocabulary(self, vid: str) -> None:
        tids = [tid for tid, tag in self.tags.items() if tag["vid"] == vid]
        for tid in tids:
            del self.tags[tid]
        logger.info(f"Cleared {len(tids)} existing tags of vocabulary {vid}")

    def create_tag(self, vid: str, name: str) -> int:
        if vid is None:
            raise MissingArgumentError("vid")
        if not name:
            raise MissingArgumentError("name")

        tid = self._next_id("tag")
        self.tags[tid] = {"tid": tid, "vid": vid, "name": name, "parents": []}
        self._created["tag"].append(tid)
        return tid

    def set_tag_parents(self, vid: str, tags: List[TagSpec]) -> None:
        if vid is None:
            raise MissingArgumentError("vid")

        for tag in tags or []:
            if not tag.parents:
                continue
            tid = self.search_tag_id(vid, tag.name)
            if tid is None:
                logger.warning(f"Tag {tag.name} not found in vocabulary {vid}")
                continue
            self.tags[tid]["parents"] = [self.search_tag_id(vid, parent) for parent in tag.parents]

    # ------------------------------------------------------------------
    # Node sink
    # ------------------------------------------------------------------

    def create_node(self, node: NodeSpec) -> int:
        if node is None:
            raise MissingArgumentError("node")

        nid = self._next_id("node")
        fields: Dict[str, List[Any]] = {}
        for node_field in node.fields:
            if node_field.reference_kind == ReferenceKind.NODE:
                self._pending_references.append((nid, node_field.field_name, list(node_field.values)))
                fields[node_field.field_name] = []
            else:
                fields[node_field.field_name] = self._field_values(node_field)

        self.nodes[nid] = {
            "nid": nid,
            "title": node.title,
            "type": node.bundle,
            "alias": node.alias,
            "fields": fields,
        }
        self._created["node"].append(nid)
        logger.debug(f"Created node {nid} ({node.bundle}): {node.title}")
        return nid

    def _field_values(self, node_field: FieldSpec) -> List[Any]:
        if node_field.reference_kind == ReferenceKind.TAXONOMY_TERM:
            return [
                {"target_id": self.search_tag_id(value["vid"], value["name"])}
                for value in node_field.values
            ]
        if node_field.is_entity:
            return [self._create_file(value) for value in node_field.values]
        return list(node_field.values)

    def _create_file(self, value: Dict[str, Optional[str]]) -> Dict[str, Any]:
        fid = self._next_id("file")
        self.files[fid] = {"fid": fid, "uri": value.get("uri")}
        self._created["file"].append(fid)

        reference: Dict[str, Any] = {"target_id": fid}
        for key in ("alt", "title"):
            if key in value:
                reference[key] = value[key]
        return reference

    def insert_node_references(self) -> None:
        for nid, field_name, titles in self._pending_references:
            targets = []
            for title in titles:
                target_id = self.search_node_id(title) if title is not None else None
                if target_id is None:
                    raise UnresolvedNodeReferenceError(self.nodes[nid]["title"], field_name, str(title))
                targets.append({"target_id": target_id})
            self.nodes[nid]["fields"][field_name] = targets
        logger.info(f"Resolved node references in {len(self._pending_references)} fields")
        self._pending_references = []

    # ------------------------------------------------------------------
    # Rollback and snapshots
    # ------------------------------------------------------------------

    def rollback(self) -> None:
        """Delete every entity created by this store instance."""
        for nid in self._created["node"]:
            self.nodes.pop(nid, None)
        for fid in self._created["file"]:
            self.files.pop(fid, None)
        for tid in self._created["tag"]:
            self.tags.pop(tid, None)
        for vid in self._created["vocabulary"]:
            self.vocabularies.pop(vid, None)

        logger.warning(
            f"Rolled back {self.count_created_vocabularies()} vocabularies, "
            f"{self.count_created_tags()} tags and {self.count_created_nodes()} nodes"
        )
        self._created = {entity_type: [] for entity_type in self.ENTITY_TYPES}
        self._pending_references = []

    def get_summary(self) -> str:
        return (
            f"Created {self.count_created_vocabularies()} vocabularies, "
            f"{self.count_created_tags()} tags, {self.count_created_nodes()} nodes "
            f"and {self.count_created_files()} files"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vocabularies": list(self.vocabularies.values()),
            "tags": list(self.tags.values()),
            "nodes": list(self.nodes.values()),
            "files": list(self.files.values()),
        }

    def load_dict(self, data: Dict[str, Any]) -> None:
        """Replace the store contents with a snapshot produced by to_dict()."""
        self.vocabularies = {v["vid"]: dict(v) for v in data.get("vocabularies", [])}
        self.tags = {int(t["tid"]): dict(t) for t in data.get("tags", [])}
        self.nodes = {int(n["nid"]): dict(n) for n in data.get("nodes", [])}
        self.files = {int(f["fid"]): dict(f) for f in data.get("files", [])}
        self._next_ids = {
            "tag": max(self.tags, default=0) + 1,
            "node": max(self.nodes, default=0) + 1,
            "file": max(self.files, default=0) + 1,
        }


class JSONContentStore(ContentStore):
    """ContentStore backed by a JSON file."""

    def __init__(self, path: Union[str, Path], overwrite: bool = False):
        super().__init__(overwrite=overwrite)
        self.path = Path(path)
        if self.path.exists():
            self.load()

    def load(self) -> None:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in content store {self.path}: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Content store {self.path} must contain a JSON object")

        self.load_dict(data)
        logger.info(
            f"Loaded content store {self.path}: {len(self.vocabularies)} vocabularies, "
            f"{len(self.nodes)} nodes"
        )

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)
        logger.info(f"Saved content store to {self.path}")
