"""
Conversion result tracking.

ConversionResult bundles the vocabularies and nodes generated from one
ontology together with the warnings raised along the way.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .content_types import NodeSpec, VocabularySpec


@dataclass
class ConversionResult:
    """
    Result of converting an ontology into a content model.

    Attributes:
        vocabularies: Vocabulary specs, fully materialized before any node.
        nodes: Node specs, one per content resource.
        warnings: Non-fatal oddities noticed during conversion.
        triple_count: Number of triples in the source graph.
    """
    vocabularies: List[VocabularySpec] = field(default_factory=list)
    nodes: List[NodeSpec] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    triple_count: int = 0

    @property
    def tag_count(self) -> int:
        return sum(len(vocabulary.tags) for vocabulary in self.vocabularies)

    def bundle_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for node in self.nodes:
            counts[node.bundle] = counts.get(node.bundle, 0) + 1
        return counts

    def get_summary(self) -> str:
        """Return a human-readable summary of the conversion."""
        lines = [
            "Conversion Summary:",
            f"  Triples: {self.triple_count}",
            f"  Vocabularies: {len(self.vocabularies)}",
            f"  Tags: {self.tag_count}",
            f"  Nodes: {len(self.nodes)}",
        ]
        for bundle, count in sorted(self.bundle_counts().items()):
            lines.append(f"    {bundle}: {count}")
        if self.warnings:
            lines.append(f"  Warnings: {len(self.warnings)}")
            for warning in self.warnings[:10]:
                lines.append(f"    - {warning}")
            if len(self.warnings) > 10:
                lines.append(f"    ... and {len(self.warnings) - 10} more")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vocabularies": [v.to_dict() for v in self.vocabularies],
            "nodes": [n.to_dict() for n in self.nodes],
            "warnings": list(self.warnings),
            "triple_count": self.triple_count,
        }
