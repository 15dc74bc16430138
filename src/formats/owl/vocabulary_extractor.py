"""
Vocabulary extraction.

Every direct subclass of duo:Vocabulary becomes a vocabulary; its transitive
subclasses become tags, linked to their parents through rdfs:subClassOf.
"""

import logging
from typing import List, Optional

from rdflib import URIRef

from core.exceptions import MissingArgumentError
from shared.models import TagSpec, VocabularySpec
from .class_hierarchy import ClassHierarchyResolver
from .duo import VOCABULARY
from .graph_accessor import GraphAccessor, Resource

logger = logging.getLogger(__name__)


class VocabularyExtractor:
    """Builds vocabulary/tag trees from the class hierarchy under duo:Vocabulary."""

    def __init__(self, accessor: GraphAccessor, hierarchy: ClassHierarchyResolver):
        self._accessor = accessor
        self._hierarchy = hierarchy

    def vocabulary_classes(self) -> List[URIRef]:
        """Return the direct subclasses of duo:Vocabulary, sorted by URI."""
        return self._hierarchy.subclasses_of(VOCABULARY)

    def parent_tags(self, tag: Optional[Resource]) -> List[str]:
        """
        Return the local names of the direct superclasses of `tag`.

        Superclasses that are themselves vocabulary classes are skipped, so a
        vocabulary root never appears as a tag parent.
        """
        if tag is None:
            raise MissingArgumentError("tag")
        return [
            self._accessor.local_name(parent)
            for parent in self._hierarchy.superclasses_of(tag)
            if not self._hierarchy.has_direct_superclass(parent, VOCABULARY)
        ]

    def extract_vocabulary(self, vocabulary_class: URIRef) -> VocabularySpec:
        vid = self._accessor.local_name(vocabulary_class)
        tags = self._hierarchy.transitive_subclasses_of(vocabulary_class)
        logger.debug(f"Vocabulary {vid}: {len(tags)} terms")

        return VocabularySpec(
            vid=vid,
            name=vid,
            tags=[
                TagSpec(name=self._accessor.local_name(tag), parents=self.parent_tags(tag))
                for tag in tags
            ],
        )

    def extract(self) -> List[VocabularySpec]:
        """Return one VocabularySpec per direct subclass of duo:Vocabulary."""
        vocabularies = [self.extract_vocabulary(cls) for cls in self.vocabulary_classes()]
        logger.info(
            f"Extracted {len(vocabularies)} vocabularies with "
            f"{sum(len(v.tags) for v in vocabularies)} tags"
        )
        return vocabularies

    def vocabulary_for_tag(self, tag: Optional[Resource]) -> Optional[URIRef]:
        """Return the vocabulary class that contains `tag`, or None if it is not a tag."""
        if tag is None:
            raise MissingArgumentError("tag")
        for vocabulary in self.vocabulary_classes():
            if self._hierarchy.has_transitive_subclass(vocabulary, tag):
                return vocabulary
        return None
