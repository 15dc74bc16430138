"""
Field value mapping.

Turns the routed properties of a content resource into FieldSpecs. Literal
properties become lists of strings; resource properties become lists of
values whose shape depends on what the referenced resource is: another
node, an image, a file, a taxonomy tag, or a generic entity.
"""

import logging
from typing import Callable, Dict, List, NamedTuple, Optional

from rdflib import RDF, RDFS, URIRef

from constants import ContentDefaults
from core.exceptions import (
    MissingArgumentError,
    MissingFieldOverrideError,
    MixedReferenceKindsError,
    UnmappableReferenceError,
    UnsupportedReferenceError,
)
from shared.models import FieldSpec, FieldValue, ReferenceKind
from .axiom_resolver import AxiomResolver
from .class_hierarchy import ClassHierarchyResolver
from .duo import ALIAS, ALT, CONTENT, DOC, ENTITY, FILE, IMG, NODE, SUMMARY, TITLE, URI, VOCABULARY
from .graph_accessor import GraphAccessor, Resource
from .literals import literal_to_string, term_text
from .property_router import PropertyRouter
from .vocabulary_extractor import VocabularyExtractor

logger = logging.getLogger(__name__)


class MappedTarget(NamedTuple):
    """Value contributed by one referenced resource, and how it marks the field."""
    value: FieldValue
    reference_kind: Optional[ReferenceKind] = None
    is_entity: bool = False


class FieldValueMapper:
    """
    Produces the field descriptors of a content resource.

    Every resource gets a body field. Resources under duo:Vocabulary also
    get a tags field. Each routed property the resource carries adds one
    field, with values ordered by AxiomResolver.
    """

    def __init__(
        self,
        accessor: GraphAccessor,
        hierarchy: ClassHierarchyResolver,
        router: PropertyRouter,
        axioms: AxiomResolver,
        vocabularies: VocabularyExtractor,
        warn: Optional[Callable[[str], None]] = None,
    ):
        self._accessor = accessor
        self._hierarchy = hierarchy
        self._router = router
        self._axioms = axioms
        self._vocabularies = vocabularies
        self._warn = warn or logger.warning

    # ------------------------------------------------------------------
    # Resource properties
    # ------------------------------------------------------------------

    def text_of(self, resource: Resource, property_uri: URIRef) -> Optional[str]:
        """Return the lexical form of the first value of `property_uri`."""
        if resource is None:
            raise MissingArgumentError("resource")
        if property_uri is None:
            raise MissingArgumentError("property_uri")

        values = self._accessor.direct_properties(resource).get(property_uri)
        if not values:
            return None
        return term_text(values[0])

    def title_of(self, resource: Resource) -> str:
        return self.text_of(resource, TITLE) or self._accessor.local_name(resource)

    def alias_of(self, resource: Resource) -> Optional[str]:
        return self.text_of(resource, ALIAS)

    # ------------------------------------------------------------------
    # Fixed fields
    # ------------------------------------------------------------------

    def body_field(self, resource: Resource) -> FieldSpec:
        return FieldSpec(
            field_name=ContentDefaults.BODY_FIELD_NAME,
            values=[{
                "value": self.text_of(resource, CONTENT),
                "summary": self.text_of(resource, SUMMARY),
                "format": ContentDefaults.BODY_FORMAT,
            }],
        )

    def is_tagged(self, resource: Resource) -> bool:
        """Return True if the resource sits under duo:Vocabulary by type or subclass."""
        return (
            self._hierarchy.is_transitive_instance_of(resource, VOCABULARY)
            or self._hierarchy.has_transitive_subclass(VOCABULARY, resource)
        )

    def tags_field(self, resource: Resource) -> Optional[FieldSpec]:
        """
        Return the tags field of `resource`, or None if it carries no tags.

        Tags are the rdf:type and rdfs:subClassOf targets below duo:Vocabulary.
        """
        if not self.is_tagged(resource):
            return None

        candidates = (
            self._accessor.resources_of(resource, RDF.type)
            + self._accessor.resources_of(resource, RDFS.subClassOf)
        )
        values: List[FieldValue] = []
        for tag in candidates:
            if not self._hierarchy.has_transitive_subclass(VOCABULARY, tag):
                continue
            vocabulary = self._vocabularies.vocabulary_for_tag(tag)
            if vocabulary is None:
                self._warn(
                    f"{self._accessor.local_name(resource)} is typed with vocabulary "
                    f"{self._accessor.local_name(tag)} itself, not one of its tags"
                )
                continue
            value = self._tag_value(vocabulary, tag)
            if value not in values:
                values.append(value)

        return FieldSpec(
            field_name=ContentDefaults.TAGS_FIELD_NAME,
            values=values,
            reference_kind=ReferenceKind.TAXONOMY_TERM,
        )

    def _tag_value(self, vocabulary: Resource, tag: Resource) -> Dict[str, Optional[str]]:
        return {
            "vid": self._accessor.local_name(vocabulary),
            "name": self._accessor.local_name(tag),
        }

    # ------------------------------------------------------------------
    # Routed property fields
    # ------------------------------------------------------------------

    def map_fields(self, resource: Optional[Resource]) -> List[FieldSpec]:
        """Return all fields of a content resource."""
        if resource is None:
            raise MissingArgumentError("resource")

        fields = [self.body_field(resource)]

        tags = self.tags_field(resource)
        if tags is not None:
            fields.append(tags)

        for routed in self._router.routed_properties():
            if not self._accessor.has_property(resource, routed.uri):
                continue
            node_field = self.map_property(resource, routed.uri)
            if node_field is not None:
                fields.append(node_field)

        return fields

    def map_property(self, resource: Resource, property_uri: URIRef) -> Optional[FieldSpec]:
        """Return the field for one routed property, or None if it has no values."""
        if resource is None:
            raise MissingArgumentError("resource")
        if property_uri is None:
            raise MissingArgumentError("property_uri")

        field_name = self._accessor.local_name(property_uri)

        literals = self._axioms.ordered_literals(resource, property_uri)
        if literals:
            return FieldSpec(
                field_name=field_name,
                values=[literal_to_string(literal) for literal in literals],
            )

        targets = self._axioms.ordered_resources(resource, property_uri)
        if targets:
            return self.resource_field(resource, property_uri, targets)

        return None

    def resource_field(
        self,
        resource: Resource,
        property_uri: URIRef,
        targets: List[Resource],
    ) -> FieldSpec:
        """Return a field with one value per referenced resource, in target order."""
        node_field = FieldSpec(field_name=self._accessor.local_name(property_uri))

        for target in targets:
            mapped = self.map_target(resource, property_uri, target)
            node_field.values.append(mapped.value)

            if mapped.reference_kind is None:
                continue
            if node_field.reference_kind is None:
                node_field.reference_kind = mapped.reference_kind
                node_field.is_entity = mapped.is_entity
            elif node_field.reference_kind != mapped.reference_kind:
                raise MixedReferenceKindsError(
                    str(resource),
                    str(property_uri),
                    str(target),
                    (node_field.reference_kind, mapped.reference_kind),
                )

        return node_field

    def map_target(self, resource: Resource, property_uri: URIRef, target: Resource) -> MappedTarget:
        """
        Map one referenced resource to a field value.

        Precedence: Node, Img, File, Doc, tag, Entity.

        Raises:
            UnsupportedReferenceError: If the target is a Doc.
            MissingFieldOverrideError: If an Entity target's axiom lacks duo:field.
            UnmappableReferenceError: If the target matches no known kind.
        """
        if target is None:
            raise MissingArgumentError("target")

        if self._hierarchy.is_transitive_instance_of(target, NODE):
            return MappedTarget(self.title_of(target), ReferenceKind.NODE)

        if self._hierarchy.is_transitive_instance_of(target, IMG):
            return MappedTarget(
                {
                    "alt": self.text_of(target, ALT),
                    "title": self.text_of(target, TITLE),
                    "uri": self.text_of(target, URI),
                },
                ReferenceKind.FILE,
                is_entity=True,
            )

        if self._hierarchy.is_transitive_instance_of(target, FILE):
            return MappedTarget(
                {
                    "uri": self.text_of(target, URI),
                    "title": self.text_of(target, TITLE),
                },
                ReferenceKind.FILE,
                is_entity=True,
            )

        if self._hierarchy.is_transitive_instance_of(target, DOC):
            raise UnsupportedReferenceError(str(resource), str(property_uri), str(target), kind="Doc")

        vocabulary = self._vocabularies.vocabulary_for_tag(target)
        if vocabulary is not None:
            return MappedTarget(self._tag_value(vocabulary, target), ReferenceKind.TAXONOMY_TERM)

        if self._hierarchy.is_transitive_instance_of(target, ENTITY):
            return MappedTarget(self._entity_value(resource, property_uri, target))

        raise UnmappableReferenceError(str(resource), str(property_uri), str(target))

    def _entity_value(self, resource: Resource, property_uri: URIRef, target: Resource) -> Optional[str]:
        axiom = self._axioms.axiom_for_target(resource, property_uri, target)
        override = self._axioms.field_override_for(axiom) if axiom is not None else None
        if override is None:
            raise MissingFieldOverrideError(str(resource), str(property_uri), str(target))

        value = self.text_of(target, override)
        if value is None:
            self._warn(
                f"Entity {self._accessor.local_name(target)} has no value for "
                f"{self._accessor.local_name(override)} (referenced by "
                f"{self._accessor.local_name(resource)})"
            )
        return value
