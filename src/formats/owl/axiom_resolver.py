"""
Axiom resolution.

OWL axioms (owl:annotatedSource / owl:annotatedProperty / owl:annotatedTarget)
annotate a single assertion. DUO uses them to order multi-valued assertions
(duo:ref_num) and to name which property of a referenced entity should be
shown (duo:field).
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from rdflib import OWL, BNode, Literal, URIRef
from rdflib.term import Node

from core.exceptions import MissingArgumentError
from .duo import ANNOTATION_FIELD, REF_NUM
from .graph_accessor import GraphAccessor, Resource
from .literals import term_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Axiom:
    """
    A reified assertion with its ordering key.

    Attributes:
        node: The axiom resource itself (usually a blank node).
        source: owl:annotatedSource.
        property: owl:annotatedProperty.
        target: owl:annotatedTarget, a literal or a resource.
        key: Explicit duo:ref_num, or one more than the previous axiom's key.
        field_override: duo:field annotation, the property of the target to project.
    """
    node: Resource
    source: Resource
    property: URIRef
    target: Optional[Node]
    key: int
    field_override: Optional[URIRef] = None


class AxiomResolver:
    """Finds and orders the axioms annotating (subject, property) assertions."""

    def __init__(self, accessor: GraphAccessor):
        self._accessor = accessor

    def axioms_for(self, subject: Optional[Resource], property_uri: Optional[URIRef]) -> List[Axiom]:
        """
        Return the axioms annotating `subject` / `property_uri`, sorted by key.

        Axioms without an explicit duo:ref_num get the previous key plus one,
        in graph order. The sort is stable, so ties keep encounter order.
        """
        if subject is None:
            raise MissingArgumentError("subject")
        if property_uri is None:
            raise MissingArgumentError("property_uri")

        axioms: List[Axiom] = []
        previous_key = 0
        for node in self._accessor.resources_with_predicate_value(OWL.annotatedSource, subject):
            if not self._accessor.has_property(node, OWL.annotatedProperty, property_uri):
                continue

            properties = self._accessor.direct_properties(node)
            key = self._explicit_key(node, properties.get(REF_NUM, []))
            if key is None:
                key = previous_key + 1
            previous_key = key

            targets = properties.get(OWL.annotatedTarget, [])
            axioms.append(Axiom(
                node=node,
                source=subject,
                property=property_uri,
                target=targets[0] if targets else None,
                key=key,
                field_override=self._field_override(properties.get(ANNOTATION_FIELD, [])),
            ))

        axioms.sort(key=lambda axiom: axiom.key)
        return axioms

    @staticmethod
    def _explicit_key(node: Resource, values: List[Node]) -> Optional[int]:
        if not values:
            return None
        raw = term_text(values[0])
        try:
            return int(raw)
        except (TypeError, ValueError):
            logger.warning(f"Axiom {node} has non-integer ref_num '{values[0]}'; numbering sequentially")
            return None

    @staticmethod
    def _field_override(values: List[Node]) -> Optional[URIRef]:
        for value in values:
            text = term_text(value)
            if text:
                return value if isinstance(value, URIRef) else URIRef(text.strip())
        return None

    def field_override_for(self, axiom: Optional[Axiom]) -> Optional[URIRef]:
        """Return the property of the axiom's target to project instead of its title."""
        if axiom is None:
            raise MissingArgumentError("axiom")
        return axiom.field_override

    def axiom_for_target(
        self,
        subject: Resource,
        property_uri: URIRef,
        target: Optional[Node],
    ) -> Optional[Axiom]:
        """Return the axiom annotating the assertion `subject property_uri target`, if any."""
        if target is None:
            raise MissingArgumentError("target")
        for axiom in self.axioms_for(subject, property_uri):
            if axiom.target == target:
                return axiom
        return None

    def ordered_literals(self, subject: Resource, property_uri: URIRef) -> List[Literal]:
        """
        Return the literal values of `property_uri`, axiom-annotated ones first.

        Literals without an axiom follow in encountered order; duplicates are dropped.
        """
        literals = self._accessor.literals_of(subject, property_uri)
        if not literals:
            return []

        result: List[Literal] = []
        for axiom in self.axioms_for(subject, property_uri):
            if isinstance(axiom.target, Literal) and axiom.target not in result:
                result.append(axiom.target)
        for literal in literals:
            if literal not in result:
                result.append(literal)
        return result

    def ordered_resources(self, subject: Resource, property_uri: URIRef) -> List[Resource]:
        """Return the resource values of `property_uri`, axiom-annotated ones first."""
        resources = self._accessor.resources_of(subject, property_uri)
        if not resources:
            return []

        result: List[Resource] = []
        for axiom in self.axioms_for(subject, property_uri):
            if isinstance(axiom.target, (URIRef, BNode)) and axiom.target not in result:
                result.append(axiom.target)
        for resource in resources:
            if resource not in result:
                result.append(resource)
        return result
