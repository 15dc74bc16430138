"""
Property routing.

Decides which declared ontology properties become content fields. A property
is routed when its rdfs:subPropertyOf closure reaches one of the DUO field
markers (duo:field, duo:literal_field, duo:reference_field).
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Set

from rdflib import RDFS, URIRef

from core.exceptions import MissingArgumentError
from .duo import FIELD_MARKERS, PropertyKind
from .graph_accessor import GraphAccessor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoutedProperty:
    """A property selected for field generation."""
    uri: URIRef
    kind: PropertyKind


class PropertyRouter:
    """
    Classifies declared properties into field categories.

    Candidates are collected from owl:AnnotationProperty, owl:DatatypeProperty
    and owl:ObjectProperty declarations, in that order and URI-sorted within
    each group.
    """

    def __init__(self, accessor: GraphAccessor):
        self._accessor = accessor
        self._routed: Optional[List[RoutedProperty]] = None

    def super_properties_of(self, property_uri: Optional[URIRef]) -> Set[URIRef]:
        """Return the transitive rdfs:subPropertyOf closure of `property_uri`."""
        if property_uri is None:
            raise MissingArgumentError("property_uri")

        closure: Set[URIRef] = set()
        frontier = [property_uri]
        while frontier:
            current = frontier.pop()
            for parent in self._accessor.resources_of(current, RDFS.subPropertyOf):
                if not isinstance(parent, URIRef) or parent in closure:
                    continue
                closure.add(parent)
                frontier.append(parent)
        closure.discard(property_uri)
        return closure

    def kind_of(self, property_uri: URIRef, declared: Optional[PropertyKind] = None) -> Optional[PropertyKind]:
        """
        Return the field kind of `property_uri`, or None if it is not routed.

        When the closure reaches several markers, the marker matching the
        declared OWL property type wins.
        """
        markers = self.super_properties_of(property_uri) & FIELD_MARKERS
        if not markers:
            return None
        if declared is not None and declared.marker in markers:
            return declared
        for kind in PropertyKind:
            if kind.marker in markers:
                if declared is not None:
                    logger.debug(
                        f"Property {property_uri} declared as {declared} but routed as {kind}"
                    )
                return kind
        return None

    def routed_properties(self) -> List[RoutedProperty]:
        """Return every routed property: annotation, then datatype, then object fields."""
        if self._routed is not None:
            return list(self._routed)

        routed: Dict[URIRef, RoutedProperty] = {}
        for declared in PropertyKind:
            candidates = sorted(
                (
                    p for p in self._accessor.all_resources_of_type(declared.declaration)
                    if isinstance(p, URIRef)
                ),
                key=str,
            )
            for prop in candidates:
                if prop in routed:
                    continue
                kind = self.kind_of(prop, declared)
                if kind is None:
                    continue
                routed[prop] = RoutedProperty(uri=prop, kind=kind)

        self._routed = list(routed.values())
        logger.info(f"Routed {len(self._routed)} properties to content fields")
        return list(self._routed)
