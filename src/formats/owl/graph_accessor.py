"""
Read-only graph access for the OWL content importer.

Every resolver, extractor and mapper receives a GraphAccessor explicitly
instead of reaching for a shared graph. The rdflib implementation wraps an
already parsed Graph and never mutates it.
"""

import logging
import re
from typing import Dict, List, Optional, Protocol, Union, runtime_checkable

from rdflib import RDF, BNode, Graph, Literal, URIRef
from rdflib.term import Node

logger = logging.getLogger(__name__)

Resource = Union[URIRef, BNode]

_LOCAL_NAME_SPLIT = re.compile(r"[#/]")


@runtime_checkable
class GraphAccessor(Protocol):
    """
    Protocol for typed read-only queries over an ontology graph.

    Values are returned as rdflib terms; absence is an empty list or None,
    never an exception.
    """

    def resources_with_predicate_value(self, predicate: URIRef, value: Node) -> List[Resource]:
        """Return subjects having `predicate` with object `value`, in graph order."""
        ...

    def all_resources_of_type(self, type_uri: URIRef) -> List[Resource]:
        """Return all resources typed `type_uri`, in graph order."""
        ...

    def direct_properties(self, resource: Resource) -> Dict[URIRef, List[Node]]:
        """Return every predicate of `resource` mapped to its objects."""
        ...

    def literals_of(self, resource: Resource, property_uri: URIRef) -> List[Literal]:
        """Return literal objects of `property_uri`, in encountered order."""
        ...

    def resources_of(self, resource: Resource, property_uri: URIRef) -> List[Resource]:
        """Return resource objects of `property_uri`, in encountered order."""
        ...

    def has_property(
        self,
        resource: Resource,
        property_uri: URIRef,
        value: Optional[Node] = None,
    ) -> bool:
        """Return True if `resource` has `property_uri` (with `value`, when given)."""
        ...

    def is_instance_of(self, resource: Resource, type_uri: URIRef) -> bool:
        """Return True if `resource` is directly typed `type_uri`."""
        ...

    def local_name(self, resource: Node) -> str:
        """Return the local part of a resource URI."""
        ...


class RDFLibGraphAccessor:
    """
    GraphAccessor backed by an rdflib Graph.

    Example:
        >>> graph, _ = OWLGraphParser.parse_file("ontology.owl")
        >>> accessor = RDFLibGraphAccessor(graph)
        >>> accessor.all_resources_of_type(OWL.NamedIndividual)
    """

    def __init__(self, graph: Graph):
        if graph is None:
            raise ValueError("graph cannot be None")
        self._graph = graph

    @property
    def graph(self) -> Graph:
        return self._graph

    def triple_count(self) -> int:
        return len(self._graph)

    def resources_with_predicate_value(self, predicate: URIRef, value: Node) -> List[Resource]:
        return _unique(
            s for s in self._graph.subjects(predicate, value)
            if isinstance(s, (URIRef, BNode))
        )

    def all_resources_of_type(self, type_uri: URIRef) -> List[Resource]:
        return self.resources_with_predicate_value(RDF.type, type_uri)

    def direct_properties(self, resource: Resource) -> Dict[URIRef, List[Node]]:
        properties: Dict[URIRef, List[Node]] = {}
        for predicate, obj in self._graph.predicate_objects(resource):
            values = properties.setdefault(predicate, [])
            if obj not in values:
                values.append(obj)
        return properties

    def literals_of(self, resource: Resource, property_uri: URIRef) -> List[Literal]:
        return _unique(
            o for o in self._graph.objects(resource, property_uri)
            if isinstance(o, Literal)
        )

    def resources_of(self, resource: Resource, property_uri: URIRef) -> List[Resource]:
        return _unique(
            o for o in self._graph.objects(resource, property_uri)
            if isinstance(o, (URIRef, BNode))
        )

    def value_of(self, resource: Resource, property_uri: URIRef) -> Optional[Node]:
        """Return the first object of `property_uri`, or None."""
        for obj in self._graph.objects(resource, property_uri):
            return obj
        return None

    def has_property(
        self,
        resource: Resource,
        property_uri: URIRef,
        value: Optional[Node] = None,
    ) -> bool:
        return (resource, property_uri, value) in self._graph

    def is_instance_of(self, resource: Resource, type_uri: URIRef) -> bool:
        return (resource, RDF.type, type_uri) in self._graph

    def local_name(self, resource: Node) -> str:
        text = str(resource)
        if isinstance(resource, BNode):
            return text
        stripped = text.rstrip("#/")
        return _LOCAL_NAME_SPLIT.split(stripped)[-1] if stripped else text


def _unique(items) -> list:
    seen = set()
    result = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result
