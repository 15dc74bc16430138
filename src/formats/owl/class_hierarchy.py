"""
Class hierarchy resolution.

Computes subclass closures over rdfs:subClassOf. Closures are pure functions
of the (read-only) graph and are memoized per class for the lifetime of the
resolver, which is one import run.
"""

import logging
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

from rdflib import RDF, RDFS, URIRef

from core.exceptions import ClassHierarchyCycleError, MissingArgumentError
from .graph_accessor import GraphAccessor, Resource

logger = logging.getLogger(__name__)


class ClassHierarchyResolver:
    """
    Resolves direct and transitive subclass relationships.

    Direct subclasses are enumerated in URI order, so closures come out in a
    reproducible depth-first discovery order. A cycle in rdfs:subClassOf is
    a modeling error and raises ClassHierarchyCycleError.
    """

    def __init__(self, accessor: GraphAccessor):
        self._accessor = accessor
        self._closures: Dict[Resource, Tuple[URIRef, ...]] = {}
        self._closure_sets: Dict[Resource, FrozenSet[URIRef]] = {}

    def subclasses_of(self, class_uri: Optional[Resource]) -> List[URIRef]:
        """Return the direct subclasses of `class_uri`."""
        if class_uri is None:
            raise MissingArgumentError("class_uri")
        return sorted(
            (
                s for s in self._accessor.resources_with_predicate_value(RDFS.subClassOf, class_uri)
                if isinstance(s, URIRef)
            ),
            key=str,
        )

    def superclasses_of(self, class_uri: Optional[Resource]) -> List[URIRef]:
        """Return the named direct superclasses of `class_uri`, skipping restrictions."""
        if class_uri is None:
            raise MissingArgumentError("class_uri")
        return [
            o for o in self._accessor.resources_of(class_uri, RDFS.subClassOf)
            if isinstance(o, URIRef)
        ]

    def has_direct_superclass(self, class_uri: Resource, superclass: Resource) -> bool:
        if class_uri is None:
            raise MissingArgumentError("class_uri")
        if superclass is None:
            raise MissingArgumentError("superclass")
        return self._accessor.has_property(class_uri, RDFS.subClassOf, superclass)

    def transitive_subclasses_of(self, class_uri: Optional[Resource]) -> List[URIRef]:
        """
        Return every transitive subclass of `class_uri`.

        The result is deduplicated and never contains `class_uri` itself.

        Raises:
            ClassHierarchyCycleError: If a subclass chain loops back on itself.
        """
        if class_uri is None:
            raise MissingArgumentError("class_uri")

        closure = self._closures.get(class_uri)
        if closure is None:
            closure = tuple(self._collect_subclasses(class_uri))
            self._closures[class_uri] = closure
            self._closure_sets[class_uri] = frozenset(closure)
            logger.debug(f"Closure of {class_uri}: {len(closure)} subclasses")
        return list(closure)

    def _collect_subclasses(self, root: Resource) -> List[URIRef]:
        result: List[URIRef] = []
        seen: Set[URIRef] = set()
        path: List[Resource] = [root]
        on_path: Set[Resource] = {root}

        def visit(current: Resource) -> None:
            for sub in self.subclasses_of(current):
                if sub in on_path:
                    cycle = path[path.index(sub):] + [sub]
                    raise ClassHierarchyCycleError(str(root), [str(c) for c in cycle])
                if sub in seen:
                    continue
                seen.add(sub)
                result.append(sub)
                path.append(sub)
                on_path.add(sub)
                visit(sub)
                path.pop()
                on_path.discard(sub)

        visit(root)
        return result

    def _closure_set(self, class_uri: Resource) -> FrozenSet[URIRef]:
        if class_uri not in self._closure_sets:
            self.transitive_subclasses_of(class_uri)
        return self._closure_sets[class_uri]

    def is_transitive_instance_of(self, resource: Optional[Resource], class_uri: Optional[Resource]) -> bool:
        """Return True if `resource` is typed `class_uri` or any of its transitive subclasses."""
        if resource is None:
            raise MissingArgumentError("resource")
        if class_uri is None:
            raise MissingArgumentError("class_uri")

        types = set(self._accessor.resources_of(resource, RDF.type))
        if class_uri in types:
            return True
        return not types.isdisjoint(self._closure_set(class_uri))

    def has_transitive_subclass(self, class_uri: Optional[Resource], candidate: Optional[Resource]) -> bool:
        """Return True if `candidate` is a transitive subclass of `class_uri`."""
        if class_uri is None:
            raise MissingArgumentError("class_uri")
        if candidate is None:
            raise MissingArgumentError("candidate")
        return candidate in self._closure_set(class_uri)

    def leaf_subclasses_of(self, class_uri: Optional[Resource]) -> List[URIRef]:
        """
        Return transitive subclasses of `class_uri` that have no subclasses.

        Leaf classes are the instantiable bundle endpoints when only leaf
        classes are imported as nodes.
        """
        return [
            sub for sub in self.transitive_subclasses_of(class_uri)
            if not self.subclasses_of(sub)
        ]
