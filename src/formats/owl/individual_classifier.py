"""
Individual classification.

Selects the resources that become content nodes and resolves the bundle
(content type) of each one.
"""

import logging
import re
from typing import List, Optional

from rdflib import OWL, URIRef

from core.exceptions import MissingArgumentError
from .class_hierarchy import ClassHierarchyResolver
from .duo import NODE
from .graph_accessor import GraphAccessor, Resource

logger = logging.getLogger(__name__)

_NON_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9]")


def normalize_bundle_name(name: str) -> str:
    """Lower-case a local name and replace non-alphanumerics with '_'."""
    return _NON_ALPHANUMERIC.sub('_', name).lower()


class IndividualClassifier:
    """
    Determines the working set of content resources.

    Named individuals under duo:Node are always content, except individuals
    typed duo:Node directly. Classes under the direct Node subclasses are
    added when `classes_as_nodes` is set (only leaf classes when
    `only_leaf_classes_as_nodes` is also set).
    """

    def __init__(
        self,
        accessor: GraphAccessor,
        hierarchy: ClassHierarchyResolver,
        classes_as_nodes: bool = False,
        only_leaf_classes_as_nodes: bool = False,
    ):
        self._accessor = accessor
        self._hierarchy = hierarchy
        self.classes_as_nodes = classes_as_nodes
        self.only_leaf_classes_as_nodes = only_leaf_classes_as_nodes

    def bundle_classes(self) -> List[URIRef]:
        """Return the direct subclasses of duo:Node in URI order."""
        return self._hierarchy.subclasses_of(NODE)

    def content_classes(self) -> List[URIRef]:
        classes: List[URIRef] = []
        for bundle_class in self.bundle_classes():
            if self.only_leaf_classes_as_nodes:
                members = self._hierarchy.leaf_subclasses_of(bundle_class)
            else:
                members = self._hierarchy.transitive_subclasses_of(bundle_class)
            classes.extend(members)
        return classes

    def content_individuals(self) -> List[Resource]:
        individuals = []
        for individual in self._accessor.all_resources_of_type(OWL.NamedIndividual):
            if not self._hierarchy.is_transitive_instance_of(individual, NODE):
                continue
            if self._accessor.is_instance_of(individual, NODE):
                logger.debug(f"Skipping {individual}: direct instances of Node are structural")
                continue
            individuals.append(individual)
        return sorted(individuals, key=str)

    def content_resources(self) -> List[Resource]:
        """Return every resource that becomes a node, classes first, without duplicates."""
        resources: List[Resource] = []
        if self.classes_as_nodes:
            resources.extend(self.content_classes())
        resources.extend(self.content_individuals())

        unique = list(dict.fromkeys(resources))
        logger.info(f"Found {len(unique)} content resources")
        return unique

    def resolve_bundle(self, resource: Optional[Resource]) -> Optional[str]:
        """
        Return the bundle of `resource`, or None if no Node subclass matches.

        Candidates are the direct Node subclasses in URI order; the first one
        the resource is an instance or subclass of wins.
        """
        if resource is None:
            raise MissingArgumentError("resource")

        for bundle_class in self.bundle_classes():
            if (
                self._hierarchy.is_transitive_instance_of(resource, bundle_class)
                or self._hierarchy.has_transitive_subclass(bundle_class, resource)
            ):
                return normalize_bundle_name(self._accessor.local_name(bundle_class))
        return None
