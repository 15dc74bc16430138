"""
Tests for ClassHierarchyResolver.

Covers direct and transitive subclass lookups, discovery order, diamond
inheritance, cycle detection and leaf classes.
"""

import pytest
from rdflib import URIRef

from core.exceptions import ClassHierarchyCycleError, MissingArgumentError
from fixtures import CYCLE_TTL, DIAMOND_TTL, EX, SITE_TTL
from formats.owl import DUO, ClassHierarchyResolver


def ex(name: str) -> URIRef:
    return URIRef(EX + name)


@pytest.mark.unit
class TestDirectSubclasses:
    """Tests for subclasses_of / superclasses_of."""

    def test_subclasses_sorted_by_uri(self, make_accessor):
        """Direct subclasses come back in URI order."""
        hierarchy = ClassHierarchyResolver(make_accessor(SITE_TTL))
        assert hierarchy.subclasses_of(DUO.Vocabulary) == [ex("Category"), ex("Status")]
        assert hierarchy.subclasses_of(DUO.Node) == [ex("Article"), ex("Person")]

    def test_class_without_subclasses(self, make_accessor):
        hierarchy = ClassHierarchyResolver(make_accessor(SITE_TTL))
        assert hierarchy.subclasses_of(ex("Closed")) == []

    def test_superclasses(self, make_accessor):
        hierarchy = ClassHierarchyResolver(make_accessor(DIAMOND_TTL))
        assert set(hierarchy.superclasses_of(ex("Bottom"))) == {ex("Left"), ex("Right")}

    def test_has_direct_superclass(self, make_accessor):
        hierarchy = ClassHierarchyResolver(make_accessor(SITE_TTL))
        assert hierarchy.has_direct_superclass(ex("Open"), ex("Status"))
        assert not hierarchy.has_direct_superclass(ex("Closed"), ex("Status"))

    def test_missing_argument(self, make_accessor):
        hierarchy = ClassHierarchyResolver(make_accessor(SITE_TTL))
        with pytest.raises(MissingArgumentError, match="class_uri"):
            hierarchy.subclasses_of(None)


@pytest.mark.unit
class TestTransitiveSubclasses:
    """Tests for transitive_subclasses_of."""

    def test_depth_first_discovery_order(self, make_accessor):
        """Children are visited before later siblings."""
        hierarchy = ClassHierarchyResolver(make_accessor(SITE_TTL))
        assert hierarchy.transitive_subclasses_of(DUO.Vocabulary) == [
            ex("Category"), ex("Events"), ex("News"),
            ex("Status"), ex("Open"), ex("Closed"),
        ]

    def test_root_not_included(self, make_accessor):
        hierarchy = ClassHierarchyResolver(make_accessor(SITE_TTL))
        assert ex("Status") not in hierarchy.transitive_subclasses_of(ex("Status"))

    def test_diamond_is_not_a_cycle(self, make_accessor):
        """A class reachable along two paths is listed once."""
        hierarchy = ClassHierarchyResolver(make_accessor(DIAMOND_TTL))
        assert hierarchy.transitive_subclasses_of(ex("Top")) == [ex("Left"), ex("Bottom"), ex("Right")]

    def test_cycle_raises(self, make_accessor):
        hierarchy = ClassHierarchyResolver(make_accessor(CYCLE_TTL))
        with pytest.raises(ClassHierarchyCycleError) as exc_info:
            hierarchy.transitive_subclasses_of(DUO.Node)
        assert str(ex("Alpha")) in exc_info.value.cycle
        assert str(ex("Beta")) in exc_info.value.cycle

    def test_closure_is_memoized(self, make_accessor):
        hierarchy = ClassHierarchyResolver(make_accessor(SITE_TTL))
        first = hierarchy.transitive_subclasses_of(DUO.Node)
        first.append(ex("Intruder"))
        assert ex("Intruder") not in hierarchy.transitive_subclasses_of(DUO.Node)

    def test_leaf_subclasses(self, make_accessor):
        hierarchy = ClassHierarchyResolver(make_accessor(DIAMOND_TTL))
        assert hierarchy.leaf_subclasses_of(ex("Top")) == [ex("Bottom")]


@pytest.mark.unit
class TestMembership:
    """Tests for instance and subclass membership checks."""

    def test_instance_of_subclass(self, site_accessor):
        hierarchy = ClassHierarchyResolver(site_accessor)
        assert hierarchy.is_transitive_instance_of(ex("article1"), DUO.Node)
        assert hierarchy.is_transitive_instance_of(ex("article1"), DUO.Vocabulary)

    def test_direct_instance(self, site_accessor):
        hierarchy = ClassHierarchyResolver(site_accessor)
        assert hierarchy.is_transitive_instance_of(ex("Img1"), DUO.Img)

    def test_not_an_instance(self, site_accessor):
        hierarchy = ClassHierarchyResolver(site_accessor)
        assert not hierarchy.is_transitive_instance_of(ex("Leipzig"), DUO.Node)

    def test_has_transitive_subclass(self, site_accessor):
        hierarchy = ClassHierarchyResolver(site_accessor)
        assert hierarchy.has_transitive_subclass(DUO.Vocabulary, ex("Closed"))
        assert not hierarchy.has_transitive_subclass(DUO.Vocabulary, DUO.Vocabulary)
        assert not hierarchy.has_transitive_subclass(DUO.Node, ex("News"))
