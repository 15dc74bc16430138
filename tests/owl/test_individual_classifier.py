"""Tests for IndividualClassifier and bundle name normalization."""

import pytest
from rdflib import URIRef

from core.exceptions import MissingArgumentError
from fixtures import CLASSES_AS_NODES_TTL, EX, MULTI_BUNDLE_TTL
from formats.owl import ClassHierarchyResolver, IndividualClassifier, normalize_bundle_name


def ex(name: str) -> URIRef:
    return URIRef(EX + name)


def make_classifier(accessor, **options):
    return IndividualClassifier(accessor, ClassHierarchyResolver(accessor), **options)


@pytest.mark.unit
class TestNormalizeBundleName:
    """Tests for normalize_bundle_name."""

    @pytest.mark.parametrize("name,expected", [
        ("Article", "article"),
        ("Blog-Post", "blog_post"),
        ("news item", "news_item"),
        ("Über", "_ber"),
    ])
    def test_normalize(self, name, expected):
        assert normalize_bundle_name(name) == expected


@pytest.mark.unit
class TestContentResources:
    """Tests for the working set of content resources."""

    def test_individuals_only_by_default(self, site_accessor):
        classifier = make_classifier(site_accessor)
        assert classifier.content_resources() == [ex("alice"), ex("article1")]

    def test_direct_node_instances_excluded(self, site_accessor):
        assert ex("Placeholder") not in make_classifier(site_accessor).content_resources()

    def test_referenced_resources_excluded(self, site_accessor):
        resources = make_classifier(site_accessor).content_resources()
        assert ex("Img1") not in resources
        assert ex("Leipzig") not in resources

    def test_classes_as_nodes(self, make_accessor):
        classifier = make_classifier(make_accessor(CLASSES_AS_NODES_TTL), classes_as_nodes=True)
        assert classifier.content_resources() == [ex("Bird"), ex("Mammal"), ex("Dog"), ex("rex")]

    def test_only_leaf_classes(self, make_accessor):
        classifier = make_classifier(
            make_accessor(CLASSES_AS_NODES_TTL),
            classes_as_nodes=True,
            only_leaf_classes_as_nodes=True,
        )
        assert classifier.content_resources() == [ex("Bird"), ex("Dog"), ex("rex")]

    def test_bundle_classes_not_content(self, make_accessor):
        classifier = make_classifier(make_accessor(CLASSES_AS_NODES_TTL), classes_as_nodes=True)
        assert ex("Animal") not in classifier.content_resources()


@pytest.mark.unit
class TestResolveBundle:
    """Tests for resolve_bundle."""

    def test_individual(self, site_accessor):
        classifier = make_classifier(site_accessor)
        assert classifier.resolve_bundle(ex("article1")) == "article"
        assert classifier.resolve_bundle(ex("alice")) == "person"

    def test_subclass(self, make_accessor):
        classifier = make_classifier(make_accessor(CLASSES_AS_NODES_TTL))
        assert classifier.resolve_bundle(ex("Dog")) == "animal"

    def test_first_bundle_in_uri_order_wins(self, make_accessor):
        classifier = make_classifier(make_accessor(MULTI_BUNDLE_TTL))
        assert classifier.resolve_bundle(ex("both")) == "article"

    def test_normalized(self, make_accessor):
        classifier = make_classifier(make_accessor(MULTI_BUNDLE_TTL))
        assert classifier.resolve_bundle(ex("post")) == "blog_post"

    def test_unresolved(self, site_accessor):
        assert make_classifier(site_accessor).resolve_bundle(ex("Leipzig")) is None

    def test_missing_argument(self, site_accessor):
        with pytest.raises(MissingArgumentError):
            make_classifier(site_accessor).resolve_bundle(None)

    def test_repeated_calls_agree(self, make_accessor):
        accessor = make_accessor(MULTI_BUNDLE_TTL)
        bundles = {make_classifier(accessor).resolve_bundle(ex("both")) for _ in range(5)}
        assert bundles == {"article"}
