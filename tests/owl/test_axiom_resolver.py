"""
Tests for AxiomResolver.

Axioms order multi-valued assertions by duo:ref_num and carry the duo:field
override used for Entity references.
"""

import logging

import pytest
from rdflib import Literal, URIRef

from core.exceptions import MissingArgumentError
from fixtures import (
    EX,
    NON_INTEGER_REF_NUM_TTL,
    ORDERED_KEYWORDS_TTL,
    SITE_TTL,
    UNNUMBERED_AXIOM_TTL,
)
from formats.owl import AxiomResolver


def ex(name: str) -> URIRef:
    return URIRef(EX + name)


@pytest.mark.unit
class TestAxiomsFor:
    """Tests for axiom lookup and keys."""

    def test_sorted_by_ref_num(self, make_accessor):
        axioms = AxiomResolver(make_accessor(ORDERED_KEYWORDS_TTL)).axioms_for(ex("note"), ex("keyword"))
        assert [a.key for a in axioms] == [2, 5]
        assert [str(a.target) for a in axioms] == ["second", "fifth"]

    def test_missing_ref_num_numbers_sequentially(self, make_accessor):
        axioms = AxiomResolver(make_accessor(UNNUMBERED_AXIOM_TTL)).axioms_for(ex("note"), ex("keyword"))
        assert len(axioms) == 1
        assert axioms[0].key == 1

    def test_non_integer_ref_num(self, make_accessor, caplog):
        with caplog.at_level(logging.WARNING):
            axioms = AxiomResolver(make_accessor(NON_INTEGER_REF_NUM_TTL)).axioms_for(ex("note"), ex("keyword"))
        assert axioms[0].key == 1
        assert "non-integer ref_num" in caplog.text

    def test_filters_by_property(self, site_accessor):
        resolver = AxiomResolver(site_accessor)
        assert resolver.axioms_for(ex("article1"), ex("author")) == []
        assert len(resolver.axioms_for(ex("article1"), ex("picture"))) == 2

    def test_field_override(self, site_accessor):
        resolver = AxiomResolver(site_accessor)
        axiom = resolver.axiom_for_target(ex("alice"), ex("affiliation"), ex("Leipzig"))
        assert axiom is not None
        assert resolver.field_override_for(axiom) == ex("shortName")

    def test_axiom_for_unknown_target(self, site_accessor):
        resolver = AxiomResolver(site_accessor)
        assert resolver.axiom_for_target(ex("article1"), ex("picture"), ex("Img3")) is None

    def test_missing_arguments(self, site_accessor):
        resolver = AxiomResolver(site_accessor)
        with pytest.raises(MissingArgumentError, match="subject"):
            resolver.axioms_for(None, ex("picture"))
        with pytest.raises(MissingArgumentError, match="property_uri"):
            resolver.axioms_for(ex("article1"), None)
        with pytest.raises(MissingArgumentError, match="axiom"):
            resolver.field_override_for(None)


@pytest.mark.unit
class TestOrderedValues:
    """Tests for ordered_literals / ordered_resources."""

    def test_annotated_literals_first(self, make_accessor):
        resolver = AxiomResolver(make_accessor(ORDERED_KEYWORDS_TTL))
        values = resolver.ordered_literals(ex("note"), ex("keyword"))
        assert [str(v) for v in values] == ["second", "fifth", "extra", "another"]

    def test_resources_follow_ref_num(self, site_accessor):
        resolver = AxiomResolver(site_accessor)
        assert resolver.ordered_resources(ex("article1"), ex("picture")) == [ex("Img1"), ex("Img2")]

    def test_unannotated_resources(self, site_accessor):
        resolver = AxiomResolver(site_accessor)
        assert resolver.ordered_resources(ex("article1"), ex("author")) == [ex("alice")]

    def test_no_values(self, site_accessor):
        resolver = AxiomResolver(site_accessor)
        assert resolver.ordered_literals(ex("alice"), ex("keyword")) == []
        assert resolver.ordered_resources(ex("alice"), ex("author")) == []

    def test_literals_and_resources_are_separate(self, site_accessor):
        resolver = AxiomResolver(site_accessor)
        assert resolver.ordered_literals(ex("article1"), ex("picture")) == []
        assert resolver.ordered_resources(ex("article1"), ex("keyword")) == []
        assert resolver.ordered_literals(ex("article1"), ex("keyword")) == [Literal("owl")]
