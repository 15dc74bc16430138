"""
Tests for OWLToContentConverter and ContentImporter.

Run with: python -m pytest tests/test_converter.py -v
"""

import logging
from unittest.mock import MagicMock

import pytest

from core.config import ImportConfig
from core.exceptions import (
    ClassHierarchyCycleError,
    MissingArgumentError,
    MissingFieldOverrideError,
    UnresolvedBundleError,
    UnresolvedNodeReferenceError,
    UnsupportedReferenceError,
)
from core.store import ContentStore
from fixtures import (
    CLASSES_AS_NODES_TTL,
    CYCLE_TTL,
    DOC_TARGET_TTL,
    ENTITY_MISSING_VALUE_TTL,
    ENTITY_WITHOUT_OVERRIDE_TTL,
    EX,
    SITE_TTL,
    generate_large_duo_ttl,
)
from formats.owl import (
    ContentImporter,
    OWLToContentConverter,
    convert_owl_content,
    convert_owl_file,
    import_owl_file,
)
from shared.models import ConversionResult, FieldSpec, NodeSpec, ReferenceKind, TagSpec, VocabularySpec


@pytest.fixture
def converter():
    return OWLToContentConverter()


@pytest.mark.unit
class TestOWLToContentConverter:
    """Test suite for OWLToContentConverter"""

    def test_convert_site(self, converter, site_accessor):
        result = converter.convert(site_accessor, triple_count=99)

        assert [v.vid for v in result.vocabularies] == ["Category", "Status"]
        assert result.tag_count == 4
        assert [n.title for n in result.nodes] == ["Alice Smith", "First Article"]
        assert [n.bundle for n in result.nodes] == ["person", "article"]
        assert result.triple_count == 99
        assert result.warnings == []

    def test_node_details(self, converter, site_accessor):
        article = converter.convert(site_accessor).nodes[1]
        assert article.alias == "/first-article"
        assert article.uri == EX + "article1"
        assert article.get_field("author").values == ["Alice Smith"]
        assert article.get_field("missing") is None

    def test_classes_as_nodes(self, make_accessor):
        converter = OWLToContentConverter(classes_as_nodes=True)
        result = converter.convert(make_accessor(CLASSES_AS_NODES_TTL))
        assert [n.title for n in result.nodes] == ["Birds", "Mammals", "Dogs", "Rex"]
        assert {n.bundle for n in result.nodes} == {"animal"}

    def test_only_leaf_classes(self, make_accessor):
        converter = OWLToContentConverter(classes_as_nodes=True, only_leaf_classes_as_nodes=True)
        result = converter.convert(make_accessor(CLASSES_AS_NODES_TTL))
        assert [n.title for n in result.nodes] == ["Birds", "Dogs", "Rex"]

    def test_only_leaf_without_classes_is_ignored(self, make_accessor, caplog):
        with caplog.at_level(logging.WARNING):
            converter = OWLToContentConverter(only_leaf_classes_as_nodes=True)
        result = converter.convert(make_accessor(CLASSES_AS_NODES_TTL))
        assert [n.title for n in result.nodes] == ["Rex"]
        assert "ignored without classes_as_nodes" in caplog.text

    def test_from_config(self):
        converter = OWLToContentConverter.from_config(ImportConfig(classes_as_nodes=True))
        assert converter.classes_as_nodes
        assert not converter.only_leaf_classes_as_nodes

    def test_warnings_collected(self, converter, make_accessor):
        result = converter.convert(make_accessor(ENTITY_MISSING_VALUE_TTL))
        assert len(result.warnings) == 1
        assert "has no value for label" in result.warnings[0]

    def test_warnings_reset_between_runs(self, converter, make_accessor):
        converter.convert(make_accessor(ENTITY_MISSING_VALUE_TTL))
        assert converter.convert(make_accessor(SITE_TTL)).warnings == []

    def test_failing_resource_aborts(self, converter, make_accessor):
        with pytest.raises(UnsupportedReferenceError):
            converter.convert(make_accessor(DOC_TARGET_TTL))

    def test_cycle_aborts(self, converter, make_accessor):
        with pytest.raises(ClassHierarchyCycleError):
            converter.convert(make_accessor(CYCLE_TTL))

    def test_missing_accessor(self, converter):
        with pytest.raises(MissingArgumentError):
            converter.convert(None)

    def test_build_node_without_bundle(self, site_accessor, components):
        from rdflib import URIRef
        built = components(site_accessor)
        with pytest.raises(UnresolvedBundleError):
            OWLToContentConverter.build_node(URIRef(EX + "Leipzig"), built["classifier"], built["mapper"])

    def test_large_ontology(self, converter, make_accessor):
        result = converter.convert(make_accessor(generate_large_duo_ttl(25)))
        assert len(result.nodes) == 25
        assert result.nodes[1].get_field("previous").values == ["Article 0"]

    def test_result_to_dict(self, converter, site_accessor):
        data = converter.convert(site_accessor).to_dict()
        assert set(data) == {"vocabularies", "nodes", "warnings", "triple_count"}
        picture = next(f for f in data["nodes"][1]["fields"] if f["field_name"] == "picture")
        assert picture["references"] == "file"
        assert picture["entity"] == "file"


@pytest.mark.unit
class TestConvenienceFunctions:
    """Tests for convert_owl_content / convert_owl_file / import_owl_file."""

    def test_convert_content(self):
        result = convert_owl_content(SITE_TTL)
        assert len(result.nodes) == 2
        assert result.triple_count > 0

    def test_convert_content_empty(self):
        with pytest.raises(ValueError):
            convert_owl_content("")

    def test_convert_file(self, site_ttl_file):
        result = convert_owl_file(site_ttl_file)
        assert [n.bundle for n in result.nodes] == ["person", "article"]

    def test_convert_file_with_config(self, tmp_path):
        path = tmp_path / "animals.ttl"
        path.write_text(CLASSES_AS_NODES_TTL, encoding="utf-8")
        result = convert_owl_file(str(path), config=ImportConfig(classes_as_nodes=True))
        assert len(result.nodes) == 4

    def test_convert_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            convert_owl_file(str(tmp_path / "missing.ttl"))

    def test_import_file(self, site_ttl_file):
        store = ContentStore()
        result = import_owl_file(site_ttl_file, store)
        assert store.count_created_nodes() == len(result.nodes) == 2

    def test_entity_without_override_fails_before_sink(self, tmp_path):
        """Conversion errors surface before the sink sees anything."""
        path = tmp_path / "entity.ttl"
        path.write_text(ENTITY_WITHOUT_OVERRIDE_TTL, encoding="utf-8")
        sink = MagicMock()

        with pytest.raises(MissingFieldOverrideError):
            import_owl_file(str(path), sink)

        assert sink.method_calls == []


@pytest.mark.unit
class TestContentImporter:
    """Tests for ContentImporter ordering and rollback."""

    @pytest.fixture
    def model(self):
        return ConversionResult(
            vocabularies=[
                VocabularySpec("Status", "Status", [TagSpec("Open"), TagSpec("Closed", ["Open"])]),
            ],
            nodes=[
                NodeSpec("Alice", "person"),
                NodeSpec("Post", "article", fields=[
                    FieldSpec("author", ["Alice"], reference_kind=ReferenceKind.NODE),
                ]),
            ],
        )

    def test_call_order(self, model):
        sink = MagicMock()
        ContentImporter(sink).run(model)

        assert [c[0] for c in sink.method_calls] == [
            "create_vocabulary",
            "create_tag",
            "create_tag",
            "set_tag_parents",
            "create_node",
            "create_node",
            "insert_node_references",
        ]

    def test_separate_sinks(self, model):
        vocabulary_sink, node_sink = MagicMock(), MagicMock()
        ContentImporter(vocabulary_sink, node_sink).run(model)

        assert vocabulary_sink.create_vocabulary.call_count == 1
        vocabulary_sink.create_node.assert_not_called()
        assert node_sink.create_node.call_count == 2

    def test_rollback_on_failure(self, model):
        sink = MagicMock()
        sink.create_node.side_effect = RuntimeError("disk full")

        with pytest.raises(RuntimeError, match="disk full"):
            ContentImporter(sink).run(model)

        sink.rollback.assert_called_once()
        sink.insert_node_references.assert_not_called()

    def test_rollback_both_sinks(self, model):
        vocabulary_sink, node_sink = MagicMock(), MagicMock()
        node_sink.insert_node_references.side_effect = RuntimeError("boom")

        with pytest.raises(RuntimeError):
            ContentImporter(vocabulary_sink, node_sink).run(model)

        vocabulary_sink.rollback.assert_called_once()
        node_sink.rollback.assert_called_once()

    def test_unresolved_reference_rolls_back_store(self, model):
        model.nodes[1].fields[0].values = ["Nobody"]
        store = ContentStore()

        with pytest.raises(UnresolvedNodeReferenceError):
            ContentImporter(store).run(model)

        assert store.vocabularies == {}
        assert store.tags == {}
        assert store.nodes == {}

    def test_missing_sink(self):
        with pytest.raises(MissingArgumentError):
            ContentImporter(None)


@pytest.mark.integration
class TestImportPipeline:
    """End-to-end: ontology file -> content store."""

    def test_site_import(self, site_ttl_file):
        store = ContentStore()
        import_owl_file(site_ttl_file, store)

        open_tid = store.search_tag_id("Status", "Open")
        closed_tid = store.search_tag_id("Status", "Closed")
        assert store.tags[closed_tid]["parents"] == [open_tid]

        alice = store.search_node_id("Alice Smith")
        article = store.nodes[store.search_node_id("First Article")]
        assert article["type"] == "article"
        assert article["alias"] == "/first-article"
        assert article["fields"]["author"] == [{"target_id": alice}]
        assert article["fields"]["field_tags"] == [{"target_id": closed_tid}]
        assert article["fields"]["category"] == [{"target_id": store.search_tag_id("Category", "News")}]
        assert article["fields"]["published"] == ["2017-03-14"]
        assert [f["title"] for f in article["fields"]["picture"]] == ["First", "Second"]
        assert store.count_created_files() == 2

        assert store.nodes[alice]["fields"]["affiliation"] == ["UL"]

    def test_large_import(self, large_ttl_file):
        store = ContentStore()
        import_owl_file(large_ttl_file, store)

        assert store.count_created_nodes() == 25
        last = store.nodes[store.search_node_id("Article 24")]
        assert last["fields"]["previous"] == [{"target_id": store.search_node_id("Article 23")}]
