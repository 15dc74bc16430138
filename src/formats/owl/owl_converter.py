"""
OWL to content model conversion.

OWLToContentConverter runs the analysis pipeline over one ontology graph and
returns every vocabulary and node it describes. ContentImporter hands that
model to a sink in dependency order and rolls the sink back on failure.

Pipeline:
    GraphAccessor -> ClassHierarchyResolver / PropertyRouter / AxiomResolver
    -> VocabularyExtractor / IndividualClassifier -> FieldValueMapper
    -> ConversionResult -> ContentImporter -> sink
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from rdflib import Graph
from tqdm import tqdm

from constants import ContentDefaults
from core.config import ImportConfig
from core.exceptions import MissingArgumentError, UnresolvedBundleError
from core.store.protocols import NodeSinkProtocol, VocabularySinkProtocol
from core.validators import InputValidator
from shared.models import ConversionResult, NodeSpec
from .axiom_resolver import AxiomResolver
from .class_hierarchy import ClassHierarchyResolver
from .field_mapper import FieldValueMapper
from .graph_accessor import GraphAccessor, RDFLibGraphAccessor, Resource
from .individual_classifier import IndividualClassifier
from .owl_parser import OWLGraphParser
from .property_router import PropertyRouter
from .vocabulary_extractor import VocabularyExtractor

logger = logging.getLogger(__name__)


class OWLToContentConverter:
    """
    Converts a DUO ontology graph into vocabularies and nodes.

    All resolvers are created per convert() call, so memoized closures never
    leak between runs. Nothing is written anywhere: a failing resource
    aborts the conversion before any sink sees the model.
    """

    def __init__(self, classes_as_nodes: bool = False, only_leaf_classes_as_nodes: bool = False):
        """
        Initialize the converter.

        Args:
            classes_as_nodes: Also turn classes under the Node subclasses into nodes
            only_leaf_classes_as_nodes: Restrict those classes to leaves
        """
        if only_leaf_classes_as_nodes and not classes_as_nodes:
            logger.warning("only_leaf_classes_as_nodes is ignored without classes_as_nodes")
        self.classes_as_nodes = classes_as_nodes
        self.only_leaf_classes_as_nodes = only_leaf_classes_as_nodes
        self.conversion_warnings: List[str] = []

    @classmethod
    def from_config(cls, config: ImportConfig) -> "OWLToContentConverter":
        return cls(
            classes_as_nodes=config.classes_as_nodes,
            only_leaf_classes_as_nodes=config.only_leaf_classes_as_nodes,
        )

    def _add_warning(self, message: str) -> None:
        """Track a warning during conversion."""
        self.conversion_warnings.append(message)
        logger.warning(message)

    def convert_graph(self, graph: Graph) -> ConversionResult:
        return self.convert(RDFLibGraphAccessor(graph), triple_count=len(graph))

    def convert(self, accessor: Optional[GraphAccessor], triple_count: int = 0) -> ConversionResult:
        """
        Build the content model of an ontology.

        Vocabularies are fully materialized before any node is built.

        Raises:
            ContentModelError: On the first resource that cannot be mapped.
        """
        if accessor is None:
            raise MissingArgumentError("accessor")

        self.conversion_warnings = []

        hierarchy = ClassHierarchyResolver(accessor)
        vocabularies = VocabularyExtractor(accessor, hierarchy)
        classifier = IndividualClassifier(
            accessor,
            hierarchy,
            classes_as_nodes=self.classes_as_nodes,
            only_leaf_classes_as_nodes=self.only_leaf_classes_as_nodes,
        )
        mapper = FieldValueMapper(
            accessor,
            hierarchy,
            PropertyRouter(accessor),
            AxiomResolver(accessor),
            vocabularies,
            warn=self._add_warning,
        )

        logger.info("Extracting vocabularies...")
        vocabulary_specs = vocabularies.extract()

        logger.info("Building nodes...")
        resources = classifier.content_resources()
        nodes = [
            self.build_node(resource, classifier, mapper)
            for resource in tqdm(
                resources,
                desc="Building nodes",
                unit="node",
                disable=len(resources) < ContentDefaults.PROGRESS_THRESHOLD,
            )
        ]

        result = ConversionResult(
            vocabularies=vocabulary_specs,
            nodes=nodes,
            warnings=self.conversion_warnings.copy(),
            triple_count=triple_count,
        )
        logger.info(
            f"Converted {len(result.vocabularies)} vocabularies, "
            f"{result.tag_count} tags and {len(result.nodes)} nodes"
        )
        return result

    @staticmethod
    def build_node(
        resource: Resource,
        classifier: IndividualClassifier,
        mapper: FieldValueMapper,
    ) -> NodeSpec:
        bundle = classifier.resolve_bundle(resource)
        if bundle is None:
            raise UnresolvedBundleError(str(resource))

        node = NodeSpec(
            title=mapper.title_of(resource),
            bundle=bundle,
            alias=mapper.alias_of(resource),
            fields=mapper.map_fields(resource),
            uri=str(resource),
        )
        logger.debug(f"Built {bundle} node '{node.title}' with {len(node.fields)} fields")
        return node


class ContentImporter:
    """
    Feeds a ConversionResult to content sinks.

    Order: each vocabulary with all its tags and then its tag parents, then
    every node, then the deferred node-to-node references. Any exception
    rolls back the sinks and is re-raised.
    """

    def __init__(
        self,
        vocabulary_sink: VocabularySinkProtocol,
        node_sink: Optional[NodeSinkProtocol] = None,
    ):
        if vocabulary_sink is None:
            raise MissingArgumentError("vocabulary_sink")
        self.vocabulary_sink = vocabulary_sink
        self.node_sink = node_sink if node_sink is not None else vocabulary_sink

    def run(self, model: ConversionResult) -> None:
        try:
            self._import_vocabularies(model)
            self._import_nodes(model)
        except Exception as e:
            logger.error(f"Import failed, rolling back: {e}")
            self.rollback()
            raise

    def _import_vocabularies(self, model: ConversionResult) -> None:
        for vocabulary in model.vocabularies:
            self.vocabulary_sink.create_vocabulary(vocabulary.vid, vocabulary.name)
            for tag in vocabulary.tags:
                self.vocabulary_sink.create_tag(vocabulary.vid, tag.name)
            self.vocabulary_sink.set_tag_parents(vocabulary.vid, vocabulary.tags)
        logger.info(f"Imported {len(model.vocabularies)} vocabularies")

    def _import_nodes(self, model: ConversionResult) -> None:
        for node in tqdm(
            model.nodes,
            desc="Importing nodes",
            unit="node",
            disable=len(model.nodes) < ContentDefaults.PROGRESS_THRESHOLD,
        ):
            self.node_sink.create_node(node)
        self.node_sink.insert_node_references()
        logger.info(f"Imported {len(model.nodes)} nodes")

    def rollback(self) -> None:
        self.node_sink.rollback()
        if self.vocabulary_sink is not self.node_sink:
            self.vocabulary_sink.rollback()


def convert_owl_content(
    content: str,
    rdf_format: str = "turtle",
    config: Optional[ImportConfig] = None,
) -> ConversionResult:
    """
    Convert serialized ontology content into a content model.

    Raises:
        ValueError: If content is empty or invalid
        MemoryError: If insufficient memory is available
        ContentModelError: If the ontology cannot be mapped
    """
    config = config or ImportConfig()
    content = InputValidator.validate_rdf_content(content)

    graph, triple_count = OWLGraphParser.parse_content(
        content,
        rdf_format=config.rdf_format or rdf_format,
        force_large_file=config.force_large_file,
    )
    converter = OWLToContentConverter.from_config(config)
    return converter.convert(RDFLibGraphAccessor(graph), triple_count=triple_count)


def convert_owl_file(
    file_path: Union[str, Path],
    config: Optional[ImportConfig] = None,
) -> ConversionResult:
    """
    Convert an ontology file into a content model.

    Raises:
        FileNotFoundError: If the file doesn't exist
        PermissionError: If the file is not readable
        ValueError: If the path or content is invalid
        MemoryError: If insufficient memory is available
        ContentModelError: If the ontology cannot be mapped
    """
    config = config or ImportConfig()
    validated_path = InputValidator.validate_input_ontology_path(str(file_path))

    graph, triple_count = OWLGraphParser.parse_file(
        validated_path,
        rdf_format=config.rdf_format,
        force_large_file=config.force_large_file,
    )
    converter = OWLToContentConverter.from_config(config)
    return converter.convert(RDFLibGraphAccessor(graph), triple_count=triple_count)


def import_owl_file(
    file_path: Union[str, Path],
    sink: VocabularySinkProtocol,
    config: Optional[ImportConfig] = None,
) -> ConversionResult:
    """Convert an ontology file and load the result into `sink`."""
    result = convert_owl_file(file_path, config=config)
    ContentImporter(sink).run(result)
    return result
