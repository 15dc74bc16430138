"""
OWL package - DUO ontology to content model conversion components.

This package contains modular components for turning OWL/RDF ontologies
that follow the DUO convention into vocabularies, tags and nodes.

Components:
- duo: DUO namespace terms and property kinds
- graph_accessor: Read-only graph query capability (rdflib implementation)
- owl_parser: Ontology parsing with memory management
- class_hierarchy: Subclass closures with cycle detection
- property_router: Selection of properties that become fields
- axiom_resolver: Ordering of statements via reified axioms
- vocabulary_extractor: Vocabularies and tags under duo:Vocabulary
- individual_classifier: Content resources and their bundles
- field_mapper: Field values per target kind
- owl_converter: Orchestration, sink import and high-level functions
"""

from .duo import DUO, FIELD_MARKERS, PropertyKind
from .graph_accessor import GraphAccessor, RDFLibGraphAccessor, Resource
from .owl_parser import MemoryManager, OWLGraphParser
from .class_hierarchy import ClassHierarchyResolver
from .property_router import PropertyRouter, RoutedProperty
from .axiom_resolver import Axiom, AxiomResolver
from .literals import format_date_literal, literal_to_string, term_text
from .vocabulary_extractor import VocabularyExtractor
from .individual_classifier import IndividualClassifier, normalize_bundle_name
from .field_mapper import FieldValueMapper, MappedTarget
from .owl_converter import (
    ContentImporter,
    OWLToContentConverter,
    convert_owl_content,
    convert_owl_file,
    import_owl_file,
)

__all__ = [
    # DUO vocabulary
    "DUO",
    "FIELD_MARKERS",
    "PropertyKind",
    # Graph access and parsing
    "GraphAccessor",
    "RDFLibGraphAccessor",
    "Resource",
    "MemoryManager",
    "OWLGraphParser",
    # Resolvers
    "ClassHierarchyResolver",
    "PropertyRouter",
    "RoutedProperty",
    "Axiom",
    "AxiomResolver",
    # Literal helpers
    "format_date_literal",
    "literal_to_string",
    "term_text",
    # Extraction and mapping
    "VocabularyExtractor",
    "IndividualClassifier",
    "normalize_bundle_name",
    "FieldValueMapper",
    "MappedTarget",
    # Orchestration
    "OWLToContentConverter",
    "ContentImporter",
    "convert_owl_content",
    "convert_owl_file",
    "import_owl_file",
]
