"""
Centralized test fixtures for the OWL content importer test suite.

Usage:
    from fixtures import SITE_TTL, DIAMOND_TTL, SAMPLE_IMPORT_CONFIG

Or use the pytest fixtures in conftest.py which import from here.
"""

from .owl_fixtures import (
    EX,
    DUO_HEADER,
    duo_ontology,

    # Vocabularies and the complete sample site
    STATUS_VOCABULARY_TTL,
    SITE_TTL,

    # Ordering
    ORDERED_KEYWORDS_TTL,
    UNNUMBERED_AXIOM_TTL,
    NON_INTEGER_REF_NUM_TTL,

    # Class hierarchy shapes
    DIAMOND_TTL,
    CYCLE_TTL,
    MULTI_BUNDLE_TTL,
    CLASSES_AS_NODES_TTL,

    # Property routing
    ROUTING_TTL,

    # Reference targets
    DOC_TARGET_TTL,
    ENTITY_WITHOUT_OVERRIDE_TTL,
    ENTITY_MISSING_VALUE_TTL,
    UNMAPPABLE_TARGET_TTL,
    MIXED_REFERENCES_TTL,
    FILE_TARGET_TTL,
    DATE_LITERALS_TTL,
    CARET_TEXT_TTL,

    # Configuration and generators
    SAMPLE_IMPORT_CONFIG,
    generate_large_duo_ttl,
)

__all__ = [
    'EX',
    'DUO_HEADER',
    'duo_ontology',
    'STATUS_VOCABULARY_TTL',
    'SITE_TTL',
    'ORDERED_KEYWORDS_TTL',
    'UNNUMBERED_AXIOM_TTL',
    'NON_INTEGER_REF_NUM_TTL',
    'DIAMOND_TTL',
    'CYCLE_TTL',
    'MULTI_BUNDLE_TTL',
    'CLASSES_AS_NODES_TTL',
    'ROUTING_TTL',
    'DOC_TARGET_TTL',
    'ENTITY_WITHOUT_OVERRIDE_TTL',
    'ENTITY_MISSING_VALUE_TTL',
    'UNMAPPABLE_TARGET_TTL',
    'MIXED_REFERENCES_TTL',
    'FILE_TARGET_TTL',
    'DATE_LITERALS_TTL',
    'CARET_TEXT_TTL',
    'SAMPLE_IMPORT_CONFIG',
    'generate_large_duo_ttl',
]
