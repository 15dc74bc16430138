"""
Pytest configuration and fixtures for the test suite.

Defines markers for selective test execution:
    pytest -m unit          # Fast unit tests
    pytest -m integration   # End-to-end tests across the pipeline
    pytest -m security      # Path validation tests

Fixtures are centralized in tests/fixtures/ for reuse across all test modules.
"""

import json
import os
import sys

import pytest

# Add src to path for imports
src_dir = os.path.join(os.path.dirname(__file__), '..', 'src')
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

# Add tests directory to path for fixtures import
tests_dir = os.path.dirname(__file__)
if tests_dir not in sys.path:
    # Ensure src directory stays ahead of tests for module resolution
    sys.path.insert(1, tests_dir)

from rdflib import Graph

from fixtures import (
    SITE_TTL,
    STATUS_VOCABULARY_TTL,
    SAMPLE_IMPORT_CONFIG,
    generate_large_duo_ttl,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: End-to-end tests across the pipeline")
    config.addinivalue_line("markers", "security: Security-related tests (path traversal, symlinks)")


# =============================================================================
# Graph Fixtures
# =============================================================================

@pytest.fixture
def make_accessor():
    """Factory turning Turtle content into an RDFLibGraphAccessor."""
    from formats.owl import RDFLibGraphAccessor

    def _make(ttl: str) -> "RDFLibGraphAccessor":
        graph = Graph()
        graph.parse(data=ttl, format="turtle")
        return RDFLibGraphAccessor(graph)

    return _make


@pytest.fixture
def site_accessor(make_accessor):
    """Accessor over the sample site ontology."""
    return make_accessor(SITE_TTL)


@pytest.fixture
def status_accessor(make_accessor):
    """Accessor over the Status/Open/Closed vocabulary."""
    return make_accessor(STATUS_VOCABULARY_TTL)


@pytest.fixture
def components():
    """Factory building the full component set over an accessor."""
    from formats.owl import (
        AxiomResolver,
        ClassHierarchyResolver,
        FieldValueMapper,
        IndividualClassifier,
        PropertyRouter,
        VocabularyExtractor,
    )

    def _build(accessor, **classifier_options):
        hierarchy = ClassHierarchyResolver(accessor)
        vocabularies = VocabularyExtractor(accessor, hierarchy)
        warnings = []
        return {
            "hierarchy": hierarchy,
            "vocabularies": vocabularies,
            "router": PropertyRouter(accessor),
            "axioms": AxiomResolver(accessor),
            "classifier": IndividualClassifier(accessor, hierarchy, **classifier_options),
            "mapper": FieldValueMapper(
                accessor,
                hierarchy,
                PropertyRouter(accessor),
                AxiomResolver(accessor),
                vocabularies,
                warn=warnings.append,
            ),
            "warnings": warnings,
        }

    return _build


# =============================================================================
# File Fixtures
# =============================================================================

@pytest.fixture
def site_ttl_file(tmp_path):
    """The sample site ontology written to a temporary .ttl file."""
    ttl_file = tmp_path / "site.ttl"
    ttl_file.write_text(SITE_TTL, encoding="utf-8")
    return str(ttl_file)


@pytest.fixture
def large_ttl_file(tmp_path):
    """An ontology with enough articles to trigger progress bars."""
    ttl_file = tmp_path / "large.ttl"
    ttl_file.write_text(generate_large_duo_ttl(num_articles=25), encoding="utf-8")
    return str(ttl_file)


@pytest.fixture
def temp_config_file(tmp_path):
    """Create a temporary configuration file for testing."""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(SAMPLE_IMPORT_CONFIG, indent=2))
    return str(config_file)


@pytest.fixture
def input_validator():
    """Get InputValidator class for path validation tests."""
    from core.validators import InputValidator
    return InputValidator
