"""
Validation utilities for the OWL content importer.

- input.py: InputValidator - file path and ontology content validation
  with security checks

Usage:
    from core.validators import InputValidator

    path = InputValidator.validate_input_ontology_path("ontology.owl")
"""

from .input import InputValidator

__all__ = [
    'InputValidator',
]
