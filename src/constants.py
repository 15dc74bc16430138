"""
Centralized configuration constants for the OWL Content Importer.

This module provides a single source of truth for all configuration constants,
default values, and limits used throughout the application.
"""

from enum import IntEnum
from typing import Dict, Final

# ============================================================================
# Exit Codes
# ============================================================================

class ExitCode(IntEnum):
    """Standard exit codes for CLI commands.

    Following Unix conventions:
    - 0: Success
    - 1: General error
    - 2: Validation/syntax error
    - 3+: Specific error categories
    """
    SUCCESS = 0
    ERROR = 1
    VALIDATION_ERROR = 2
    CONFIG_ERROR = 3
    STORE_ERROR = 4
    FILE_NOT_FOUND = 5
    PERMISSION_DENIED = 6


# ============================================================================
# Memory Management
# ============================================================================

class MemoryLimits:
    """Memory management constants."""

    MAX_SAFE_FILE_MB: Final[int] = 500
    """Default maximum file size without explicit override (MB)."""

    MEMORY_MULTIPLIER: Final[float] = 3.5
    """RDFlib typically uses ~3-4x file size in memory."""

    MIN_AVAILABLE_MEMORY_MB: Final[int] = 256
    """Minimum available memory required before processing (MB)."""

    LOAD_FACTOR: Final[float] = 0.7
    """Share of available memory considered safe for parsing."""


# ============================================================================
# File Extensions
# ============================================================================

class FileExtensions:
    """Supported file extensions."""

    RDF_FORMATS: Final[Dict[str, str]] = {
        '.owl': 'xml',
        '.rdf': 'xml',
        '.xml': 'xml',
        '.ttl': 'turtle',
        '.turtle': 'turtle',
        '.n3': 'n3',
        '.nt': 'nt',
        '.nq': 'nquads',
        '.trig': 'trig',
        '.jsonld': 'json-ld',
    }
    """Ontology file extensions mapped to rdflib parser names."""

    ONTOLOGY_EXTENSIONS: Final[tuple] = tuple(RDF_FORMATS)
    """Valid ontology input extensions."""

    OUTPUT_EXTENSIONS: Final[tuple] = ('.json',)
    """Valid output file extensions."""


# ============================================================================
# Content Model Defaults
# ============================================================================

class ContentDefaults:
    """Field names and formats of the generated content model."""

    BODY_FIELD_NAME: Final[str] = "body"
    """Field holding the content/summary pair of every node."""

    BODY_FORMAT: Final[str] = "full_html"
    """Text format assigned to body values."""

    TAGS_FIELD_NAME: Final[str] = "field_tags"
    """Field holding taxonomy tags derived from rdf:type/rdfs:subClassOf."""

    DATE_FORMAT: Final[str] = "%Y-%m-%d"
    """Output format for xsd:date and xsd:dateTime literals."""

    PROGRESS_THRESHOLD: Final[int] = 10
    """Minimum number of content resources before a progress bar is shown."""


# ============================================================================
# Logging
# ============================================================================

class LoggingConfig:
    """Logging configuration."""

    DEFAULT_LOG_LEVEL: Final[str] = "INFO"
    """Default logging level."""

    LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    """Default log format string."""

    DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
    """Default date format for logs."""

    DEFAULT_FORMAT_STYLE: Final[str] = "text"
    """Human-readable formatter style."""

    JSON_DATE_FORMAT: Final[str] = "%Y-%m-%dT%H:%M:%S.%fZ"
    """ISO-8601 timestamp format for structured logs."""

    SUPPORTED_FORMATS: Final[tuple[str, ...]] = ("text", "json")
    """Supported formatter styles."""

    MAX_LOG_FILE_MB: Final[int] = 10
    """Maximum log file size before rotation (MB)."""

    LOG_BACKUP_COUNT: Final[int] = 5
    """Number of backup log files to keep."""

    ROTATION_ENABLED: Final[bool] = True
    """Enable log rotation by default when a file handler is configured."""

    DEFAULT_LOG_FILENAME: Final[str] = "owl_content_importer.log"
    """File name used in fallback log locations."""
