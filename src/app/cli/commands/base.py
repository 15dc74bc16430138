"""
Base command class.

This module contains the base command class that all CLI commands inherit
from, plus the shared mapping from exceptions to exit codes.
"""

import argparse
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from ..helpers import (
    get_default_config_path,
    load_config,
    print_footer,
    print_header,
    setup_logging,
)
from constants import ExitCode
from core.config import ImportConfig
from core.exceptions import (
    ContentModelError,
    UnresolvedNodeReferenceError,
    VocabularyConflictError,
)
from core.validators import InputValidator
from shared.models import ConversionResult


logger = logging.getLogger(__name__)


# ============================================================================
# Helper Utilities
# ============================================================================

def print_conversion_summary(result: ConversionResult, heading: Optional[str] = None) -> None:
    """Print a consistent summary for a conversion result."""
    if heading:
        print_header(heading)
    print(result.get_summary())
    if heading:
        print_footer()


def exit_code_for(error: BaseException) -> ExitCode:
    """Map an exception raised by a command to its exit code."""
    if isinstance(error, (VocabularyConflictError, UnresolvedNodeReferenceError)):
        return ExitCode.STORE_ERROR
    if isinstance(error, ContentModelError):
        return ExitCode.VALIDATION_ERROR
    if isinstance(error, FileNotFoundError):
        return ExitCode.FILE_NOT_FOUND
    if isinstance(error, PermissionError):
        return ExitCode.PERMISSION_DENIED
    if isinstance(error, ValueError):
        return ExitCode.VALIDATION_ERROR
    return ExitCode.ERROR


# ============================================================================
# Base Command Class
# ============================================================================

class BaseCommand(ABC):
    """
    Base class for CLI commands.

    Provides configuration loading, logging setup and ontology path
    validation. Subclasses implement execute().
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the command.

        Args:
            config_path: Path to configuration file. Without it, config.json
                in the project root is used when present.
        """
        self._explicit_config = config_path is not None
        self.config_path = config_path or get_default_config_path()
        self._config: Optional[Dict[str, Any]] = None

    @property
    def config(self) -> Dict[str, Any]:
        """Lazy-load configuration; a missing default config file yields {}."""
        if self._config is None:
            if not self._explicit_config and not Path(self.config_path).exists():
                self._config = {}
            else:
                self._config = load_config(self.config_path)
        return self._config

    def setup_logging_from_args(self, args: argparse.Namespace) -> None:
        setup_logging(
            level=getattr(args, 'log_level', None),
            log_file=getattr(args, 'log_file', None),
            config=self.config.get('logging', {}),
        )

    def build_import_config(self, args: argparse.Namespace) -> ImportConfig:
        """Merge the configuration file with command-line overrides."""
        return ImportConfig.from_dict(self.config).with_overrides(
            classes_as_nodes=getattr(args, 'classes_as_nodes', None),
            only_leaf_classes_as_nodes=getattr(args, 'only_leaf_classes_as_nodes', None),
            overwrite=getattr(args, 'overwrite', None),
            rdf_format=getattr(args, 'rdf_format', None),
            force_large_file=getattr(args, 'force_memory', None),
        )

    def prepare(self, args: argparse.Namespace) -> Optional[ImportConfig]:
        """
        Load configuration and set up logging.

        Returns:
            The merged ImportConfig, or None if the configuration is unusable.
        """
        try:
            import_config = self.build_import_config(args)
        except (ValueError, TypeError, FileNotFoundError, PermissionError) as e:
            print(f"✗ Configuration error: {e}")
            return None
        self.setup_logging_from_args(args)
        return import_config

    @staticmethod
    def validate_ontology_path(args: argparse.Namespace) -> Path:
        return InputValidator.validate_input_ontology_path(
            args.ontology,
            allow_relative_up=getattr(args, 'allow_relative_up', False),
        )

    @staticmethod
    def report_error(error: BaseException) -> int:
        """Print a failure and return its exit code."""
        if isinstance(error, ContentModelError):
            print(f"✗ {type(error).__name__}: {error.message}")
        elif isinstance(error, MemoryError):
            print(f"✗ {error}\n\nTip: Use --force-memory to skip the memory check.")
        else:
            print(f"✗ {error}")
        logger.debug("Command failed", exc_info=error)
        return exit_code_for(error)

    @abstractmethod
    def execute(self, args: argparse.Namespace) -> int:
        """
        Execute the command.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code (0 for success, non-zero for error).
        """
