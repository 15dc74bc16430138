"""
Input validation utilities for the OWL content importer.

This module provides centralized input validation with consistent error messages for:
- Ontology content validation
- File path validation with security checks (ontology, output, config, store)

Security features:
- Path traversal detection (../ sequences)
- Symlink detection and rejection
- Extension validation
- Directory boundary awareness

Usage:
    from core.validators.input import InputValidator

    validated_path = InputValidator.validate_input_ontology_path("ontology.owl")
    content = InputValidator.validate_rdf_content(content)
"""

import os
import logging
from pathlib import Path
from typing import Any, List, Optional

from constants import FileExtensions

logger = logging.getLogger(__name__)

_TRAVERSAL_PATTERNS = ['../', '..\\', '/..', '\\..']


class InputValidator:
    """
    Centralized input validation for the importer's public entry points.

    Every path check resolves the path, rejects '..' sequences unless
    explicitly allowed, and rejects symlinks by default.
    """

    ONTOLOGY_EXTENSIONS = list(FileExtensions.ONTOLOGY_EXTENSIONS)
    JSON_EXTENSIONS = ['.json']
    OUTPUT_EXTENSIONS = list(FileExtensions.OUTPUT_EXTENSIONS)

    @staticmethod
    def validate_rdf_content(content: Any) -> str:
        """
        Validate serialized ontology content.

        Raises:
            ValueError: If content is None or empty
            TypeError: If content is not a string
        """
        if content is None:
            raise ValueError("Ontology content cannot be None")

        if not isinstance(content, str):
            raise TypeError(f"Ontology content must be string, got {type(content).__name__}")

        if not content.strip():
            raise ValueError("Ontology content cannot be empty or whitespace-only")

        return content

    @staticmethod
    def _has_relative_up(path_str: str) -> bool:
        normalized = path_str.replace('\\', '/')
        if any(pattern in path_str or pattern in normalized for pattern in _TRAVERSAL_PATTERNS):
            return True
        return '..' in Path(path_str).parts

    @classmethod
    def _check_path_traversal(cls, path_str: str) -> None:
        """
        Raises:
            ValueError: If path traversal detected
        """
        if cls._has_relative_up(path_str):
            raise ValueError(
                f"Path traversal detected in path: {path_str}. "
                f"Paths containing '..' are not allowed for security reasons."
            )

    @staticmethod
    def _check_symlink(path_obj: Path, strict: bool = False) -> None:
        """
        Reject (strict) or warn about a symlinked path.

        Raises:
            ValueError: If symlink detected and strict mode enabled
        """
        try:
            is_symlink = path_obj.is_symlink()
        except OSError:
            if strict:
                raise ValueError(f"Cannot verify symlink status for: {path_obj}")
            return

        if is_symlink:
            msg = (
                f"Security error: Symlink detected: {path_obj}. "
                f"Symlinks are not allowed for security reasons. "
                f"Please use the actual file path instead."
            )
            if strict:
                raise ValueError(msg)
            logger.warning(msg)

    @staticmethod
    def _check_directory_boundary(path_obj: Path, warn_only: bool = True) -> None:
        try:
            path_obj.relative_to(Path.cwd().resolve())
        except ValueError:
            msg = f"Path is outside current directory: {path_obj}"
            if not warn_only:
                raise ValueError(msg + ". Access to paths outside working directory is restricted.")
            logger.debug(msg)

    @staticmethod
    def _check_extension(path_obj: Path, allowed_extensions: Optional[List[str]]) -> None:
        if not allowed_extensions:
            return
        normalized_extensions = [
            ext.lower() if ext.startswith('.') else f'.{ext.lower()}'
            for ext in allowed_extensions
        ]
        if path_obj.suffix.lower() not in normalized_extensions:
            raise ValueError(
                f"Invalid file extension: '{path_obj.suffix}'. "
                f"Expected one of: {', '.join(normalized_extensions)}"
            )

    @classmethod
    def _resolve(
        cls,
        path: Any,
        restrict_to_cwd: bool,
        allow_relative_up: bool,
    ) -> Path:
        if not isinstance(path, str):
            raise TypeError(f"File path must be string, got {type(path).__name__}")

        if not path.strip():
            raise ValueError("File path cannot be empty")

        path = path.strip()
        has_relative_up = cls._has_relative_up(path)
        if not allow_relative_up:
            cls._check_path_traversal(path)

        path_obj = Path(path).resolve()
        if allow_relative_up and has_relative_up:
            cls._check_directory_boundary(path_obj, warn_only=False)
        else:
            cls._check_directory_boundary(path_obj, warn_only=not restrict_to_cwd)
        return path_obj

    @classmethod
    def validate_file_path(
        cls,
        path: Any,
        allowed_extensions: Optional[List[str]] = None,
        check_exists: bool = True,
        check_readable: bool = True,
        restrict_to_cwd: bool = False,
        reject_symlinks: bool = True,
        allow_relative_up: bool = False,
    ) -> Path:
        """
        Validate file path for security and correctness.

        Args:
            path: Path to validate (should be non-empty string)
            allowed_extensions: List of allowed extensions (e.g., ['.owl', '.ttl'])
            check_exists: Whether to verify file exists
            check_readable: Whether to verify file is readable
            restrict_to_cwd: If True, reject paths outside current directory
            reject_symlinks: If True, raise exception on symlinks; if False, warn only
            allow_relative_up: If True, allow '..' but enforce path stays within cwd

        Returns:
            Validated Path object (resolved to absolute path)

        Raises:
            TypeError: If path is not a string
            ValueError: If path is empty, has invalid extension, traversal detected, or symlink found
            FileNotFoundError: If file doesn't exist (when check_exists=True)
            PermissionError: If file is not readable (when check_readable=True)
        """
        if isinstance(path, str) and path.strip():
            cls._check_symlink(Path(path.strip()), strict=reject_symlinks)

        path_obj = cls._resolve(path, restrict_to_cwd, allow_relative_up)

        if check_exists:
            if not path_obj.exists():
                raise FileNotFoundError(f"File not found: {path_obj}")
            if not path_obj.is_file():
                raise ValueError(f"Path is not a file: {path_obj}")

        cls._check_extension(path_obj, allowed_extensions)

        if check_readable and check_exists and not os.access(path_obj, os.R_OK):
            raise PermissionError(f"File is not readable: {path_obj}")

        return path_obj

    @classmethod
    def validate_input_ontology_path(
        cls,
        path: Any,
        restrict_to_cwd: bool = False,
        reject_symlinks: bool = True,
        allow_relative_up: bool = False,
    ) -> Path:
        """
        Validate an input ontology file path (.owl, .rdf, .ttl, ...).

        Symlinks are hard-rejected by default.
        """
        return cls.validate_file_path(
            path,
            allowed_extensions=cls.ONTOLOGY_EXTENSIONS,
            check_exists=True,
            check_readable=True,
            restrict_to_cwd=restrict_to_cwd,
            reject_symlinks=reject_symlinks,
            allow_relative_up=allow_relative_up,
        )

    @classmethod
    def validate_output_file_path(
        cls,
        path: Any,
        allowed_extensions: Optional[List[str]] = None,
        restrict_to_cwd: bool = False,
        reject_symlinks: bool = True,
        allow_relative_up: bool = False,
    ) -> Path:
        """
        Validate output file path for writing.

        The file need not exist, but its parent directory must exist and be
        writable.

        Raises:
            TypeError: If path is not a string
            ValueError: If path is empty, has invalid extension, or traversal detected
            PermissionError: If parent directory is not writable
        """
        path_obj = cls._resolve(path, restrict_to_cwd, allow_relative_up)

        if path_obj.exists():
            cls._check_symlink(path_obj, strict=reject_symlinks)

        cls._check_extension(path_obj, allowed_extensions or cls.OUTPUT_EXTENSIONS)

        parent_dir = path_obj.parent
        if not parent_dir.exists():
            raise ValueError(f"Parent directory does not exist: {parent_dir}")

        if not os.access(parent_dir, os.W_OK):
            raise PermissionError(f"Cannot write to directory: {parent_dir}")

        if path_obj.exists() and not os.access(path_obj, os.W_OK):
            raise PermissionError(f"File exists but is not writable: {path_obj}")

        return path_obj

    @classmethod
    def validate_config_file_path(cls, path: Any, restrict_to_cwd: bool = True) -> Path:
        """
        Validate configuration file path.

        Configuration files must be readable JSON files, are kept inside the
        working directory by default, and may not be symlinks.
        """
        return cls.validate_file_path(
            path,
            allowed_extensions=cls.JSON_EXTENSIONS,
            check_exists=True,
            check_readable=True,
            restrict_to_cwd=restrict_to_cwd,
            reject_symlinks=True,
        )
