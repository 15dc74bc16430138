"""
OWL Parser Module

This module handles ontology parsing with memory management.

Components:
- MemoryManager: Pre-flight memory checks before parsing large files
- OWLGraphParser: Ontology parsing and graph creation with validation
"""

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

import psutil
from rdflib import Graph

from constants import FileExtensions, MemoryLimits

logger = logging.getLogger(__name__)


class MemoryManager:
    """
    Pre-flight check that an ontology of a given size can be loaded.

    rdflib keeps the whole graph in memory, so the estimate is a multiple of
    the serialized size compared against what psutil reports as available.
    """

    MIN_AVAILABLE_MB = MemoryLimits.MIN_AVAILABLE_MEMORY_MB
    MAX_SAFE_FILE_MB = MemoryLimits.MAX_SAFE_FILE_MB
    MEMORY_MULTIPLIER = MemoryLimits.MEMORY_MULTIPLIER
    LOAD_FACTOR = MemoryLimits.LOAD_FACTOR

    @staticmethod
    def get_available_memory_mb() -> float:
        return psutil.virtual_memory().available / (1024 * 1024)

    @classmethod
    def check_memory_available(cls, file_size_mb: float, force: bool = False) -> Tuple[bool, str]:
        """
        Decide whether an ontology of `file_size_mb` may be parsed.

        `force` lifts the size limit and the load-factor threshold but not
        the minimum free memory floor.

        Returns:
            Tuple of (can_proceed, message)
        """
        estimated_mb = file_size_mb * cls.MEMORY_MULTIPLIER

        if not force and file_size_mb > cls.MAX_SAFE_FILE_MB:
            return False, (
                f"Ontology is {file_size_mb:.1f}MB, above the {cls.MAX_SAFE_FILE_MB}MB limit "
                f"(~{estimated_mb:.0f}MB needed to build the graph). Use --force-memory to import it anyway."
            )

        available_mb = cls.get_available_memory_mb()
        if available_mb < cls.MIN_AVAILABLE_MB:
            return False, (
                f"Insufficient free memory: {available_mb:.0f}MB available, "
                f"{cls.MIN_AVAILABLE_MB}MB required."
            )

        threshold_mb = available_mb * cls.LOAD_FACTOR
        if estimated_mb > threshold_mb:
            if force:
                return True, (
                    f"WARNING: graph may need ~{estimated_mb:.0f}MB, above the "
                    f"{threshold_mb:.0f}MB threshold; continuing because of --force-memory."
                )
            return False, (
                f"Ontology graph may need ~{estimated_mb:.0f}MB, above the "
                f"{threshold_mb:.0f}MB threshold ({available_mb:.0f}MB available)."
            )

        return True, f"Memory OK: ~{estimated_mb:.0f}MB of {available_mb:.0f}MB available"

    @classmethod
    def ensure_capacity(cls, size_mb: float, force: bool = False) -> None:
        """Raise MemoryError if an ontology of `size_mb` should not be parsed."""
        can_proceed, message = cls.check_memory_available(size_mb, force=force)
        if not can_proceed:
            logger.error(f"Memory check failed: {message}")
            raise MemoryError(message)
        logger.debug(message)


class OWLGraphParser:
    """
    Handles ontology parsing with memory management and validation.

    Any serialization rdflib understands is accepted; the parser name is
    taken from an explicit hint or inferred from the file extension.
    """

    DEFAULT_FORMAT = "xml"

    @staticmethod
    def infer_format_from_path(path: Union[str, Path]) -> Optional[str]:
        """Return the rdflib parser name for a file extension, or None if unknown."""
        return FileExtensions.RDF_FORMATS.get(Path(path).suffix.lower())

    @classmethod
    def resolve_format(
        cls,
        rdf_format: Optional[str],
        source_path: Optional[Union[str, Path]] = None,
    ) -> str:
        """Pick the parser name: explicit hint, then extension, then RDF/XML."""
        if rdf_format:
            return rdf_format
        if source_path:
            inferred = cls.infer_format_from_path(source_path)
            if inferred:
                return inferred
        return cls.DEFAULT_FORMAT

    @staticmethod
    def _finish(graph: Graph, size_mb: float) -> Tuple[Graph, int]:
        triple_count = len(graph)
        if triple_count == 0:
            logger.warning("Parsed graph is empty - no triples found")
            raise ValueError("No RDF triples found in the provided ontology")

        logger.info(f"Successfully parsed {triple_count} triples ({size_mb:.1f} MB)")
        return graph, triple_count

    @classmethod
    def parse_content(
        cls,
        content: str,
        rdf_format: str = "turtle",
        force_large_file: bool = False,
    ) -> Tuple[Graph, int]:
        """
        Parse serialized ontology content into an RDF graph.

        Args:
            content: The serialized ontology
            rdf_format: rdflib parser name (default: turtle)
            force_large_file: If True, skip memory safety checks

        Returns:
            Tuple of (parsed Graph, triple count)

        Raises:
            ValueError: If content is empty or has invalid syntax
            MemoryError: If insufficient memory is available
        """
        if not content or not content.strip():
            raise ValueError("Empty ontology content provided")

        content_size_mb = len(content.encode('utf-8')) / (1024 * 1024)
        MemoryManager.ensure_capacity(content_size_mb, force=force_large_file)

        graph = Graph()
        try:
            graph.parse(data=content, format=rdf_format)
        except MemoryError as e:
            raise MemoryError(
                f"Insufficient memory while parsing ontology content ({content_size_mb:.1f} MB). "
                f"Original error: {e}"
            )
        except Exception as e:
            logger.error(f"Failed to parse ontology content: {e}")
            raise ValueError(f"Invalid RDF syntax: {e}")

        return cls._finish(graph, content_size_mb)

    @classmethod
    def parse_file(
        cls,
        file_path: Union[str, Path],
        rdf_format: Optional[str] = None,
        force_large_file: bool = False,
    ) -> Tuple[Graph, int]:
        """
        Parse an ontology file into an RDF graph with memory safety checks.

        Args:
            file_path: Path to the ontology file
            rdf_format: rdflib parser name; inferred from the extension when None
            force_large_file: If True, skip memory safety checks for large files

        Returns:
            Tuple of (parsed Graph, triple count)

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If file has invalid syntax
            MemoryError: If insufficient memory is available
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        file_size_mb = path.stat().st_size / (1024 * 1024)
        format_name = cls.resolve_format(rdf_format, path)
        logger.info(f"Parsing {path.name} ({file_size_mb:.2f} MB, format: {format_name})")

        MemoryManager.ensure_capacity(file_size_mb, force=force_large_file)

        graph = Graph()
        try:
            graph.parse(str(path), format=format_name)
        except MemoryError as e:
            raise MemoryError(
                f"Insufficient memory while parsing {path.name} ({file_size_mb:.1f} MB). "
                f"Try splitting the ontology into smaller files or increasing available memory. "
                f"Original error: {e}"
            )
        except Exception as e:
            logger.error(f"Failed to parse {path.name}: {e}")
            raise ValueError(f"Invalid RDF syntax: {e}")

        return cls._finish(graph, file_size_mb)
