"""
CLI argument parser configuration.

This module defines the argument parser structure for all CLI commands.

Command Structure:
    - convert <ontology> [--output model.json]
    - import  <ontology> --store store.json [--overwrite]
    - inspect <ontology>
"""

import argparse

from constants import FileExtensions, LoggingConfig

RDF_FORMAT_CHOICES = sorted(set(FileExtensions.RDF_FORMATS.values()))


# ============================================================================
# Shared Flag Group Builders
# ============================================================================

def add_input_flags(parser: argparse.ArgumentParser) -> None:
    """Add the ontology argument and input-related flags."""
    parser.add_argument('ontology', help='Path to the OWL/RDF ontology file')
    parser.add_argument(
        '--format',
        dest='rdf_format',
        choices=RDF_FORMAT_CHOICES,
        help='RDF serialization of the ontology (default: inferred from the extension)'
    )
    parser.add_argument(
        '--allow-relative-up',
        action='store_true',
        help="Permit '..' in path only if the resolved path stays within the current directory"
    )


def add_mapping_flags(parser: argparse.ArgumentParser) -> None:
    """Add flags that change which resources become nodes."""
    parser.add_argument(
        '--classes-as-nodes',
        action='store_true',
        default=None,
        help='Also import classes below the Node subclasses as nodes'
    )
    parser.add_argument(
        '--only-leaf-classes',
        dest='only_leaf_classes_as_nodes',
        action='store_true',
        default=None,
        help='With --classes-as-nodes, import only leaf classes'
    )


def add_performance_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--force-memory',
        action='store_true',
        default=None,
        help='Skip memory safety checks for very large files (use with caution)'
    )


def add_common_flags(parser: argparse.ArgumentParser) -> None:
    """Add configuration and logging flags."""
    parser.add_argument(
        '--config', '-c',
        help='Path to configuration file'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help=f'Logging level (default: {LoggingConfig.DEFAULT_LOG_LEVEL})'
    )
    parser.add_argument(
        '--log-file',
        help='Also write logs to this file'
    )


# ============================================================================
# Main Parser Factory
# ============================================================================

def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the main argument parser.

    Returns:
        Configured ArgumentParser with all subcommands.
    """
    parser = argparse.ArgumentParser(
        description="OWL/RDF ontology to content model importer (DUO convention)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Write the content model as JSON
    %(prog)s convert ontology.owl --output model.json
    %(prog)s convert ontology.ttl --classes-as-nodes --only-leaf-classes

    # Import into a JSON content store
    %(prog)s import ontology.owl --store content.json --overwrite

    # Show vocabularies, bundles and routed properties
    %(prog)s inspect ontology.owl
        """,
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    _add_convert_parser(subparsers)
    _add_import_parser(subparsers)
    _add_inspect_parser(subparsers)

    return parser


# ============================================================================
# Command Parsers
# ============================================================================

def _add_convert_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        'convert',
        help='Convert an ontology into a content model (JSON)'
    )
    add_input_flags(parser)
    add_mapping_flags(parser)
    add_performance_flags(parser)
    add_common_flags(parser)
    parser.add_argument(
        '--output', '-o',
        help='Output JSON file (default: print to stdout)'
    )


def _add_import_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        'import',
        help='Convert an ontology and load it into a JSON content store'
    )
    add_input_flags(parser)
    add_mapping_flags(parser)
    add_performance_flags(parser)
    add_common_flags(parser)
    parser.add_argument(
        '--store', '-s',
        required=True,
        help='JSON content store file (created if missing)'
    )
    parser.add_argument(
        '--overwrite',
        action='store_true',
        default=None,
        help='Replace the tags of vocabularies that already exist in the store'
    )


def _add_inspect_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        'inspect',
        help='Show vocabularies, bundles and routed properties of an ontology'
    )
    add_input_flags(parser)
    add_performance_flags(parser)
    add_common_flags(parser)
