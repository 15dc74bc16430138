#!/usr/bin/env python3
"""
OWL Content Importer

Main entry point for turning DUO-convention OWL/RDF ontologies into
vocabularies, tags and nodes.

Usage:
    python main.py convert <ontology> [--output <model.json>]
    python main.py import <ontology> --store <content.json> [--overwrite]
    python main.py inspect <ontology>
"""

import argparse
import sys
from typing import Dict, List, Optional, Type

from app.cli.commands import BaseCommand, ConvertCommand, ImportCommand, InspectCommand
from app.cli.parsers import create_argument_parser
from constants import ExitCode

COMMANDS: Dict[str, Type[BaseCommand]] = {
    'convert': ConvertCommand,
    'import': ImportCommand,
    'inspect': InspectCommand,
}


def run(args: argparse.Namespace) -> int:
    """Dispatch parsed arguments to their command and return the exit code."""
    command_class = COMMANDS[args.command]
    command = command_class(config_path=getattr(args, 'config', None))
    return int(command.execute(args))


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return ExitCode.ERROR

    try:
        return run(args)
    except KeyboardInterrupt:
        print("\n✗ Interrupted")
        return ExitCode.ERROR


if __name__ == '__main__':
    sys.exit(main())
