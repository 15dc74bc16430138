"""
CLI command implementations.

- base.py: Base command class and exit code mapping
- convert.py: ConvertCommand
- import_command.py: ImportCommand
- inspect.py: InspectCommand
"""

from .base import (
    BaseCommand,
    exit_code_for,
    print_conversion_summary,
)
from .convert import ConvertCommand
from .import_command import ImportCommand
from .inspect import InspectCommand


__all__ = [
    'BaseCommand',
    'exit_code_for',
    'print_conversion_summary',
    'ConvertCommand',
    'ImportCommand',
    'InspectCommand',
]
