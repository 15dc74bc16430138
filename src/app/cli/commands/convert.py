"""
Convert command: ontology -> content model JSON.
"""

import argparse
import json
import logging

from .base import BaseCommand, print_conversion_summary
from constants import ExitCode
from core.exceptions import ContentModelError
from core.validators import InputValidator
from formats.owl import convert_owl_file


logger = logging.getLogger(__name__)


class ConvertCommand(BaseCommand):
    """
    Convert an ontology into vocabularies and nodes and write them as JSON.

    Usage:
        convert <ontology> [--output model.json] [options]
    """

    def execute(self, args: argparse.Namespace) -> int:
        import_config = self.prepare(args)
        if import_config is None:
            return ExitCode.CONFIG_ERROR

        try:
            validated_path = self.validate_ontology_path(args)
            output_path = (
                InputValidator.validate_output_file_path(args.output, allowed_extensions=['.json'])
                if args.output else None
            )
        except (ValueError, FileNotFoundError, PermissionError) as e:
            return self.report_error(e)

        logger.info(f"Converting {validated_path}")
        try:
            result = convert_owl_file(validated_path, config=import_config)
        except (ContentModelError, ValueError, MemoryError, OSError) as e:
            return self.report_error(e)

        output = json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
        if output_path is None:
            print(output)
            return ExitCode.SUCCESS

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(output)

        print_conversion_summary(result, heading=f"Converted {validated_path.name}")
        print(f"Saved to: {output_path}")
        return ExitCode.SUCCESS
