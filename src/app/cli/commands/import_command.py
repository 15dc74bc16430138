"""
Import command: ontology -> JSON content store.
"""

import argparse
import logging

from .base import BaseCommand, print_conversion_summary
from constants import ExitCode
from core.exceptions import ContentModelError
from core.store import JSONContentStore
from core.validators import InputValidator
from formats.owl import ContentImporter, convert_owl_file


logger = logging.getLogger(__name__)


class ImportCommand(BaseCommand):
    """
    Convert an ontology and load the result into a JSON content store.

    The store is only written when the whole import succeeds; on failure
    everything created during the run is rolled back.

    Usage:
        import <ontology> --store content.json [--overwrite] [options]
    """

    def execute(self, args: argparse.Namespace) -> int:
        import_config = self.prepare(args)
        if import_config is None:
            return ExitCode.CONFIG_ERROR

        try:
            validated_path = self.validate_ontology_path(args)
            store_path = InputValidator.validate_output_file_path(args.store, allowed_extensions=['.json'])
            store = JSONContentStore(store_path, overwrite=import_config.overwrite)
        except (ValueError, FileNotFoundError, PermissionError) as e:
            return self.report_error(e)

        try:
            result = convert_owl_file(validated_path, config=import_config)
        except (ContentModelError, ValueError, MemoryError, OSError) as e:
            return self.report_error(e)

        print_conversion_summary(result, heading=f"Importing {validated_path.name}")

        try:
            ContentImporter(store).run(result)
        except ContentModelError as e:
            return self.report_error(e)

        store.save()
        print(f"✓ {store.get_summary()}")
        print(f"Saved to: {store_path}")
        return ExitCode.SUCCESS
