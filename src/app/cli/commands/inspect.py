"""
Inspect command: show how an ontology will be read without mapping fields.
"""

import argparse
import logging

from .base import BaseCommand
from ..helpers import format_count_summary, print_footer, print_header
from constants import ExitCode
from core.exceptions import ContentModelError
from formats.owl import (
    ClassHierarchyResolver,
    IndividualClassifier,
    OWLGraphParser,
    PropertyRouter,
    RDFLibGraphAccessor,
    VocabularyExtractor,
)


logger = logging.getLogger(__name__)


class InspectCommand(BaseCommand):
    """
    Print vocabularies, bundles, routed properties and content resources.

    Usage:
        inspect <ontology> [--format turtle]
    """

    def execute(self, args: argparse.Namespace) -> int:
        import_config = self.prepare(args)
        if import_config is None:
            return ExitCode.CONFIG_ERROR

        try:
            validated_path = self.validate_ontology_path(args)
            graph, triple_count = OWLGraphParser.parse_file(
                validated_path,
                rdf_format=import_config.rdf_format,
                force_large_file=import_config.force_large_file,
            )
        except (ValueError, FileNotFoundError, PermissionError, MemoryError) as e:
            return self.report_error(e)

        accessor = RDFLibGraphAccessor(graph)
        hierarchy = ClassHierarchyResolver(accessor)
        classifier = IndividualClassifier(
            accessor,
            hierarchy,
            classes_as_nodes=import_config.classes_as_nodes,
            only_leaf_classes_as_nodes=import_config.only_leaf_classes_as_nodes,
        )

        try:
            vocabularies = VocabularyExtractor(accessor, hierarchy).extract()
            routed = PropertyRouter(accessor).routed_properties()
            resources = classifier.content_resources()
            bundle_counts = {}
            unresolved = 0
            for resource in resources:
                bundle = classifier.resolve_bundle(resource)
                if bundle is None:
                    unresolved += 1
                    continue
                bundle_counts[bundle] = bundle_counts.get(bundle, 0) + 1
        except ContentModelError as e:
            return self.report_error(e)

        print_header(f"{validated_path.name} ({triple_count} triples)")

        print(f"Vocabularies: {len(vocabularies)}")
        for vocabulary in vocabularies:
            print(f"  {vocabulary.vid}: {len(vocabulary.tags)} tags")

        print(f"Bundles: {len(classifier.bundle_classes())}")
        for bundle_class in classifier.bundle_classes():
            print(f"  {accessor.local_name(bundle_class)}")

        print(f"Routed properties: {len(routed)}")
        for prop in routed:
            print(f"  {accessor.local_name(prop.uri)} ({prop.kind})")

        print(f"Content resources: {len(resources)}")
        if bundle_counts:
            print(format_count_summary(bundle_counts, prefix="  "))
        if unresolved:
            print(f"  ⚠ {unresolved} without a bundle")

        print_footer()
        return ExitCode.SUCCESS
