"""Manifest builder - feeds collected sources through the extraction engine."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from graphql import parse
from graphql.error import GraphQLSyntaxError

from .engine import ExtractionEngine, Manifest
from .extractors import ExtractedSource
from .query_collector import SourceCollector

logger = logging.getLogger(__name__)


class SourceParseError(Exception):
    """Raised when extracted source text is not valid GraphQL."""

    def __init__(self, source: ExtractedSource, error: GraphQLSyntaxError) -> None:
        if error.locations:
            loc = error.locations[0]
            location = source.get_location_str(loc.line, loc.column)
        else:
            location = str(source.source_file)
        super().__init__(f"{location}: {error.message}")
        self.source = source
        self.error = error


class ManifestBuilder:
    """
    Builds one manifest from many files.

    All sources go through the same engine, so operations repeated across
    files share one id and ids follow first-seen order over the whole run.
    """

    def __init__(
        self,
        engine: Optional[ExtractionEngine] = None,
        collector: Optional[SourceCollector] = None,
    ) -> None:
        self.engine = engine or ExtractionEngine()
        self.collector = collector or SourceCollector()

    def process_source(self, source: ExtractedSource) -> Manifest:
        """
        Parse one extracted source and extract its operations.

        Raises:
            SourceParseError: If the source is not valid GraphQL
        """
        try:
            document = parse(source.content)
        except GraphQLSyntaxError as e:
            raise SourceParseError(source, e) from e

        manifest = self.engine.create_map_from_document(document)
        logger.info("%s: %d operations", source.source_file, len(manifest))
        return manifest

    def build(
        self,
        paths: list[Path],
        extensions: Optional[list[str]] = None,
    ) -> Manifest:
        """
        Collect every source under the given paths and merge their manifests.

        Args:
            paths: Files or directories to scan
            extensions: Optional extension filter

        Returns:
            Aggregated manifest, in first-seen order
        """
        manifest: Manifest = {}
        sources = self.collector.collect(paths, extensions)
        logger.info("Found %d GraphQL sources", len(sources))

        for source in sources:
            manifest.update(self.process_source(source))

        return manifest
