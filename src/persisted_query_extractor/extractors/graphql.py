"""GraphQL file extractor - handles .graphql and .gql files."""

from __future__ import annotations

from pathlib import Path

from .base import BaseExtractor, ExtractedSource


class GraphQLExtractor(BaseExtractor):
    """
    Extractor for native GraphQL files.

    This is a passthrough extractor - the entire file content is treated
    as a single GraphQL document.
    """

    extensions = [".graphql", ".gql"]

    def extract(self, file_path: Path, content: str) -> list[ExtractedSource]:
        """
        Extract the GraphQL document from a .graphql or .gql file.

        Args:
            file_path: Path to the GraphQL file
            content: File content

        Returns:
            List containing a single ExtractedSource for the whole file
        """
        if not content.strip():
            return []

        return [
            ExtractedSource(
                content=content,
                source_file=file_path,
            )
        ]
