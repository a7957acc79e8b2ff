"""Base extractor interface for pulling GraphQL source text out of files."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass
class ExtractedSource:
    """GraphQL source text extracted from a file."""

    content: str
    """Raw GraphQL text, parsed as a single document.

    Lines and columns of the text match those of the source file, so parser
    locations can be reported against the file directly.
    """

    source_file: Path
    """Path to the original source file."""

    def get_location_str(self, line: int = 1, column: int = 1) -> str:
        """
        Get a formatted location string for error reporting.

        Args:
            line: Line number (1-based)
            column: Column number within that line (1-based)

        Returns:
            Formatted string like "path/to/queries.graphql:12:5"
        """
        return f"{self.source_file}:{line}:{column}"


class BaseExtractor(ABC):
    """Abstract base class for source extractors."""

    extensions: list[str] = []
    """File extensions this extractor handles (e.g., ['.graphql'])."""

    @abstractmethod
    def extract(self, file_path: Path, content: str) -> list[ExtractedSource]:
        """
        Extract GraphQL source text from file content.

        Args:
            file_path: Path to the source file
            content: Raw content of the file

        Returns:
            List of extracted sources (empty if the file holds no GraphQL)
        """
        ...
