"""Source collector - scans files and extracts GraphQL source text."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .extractors import BaseExtractor, ExtractedSource, GraphQLExtractor, JavaScriptExtractor

logger = logging.getLogger(__name__)


class SourceCollector:
    """
    Collects GraphQL source text from various file types.

    Uses a registry of extractors keyed by file extension. Files with an
    extension no extractor handles contribute nothing.
    """

    def __init__(self, extract_from_js: bool = False, literal_tag: str = "gql") -> None:
        """
        Initialize with default extractors.

        Args:
            extract_from_js: Also handle JavaScript/TypeScript files
            literal_tag: Template literal tag used by the JavaScript extractor
        """
        self._extractors: dict[str, BaseExtractor] = {}
        self.register_extractor(GraphQLExtractor())
        if extract_from_js:
            self.register_extractor(JavaScriptExtractor(literal_tag))

    def register_extractor(self, extractor: BaseExtractor) -> None:
        """
        Register an extractor for each of its extensions.

        Args:
            extractor: Extractor instance to register
        """
        for ext in extractor.extensions:
            self._extractors[ext.lower()] = extractor

    def get_extractor(self, file_path: Path) -> Optional[BaseExtractor]:
        """Get the extractor registered for a file's extension, if any."""
        return self._extractors.get(file_path.suffix.lower())

    def collect(
        self,
        paths: list[Path],
        extensions: Optional[list[str]] = None,
    ) -> list[ExtractedSource]:
        """
        Collect GraphQL sources from the given paths.

        Args:
            paths: List of files or directories to scan
            extensions: Optional list of extensions to filter by (e.g., ['.graphql', '.js'])

        Returns:
            Extracted sources, in path order and sorted within directories
        """
        sources: list[ExtractedSource] = []

        # Normalize extensions
        if extensions:
            extensions = [ext.lower() if ext.startswith(".") else f".{ext}".lower() for ext in extensions]

        for path in paths:
            if path.is_file():
                sources.extend(self.process_file(path, extensions))
            elif path.is_dir():
                sources.extend(self.process_directory(path, extensions))
            else:
                logger.warning("Skipping %s: not a file or directory", path)

        return sources

    def process_file(
        self,
        file_path: Path,
        extensions: Optional[list[str]] = None,
    ) -> list[ExtractedSource]:
        """
        Process a single file.

        Args:
            file_path: Path to the file
            extensions: Optional extension filter

        Returns:
            List of extracted sources
        """
        if extensions and file_path.suffix.lower() not in extensions:
            return []

        extractor = self.get_extractor(file_path)
        if not extractor:
            logger.debug("No extractor for %s", file_path)
            return []

        try:
            content = file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            logger.warning("Skipping %s: not UTF-8 text", file_path)
            return []
        except OSError as e:
            logger.warning("Could not read %s: %s", file_path, e)
            return []

        return extractor.extract(file_path, content)

    def process_directory(
        self,
        directory: Path,
        extensions: Optional[list[str]] = None,
    ) -> list[ExtractedSource]:
        """
        Recursively process a directory.

        Args:
            directory: Directory to scan
            extensions: Optional extension filter

        Returns:
            List of extracted sources from all recognized files in the directory
        """
        target_extensions = extensions or list(self._extractors.keys())

        file_paths: set[Path] = set()
        for ext in target_extensions:
            for file_path in directory.rglob(f"*{ext}"):
                if file_path.is_file() and file_path.suffix.lower() == ext:
                    file_paths.add(file_path)

        sources: list[ExtractedSource] = []
        for file_path in sorted(file_paths):
            sources.extend(self.process_file(file_path, extensions))
        return sources

    @property
    def supported_extensions(self) -> list[str]:
        """Get list of supported file extensions."""
        return list(self._extractors.keys())
