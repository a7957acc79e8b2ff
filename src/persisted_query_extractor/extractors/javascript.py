"""JavaScript extractor - handles GraphQL in tagged template literals."""

from __future__ import annotations

import re
from pathlib import Path

from .base import BaseExtractor, ExtractedSource


class JavaScriptExtractor(BaseExtractor):
    """
    Extractor for JavaScript/TypeScript files holding GraphQL in tagged templates.

    Supports patterns like:
        const QUERY = gql`
            query { ... }
        `;

    Interpolations (e.g. ${AuthorFragment}) are blanked out; the fragments they
    carry are expected to be defined by another literal of the same file.
    All literals of a file are joined into a single GraphQL document so
    spreads can resolve across them.
    """

    extensions = [".js", ".jsx", ".ts", ".tsx"]

    # Pattern to match template literal interpolations: ${...}
    INTERPOLATION_PATTERN = re.compile(r"\$\{[^}]*\}")

    def __init__(self, literal_tag: str = "gql") -> None:
        """
        Initialize the extractor.

        Args:
            literal_tag: Tag marking GraphQL template literals
        """
        self.literal_tag = literal_tag
        # Captures: literal content
        self.literal_pattern = re.compile(
            rf"(?<![\w$.]){re.escape(literal_tag)}\s*`(.*?)`",
            re.DOTALL,
        )

    def find_tagged_literals(self, content: str) -> list[tuple[int, int, str]]:
        """
        Find every template literal tagged with the configured tag.

        Args:
            content: JavaScript file content

        Returns:
            List of (1-based line, 1-based column, literal content) tuples,
            where line and column locate the first character of the content
        """
        literals: list[tuple[int, int, str]] = []
        for match in self.literal_pattern.finditer(content):
            start_pos = match.start(1)
            line_number = content[:start_pos].count("\n") + 1
            line_start = content.rfind("\n", 0, start_pos) + 1
            literals.append((line_number, start_pos - line_start + 1, match.group(1)))
        return literals

    def eliminate_interpolations(self, literal: str) -> str:
        """Blank out ${...} interpolations, keeping the literal's line layout."""
        return self.INTERPOLATION_PATTERN.sub(
            lambda match: re.sub(r"[^\n]", " ", match.group(0)), literal
        )

    def extract(self, file_path: Path, content: str) -> list[ExtractedSource]:
        """
        Extract the tagged GraphQL literals of a file as one document.

        Each literal is padded onto the line and column it occupies in the
        file, so parse errors point at the right place in the source.

        Args:
            file_path: Path to the JavaScript file
            content: File content

        Returns:
            List containing a single ExtractedSource, or empty if no literal was found
        """
        literals = self.find_tagged_literals(content)
        if not literals:
            return []

        parts: list[str] = []
        current_line = 1
        current_col = 1
        for line, col, body in literals:
            if line > current_line:
                parts.append("\n" * (line - current_line))
                current_col = 1
            # Literals sharing a line need at least one separating space
            padding = max(col - current_col, 0 if current_col == 1 else 1)
            parts.append(" " * padding)

            body = self.eliminate_interpolations(body)
            parts.append(body)

            current_line = line + body.count("\n")
            if "\n" in body:
                current_col = len(body) - body.rfind("\n")
            else:
                current_col += padding + len(body)

        joined = "".join(parts)
        if not joined.strip():
            return []

        return [ExtractedSource(content=joined, source_file=file_path)]
