"""Configuration models for the persisted query extractor."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from .engine import ExtractionEngine
    from .query_collector import SourceCollector


class OutputFormat(str, Enum):
    """Output format options."""

    MANIFEST = "manifest"
    """Identity key mapped to the assigned id and the printed transformed query."""

    QUERY_MAP = "query-map"
    """Printed transformed query mapped to the assigned id."""


class KeyFormat(str, Enum):
    """How manifest keys are derived from operations."""

    QUERY = "query"
    SHA256 = "sha256"


class ExtractorConfig(BaseModel):
    """Main configuration for an extraction run."""

    input_paths: list[Path] = Field(..., description="Files or directories to extract queries from")
    output_path: Optional[Path] = Field(
        Path("extracted_queries.json"), description="Manifest destination (None writes to stdout)"
    )
    output_format: OutputFormat = Field(OutputFormat.MANIFEST, description="Manifest output format")
    key_format: KeyFormat = Field(KeyFormat.QUERY, description="Manifest key format")
    add_typename: bool = Field(False, description="Add __typename to every non-root selection set")
    extract_from_js: bool = Field(False, description="Also extract tagged template literals from JS/TS files")
    literal_tag: str = Field("gql", description="Template literal tag marking GraphQL in JS/TS files")
    extensions: Optional[list[str]] = Field(
        None, description="File extensions to filter (e.g., ['.graphql', '.js'])"
    )
    operation_types: list[str] = Field(
        default_factory=lambda: ["query"], description="Operation types to extract"
    )

    def create_engine(self) -> "ExtractionEngine":
        """Build an extraction engine for this configuration."""
        from .engine import ExtractionEngine

        return ExtractionEngine(
            add_typename=self.add_typename,
            key_format=self.key_format,
            operation_types=self.operation_types,
        )

    def create_collector(self) -> "SourceCollector":
        """Build a source collector for this configuration."""
        from .query_collector import SourceCollector

        return SourceCollector(
            extract_from_js=self.extract_from_js,
            literal_tag=self.literal_tag,
        )
