"""Extraction engine - deduplicates operations and assigns persisted query ids."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Optional

from graphql import DocumentNode, OperationDefinitionNode, parse, print_ast

from .config import KeyFormat
from .fragments import (
    build_fragment_index,
    get_operation_definitions,
    resolve_fragment_names,
    trim_document,
)
from .identity import hashed_query_key, query_key
from .transformers import (
    QueryTransformer,
    QueryTransformerPipeline,
    add_typename_to_document,
)

logger = logging.getLogger(__name__)

KEY_FUNCTIONS: dict[KeyFormat, Callable[[OperationDefinitionNode], str]] = {
    KeyFormat.QUERY: query_key,
    KeyFormat.SHA256: hashed_query_key,
}


@dataclass(frozen=True)
class ManifestEntry:
    """A persisted query: its id and the minimized document stored for it."""

    id: int
    """Persisted query id, starting at 1."""

    transformed_query: DocumentNode
    """Single-operation document with its fragment closure."""

    @property
    def operation_name(self) -> str:
        """Name of the stored operation, or an empty string if anonymous."""
        operation = self.transformed_query.definitions[0]
        return operation.name.value if operation.name else ""

    @property
    def fragment_count(self) -> int:
        """Number of fragment definitions in the stored document."""
        return len(self.transformed_query.definitions) - 1

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "id": self.id,
            "transformedQuery": print_ast(self.transformed_query),
        }


Manifest = dict[str, ManifestEntry]


class ExtractionEngine:
    """
    Turns parsed documents into persisted query manifest entries.

    The engine owns the dedup table (identity key to id) and the id
    counter for its whole lifetime, so ids stay stable across every
    document fed to the same engine. Calls that change this state are
    serialized, and a document either commits all of its entries or none.
    """

    def __init__(
        self,
        query_transformers: Optional[list[QueryTransformer]] = None,
        key_format: KeyFormat = KeyFormat.QUERY,
        operation_types: Iterable[str] = ("query",),
        add_typename: bool = False,
    ) -> None:
        """
        Initialize the engine.

        Args:
            query_transformers: Transformers applied to each operation before storage
            key_format: How manifest keys are derived from operations
            operation_types: Operation types to extract (e.g., ['query', 'mutation'])
            add_typename: Add __typename to the stored documents, fragments included
        """
        self.pipeline = QueryTransformerPipeline(query_transformers)
        self.key_format = KeyFormat(key_format)
        self.operation_types = tuple(operation_types)
        self.add_typename = add_typename
        self._key_function = KEY_FUNCTIONS[self.key_format]
        self._lock = threading.Lock()
        self._ids: dict[str, int] = {}
        self._manifest: Manifest = {}
        self._next_id = 1

    @property
    def manifest(self) -> Mapping[str, ManifestEntry]:
        """Read-only view of every entry stored by this engine."""
        return MappingProxyType(self._manifest)

    @property
    def next_id(self) -> int:
        """The id the next new operation will receive."""
        return self._next_id

    def get_query_key(self, operation: OperationDefinitionNode) -> str:
        """Compute the manifest key for an operation."""
        return self._key_function(operation)

    def add_query_transformer(self, transformer: QueryTransformer) -> None:
        """Register a transformer applied after any already registered."""
        self.pipeline.register(transformer)

    def trim_document_for_query(
        self,
        document: DocumentNode,
        operation: OperationDefinitionNode,
    ) -> DocumentNode:
        """
        Build the minimal document for one operation of a document.

        Args:
            document: Source document holding the operation's fragments
            operation: Operation to keep

        Returns:
            Document with the operation and the fragments it reaches
        """
        fragment_index = build_fragment_index(document)
        names = resolve_fragment_names(operation, fragment_index)
        return trim_document(document, operation, names)

    def create_map_from_document(self, document: DocumentNode) -> Manifest:
        """
        Extract, minimize and number every operation of a document.

        Keys are computed from the original operations; the stored documents
        hold the transformed operations with their own fragment closure.

        Args:
            document: Parsed GraphQL document

        Returns:
            Manifest entries for the operations found in this document

        Raises:
            QueryTransformerError: If a transformer returns an invalid value
        """
        with self._lock:
            fragment_index = build_fragment_index(document)
            staged_ids: dict[str, int] = {}
            next_id = self._next_id
            result: Manifest = {}

            for operation in get_operation_definitions(document, self.operation_types):
                key = self.get_query_key(operation)
                transformed = self.pipeline.apply(operation)
                names = resolve_fragment_names(transformed, fragment_index)
                trimmed = trim_document(document, transformed, names)
                if self.add_typename:
                    trimmed = add_typename_to_document(trimmed)

                query_id = self._ids.get(key) or staged_ids.get(key)
                if query_id is None:
                    query_id = next_id
                    next_id += 1
                    staged_ids[key] = query_id

                result[key] = ManifestEntry(id=query_id, transformed_query=trimmed)

            # Commit only once every operation of the document succeeded
            self._ids.update(staged_ids)
            self._next_id = next_id
            self._manifest.update(result)

        logger.debug(
            "Extracted %d operations (%d new) from document", len(result), len(staged_ids)
        )
        return result

    def process_graphql_source(self, source: str) -> Manifest:
        """
        Parse GraphQL text and extract its operations.

        Raises:
            GraphQLSyntaxError: If the text is not valid GraphQL
        """
        return self.create_map_from_document(parse(source))

    def reset(self) -> None:
        """Forget every assigned id and stored entry."""
        with self._lock:
            self._ids.clear()
            self._manifest.clear()
            self._next_id = 1
