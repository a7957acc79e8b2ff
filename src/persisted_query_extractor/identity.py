"""Query identity - canonical keys for operation deduplication."""

from __future__ import annotations

import hashlib

from graphql import OperationDefinitionNode, print_ast


def query_key(operation: OperationDefinitionNode) -> str:
    """
    Compute the canonical key of an operation.

    The operation is re-printed with graphql-core's printer, so source
    whitespace and comments do not matter while names, aliases, arguments,
    directives, spreads and selection order all do. Anonymous operations
    are keyed by their structure alone.

    Args:
        operation: Operation definition to key

    Returns:
        Printed operation text
    """
    return print_ast(operation)


def hashed_query_key(operation: OperationDefinitionNode) -> str:
    """Compute the SHA-256 hex digest of the canonical key of an operation."""
    return hashlib.sha256(query_key(operation).encode("utf-8")).hexdigest()
