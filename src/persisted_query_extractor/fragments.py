"""Fragment dependency resolution and per-operation document minimization."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Optional

from graphql import (
    DocumentNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    OperationDefinitionNode,
    SelectionSetNode,
)

logger = logging.getLogger(__name__)

FragmentIndex = dict[str, FragmentDefinitionNode]


def build_fragment_index(document: DocumentNode) -> FragmentIndex:
    """
    Build a lookup from fragment name to fragment definition.

    When a document defines the same fragment name more than once, the first
    definition wins and later ones are ignored.

    Args:
        document: Parsed GraphQL document

    Returns:
        Mapping of fragment name to its definition
    """
    index: FragmentIndex = {}
    for definition in document.definitions:
        if not isinstance(definition, FragmentDefinitionNode):
            continue
        name = definition.name.value
        if name in index:
            logger.debug("Ignoring duplicate definition of fragment %s", name)
            continue
        index[name] = definition
    return index


def get_operation_definitions(
    document: DocumentNode,
    operation_types: Optional[Iterable[str]] = None,
) -> list[OperationDefinitionNode]:
    """
    Get the operation definitions of a document, in document order.

    Args:
        document: Parsed GraphQL document
        operation_types: Optional operation types to keep (e.g., ['query'])

    Returns:
        List of matching operation definitions
    """
    allowed = set(operation_types) if operation_types is not None else None
    return [
        definition
        for definition in document.definitions
        if isinstance(definition, OperationDefinitionNode)
        and (allowed is None or definition.operation.value in allowed)
    ]


def resolve_fragment_names(
    node: OperationDefinitionNode | FragmentDefinitionNode,
    fragment_index: FragmentIndex,
) -> list[str]:
    """
    Compute the transitive set of fragment names a definition spreads.

    Names are returned in the order they are first reached by a depth-first
    walk that follows spreads in the order they appear. Each fragment is
    walked at most once, so cyclic spreads terminate. Spreads of fragments
    missing from the index are skipped.

    Args:
        node: Operation (or fragment) whose selection tree is walked
        fragment_index: Fragment lookup for the source document

    Returns:
        Ordered, duplicate-free list of resolved fragment names
    """
    recorded: dict[str, None] = {}
    unresolved: set[str] = set()
    _collect_spreads(node.selection_set, fragment_index, recorded, unresolved)

    if unresolved:
        logger.debug("Unresolved fragment spreads: %s", ", ".join(sorted(unresolved)))

    return list(recorded)


def _collect_spreads(
    selection_set: Optional[SelectionSetNode],
    fragment_index: FragmentIndex,
    recorded: dict[str, None],
    unresolved: set[str],
) -> None:
    if selection_set is None:
        return

    for selection in selection_set.selections:
        if isinstance(selection, FragmentSpreadNode):
            name = selection.name.value
            if name in recorded or name in unresolved:
                continue
            fragment = fragment_index.get(name)
            if fragment is None:
                unresolved.add(name)
                continue
            recorded[name] = None
            _collect_spreads(fragment.selection_set, fragment_index, recorded, unresolved)
        else:
            # Fields and inline fragments
            _collect_spreads(
                getattr(selection, "selection_set", None),
                fragment_index,
                recorded,
                unresolved,
            )


def trim_document(
    document: DocumentNode,
    operation: OperationDefinitionNode,
    fragment_names: Iterable[str],
) -> DocumentNode:
    """
    Build a document holding one operation and the fragments it needs.

    The operation comes first. Fragments follow in the order they appear in
    the source document, not in the order they were resolved.

    Args:
        document: Source document the fragments are taken from
        operation: Operation to place at the top of the new document
        fragment_names: Names of the fragments to keep

    Returns:
        New single-operation document
    """
    wanted = set(fragment_names)
    emitted: set[str] = set()
    definitions = [operation]

    for definition in document.definitions:
        if not isinstance(definition, FragmentDefinitionNode):
            continue
        name = definition.name.value
        if name in wanted and name not in emitted:
            emitted.add(name)
            definitions.append(definition)

    return DocumentNode(definitions=tuple(definitions))


def create_document_from_query(operation: OperationDefinitionNode) -> DocumentNode:
    """Wrap a single operation in a document of its own."""
    return DocumentNode(definitions=(operation,))
