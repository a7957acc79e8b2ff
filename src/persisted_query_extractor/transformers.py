"""Query transformers - user-registered rewrites applied before storage."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Callable, Optional

from graphql import (
    DocumentNode,
    FieldNode,
    NameNode,
    OperationDefinitionNode,
    SelectionSetNode,
    Visitor,
    visit,
)

QueryTransformer = Callable[[OperationDefinitionNode], OperationDefinitionNode]

TYPENAME_FIELD = FieldNode(name=NameNode(value="__typename"), arguments=(), directives=())


class QueryTransformerError(Exception):
    """Raised when a query transformer returns something other than an operation."""


class QueryTransformerPipeline:
    """
    Ordered list of query transformers.

    Each transformer receives the result of the previous one. An empty
    pipeline returns the operation unchanged.
    """

    def __init__(self, transformers: Optional[list[QueryTransformer]] = None) -> None:
        self._transformers: list[QueryTransformer] = []
        for transformer in transformers or []:
            self.register(transformer)

    def register(self, transformer: QueryTransformer) -> None:
        """
        Append a transformer to the pipeline.

        Args:
            transformer: Callable mapping an operation to an operation
        """
        if not callable(transformer):
            raise TypeError(f"Query transformer must be callable, got {transformer!r}")
        self._transformers.append(transformer)

    def apply(self, operation: OperationDefinitionNode) -> OperationDefinitionNode:
        """
        Run every registered transformer in registration order.

        Exceptions raised by a transformer propagate unchanged.

        Args:
            operation: Operation to transform

        Returns:
            The final transformed operation

        Raises:
            QueryTransformerError: If a transformer returns a non-operation value
        """
        result = operation
        for transformer in self._transformers:
            result = transformer(result)
            if not isinstance(result, OperationDefinitionNode):
                name = getattr(transformer, "__name__", repr(transformer))
                raise QueryTransformerError(
                    f"Query transformer {name} returned {type(result).__name__}, "
                    "expected an OperationDefinitionNode"
                )
        return result

    def __len__(self) -> int:
        return len(self._transformers)

    def __iter__(self) -> Iterator[QueryTransformer]:
        return iter(self._transformers)


class _AddTypenameVisitor(Visitor):
    """Appends __typename to every selection set that is not an operation root."""

    def leave_selection_set(
        self, node: SelectionSetNode, _key: Any, parent: Any, *_args: Any
    ) -> Optional[SelectionSetNode]:
        if isinstance(parent, OperationDefinitionNode):
            return None

        for selection in node.selections:
            if (
                isinstance(selection, FieldNode)
                and selection.name.value == "__typename"
                and selection.alias is None
            ):
                return None

        return SelectionSetNode(selections=(*node.selections, TYPENAME_FIELD))


def add_typename(operation: OperationDefinitionNode) -> OperationDefinitionNode:
    """
    Add a __typename field to every non-root selection set of an operation.

    Selection sets that already select __typename are left alone. The
    input operation is not modified.
    """
    return visit(operation, _AddTypenameVisitor())


def add_typename_to_document(document: DocumentNode) -> DocumentNode:
    """
    Add a __typename field to every selection set of a document except
    the root selection sets of its operations.

    Fragment definitions get it in their own top-level selection set too,
    since a fragment may be spread anywhere below an operation root.
    """
    return visit(document, _AddTypenameVisitor())
