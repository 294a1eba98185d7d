#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

This module provides the visitor base class that every consumer of a parsed
tree implements: renderers, serializers, validators. A visitor implements one
``visit_*`` method per node kind; the abstract base makes the set exhaustive,
so a consumer that forgets a node kind cannot be instantiated.

Traversal
---------
The tree holds no traversal state. The visitor keeps an explicit stack of the
nodes it is currently visiting:

- ``visitor.visit(node)`` pushes a frame for ``node`` and dispatches through
  ``node.accept(visitor)``.
- Inside ``visit_xxx(node)`` the implementation may call
  ``self.visit_children(node)`` once to recurse; it returns the list of child
  results.
- Calling ``visit_children`` a second time for the same visit, or for a node
  that is not the one being visited, raises ``StructuralError``.

``walk(node, visitor)`` is the free-function entry point.

Examples
--------
Collect the text of every header:

    >>> class HeaderCollector(NodeVisitor):
    ...     def __init__(self):
    ...         self.headers = []
    ...     def visit_header(self, node):
    ...         self.headers.append(node.text_content)
    ...     def generic_visit(self, node):
    ...         self.visit_children(node)
    ...     visit_document = visit_paragraph = generic_visit
    ...     # ... one method per node kind

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from markweave.ast.nodes import (
    BlockQuote,
    Bold,
    Code,
    CodeBlock,
    Document,
    FencedCodeBlock,
    Header,
    HorizontalRule,
    Image,
    Italic,
    Link,
    ListParagraph,
    Node,
    OrderedList,
    OrderedListItem,
    Paragraph,
    Strikethrough,
    Table,
    TableCell,
    TableHeader,
    TableRow,
    Text,
    UnorderedList,
    UnorderedListItem,
)
from markweave.exceptions import StructuralError


class _Frame:
    """Traversal frame for one node currently being visited."""

    __slots__ = ("node", "children_visited")

    def __init__(self, node: Node) -> None:
        self.node = node
        self.children_visited = False


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    Subclasses implement a visit_* method for every node kind. Traversal goes
    through ``visit()``; recursion into children goes through
    ``visit_children()``, which may be called at most once per visit.

    Subclasses do not need to call ``super().__init__()``; the traversal
    stack is created on first use.

    """

    @property
    def _stack(self) -> list[_Frame]:
        return self.__dict__.setdefault("_traversal_stack", [])

    @property
    def depth(self) -> int:
        """Number of nodes currently being visited (0 outside a traversal)."""
        return len(self._stack)

    def visit(self, node: Node) -> Any:
        """Visit a node, dispatching to the matching visit_* method.

        Parameters
        ----------
        node : Node
            The node to visit

        Returns
        -------
        Any
            Result of the visit_* method

        """
        stack = self._stack
        stack.append(_Frame(node))
        try:
            return node.accept(self)
        finally:
            stack.pop()

    def visit_children(self, node: Node) -> list[Any]:
        """Visit the children of the node currently being visited.

        Parameters
        ----------
        node : Node
            The node whose visit_* method is running

        Returns
        -------
        list
            One result per child, in order

        Raises
        ------
        StructuralError
            If ``node`` is not the node currently being visited, or its
            children were already visited during this visit

        """
        stack = self._stack
        if not stack or stack[-1].node is not node:
            raise StructuralError(
                f"{type(self).__name__} tried to traverse children of a {type(node).__name__} "
                "that is not being visited"
            )
        frame = stack[-1]
        if frame.children_visited:
            raise StructuralError(
                f"{type(self).__name__} tried to traverse children of a {type(node).__name__} twice"
            )
        frame.children_visited = True
        return [self.visit(child) for child in node.children]

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit a Document node.

        Parameters
        ----------
        node : Document
            The document node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_header(self, node: Header) -> Any:
        """Visit a Header node.

        Parameters
        ----------
        node : Header
            The header node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""
        pass

    @abstractmethod
    def visit_list_paragraph(self, node: ListParagraph) -> Any:
        """Visit a ListParagraph node."""
        pass

    @abstractmethod
    def visit_block_quote(self, node: BlockQuote) -> Any:
        """Visit a BlockQuote node."""
        pass

    @abstractmethod
    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit an indented CodeBlock node."""
        pass

    @abstractmethod
    def visit_fenced_code_block(self, node: FencedCodeBlock) -> Any:
        """Visit a FencedCodeBlock node."""
        pass

    @abstractmethod
    def visit_horizontal_rule(self, node: HorizontalRule) -> Any:
        """Visit a HorizontalRule node."""
        pass

    @abstractmethod
    def visit_unordered_list(self, node: UnorderedList) -> Any:
        """Visit an UnorderedList node."""
        pass

    @abstractmethod
    def visit_ordered_list(self, node: OrderedList) -> Any:
        """Visit an OrderedList node."""
        pass

    @abstractmethod
    def visit_unordered_list_item(self, node: UnorderedListItem) -> Any:
        """Visit an UnorderedListItem node."""
        pass

    @abstractmethod
    def visit_ordered_list_item(self, node: OrderedListItem) -> Any:
        """Visit an OrderedListItem node."""
        pass

    @abstractmethod
    def visit_table(self, node: Table) -> Any:
        """Visit a Table node.

        Parameters
        ----------
        node : Table
            The table node to visit; its first child is the TableHeader

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_table_header(self, node: TableHeader) -> Any:
        """Visit a TableHeader node."""
        pass

    @abstractmethod
    def visit_table_row(self, node: TableRow) -> Any:
        """Visit a TableRow node."""
        pass

    @abstractmethod
    def visit_table_cell(self, node: TableCell) -> Any:
        """Visit a TableCell node."""
        pass

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""
        pass

    @abstractmethod
    def visit_code(self, node: Code) -> Any:
        """Visit an inline Code node."""
        pass

    @abstractmethod
    def visit_link(self, node: Link) -> Any:
        """Visit a Link node."""
        pass

    @abstractmethod
    def visit_image(self, node: Image) -> Any:
        """Visit an Image node."""
        pass

    @abstractmethod
    def visit_bold(self, node: Bold) -> Any:
        """Visit a Bold node."""
        pass

    @abstractmethod
    def visit_italic(self, node: Italic) -> Any:
        """Visit an Italic node."""
        pass

    @abstractmethod
    def visit_strikethrough(self, node: Strikethrough) -> Any:
        """Visit a Strikethrough node."""
        pass


def walk(node: Node, visitor: NodeVisitor) -> Any:
    """Traverse ``node`` with ``visitor`` and return the visitor's result.

    Parameters
    ----------
    node : Node
        Root of the subtree to traverse
    visitor : NodeVisitor
        The consumer to run

    Returns
    -------
    Any
        Whatever the visitor's method for ``node`` returns

    """
    return visitor.visit(node)


__all__ = [
    "NodeVisitor",
    "walk",
]
