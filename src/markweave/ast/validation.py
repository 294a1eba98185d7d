#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/ast/validation.py
"""Structural validation of finished syntax trees.

The parser guarantees a handful of invariants about every tree it returns.
``StructureValidator`` re-checks them on an arbitrary tree, which is useful
after hand-building or transforming a tree and is what the parser runs when
``validate_output`` is enabled.

Checked invariants:

- every header level is within 1-6
- a table's first child is its only TableHeader, every other child is a
  TableRow, and every row has exactly ``column_count`` cells
- no node instance is reachable twice
- no UnparsedContent placeholder is reachable

"""

from __future__ import annotations

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
    UnparsedContent,
)
from markweave.ast.visitors import NodeVisitor
from markweave.constants import HEADER_LEVELS
from markweave.exceptions import StructuralError


class StructureValidator(NodeVisitor):
    """Visitor that validates tree invariants.

    Parameters
    ----------
    strict : bool, default = True
        Raise ``StructuralError`` on the first violation. When False,
        violations are collected in ``errors`` and traversal continues.

    Examples
    --------
    >>> validator = StructureValidator(strict=False)
    >>> validator.validate(document)
    >>> validator.errors
    []

    """

    def __init__(self, strict: bool = True):
        """Initialize the validator."""
        self.strict = strict
        self.errors: list[str] = []
        self._seen: set[int] = set()

    def validate(self, node: Node) -> list[str]:
        """Validate a tree and return the violations found.

        Parameters
        ----------
        node : Node
            Root of the tree to validate

        Returns
        -------
        list of str
            Violation messages (always empty in strict mode, which raises)

        Raises
        ------
        StructuralError
            In strict mode, on the first violation

        """
        self.errors = []
        self._seen = set()
        self.visit(node)
        return list(self.errors)

    def _add_error(self, message: str, node: Node | None = None) -> None:
        self.errors.append(message)
        if self.strict:
            location = node.source_location if node is not None else None
            raise StructuralError(message, line=location.line if location else None)

    def visit(self, node: Node) -> Any:
        """Check identity and placeholder rules, then dispatch."""
        if id(node) in self._seen:
            self._add_error(f"{type(node).__name__} instance appears more than once in the tree", node)
            return None
        self._seen.add(id(node))
        if isinstance(node, UnparsedContent):
            self._add_error("Unresolved UnparsedContent placeholder in tree", node)
            return None
        return super().visit(node)

    def _visit_composite(self, node: Node) -> None:
        self.visit_children(node)

    def visit_document(self, node: Document) -> None:
        """Validate a Document node."""
        self._visit_composite(node)

    def visit_header(self, node: Header) -> None:
        """Validate a Header node."""
        if node.level not in HEADER_LEVELS:
            self._add_error(f"Invalid header level: {node.level}", node)
        self._visit_composite(node)

    def visit_paragraph(self, node: Paragraph) -> None:
        self._visit_composite(node)

    def visit_list_paragraph(self, node: ListParagraph) -> None:
        self._visit_composite(node)

    def visit_block_quote(self, node: BlockQuote) -> None:
        self._visit_composite(node)

    def visit_code_block(self, node: CodeBlock) -> None:
        pass

    def visit_fenced_code_block(self, node: FencedCodeBlock) -> None:
        pass

    def visit_horizontal_rule(self, node: HorizontalRule) -> None:
        pass

    def visit_unordered_list(self, node: UnorderedList) -> None:
        """Validate an UnorderedList node."""
        for item in node.children:
            if not isinstance(item, UnorderedListItem):
                self._add_error(f"UnorderedList contains {type(item).__name__}", node)
        self._visit_composite(node)

    def visit_ordered_list(self, node: OrderedList) -> None:
        """Validate an OrderedList node."""
        for item in node.children:
            if not isinstance(item, OrderedListItem):
                self._add_error(f"OrderedList contains {type(item).__name__}", node)
        self._visit_composite(node)

    def visit_unordered_list_item(self, node: UnorderedListItem) -> None:
        self._visit_composite(node)

    def visit_ordered_list_item(self, node: OrderedListItem) -> None:
        self._visit_composite(node)

    def visit_table(self, node: Table) -> None:
        """Validate a Table node: header placement and row widths."""
        if not node.children or not isinstance(node.children[0], TableHeader):
            self._add_error("Table must start with a TableHeader", node)
        for index, row in enumerate(node.children[1:], start=1):
            if not isinstance(row, TableRow):
                self._add_error(f"Table child {index} is a {type(row).__name__}, expected TableRow", node)
        for index, row in enumerate(node.children):
            if len(row.children) != node.column_count:
                self._add_error(
                    f"Table row {index} has {len(row.children)} cells, expected {node.column_count}",
                    node,
                )
        self._visit_composite(node)

    def visit_table_header(self, node: TableHeader) -> None:
        self._visit_composite(node)

    def visit_table_row(self, node: TableRow) -> None:
        self._visit_composite(node)

    def visit_table_cell(self, node: TableCell) -> None:
        self._visit_composite(node)

    def visit_text(self, node: Text) -> None:
        pass

    def visit_code(self, node: Code) -> None:
        pass

    def visit_link(self, node: Link) -> None:
        self._visit_composite(node)

    def visit_image(self, node: Image) -> None:
        pass

    def visit_bold(self, node: Bold) -> None:
        self._visit_composite(node)

    def visit_italic(self, node: Italic) -> None:
        self._visit_composite(node)

    def visit_strikethrough(self, node: Strikethrough) -> None:
        self._visit_composite(node)


def validate_tree(node: Node, strict: bool = True) -> list[str]:
    """Validate a tree with a fresh StructureValidator.

    Parameters
    ----------
    node : Node
        Root of the tree
    strict : bool, default = True
        Raise on the first violation instead of collecting

    Returns
    -------
    list of str
        Violation messages

    """
    return StructureValidator(strict=strict).validate(node)


__all__ = [
    "StructureValidator",
    "validate_tree",
]
