#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/ast/serialization.py
"""JSON serialization for AST nodes.

This module converts a finished tree into plain dictionaries and JSON. It is a
structural dump used by the command-line interface and by tests that compare
trees, not an output-format renderer: every node kind and every attribute is
written out, nothing is interpreted.

Examples
--------
Serialize a tree to JSON:

    >>> from markweave.ast import Document, Header, Text
    >>> from markweave.ast.serialization import ast_to_json
    >>>
    >>> doc = Document(children=[
    ...     Header(level=1, children=[Text("Title")])
    ... ])
    >>> print(ast_to_json(doc, indent=2))

"""

from __future__ import annotations

import json
from typing import Any, Optional

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
from markweave.ast.visitors import NodeVisitor

SCHEMA_VERSION = 1


class DictSerializer(NodeVisitor):
    """Visitor that turns a tree into nested dictionaries.

    Parameters
    ----------
    include_source : bool, default = False
        Add a ``source_location`` entry to nodes that carry one

    """

    def __init__(self, include_source: bool = False):
        """Initialize the serializer."""
        self.include_source = include_source

    def _base(self, node: Node, **fields: Any) -> dict[str, Any]:
        result: dict[str, Any] = {"node_type": type(node).__name__, **fields}
        if self.include_source and node.source_location is not None:
            result["source_location"] = {
                "line": node.source_location.line,
                "column": node.source_location.column,
            }
        return result

    def _composite(self, node: Node, **fields: Any) -> dict[str, Any]:
        result = self._base(node, **fields)
        result["children"] = self.visit_children(node)
        return result

    def visit_document(self, node: Document) -> dict[str, Any]:
        return self._composite(node)

    def visit_header(self, node: Header) -> dict[str, Any]:
        return self._composite(node, level=node.level)

    def visit_paragraph(self, node: Paragraph) -> dict[str, Any]:
        return self._composite(node)

    def visit_list_paragraph(self, node: ListParagraph) -> dict[str, Any]:
        return self._composite(node)

    def visit_block_quote(self, node: BlockQuote) -> dict[str, Any]:
        return self._composite(node)

    def visit_code_block(self, node: CodeBlock) -> dict[str, Any]:
        return self._base(node, content=node.content)

    def visit_fenced_code_block(self, node: FencedCodeBlock) -> dict[str, Any]:
        return self._base(node, content=node.content, language=node.language)

    def visit_horizontal_rule(self, node: HorizontalRule) -> dict[str, Any]:
        return self._base(node)

    def visit_unordered_list(self, node: UnorderedList) -> dict[str, Any]:
        return self._composite(node)

    def visit_ordered_list(self, node: OrderedList) -> dict[str, Any]:
        return self._composite(node, start=node.start)

    def visit_unordered_list_item(self, node: UnorderedListItem) -> dict[str, Any]:
        return self._composite(node, checkbox=_serialize_checkbox(node.checkbox))

    def visit_ordered_list_item(self, node: OrderedListItem) -> dict[str, Any]:
        return self._composite(node, checkbox=_serialize_checkbox(node.checkbox))

    def visit_table(self, node: Table) -> dict[str, Any]:
        return self._composite(node, column_count=node.column_count)

    def visit_table_header(self, node: TableHeader) -> dict[str, Any]:
        return self._composite(node)

    def visit_table_row(self, node: TableRow) -> dict[str, Any]:
        return self._composite(node)

    def visit_table_cell(self, node: TableCell) -> dict[str, Any]:
        return self._composite(node, alignment=node.alignment, column_index=node.column_index)

    def visit_text(self, node: Text) -> dict[str, Any]:
        return self._base(node, content=node.content)

    def visit_code(self, node: Code) -> dict[str, Any]:
        return self._base(node, content=node.content)

    def visit_link(self, node: Link) -> dict[str, Any]:
        return self._composite(node, url=node.url, title=node.title)

    def visit_image(self, node: Image) -> dict[str, Any]:
        return self._base(node, destination=node.destination, alt=node.alt, title=node.title)

    def visit_bold(self, node: Bold) -> dict[str, Any]:
        return self._composite(node)

    def visit_italic(self, node: Italic) -> dict[str, Any]:
        return self._composite(node)

    def visit_strikethrough(self, node: Strikethrough) -> dict[str, Any]:
        return self._composite(node)


def _serialize_checkbox(checkbox: Any) -> Optional[dict[str, bool]]:
    if checkbox is None:
        return None
    return {"checked": checkbox.checked}


def ast_to_dict(node: Node, include_source: bool = False) -> dict[str, Any]:
    """Convert an AST node (and its subtree) to a dictionary.

    Parameters
    ----------
    node : Node
        The node to serialize
    include_source : bool, default = False
        Include source line/column information

    Returns
    -------
    dict
        Nested dictionaries with a ``node_type`` key on every level

    Raises
    ------
    StructuralError
        If the tree still contains an UnparsedContent placeholder

    """
    return DictSerializer(include_source=include_source).visit(node)


def ast_to_json(node: Node, indent: int | None = None, include_source: bool = False) -> str:
    """Serialize an AST node to a JSON string with schema versioning.

    Parameters
    ----------
    node : Node
        The AST node to serialize
    indent : int or None, default = None
        Number of spaces for indentation (None for compact format)
    include_source : bool, default = False
        Include source line/column information

    Returns
    -------
    str
        JSON string of the form ``{"schema_version": 1, "node_type": ...}``

    """
    node_dict = ast_to_dict(node, include_source=include_source)
    versioned_dict = {"schema_version": SCHEMA_VERSION, **node_dict}
    return json.dumps(versioned_dict, indent=indent, ensure_ascii=False)


__all__ = [
    "DictSerializer",
    "ast_to_dict",
    "ast_to_json",
]
