#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/ast/__init__.py
"""Syntax tree module for parsed markup documents.

The module consists of several components:

- nodes: the closed set of node kinds and tree helpers
- visitors: the visitor base class every tree consumer implements
- validation: structural invariant checks for finished trees
- serialization: dictionary/JSON dumps of a tree
- dump: indented text outline of a tree

Examples
--------
Build a tree by hand and validate it:

    >>> from markweave.ast import Document, Header, Text, validate_tree
    >>> doc = Document(children=[Header(level=1, children=[Text("Title")])])
    >>> validate_tree(doc)
    []

"""

from __future__ import annotations

from markweave.ast.dump import DumpEntry, TreeDumper, dump_tree
from markweave.ast.nodes import (
    BlockQuote,
    Bold,
    Checkbox,
    Code,
    CodeBlock,
    Document,
    FencedCodeBlock,
    Header,
    HorizontalRule,
    Image,
    Italic,
    LeafNode,
    Link,
    ListParagraph,
    Node,
    OrderedList,
    OrderedListItem,
    Paragraph,
    SourceLocation,
    Strikethrough,
    Table,
    TableCell,
    TableHeader,
    TableRow,
    Text,
    UnorderedList,
    UnorderedListItem,
    UnparsedContent,
    find_nodes,
    iter_nodes,
    replace_node_children,
)
from markweave.ast.serialization import DictSerializer, ast_to_dict, ast_to_json
from markweave.ast.validation import StructureValidator, validate_tree
from markweave.ast.visitors import NodeVisitor, walk

__all__ = [
    # Nodes
    "Node",
    "LeafNode",
    "SourceLocation",
    "Checkbox",
    "Document",
    "Header",
    "Paragraph",
    "ListParagraph",
    "BlockQuote",
    "CodeBlock",
    "FencedCodeBlock",
    "HorizontalRule",
    "UnorderedList",
    "OrderedList",
    "UnorderedListItem",
    "OrderedListItem",
    "Table",
    "TableHeader",
    "TableRow",
    "TableCell",
    "Text",
    "UnparsedContent",
    "Code",
    "Link",
    "Image",
    "Bold",
    "Italic",
    "Strikethrough",
    # Helpers
    "iter_nodes",
    "find_nodes",
    "replace_node_children",
    # Visitors
    "NodeVisitor",
    "walk",
    "StructureValidator",
    "validate_tree",
    "DictSerializer",
    "ast_to_dict",
    "ast_to_json",
    "DumpEntry",
    "TreeDumper",
    "dump_tree",
]
