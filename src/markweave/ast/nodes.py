#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/ast/nodes.py
"""AST node classes for parsed markup documents.

This module defines the closed set of node kinds produced by the parser. Each
node represents a structural or inline element of the document and supports
the visitor pattern through ``accept()``.

Node Hierarchy
--------------
All nodes inherit from the base Node class. Composite nodes store their
children in a ``children`` list; leaf nodes expose an empty ``children``
property.

Block-level nodes:
    - Document, Header, Paragraph, ListParagraph, BlockQuote
    - CodeBlock, FencedCodeBlock, HorizontalRule
    - UnorderedList, OrderedList, UnorderedListItem, OrderedListItem
    - Table, TableHeader, TableRow, TableCell

Inline nodes:
    - Text, Code, Link, Image, Bold, Italic, Strikethrough

Placeholder:
    - UnparsedContent, raw text that has not been through inline resolution.
      It only ever appears in a preliminary (block-phase) tree.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, Iterator, Optional, TypeVar

from markweave.constants import DEFAULT_ALIGNMENT, HEADER_LEVELS, Alignment
from markweave.exceptions import StructuralError

NodeT = TypeVar("NodeT", bound="Node")


@dataclass
class SourceLocation:
    """Source location information for AST nodes.

    Parameters
    ----------
    line : int
        1-based line number the node starts on
    column : int, default = 1
        1-based column number the node starts on

    """

    line: int
    column: int = 1


@dataclass(frozen=True)
class Checkbox:
    """Task-list checkbox attached to a list item.

    Parameters
    ----------
    checked : bool
        Whether the box is ticked (``[x]``) or empty (``[ ]``)

    """

    checked: bool


class Node(ABC):
    """Base class for all AST nodes.

    Every node has a list of children (empty for leaves), a computed
    ``text_content`` projection and an ``accept()`` method that calls exactly
    one ``visit_*`` method on the visitor.

    """

    children: list[Node]
    source_location: Optional[SourceLocation]

    @property
    def text_content(self) -> str:
        """Concatenated text of all descendant leaves."""
        return "".join(child.text_content for child in self.children)

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


class LeafNode(Node):
    """Base class for nodes that never have children."""

    @property
    def children(self) -> list[Node]:  # type: ignore[override]
        return []


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root document node containing the top-level blocks.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes of the document
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this document."""
        return visitor.visit_document(self)


@dataclass
class Header(Node):
    """Header node (levels 1-6).

    Parameters
    ----------
    level : int
        Header level (1-6, where 1 is most important)
    children : list of Node, default = empty list
        Inline nodes representing the header text
    source_location : SourceLocation or None, default = None
        Source location information

    Raises
    ------
    StructuralError
        If level is outside 1-6. A grammar rule that builds such a header has
        a broken pattern; the level is never clamped.

    """

    level: int
    children: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        """Validate header level is between 1 and 6."""
        if self.level not in HEADER_LEVELS:
            raise StructuralError(f"Header level must be 1-6, got {self.level}")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this header.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_header method

        Returns
        -------
        Any
            Result from visitor.visit_header(self)

        """
        return visitor.visit_header(self)


@dataclass
class Paragraph(Node):
    """Paragraph node containing inline content.

    Parameters
    ----------
    children : list of Node, default = empty list
        Inline nodes representing paragraph content
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this paragraph.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_paragraph method

        Returns
        -------
        Any
            Result from visitor.visit_paragraph(self)

        """
        return visitor.visit_paragraph(self)


@dataclass
class ListParagraph(Node):
    """Paragraph that sits directly inside a list item.

    Kept separate from Paragraph so consumers can render tight list content
    without paragraph spacing.

    """

    children: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list paragraph."""
        return visitor.visit_list_paragraph(self)


@dataclass
class BlockQuote(Node):
    """Block quote node containing block-level content.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes inside the quote (may contain nested quotes)
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this block quote."""
        return visitor.visit_block_quote(self)


@dataclass
class CodeBlock(LeafNode):
    """Indented code block.

    Parameters
    ----------
    content : str
        Raw code with the indentation removed
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: str
    source_location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    @property
    def text_content(self) -> str:
        return self.content

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this code block."""
        return visitor.visit_code_block(self)


@dataclass
class FencedCodeBlock(LeafNode):
    """Fenced code block with an optional language tag.

    Parameters
    ----------
    content : str
        Raw code between the fences
    language : str or None, default = None
        First word of the fence's info string
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: str
    language: Optional[str] = None
    source_location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    @property
    def text_content(self) -> str:
        return self.content

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this fenced code block.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_fenced_code_block method

        Returns
        -------
        Any
            Result from visitor.visit_fenced_code_block(self)

        """
        return visitor.visit_fenced_code_block(self)


@dataclass
class HorizontalRule(LeafNode):
    """Horizontal rule (thematic break). Has no content."""

    source_location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    @property
    def text_content(self) -> str:
        return ""

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this horizontal rule."""
        return visitor.visit_horizontal_rule(self)


@dataclass
class UnorderedList(Node):
    """Bullet list node.

    Parameters
    ----------
    children : list of UnorderedListItem, default = empty list
        Items of the list
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this unordered list."""
        return visitor.visit_unordered_list(self)


@dataclass
class OrderedList(Node):
    """Numbered list node.

    Parameters
    ----------
    children : list of OrderedListItem, default = empty list
        Items of the list
    start : int, default = 1
        Number of the first item
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    start: int = 1
    source_location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this ordered list."""
        return visitor.visit_ordered_list(self)


@dataclass
class UnorderedListItem(Node):
    """Item of a bullet list.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level content of the item
    checkbox : Checkbox or None, default = None
        Task-list checkbox, when the item starts with ``[ ]`` or ``[x]``
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    checkbox: Optional[Checkbox] = None
    source_location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list item."""
        return visitor.visit_unordered_list_item(self)


@dataclass
class OrderedListItem(Node):
    """Item of a numbered list.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level content of the item
    checkbox : Checkbox or None, default = None
        Task-list checkbox, when the item starts with ``[ ]`` or ``[x]``
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    checkbox: Optional[Checkbox] = None
    source_location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list item."""
        return visitor.visit_ordered_list_item(self)


@dataclass
class Table(Node):
    """Table node.

    The first child is always the TableHeader, followed by zero or more
    TableRow children. Every row holds exactly ``column_count`` cells.

    Parameters
    ----------
    children : list of Node, default = empty list
        The header row followed by the body rows
    column_count : int, default = 0
        Number of columns, fixed by the separator row
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    column_count: int = 0
    source_location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    @property
    def header(self) -> Optional[TableHeader]:
        """The header row, if present."""
        if self.children and isinstance(self.children[0], TableHeader):
            return self.children[0]
        return None

    @property
    def rows(self) -> list[TableRow]:
        """The body rows."""
        return [child for child in self.children if isinstance(child, TableRow)]

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_table method

        Returns
        -------
        Any
            Result from visitor.visit_table(self)

        """
        return visitor.visit_table(self)


@dataclass
class TableHeader(Node):
    """Header row of a table, holding TableCell children."""

    children: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table header."""
        return visitor.visit_table_header(self)


@dataclass
class TableRow(Node):
    """Body row of a table, holding TableCell children."""

    children: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table row."""
        return visitor.visit_table_row(self)


@dataclass
class TableCell(Node):
    """Table cell node.

    Parameters
    ----------
    children : list of Node, default = empty list
        Inline content of the cell
    alignment : {'left', 'center', 'right'} or None, default = None
        Alignment taken from the separator row; None when the separator
        carried no colon
    column_index : int, default = 0
        Zero-based column of the cell
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    alignment: Optional[Alignment] = None
    column_index: int = 0
    source_location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    @property
    def effective_alignment(self) -> Alignment:
        """Alignment to render with; unspecified alignment means left."""
        return self.alignment if self.alignment is not None else DEFAULT_ALIGNMENT

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table cell.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_table_cell method

        Returns
        -------
        Any
            Result from visitor.visit_table_cell(self)

        """
        return visitor.visit_table_cell(self)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(LeafNode):
    """Plain text node.

    Parameters
    ----------
    content : str
        The text content
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: str
    source_location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    @property
    def text_content(self) -> str:
        return self.content

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this text node."""
        return visitor.visit_text(self)


@dataclass
class UnparsedContent(LeafNode):
    """Raw text awaiting inline resolution.

    Block rules capture every text region as an UnparsedContent leaf. The
    inline resolution pass replaces each one with resolved inline nodes, so
    a finished tree never contains this node and visitors have no method for
    it.

    Parameters
    ----------
    content : str
        Raw text of the region, line breaks preserved
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: str
    source_location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    @property
    def text_content(self) -> str:
        return self.content

    def accept(self, visitor: Any) -> Any:
        """Refuse traversal; placeholders never reach a visitor.

        Raises
        ------
        StructuralError
            Always. Visiting a placeholder means inline resolution was skipped.

        """
        raise StructuralError(
            "Unresolved inline placeholder reached a visitor",
            line=self.source_location.line if self.source_location else None,
        )


@dataclass
class Code(LeafNode):
    """Inline code span.

    Parameters
    ----------
    content : str
        Code text with the backticks removed
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: str
    source_location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    @property
    def text_content(self) -> str:
        return self.content

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this inline code."""
        return visitor.visit_code(self)


@dataclass
class Link(Node):
    """Hyperlink node.

    Parameters
    ----------
    children : list of Node, default = empty list
        Inline nodes representing the link text
    url : str, default = ""
        Resolved link destination
    title : str or None, default = None
        Optional link title
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    url: str = ""
    title: Optional[str] = None
    source_location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this link.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_link method

        Returns
        -------
        Any
            Result from visitor.visit_link(self)

        """
        return visitor.visit_link(self)


@dataclass
class Image(LeafNode):
    """Image node.

    Parameters
    ----------
    destination : str
        Image URL or path
    alt : str, default = ""
        Alternative text
    title : str or None, default = None
        Optional image title
    source_location : SourceLocation or None, default = None
        Source location information

    """

    destination: str
    alt: str = ""
    title: Optional[str] = None
    source_location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    @property
    def text_content(self) -> str:
        return self.title or ""

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this image."""
        return visitor.visit_image(self)


@dataclass
class Bold(Node):
    """Strong emphasis (``**text**`` or ``__text__``)."""

    children: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this bold node."""
        return visitor.visit_bold(self)


@dataclass
class Italic(Node):
    """Emphasis (``*text*`` or ``_text_``)."""

    children: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this italic node."""
        return visitor.visit_italic(self)


@dataclass
class Strikethrough(Node):
    """Strikethrough text (``~~text~~``)."""

    children: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this strikethrough node."""
        return visitor.visit_strikethrough(self)


# ============================================================================
# Helpers
# ============================================================================


def iter_nodes(node: Node) -> Iterator[Node]:
    """Iterate over a node and all of its descendants in pre-order.

    Parameters
    ----------
    node : Node
        Root of the subtree to walk

    Yields
    ------
    Node
        Each node of the subtree, parents before children

    """
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def find_nodes(node: Node, node_type: type[NodeT]) -> list[NodeT]:
    """Return all nodes of the given type in the subtree, in document order.

    Examples
    --------
    >>> doc = Document(children=[Header(level=1, children=[Text("Hi")])])
    >>> [h.level for h in find_nodes(doc, Header)]
    [1]

    """
    return [candidate for candidate in iter_nodes(node) if isinstance(candidate, node_type)]


def replace_node_children(node: NodeT, new_children: list[Node]) -> NodeT:
    """Create a copy of a node with replaced children.

    The original node is left untouched. All other fields (level, alignment,
    column count, source location, ...) are copied as they are.

    Parameters
    ----------
    node : Node
        The composite node to copy
    new_children : list of Node
        Children for the copy

    Returns
    -------
    Node
        New node of the same type

    Raises
    ------
    ValueError
        If the node is a leaf and cannot hold children

    """
    if isinstance(node, LeafNode):
        if new_children:
            raise ValueError(f"{type(node).__name__} cannot have children")
        return node
    return replace(node, children=list(new_children))


__all__ = [
    "SourceLocation",
    "Checkbox",
    "Node",
    "LeafNode",
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
    "iter_nodes",
    "find_nodes",
    "replace_node_children",
]
