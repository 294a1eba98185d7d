#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/ast/dump.py
"""Indented text outline of a syntax tree.

``dump_tree`` is the default output of the command-line interface and a
convenient way to eyeball a parse result::

    >>> print(dump_tree(parse_markdown("# Title")))
    Document
      Header(level=1)
        Text('Title')

The outline is produced in two steps: ``TreeDumper`` turns the tree into
``DumpEntry`` records (a label plus child entries), which are then formatted
as text. The CLI formats the same entries as a ``rich`` tree.

"""

from __future__ import annotations

from dataclasses import dataclass, field

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


@dataclass
class DumpEntry:
    """One line of the outline and the entries nested below it."""

    label: str
    children: list[DumpEntry] = field(default_factory=list)


def _label(node: Node, *params: str) -> str:
    name = type(node).__name__
    if not params:
        return name
    return f"{name}({', '.join(params)})"


def _checkbox_params(checkbox: Checkbox | None) -> tuple[str, ...]:
    if checkbox is None:
        return ()
    return ("checkbox=[x]" if checkbox.checked else "checkbox=[ ]",)


class TreeDumper(NodeVisitor):
    """Visitor producing ``DumpEntry`` records for every node."""

    def _leaf(self, node: Node, *params: str) -> DumpEntry:
        return DumpEntry(_label(node, *params))

    def _composite(self, node: Node, *params: str) -> DumpEntry:
        return DumpEntry(_label(node, *params), self.visit_children(node))

    def visit_document(self, node: Document) -> DumpEntry:
        return self._composite(node)

    def visit_header(self, node: Header) -> DumpEntry:
        return self._composite(node, f"level={node.level}")

    def visit_paragraph(self, node: Paragraph) -> DumpEntry:
        return self._composite(node)

    def visit_list_paragraph(self, node: ListParagraph) -> DumpEntry:
        return self._composite(node)

    def visit_block_quote(self, node: BlockQuote) -> DumpEntry:
        return self._composite(node)

    def visit_code_block(self, node: CodeBlock) -> DumpEntry:
        return self._leaf(node, repr(node.content))

    def visit_fenced_code_block(self, node: FencedCodeBlock) -> DumpEntry:
        return self._leaf(node, f"language={node.language!r}", repr(node.content))

    def visit_horizontal_rule(self, node: HorizontalRule) -> DumpEntry:
        return self._leaf(node)

    def visit_unordered_list(self, node: UnorderedList) -> DumpEntry:
        return self._composite(node)

    def visit_ordered_list(self, node: OrderedList) -> DumpEntry:
        return self._composite(node, f"start={node.start}")

    def visit_unordered_list_item(self, node: UnorderedListItem) -> DumpEntry:
        return self._composite(node, *_checkbox_params(node.checkbox))

    def visit_ordered_list_item(self, node: OrderedListItem) -> DumpEntry:
        return self._composite(node, *_checkbox_params(node.checkbox))

    def visit_table(self, node: Table) -> DumpEntry:
        return self._composite(node, f"column_count={node.column_count}")

    def visit_table_header(self, node: TableHeader) -> DumpEntry:
        return self._composite(node)

    def visit_table_row(self, node: TableRow) -> DumpEntry:
        return self._composite(node)

    def visit_table_cell(self, node: TableCell) -> DumpEntry:
        return self._composite(node, f"{node.effective_alignment}", f"column_index={node.column_index}")

    def visit_text(self, node: Text) -> DumpEntry:
        return self._leaf(node, repr(node.content))

    def visit_code(self, node: Code) -> DumpEntry:
        return self._leaf(node, repr(node.content))

    def visit_link(self, node: Link) -> DumpEntry:
        params = [f"url={node.url!r}"]
        if node.title is not None:
            params.append(f"title={node.title!r}")
        return self._composite(node, *params)

    def visit_image(self, node: Image) -> DumpEntry:
        params = [f"destination={node.destination!r}", f"alt={node.alt!r}"]
        if node.title is not None:
            params.append(f"title={node.title!r}")
        return self._leaf(node, *params)

    def visit_bold(self, node: Bold) -> DumpEntry:
        return self._composite(node)

    def visit_italic(self, node: Italic) -> DumpEntry:
        return self._composite(node)

    def visit_strikethrough(self, node: Strikethrough) -> DumpEntry:
        return self._composite(node)


def _format_entry(entry: DumpEntry, indent: str, level: int, lines: list[str]) -> None:
    lines.append(f"{indent * level}{entry.label}")
    for child in entry.children:
        _format_entry(child, indent, level + 1, lines)


def dump_tree(node: Node | list[Node], indent: str = "  ") -> str:
    """Render a tree (or a list of sibling trees) as an indented outline.

    Parameters
    ----------
    node : Node or list of Node
        Root of the tree, or the inline nodes returned by an inline-only parse
    indent : str, default = "  "
        Indentation added per nesting level

    Returns
    -------
    str
        One line per node, without a trailing newline

    """
    roots = node if isinstance(node, list) else [node]
    dumper = TreeDumper()
    lines: list[str] = []
    for root in roots:
        _format_entry(dumper.visit(root), indent, 0, lines)
    return "\n".join(lines)


__all__ = [
    "DumpEntry",
    "TreeDumper",
    "dump_tree",
]
