#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/block_syntaxes/lists.py
"""Bullet and numbered list rules.

A list is a run of items that share a marker: the bullet character for
unordered lists, the delimiter (``.`` or ``)``) for ordered lists. A different
marker starts a new list. Each item's lines (marker removed, continuation
lines de-indented to the item's content column) are parsed recursively as
blocks; paragraphs directly inside an item become ``ListParagraph`` nodes.

With ``checkboxes=True`` an item starting with ``[ ]`` or ``[x]`` gets a
``Checkbox`` and the box is removed from its text (GitHub task lists).
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass, field, replace
from re import Match, Pattern
from typing import TYPE_CHECKING, Any, Optional

from markweave.ast.nodes import (
    Checkbox,
    ListParagraph,
    Node,
    OrderedList,
    OrderedListItem,
    Paragraph,
    SourceLocation,
    UnorderedList,
    UnorderedListItem,
)
from markweave.block_syntaxes.base import NO_MATCH, BlockSyntax, ParseResult
from markweave.patterns import (
    CHECKBOX_PATTERN,
    HORIZONTAL_RULE_PATTERN,
    ORDERED_LIST_PATTERN,
    UNORDERED_LIST_PATTERN,
    indentation,
    is_blank,
    strip_indentation,
)

if TYPE_CHECKING:
    from markweave.block_parser import BlockParser


@dataclass
class _ItemDraft:
    """Lines collected for one list item while scanning."""

    line_offset: int
    location: SourceLocation
    content_indent: int
    lines: list[str] = field(default_factory=list)
    checkbox: Optional[Checkbox] = None


class ListSyntax(BlockSyntax):
    """Shared scanning logic for bullet and numbered lists.

    Parameters
    ----------
    checkboxes : bool, default = False
        Recognize ``[ ]`` / ``[x]`` task-list boxes at the start of items

    """

    def __init__(self, checkboxes: bool = False):
        """Initialize the list rule."""
        self._checkboxes = checkboxes

    @property
    def checkboxes(self) -> bool:
        """Whether task-list boxes are recognized."""
        return self._checkboxes

    def _config(self) -> dict[str, Any]:
        return {"checkboxes": self._checkboxes}

    def can_parse(self, parser: BlockParser) -> bool:
        if parser.is_done or HORIZONTAL_RULE_PATTERN.match(parser.current):
            return False
        return parser.matches(self.pattern) is not None  # type: ignore[arg-type]

    @abstractmethod
    def _marker_key(self, match: Match[str]) -> str:
        """Part of the marker that must stay the same across one list."""

    @abstractmethod
    def _build_list(self, items: list[Node], first: Match[str], location: SourceLocation) -> Node:
        """Wrap the parsed items in the list node."""

    @abstractmethod
    def _build_item(self, children: list[Node], checkbox: Optional[Checkbox], location: SourceLocation) -> Node:
        """Build one list item node."""

    def _start_item(self, parser: BlockParser, match: Match[str]) -> _ItemDraft:
        marker_width = len(match.group(1)) + len(match.group(2)) + (len(match.group(3)) if match.re.groups == 5 else 0)
        spacing = match.group(match.re.groups - 1) or ""
        content = match.group(match.re.groups) or ""
        spacing_width = indentation(spacing)
        if not content or spacing_width > 4:
            # Empty item, or an indented code block right after the marker.
            content_indent = marker_width + 1
            content = (" " * (spacing_width - 1) + content) if content else ""
        else:
            content_indent = marker_width + spacing_width

        draft = _ItemDraft(
            line_offset=parser.line_number - 1,
            location=parser.location(),
            content_indent=content_indent,
        )
        if self._checkboxes:
            box = CHECKBOX_PATTERN.match(content)
            if box is not None:
                draft.checkbox = Checkbox(checked=box.group(1) != " ")
                content = box.group(2) or ""
        draft.lines.append(content)
        return draft

    def _continues_after_blank(self, parser: BlockParser, draft: _ItemDraft, marker: str) -> bool:
        offset = 1
        line = parser.peek(offset)
        while line is not None and is_blank(line):
            offset += 1
            line = parser.peek(offset)
        if line is None:
            return False
        if indentation(line) >= draft.content_indent:
            return True
        match = self.pattern.match(line)  # type: ignore[union-attr]
        return match is not None and not HORIZONTAL_RULE_PATTERN.match(line) and self._marker_key(match) == marker

    def parse(self, parser: BlockParser) -> ParseResult:
        first = parser.matches(self.pattern)  # type: ignore[arg-type]
        if first is None:
            return NO_MATCH
        location = parser.location()
        marker = self._marker_key(first)
        drafts: list[_ItemDraft] = []

        while not parser.is_done:
            line = parser.current
            match = None if HORIZONTAL_RULE_PATTERN.match(line) else self.pattern.match(line)  # type: ignore[union-attr]
            current = drafts[-1] if drafts else None

            if current is not None and not is_blank(line) and indentation(line) >= current.content_indent:
                current.lines.append(strip_indentation(line, current.content_indent))
                parser.advance()
                continue

            if match is not None:
                if self._marker_key(match) != marker:
                    break
                drafts.append(self._start_item(parser, match))
                parser.advance()
                continue

            if current is None:
                break

            if is_blank(line):
                if not self._continues_after_blank(parser, current, marker):
                    break
                current.lines.append("")
                parser.advance()
                continue

            # Lazy continuation of the item's paragraph.
            if not current.lines or is_blank(current.lines[-1]) or parser.is_at_block_end():
                break
            current.lines.append(line.strip())
            parser.advance()

        items = [self._finish_item(parser, draft) for draft in drafts]
        return self._build_list(items, first, location)

    def _finish_item(self, parser: BlockParser, draft: _ItemDraft) -> Node:
        children = parser.parse_child(draft.lines, draft.line_offset, rule=self.name)
        children = [
            ListParagraph(children=child.children, source_location=child.source_location)
            if isinstance(child, Paragraph)
            else child
            for child in children
        ]
        return self._build_item(children, draft.checkbox, draft.location)


class UnorderedListSyntax(ListSyntax):
    """Parses bullet lists marked with ``-``, ``*`` or ``+``."""

    pattern: Pattern[str] = UNORDERED_LIST_PATTERN

    def _marker_key(self, match: Match[str]) -> str:
        return match.group(2)

    def _build_list(self, items: list[Node], first: Match[str], location: SourceLocation) -> Node:
        return UnorderedList(children=items, source_location=location)

    def _build_item(self, children: list[Node], checkbox: Optional[Checkbox], location: SourceLocation) -> Node:
        return UnorderedListItem(children=children, checkbox=checkbox, source_location=location)


class OrderedListSyntax(ListSyntax):
    """Parses numbered lists marked with ``1.`` or ``1)``.

    The first item's number becomes the list's ``start``. Only a list that
    starts at 1 may interrupt a paragraph, so numbers at the start of a
    wrapped prose line do not open a list.
    """

    pattern: Pattern[str] = ORDERED_LIST_PATTERN

    def can_end_block(self, parser: BlockParser) -> bool:
        match = parser.matches(ORDERED_LIST_PATTERN)
        return match is not None and int(match.group(2)) == 1

    def _marker_key(self, match: Match[str]) -> str:
        return match.group(3)

    def _build_list(self, items: list[Node], first: Match[str], location: SourceLocation) -> Node:
        return OrderedList(children=items, start=int(first.group(2)), source_location=location)

    def _build_item(self, children: list[Node], checkbox: Optional[Checkbox], location: SourceLocation) -> Node:
        return OrderedListItem(children=children, checkbox=checkbox, source_location=location)


__all__ = [
    "ListSyntax",
    "UnorderedListSyntax",
    "OrderedListSyntax",
]
