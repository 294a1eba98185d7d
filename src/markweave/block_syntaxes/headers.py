#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/block_syntaxes/headers.py
"""ATX (``## Header ##``) and setext (underlined) header rules."""

from __future__ import annotations

from re import Pattern
from typing import TYPE_CHECKING, Any, Optional

from markweave.ast.nodes import Header, UnparsedContent
from markweave.block_syntaxes.base import BlockSyntax, ParseResult
from markweave.constants import HEADER_LEVELS
from markweave.exceptions import StructuralError
from markweave.patterns import (
    BLOCKQUOTE_PATTERN,
    CODE_FENCE_PATTERN,
    EMPTY_PATTERN,
    HEADER_PATTERN,
    HORIZONTAL_RULE_PATTERN,
    INDENT_PATTERN,
    ORDERED_LIST_PATTERN,
    SETEXT_PATTERN,
    UNORDERED_LIST_PATTERN,
)

if TYPE_CHECKING:
    from markweave.block_parser import BlockParser


class HeaderSyntax(BlockSyntax):
    """Parses ATX headers: ``# Title`` through ``###### Title``.

    The number of leading ``#`` characters is the header level. The default
    pattern only admits one to six markers, so seven or more fall through to
    the paragraph rule.

    Parameters
    ----------
    pattern : re.Pattern, optional
        Replacement header pattern. Group 1 must be the marker run and group
        2 (optional) the header text.

    Raises
    ------
    StructuralError
        From ``parse``, if the pattern yields a marker run outside 1-6. This
        means the pattern is broken; the level is never clamped.

    """

    def __init__(self, pattern: Optional[Pattern[str]] = None):
        """Initialize with the default or a replacement pattern."""
        self._pattern = pattern if pattern is not None else HEADER_PATTERN

    @property
    def pattern(self) -> Pattern[str]:  # type: ignore[override]
        return self._pattern

    def _config(self) -> dict[str, Any]:
        return {"pattern": self._pattern.pattern} if self._pattern is not HEADER_PATTERN else {}

    def parse(self, parser: BlockParser) -> ParseResult:
        match = parser.matches(self.pattern)
        if match is None:
            raise StructuralError("Header pattern no longer matches the current line")
        location = parser.location()
        parser.advance()

        level = len(match.group(1))
        if level not in HEADER_LEVELS:
            raise StructuralError(f"Invalid header level {level}")

        text = (match.group(2) if match.re.groups >= 2 else None) or ""
        contents = UnparsedContent(text.strip(), source_location=location)
        return Header(level=level, children=[contents], source_location=location)


_NON_PARAGRAPH_PATTERNS = (
    EMPTY_PATTERN,
    INDENT_PATTERN,
    CODE_FENCE_PATTERN,
    BLOCKQUOTE_PATTERN,
    HEADER_PATTERN,
    HORIZONTAL_RULE_PATTERN,
    UNORDERED_LIST_PATTERN,
    ORDERED_LIST_PATTERN,
)


def _interpretable_as_paragraph(line: str) -> bool:
    return not any(pattern.match(line) for pattern in _NON_PARAGRAPH_PATTERNS)


class SetextHeaderSyntax(BlockSyntax):
    """Parses setext headers: paragraph text underlined with ``===`` or ``---``.

    Detection looks ahead over the lines that would form a paragraph. If one
    of them is an underline, the lines above it become a level 1 (``=``) or
    level 2 (``-``) header.
    """

    def can_parse(self, parser: BlockParser) -> bool:
        if parser.is_done or not _interpretable_as_paragraph(parser.current):
            return False
        offset = 1
        while True:
            line = parser.peek(offset)
            if line is None:
                return False
            if SETEXT_PATTERN.match(line):
                return True
            if not _interpretable_as_paragraph(line):
                return False
            offset += 1

    def can_end_block(self, parser: BlockParser) -> bool:
        return False

    def parse(self, parser: BlockParser) -> ParseResult:
        location = parser.location()
        lines: list[str] = []
        while not parser.is_done:
            match = parser.matches(SETEXT_PATTERN)
            if match is not None:
                parser.advance()
                level = 1 if match.group(1).startswith("=") else 2
                contents = UnparsedContent("\n".join(lines), source_location=location)
                return Header(level=level, children=[contents], source_location=location)
            lines.append(parser.current.strip())
            parser.advance()
        raise StructuralError("Setext header underline disappeared during parsing")


__all__ = [
    "HeaderSyntax",
    "SetextHeaderSyntax",
]
