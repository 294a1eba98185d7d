#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/block_syntaxes/paragraph.py
"""Blank-line and paragraph rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

from markweave.ast.nodes import Paragraph, UnparsedContent
from markweave.block_syntaxes.base import BlockSyntax, ParseResult
from markweave.patterns import EMPTY_PATTERN

if TYPE_CHECKING:
    from markweave.block_parser import BlockParser


class EmptyBlockSyntax(BlockSyntax):
    """Consumes a run of blank lines and emits nothing."""

    pattern = EMPTY_PATTERN

    def parse(self, parser: BlockParser) -> ParseResult:
        while not parser.is_done and parser.matches(EMPTY_PATTERN):
            parser.advance()
        return None


class ParagraphSyntax(BlockSyntax):
    """Default rule: a run of text lines.

    Matches any line and keeps consuming lines until a rule that may end a
    block matches. Each line is stripped of surrounding whitespace; the lines
    are joined with newlines into a single placeholder.
    """

    def can_parse(self, parser: BlockParser) -> bool:
        return not parser.is_done

    def can_end_block(self, parser: BlockParser) -> bool:
        return False

    def parse(self, parser: BlockParser) -> ParseResult:
        location = parser.location()
        lines = [parser.current.strip()]
        parser.advance()
        while not parser.is_at_block_end():
            lines.append(parser.current.strip())
            parser.advance()
        contents = UnparsedContent("\n".join(lines), source_location=location)
        return Paragraph(children=[contents], source_location=location)


__all__ = [
    "EmptyBlockSyntax",
    "ParagraphSyntax",
]
