#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/block_syntaxes/blockquote.py
"""Block quote rule."""

from __future__ import annotations

from typing import TYPE_CHECKING

from markweave.ast.nodes import BlockQuote
from markweave.block_syntaxes.base import BlockSyntax, ParseResult
from markweave.patterns import BLOCKQUOTE_PATTERN, is_blank

if TYPE_CHECKING:
    from markweave.block_parser import BlockParser


class BlockquoteSyntax(BlockSyntax):
    """Parses ``>`` quoted blocks.

    The ``>`` marker (and one following space) is removed from each line and
    the remaining lines are parsed recursively as blocks, so quotes can hold
    lists, code and further quotes. A non-blank line without a marker that
    directly follows quoted text and does not start another block is a lazy
    continuation of the quoted paragraph.
    """

    pattern = BLOCKQUOTE_PATTERN

    def parse(self, parser: BlockParser) -> ParseResult:
        location = parser.location()
        line_offset = parser.line_number - 1
        child_lines: list[str] = []

        while not parser.is_done:
            match = parser.matches(BLOCKQUOTE_PATTERN)
            if match is not None:
                child_lines.append(match.group(1))
                parser.advance()
                continue

            # Lazy continuation of the quoted paragraph.
            if is_blank(parser.current) or not child_lines or is_blank(child_lines[-1]):
                break
            if parser.is_at_block_end():
                break
            child_lines.append(parser.current)
            parser.advance()

        children = parser.parse_child(child_lines, line_offset, rule=self.name)
        return BlockQuote(children=children, source_location=location)


__all__ = [
    "BlockquoteSyntax",
]
