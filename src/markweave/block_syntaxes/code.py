#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/block_syntaxes/code.py
"""Indented and fenced code block rules.

Code content is kept verbatim; it never goes through inline resolution.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from markweave.ast.nodes import CodeBlock, FencedCodeBlock
from markweave.block_syntaxes.base import NO_MATCH, BlockSyntax, ParseResult
from markweave.patterns import CODE_FENCE_PATTERN, INDENT_PATTERN, is_blank, strip_indentation

if TYPE_CHECKING:
    from markweave.block_parser import BlockParser


class CodeBlockSyntax(BlockSyntax):
    """Parses code indented by four spaces or a tab.

    Blank lines inside the block are kept; trailing blank lines are dropped.
    An indented line cannot interrupt a paragraph, so it only starts a code
    block where no paragraph is open.
    """

    pattern = INDENT_PATTERN

    def can_end_block(self, parser: BlockParser) -> bool:
        return False

    def parse(self, parser: BlockParser) -> ParseResult:
        location = parser.location()
        lines: list[str] = []
        while not parser.is_done:
            match = parser.matches(INDENT_PATTERN)
            if match is not None:
                lines.append(match.group(1))
            elif is_blank(parser.current):
                lines.append(strip_indentation(parser.current, 4))
            else:
                break
            parser.advance()

        while lines and is_blank(lines[-1]):
            lines.pop()
        return CodeBlock(content="\n".join(lines), source_location=location)


class FencedCodeBlockSyntax(BlockSyntax):
    """Parses fenced code blocks delimited by ```` ``` ```` or ``~~~``.

    The closing fence must use the same character and be at least as long as
    the opening one. An unclosed fence runs to the end of the input. The
    first word of the info string becomes the language tag, and the opening
    fence's indentation is removed from each content line.
    """

    pattern = CODE_FENCE_PATTERN

    def can_parse(self, parser: BlockParser) -> bool:
        match = parser.matches(CODE_FENCE_PATTERN)
        if match is None:
            return False
        # A backtick fence's info string may not contain backticks.
        return not (match.group(2).startswith("`") and "`" in match.group(3))

    def parse(self, parser: BlockParser) -> ParseResult:
        location = parser.location()
        match = parser.matches(CODE_FENCE_PATTERN)
        if match is None:
            return NO_MATCH
        indent = len(match.group(1))
        fence = match.group(2)
        info = match.group(3).strip()
        parser.advance()

        closing = re.compile(rf"^ {{0,3}}{re.escape(fence[0])}{{{len(fence)},}}[ \t]*$")
        lines: list[str] = []
        while not parser.is_done:
            if closing.match(parser.current):
                parser.advance()
                break
            lines.append(strip_indentation(parser.current, indent))
            parser.advance()

        language = info.split()[0] if info else None
        return FencedCodeBlock(content="\n".join(lines), language=language, source_location=location)


__all__ = [
    "CodeBlockSyntax",
    "FencedCodeBlockSyntax",
]
