#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/block_syntaxes/horizontal_rule.py
"""Horizontal rule (thematic break) rule."""

from __future__ import annotations

from typing import TYPE_CHECKING

from markweave.ast.nodes import HorizontalRule
from markweave.block_syntaxes.base import BlockSyntax, ParseResult
from markweave.patterns import HORIZONTAL_RULE_PATTERN

if TYPE_CHECKING:
    from markweave.block_parser import BlockParser


class HorizontalRuleSyntax(BlockSyntax):
    """Parses ``---``, ``***`` and ``___`` (three or more, spaces allowed)."""

    pattern = HORIZONTAL_RULE_PATTERN

    def parse(self, parser: BlockParser) -> ParseResult:
        location = parser.location()
        parser.advance()
        return HorizontalRule(source_location=location)


__all__ = [
    "HorizontalRuleSyntax",
]
