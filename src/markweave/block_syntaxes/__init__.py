#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/block_syntaxes/__init__.py
"""Block-level grammar rules.

``DEFAULT_BLOCK_SYNTAXES`` lists the built-in rules in the priority order the
block parser tries them. Extension rules such as ``TableSyntax`` are not part
of the defaults; they are activated through an extension set.
"""

from __future__ import annotations

from markweave.block_syntaxes.base import NO_MATCH, BlockSyntax, ParseResult
from markweave.block_syntaxes.blockquote import BlockquoteSyntax
from markweave.block_syntaxes.code import CodeBlockSyntax, FencedCodeBlockSyntax
from markweave.block_syntaxes.headers import HeaderSyntax, SetextHeaderSyntax
from markweave.block_syntaxes.horizontal_rule import HorizontalRuleSyntax
from markweave.block_syntaxes.lists import ListSyntax, OrderedListSyntax, UnorderedListSyntax
from markweave.block_syntaxes.paragraph import EmptyBlockSyntax, ParagraphSyntax
from markweave.block_syntaxes.table import TableSyntax

DEFAULT_BLOCK_SYNTAXES: tuple[BlockSyntax, ...] = (
    EmptyBlockSyntax(),
    SetextHeaderSyntax(),
    HeaderSyntax(),
    FencedCodeBlockSyntax(),
    CodeBlockSyntax(),
    BlockquoteSyntax(),
    HorizontalRuleSyntax(),
    UnorderedListSyntax(),
    OrderedListSyntax(),
    ParagraphSyntax(),
)

__all__ = [
    "NO_MATCH",
    "ParseResult",
    "BlockSyntax",
    "EmptyBlockSyntax",
    "SetextHeaderSyntax",
    "HeaderSyntax",
    "FencedCodeBlockSyntax",
    "CodeBlockSyntax",
    "BlockquoteSyntax",
    "HorizontalRuleSyntax",
    "ListSyntax",
    "UnorderedListSyntax",
    "OrderedListSyntax",
    "ParagraphSyntax",
    "TableSyntax",
    "DEFAULT_BLOCK_SYNTAXES",
]
