#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/inline_syntaxes/__init__.py
"""Inline grammar rules.

``DEFAULT_INLINE_SYNTAXES`` lists the built-in rules in the order the inline
parser tries them at each position. ``StrikethroughSyntax`` and
``AutolinkExtensionSyntax`` are extension rules enabled by the ``gfm``
extension set.
"""

from __future__ import annotations

from markweave.inline_syntaxes.base import InlineParseResult, InlineSyntax
from markweave.inline_syntaxes.code import CodeSyntax, EscapeSyntax
from markweave.inline_syntaxes.emphasis import BoldSyntax, EmphasisSyntax, ItalicSyntax, StrikethroughSyntax
from markweave.inline_syntaxes.links import AutolinkExtensionSyntax, AutolinkSyntax, ImageSyntax, LinkSyntax

DEFAULT_INLINE_SYNTAXES: tuple[InlineSyntax, ...] = (
    EscapeSyntax(),
    CodeSyntax(),
    AutolinkSyntax(),
    ImageSyntax(),
    LinkSyntax(),
    BoldSyntax(),
    ItalicSyntax(),
)

__all__ = [
    "InlineParseResult",
    "InlineSyntax",
    "EscapeSyntax",
    "CodeSyntax",
    "AutolinkSyntax",
    "ImageSyntax",
    "LinkSyntax",
    "EmphasisSyntax",
    "BoldSyntax",
    "ItalicSyntax",
    "StrikethroughSyntax",
    "AutolinkExtensionSyntax",
    "DEFAULT_INLINE_SYNTAXES",
]
