#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/session.py
"""Per-parse state and the block-phase result type."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from markweave.ast.nodes import Node
from markweave.block_syntaxes.base import BlockSyntax
from markweave.block_syntaxes.paragraph import ParagraphSyntax
from markweave.constants import DEFAULT_MAX_NESTING_DEPTH, DEFAULT_NESTING_POLICY, NestingPolicy
from markweave.inline_syntaxes.base import InlineSyntax
from markweave.references import LinkReference

#: Callback for reference links and images without a definition. Called as
#: ``resolver(label, text)`` where ``text`` is the bracketed text when it
#: differs from the label; returns a node to use or None.
Resolver = Callable[[str, Optional[str]], Optional[Node]]


@dataclass
class ParseSession:
    """Mutable state owned by exactly one parse call.

    The rule tuples are shared, immutable configuration; everything else
    (the link reference table in particular) belongs to this parse only and
    is discarded when it returns.

    """

    block_syntaxes: tuple[BlockSyntax, ...] = ()
    inline_syntaxes: tuple[InlineSyntax, ...] = ()
    fallback_block_syntax: BlockSyntax = field(default_factory=ParagraphSyntax)
    link_resolver: Optional[Resolver] = None
    image_resolver: Optional[Resolver] = None
    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH
    nesting_policy: NestingPolicy = DEFAULT_NESTING_POLICY
    link_references: dict[str, LinkReference] = field(default_factory=dict)


@dataclass(frozen=True)
class PreliminaryTree:
    """Output of the block phase.

    Holds the top-level blocks with ``UnparsedContent`` placeholders still in
    place. ``InlineResolver.resolve`` turns it into a placeholder-free
    ``Document``; the preliminary tree itself is never modified.

    """

    nodes: tuple[Node, ...]


__all__ = [
    "Resolver",
    "ParseSession",
    "PreliminaryTree",
]
