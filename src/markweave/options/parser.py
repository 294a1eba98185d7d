#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/options/parser.py
"""Configuration options for the Markdown parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from markweave.block_syntaxes.base import BlockSyntax
from markweave.constants import (
    DEFAULT_EXTENSION_SET,
    DEFAULT_MAX_NESTING_DEPTH,
    DEFAULT_NESTING_POLICY,
    MAX_NESTING_DEPTH_LIMIT,
    NESTING_POLICIES,
    NestingPolicy,
)
from markweave.extension_set import ExtensionSet
from markweave.inline_syntaxes.base import InlineSyntax
from markweave.options.base import CloneFrozenMixin
from markweave.session import Resolver


@dataclass(frozen=True)
class ParserOptions(CloneFrozenMixin):
    """Configuration options for ``MarkdownParser``.

    Every option is independent; the defaults parse GitHub Flavored Markdown.

    Parameters
    ----------
    block_syntaxes : tuple of BlockSyntax, default ()
        Custom block rules, tried before the extension set and the defaults.
    inline_syntaxes : tuple of InlineSyntax, default ()
        Custom inline rules, tried before the extension set and the defaults.
    extension_set : str or ExtensionSet, default "gfm"
        Named bundle of extra rules ("none", "commonmark", "gfm") or an
        ``ExtensionSet`` instance.
    link_resolver : callable, optional
        Called as ``link_resolver(label, text)`` for reference links without a
        definition; returns a node to use, or None to keep the text.
    image_resolver : callable, optional
        Same as ``link_resolver``, for reference images.
    with_default_block_syntaxes : bool, default True
        Include the built-in block rules. Disable to supply a fully custom
        block grammar; unmatched lines still become paragraphs.
    with_default_inline_syntaxes : bool, default True
        Include the built-in inline rules.
    max_nesting_depth : int, default 32
        Deepest allowed nesting of block quotes and list items, and of inline
        constructs inside each other. Must be between 1 and 100.
    nesting_policy : {"truncate", "error"}, default "truncate"
        What happens beyond ``max_nesting_depth``: "truncate" keeps the
        contents as plain paragraph text and logs a warning, "error" raises
        ``NestingDepthError``.
    validate_output : bool, default False
        Check the finished tree's structural invariants before returning it.

    Examples
    --------
    Parse CommonMark without extensions:
        >>> options = ParserOptions(extension_set="commonmark")

    Fail on pathological nesting:
        >>> options = ParserOptions(max_nesting_depth=8, nesting_policy="error")

    """

    block_syntaxes: tuple[BlockSyntax, ...] = field(
        default=(),
        metadata={"help": "Custom block rules, tried before all others", "importance": "advanced"},
    )
    inline_syntaxes: tuple[InlineSyntax, ...] = field(
        default=(),
        metadata={"help": "Custom inline rules, tried before all others", "importance": "advanced"},
    )
    extension_set: Union[str, ExtensionSet] = field(
        default=DEFAULT_EXTENSION_SET,
        metadata={"help": "Extension set to enable (none, commonmark, gfm)", "importance": "core"},
    )
    link_resolver: Optional[Resolver] = field(
        default=None,
        metadata={"help": "Callback for reference links without a definition", "importance": "advanced"},
    )
    image_resolver: Optional[Resolver] = field(
        default=None,
        metadata={"help": "Callback for reference images without a definition", "importance": "advanced"},
    )
    with_default_block_syntaxes: bool = field(
        default=True,
        metadata={"help": "Include the built-in block rules"},
    )
    with_default_inline_syntaxes: bool = field(
        default=True,
        metadata={"help": "Include the built-in inline rules"},
    )
    max_nesting_depth: int = field(
        default=DEFAULT_MAX_NESTING_DEPTH,
        metadata={
            "help": "Maximum nesting depth of containers and inline markup",
            "type": int,
            "importance": "security",
        },
    )
    nesting_policy: NestingPolicy = field(
        default=DEFAULT_NESTING_POLICY,
        metadata={
            "help": "Behavior beyond the nesting limit",
            "choices": list(NESTING_POLICIES),
            "importance": "security",
        },
    )
    validate_output: bool = field(
        default=False,
        metadata={"help": "Check structural invariants of the finished tree"},
    )

    def __post_init__(self) -> None:
        """Normalize rule sequences and validate option values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range or of the wrong kind.

        """
        if not isinstance(self.block_syntaxes, tuple):
            object.__setattr__(self, "block_syntaxes", tuple(self.block_syntaxes))
        if not isinstance(self.inline_syntaxes, tuple):
            object.__setattr__(self, "inline_syntaxes", tuple(self.inline_syntaxes))

        for syntax in self.block_syntaxes:
            if not isinstance(syntax, BlockSyntax):
                raise ValueError(f"block_syntaxes must contain BlockSyntax instances, got {syntax!r}")
        for syntax in self.inline_syntaxes:
            if not isinstance(syntax, InlineSyntax):
                raise ValueError(f"inline_syntaxes must contain InlineSyntax instances, got {syntax!r}")

        if not isinstance(self.extension_set, (str, ExtensionSet)):
            raise ValueError(f"extension_set must be a name or an ExtensionSet, got {self.extension_set!r}")

        for name in ("link_resolver", "image_resolver"):
            value = getattr(self, name)
            if value is not None and not callable(value):
                raise ValueError(f"{name} must be callable, got {value!r}")

        if isinstance(self.max_nesting_depth, bool) or not isinstance(self.max_nesting_depth, int):
            raise ValueError(f"max_nesting_depth must be an integer, got {self.max_nesting_depth!r}")
        if not 1 <= self.max_nesting_depth <= MAX_NESTING_DEPTH_LIMIT:
            raise ValueError(
                f"max_nesting_depth must be between 1 and {MAX_NESTING_DEPTH_LIMIT}, got {self.max_nesting_depth}"
            )

        if self.nesting_policy not in NESTING_POLICIES:
            raise ValueError(f"nesting_policy must be one of {NESTING_POLICIES}, got {self.nesting_policy!r}")


__all__ = [
    "ParserOptions",
]
