#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/parser.py
"""Markdown parsing entry points.

Parsing runs in two phases:

1. **Block phase**: ``BlockParser`` segments the lines into blocks
   (headers, lists, tables, ...) and captures every text region as an
   ``UnparsedContent`` placeholder. The result is a ``PreliminaryTree``.
2. **Inline phase**: ``InlineResolver`` collects the link reference
   definitions of the whole document, then builds the final ``Document``
   with every placeholder replaced by resolved inline nodes.

``MarkdownParser`` holds only immutable configuration: the merged rule
tuples built from its ``ParserOptions``. Every parse call creates its own
``ParseSession``, so one parser may serve many threads at once.

Examples
--------
    >>> doc = parse_markdown("# Title")
    >>> doc.children[0].level
    1

"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence, TypeVar

from markweave.ast.nodes import Document, Node
from markweave.ast.validation import validate_tree
from markweave.block_parser import BlockParser
from markweave.block_syntaxes import DEFAULT_BLOCK_SYNTAXES
from markweave.block_syntaxes.base import BlockSyntax
from markweave.exceptions import ValidationError
from markweave.extension_set import ExtensionSet, get_extension_set
from markweave.inline_parser import InlineParser
from markweave.inline_syntaxes import DEFAULT_INLINE_SYNTAXES
from markweave.inline_syntaxes.base import InlineSyntax
from markweave.options.parser import ParserOptions
from markweave.resolver import InlineResolver
from markweave.session import ParseSession, PreliminaryTree
from markweave.utils.decorators import debug_timer

logger = logging.getLogger(__name__)

SyntaxT = TypeVar("SyntaxT", BlockSyntax, InlineSyntax)


def merge_syntaxes(*groups: Iterable[SyntaxT]) -> tuple[SyntaxT, ...]:
    """Concatenate rule groups, keeping the first rule of each class.

    Groups are passed highest priority first. A later rule whose class has
    already been seen is dropped, which lets an earlier group replace a
    default rule with a differently configured instance.

    Examples
    --------
        >>> merge_syntaxes([UnorderedListSyntax(checkboxes=True)], DEFAULT_BLOCK_SYNTAXES)
        (UnorderedListSyntax(checkboxes=True), EmptyBlockSyntax(), ...)

    """
    seen: set[type] = set()
    merged: list[SyntaxT] = []
    for group in groups:
        for syntax in group:
            if type(syntax) in seen:
                continue
            seen.add(type(syntax))
            merged.append(syntax)
    return tuple(merged)


def normalize_line_endings(text: str) -> str:
    """Convert ``\\r\\n`` and lone ``\\r`` line endings to ``\\n``."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


class MarkdownParser:
    """Two-phase Markdown parser.

    Parameters
    ----------
    options : ParserOptions, optional
        Parser configuration. Defaults to ``ParserOptions()`` (GitHub
        Flavored Markdown).

    Raises
    ------
    ValidationError
        If ``options.extension_set`` names an unknown extension set

    """

    def __init__(self, options: Optional[ParserOptions] = None):
        """Build the rule tuples for the given options."""
        self.options = options or ParserOptions()
        extension_set = self.options.extension_set
        if not isinstance(extension_set, ExtensionSet):
            extension_set = get_extension_set(extension_set)
        self.extension_set = extension_set

        self.block_syntaxes: tuple[BlockSyntax, ...] = merge_syntaxes(
            self.options.block_syntaxes,
            extension_set.block_syntaxes,
            DEFAULT_BLOCK_SYNTAXES if self.options.with_default_block_syntaxes else (),
        )
        self.inline_syntaxes: tuple[InlineSyntax, ...] = merge_syntaxes(
            self.options.inline_syntaxes,
            extension_set.inline_syntaxes,
            DEFAULT_INLINE_SYNTAXES if self.options.with_default_inline_syntaxes else (),
        )
        logger.debug(
            "Parser configured with extension set %r: %d block rules, %d inline rules",
            extension_set.name,
            len(self.block_syntaxes),
            len(self.inline_syntaxes),
        )

    def new_session(self) -> ParseSession:
        """Create the mutable state for one parse call."""
        return ParseSession(
            block_syntaxes=self.block_syntaxes,
            inline_syntaxes=self.inline_syntaxes,
            link_resolver=self.options.link_resolver,
            image_resolver=self.options.image_resolver,
            max_nesting_depth=self.options.max_nesting_depth,
            nesting_policy=self.options.nesting_policy,
        )

    def parse(self, text: str) -> Document:
        """Parse a Markdown document.

        Parameters
        ----------
        text : str
            Markdown source; any line ending convention

        Returns
        -------
        Document
            Finished tree without placeholders

        Raises
        ------
        ValidationError
            If ``text`` is not a string
        StructuralError
            If a grammar rule breaks a tree invariant

        """
        _check_text(text)
        return self.parse_lines(normalize_line_endings(text).split("\n"))

    def parse_lines(self, lines: Sequence[str]) -> Document:
        """Parse a document given as lines without line endings."""
        session = self.new_session()
        tree = self._parse_blocks(lines, session)
        with debug_timer(logger, "Inline phase"):
            document = InlineResolver(session).resolve(tree)
        if self.options.validate_output:
            validate_tree(document, strict=True)
        return document

    def parse_blocks(self, lines: Sequence[str]) -> PreliminaryTree:
        """Run only the block phase.

        Returns
        -------
        PreliminaryTree
            Top-level blocks with ``UnparsedContent`` placeholders in place

        """
        return self._parse_blocks(lines, self.new_session())

    def parse_inline(self, text: str) -> list[Node]:
        """Parse a single fragment as inline markup only.

        Block syntax is not recognized and no reference definitions exist, so
        reference links resolve only through the configured resolvers.

        """
        _check_text(text)
        return InlineParser(normalize_line_endings(text), self.new_session()).parse()

    def _parse_blocks(self, lines: Sequence[str], session: ParseSession) -> PreliminaryTree:
        with debug_timer(logger, "Block phase"):
            nodes = BlockParser(lines, session).parse_lines()
        logger.debug("Block phase produced %d top-level blocks from %d lines", len(nodes), len(lines))
        return PreliminaryTree(nodes=tuple(nodes))


def _check_text(text: Any) -> None:
    if not isinstance(text, str):
        raise ValidationError(
            f"Markdown input must be a str, got {type(text).__name__}",
            parameter_name="text",
            parameter_value=text,
        )


def _build_options(options: Optional[ParserOptions], **kwargs: Any) -> Optional[ParserOptions]:
    if not kwargs:
        return options
    try:
        return (options or ParserOptions()).create_updated(**kwargs)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid parser options: {e}", original_error=e) from e


def parse_markdown(text: str, options: Optional[ParserOptions] = None, **kwargs: Any) -> Document:
    """Parse a Markdown document into a tree.

    Parameters
    ----------
    text : str
        Markdown source
    options : ParserOptions, optional
        Parser configuration
    kwargs : Any
        Individual ``ParserOptions`` fields that override ``options``

    Returns
    -------
    Document
        Finished tree without placeholders

    Raises
    ------
    ValidationError
        If the input is not a string or an option is invalid
    StructuralError
        If a grammar rule breaks a tree invariant

    Examples
    --------
        >>> doc = parse_markdown("| a |\\n|---|\\n| 1 |")
        >>> doc.children[0].column_count
        1

        >>> doc = parse_markdown("[home]\\n\\n[home]: /index.html")
        >>> doc.children[0].children[0].url
        '/index.html'

    """
    return MarkdownParser(_build_options(options, **kwargs)).parse(text)


def parse_inline(text: str, options: Optional[ParserOptions] = None, **kwargs: Any) -> list[Node]:
    """Parse a text fragment as inline markup only.

    Examples
    --------
        >>> parse_inline("**bold**")
        [Bold(children=[Text(content='bold')])]

    """
    return MarkdownParser(_build_options(options, **kwargs)).parse_inline(text)


__all__ = [
    "MarkdownParser",
    "ParseSession",
    "PreliminaryTree",
    "merge_syntaxes",
    "normalize_line_endings",
    "parse_markdown",
    "parse_inline",
]
