#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/inline_syntaxes/emphasis.py
"""Delimiter-based inline rules: bold, italic and strikethrough."""

from __future__ import annotations

import re
from re import Match
from typing import TYPE_CHECKING, Callable, Optional

from markweave.ast.nodes import Bold, Italic, Node, Strikethrough
from markweave.inline_syntaxes.base import InlineParseResult, InlineSyntax

if TYPE_CHECKING:
    from markweave.inline_parser import InlineParser


class EmphasisSyntax(InlineSyntax):
    """Wraps text between an opening and a closing delimiter run.

    The opening delimiter must be followed by a non-space character and the
    closing one preceded by one. Underscore delimiters do not open or close
    inside a word (``snake_case_name`` stays plain text); asterisks and
    tildes do.

    A closer that is missing from one offset is missing from every later
    one, so each delimiter is searched for at most once past a failure.

    Subclasses set ``pattern`` (alternatives for the delimiter) and
    ``node_factory``.
    """

    node_factory: Callable[..., Node]

    def parse(self, parser: InlineParser, match: Match[str]) -> InlineParseResult:
        source = parser.source
        delimiter = match.group(0)
        start = match.start()
        open_end = match.end()
        if open_end >= len(source) or source[open_end].isspace():
            return None

        intraword = delimiter[0] != "_"
        if not intraword and start > 0 and source[start - 1].isalnum():
            return None

        search_key = (type(self), delimiter)
        if parser.search_failed(search_key, open_end):
            return None
        close = self._find_closing(source, delimiter, open_end, intraword)
        if close is None:
            parser.record_failed_search(search_key, open_end)
            return None
        children = parser.parse_nested(source[open_end:close])
        return [type(self).node_factory(children=children)], close + len(delimiter)

    @staticmethod
    def _find_closing(source: str, delimiter: str, start: int, intraword: bool) -> Optional[int]:
        char = delimiter[0]
        width = len(delimiter)
        index = start
        while True:
            index = source.find(delimiter, index)
            if index < 0:
                return None
            run_end = index
            while run_end < len(source) and source[run_end] == char:
                run_end += 1

            if index == start or source[index - 1].isspace() or source[index - 1] == "\\":
                index = run_end
                continue
            if not intraword and run_end < len(source) and source[run_end].isalnum():
                index = run_end
                continue
            # In a longer run the innermost delimiter closes this span.
            return run_end - width


class BoldSyntax(EmphasisSyntax):
    """Parses ``**strong**`` and ``__strong__``."""

    pattern = re.compile(r"\*\*|__")
    trigger_characters = "*_"
    node_factory = Bold


class ItalicSyntax(EmphasisSyntax):
    """Parses ``*emphasis*`` and ``_emphasis_``."""

    pattern = re.compile(r"\*|_")
    trigger_characters = "*_"
    node_factory = Italic


class StrikethroughSyntax(EmphasisSyntax):
    """Parses ``~~deleted~~`` (GitHub Flavored Markdown extension)."""

    pattern = re.compile(r"~~")
    trigger_characters = "~"
    node_factory = Strikethrough


__all__ = [
    "EmphasisSyntax",
    "BoldSyntax",
    "ItalicSyntax",
    "StrikethroughSyntax",
]
