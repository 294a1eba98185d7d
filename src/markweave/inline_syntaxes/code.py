#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/inline_syntaxes/code.py
"""Backslash escapes and backtick code spans."""

from __future__ import annotations

import re
from functools import lru_cache
from re import Match, Pattern
from typing import TYPE_CHECKING

from markweave.ast.nodes import Code, Text
from markweave.inline_syntaxes.base import InlineParseResult, InlineSyntax

if TYPE_CHECKING:
    from markweave.inline_parser import InlineParser

ESCAPABLE = r"""!"#$%&'()*+,\-./:;<=>?@\[\\\]^_`{|}~"""


class EscapeSyntax(InlineSyntax):
    """Turns ``\\*`` and other escaped ASCII punctuation into literal text."""

    pattern = re.compile(rf"\\([{ESCAPABLE}])")
    trigger_characters = "\\"

    def parse(self, parser: InlineParser, match: Match[str]) -> InlineParseResult:
        return [Text(match.group(1))], match.end()


@lru_cache(maxsize=32)
def _closing_run(length: int) -> Pattern[str]:
    return re.compile(rf"(?<!`)`{{{length}}}(?!`)")


class CodeSyntax(InlineSyntax):
    """Parses code spans delimited by equal-length backtick runs.

    A run without a matching closing run is literal text. Line endings inside
    the span become spaces, and one leading and trailing space is removed
    when both are present.
    """

    pattern = re.compile(r"`+")
    trigger_characters = "`"

    def parse(self, parser: InlineParser, match: Match[str]) -> InlineParseResult:
        run = match.group(0)
        search_key = (type(self), len(run))
        closing = None
        if not parser.search_failed(search_key, match.end()):
            closing = _closing_run(len(run)).search(parser.source, match.end())
        if closing is None:
            parser.record_failed_search(search_key, match.end())
            return [Text(run)], match.end()

        content = parser.source[match.end() : closing.start()].replace("\n", " ")
        if len(content) >= 2 and content[0] == " " and content[-1] == " " and content.strip():
            content = content[1:-1]
        return [Code(content)], closing.end()


__all__ = [
    "EscapeSyntax",
    "CodeSyntax",
]
