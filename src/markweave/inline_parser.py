#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/inline_parser.py
"""Single-pass scanner for inline markup."""

from __future__ import annotations

import logging
from collections.abc import Hashable
from typing import Optional

from markweave.ast.nodes import Node, Text
from markweave.exceptions import NestingDepthError, StructuralError
from markweave.inline_syntaxes.links import match_brackets
from markweave.session import ParseSession

logger = logging.getLogger(__name__)


class InlineParser:
    """Resolve the inline markup of one text fragment.

    The text is scanned left to right. At each position the configured inline
    syntaxes are tried in order; the first one that produces nodes wins and
    scanning resumes after the text it consumed. Positions where no rule
    applies are collected as plain text, and adjacent text nodes are merged.

    Parameters
    ----------
    source : str
        Text to parse
    session : ParseSession
        Per-parse state: inline rules, resolvers and the reference table
    depth : int, default = 0
        Inline nesting depth (emphasis inside a link inside emphasis, ...)

    """

    def __init__(self, source: str, session: ParseSession, depth: int = 0):
        """Initialize the parser at the start of ``source``."""
        self.source = source
        self.session = session
        self.depth = depth
        self._failed_searches: dict[Hashable, int] = {}
        self._bracket_tables: list[dict[int, Optional[int]]] = []

    def closing_bracket(self, open_index: int) -> Optional[int]:
        """Return the index of the ``]`` closing the ``[`` at ``open_index``.

        Brackets are paired for the rest of the text in one pass the first
        time they are needed, so repeated lookups stay linear.
        """
        for table in self._bracket_tables:
            if open_index in table:
                return table[open_index]
        table = match_brackets(self.source, open_index)
        self._bracket_tables.append(table)
        return table.get(open_index)

    def search_failed(self, key: Hashable, offset: int) -> bool:
        """Return True if a search for ``key`` is known to fail from ``offset``."""
        failed_from = self._failed_searches.get(key)
        return failed_from is not None and offset >= failed_from

    def record_failed_search(self, key: Hashable, offset: int) -> None:
        """Remember that a forward search for ``key`` from ``offset`` found nothing.

        Only searches whose failure at one offset implies failure at every
        later offset may be recorded.
        """
        self._failed_searches[key] = min(offset, self._failed_searches.get(key, offset))

    def parse(self) -> list[Node]:
        """Parse the whole fragment into inline nodes.

        Raises
        ------
        StructuralError
            If a rule reports success without consuming any text

        """
        source = self.source
        nodes: list[Node] = []
        text_start = 0
        pos = 0
        while pos < len(source):
            for syntax in self.session.inline_syntaxes:
                match = syntax.match(source, pos)
                if match is None:
                    continue
                result = syntax.parse(self, match)
                if result is None:
                    continue
                produced, end = result
                if end <= pos:
                    raise StructuralError(f"Inline rule consumed no input at offset {pos}", rule=syntax.name)
                if text_start < pos:
                    nodes.append(Text(source[text_start:pos]))
                nodes.extend(produced)
                pos = text_start = end
                break
            else:
                pos += 1

        if text_start < len(source):
            nodes.append(Text(source[text_start:]))
        return _merge_text(nodes)

    def parse_nested(self, text: str) -> list[Node]:
        """Parse text nested inside another inline construct.

        Beyond the session's nesting limit the text is kept as a single
        ``Text`` node instead of being parsed further, or, under the
        ``error`` policy, ``NestingDepthError`` is raised.
        """
        depth = self.depth + 1
        if depth > self.session.max_nesting_depth:
            if self.session.nesting_policy == "error":
                raise NestingDepthError(depth, self.session.max_nesting_depth)
            logger.warning("Inline nesting exceeds limit %d; keeping text as-is", self.session.max_nesting_depth)
            return [Text(text)] if text else []
        return InlineParser(text, self.session, depth=depth).parse()


def _merge_text(nodes: list[Node]) -> list[Node]:
    merged: list[Node] = []
    pending: list[str] = []
    for node in nodes:
        if isinstance(node, Text):
            pending.append(node.content)
            continue
        if pending:
            merged.append(Text("".join(pending)))
            pending = []
        merged.append(node)
    if pending:
        merged.append(Text("".join(pending)))
    return merged


__all__ = [
    "InlineParser",
]
