#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/inline_syntaxes/base.py
"""Base class for inline grammar rules.

Inline syntaxes follow the same shape as block syntaxes: immutable value
objects, built once, tried in priority order. The inline parser offers each
rule the current position of the text it is scanning; a rule either returns
the nodes it produced and the index just past the text it consumed, or None
to let the next rule try.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from re import Match, Pattern
from typing import TYPE_CHECKING, Any, Optional

from markweave.ast.nodes import Node

if TYPE_CHECKING:
    from markweave.inline_parser import InlineParser

InlineParseResult = Optional[tuple[list[Node], int]]


class InlineSyntax(ABC):
    """Abstract base class for inline grammar rules.

    Attributes
    ----------
    pattern : re.Pattern
        Matched with ``pattern.match(source, position)`` at every candidate
        position
    trigger_characters : str or None
        Characters a match can start with. Positions holding any other
        character are skipped without running the regex. None disables the
        filter.

    """

    pattern: Pattern[str]
    trigger_characters: Optional[str] = None

    @property
    def name(self) -> str:
        """Rule name used in log records."""
        return type(self).__name__

    def match(self, source: str, position: int) -> Optional[Match[str]]:
        """Match this rule's pattern at ``position``."""
        if self.trigger_characters is not None and source[position] not in self.trigger_characters:
            return None
        return self.pattern.match(source, position)

    @abstractmethod
    def parse(self, parser: InlineParser, match: Match[str]) -> InlineParseResult:
        """Build nodes for a match.

        Parameters
        ----------
        parser : InlineParser
            The parser scanning the text; ``parser.source`` is the full text
        match : re.Match
            Match of ``pattern`` at the current position

        Returns
        -------
        tuple of (list of Node, int) or None
            The nodes and the index just past the consumed text, or None to
            refuse

        """

    def _config(self) -> dict[str, Any]:
        return {}

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._config() == other._config()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), tuple(sorted(self._config().items()))))

    def __repr__(self) -> str:
        params = ", ".join(f"{key}={value!r}" for key, value in self._config().items())
        return f"{self.name}({params})"


__all__ = [
    "InlineSyntax",
    "InlineParseResult",
]
