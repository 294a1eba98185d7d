#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/block_syntaxes/base.py
"""Base class for block-level grammar rules.

A block syntax recognizes one kind of block (header, list, table, ...) in the
line stream of a ``BlockParser``. Rules are immutable value objects: they are
built once when a parser is configured and shared by every parse, so they
never store per-parse state. All mutable state lives on the ``BlockParser``
passed into each call.

Contract
--------
pattern
    Compiled regex for the line that starts the block, or None.
can_parse(parser)
    Look-ahead predicate. May inspect lines after the current one but must
    not move the cursor.
can_end_block(parser)
    Whether this rule may interrupt an open paragraph, list item or quote
    continuation when it matches the current line.
parse(parser)
    Consume lines and return a Node, ``None`` (lines consumed, nothing
    emitted) or ``NO_MATCH`` (refusal: the parser rewinds the cursor and tries
    the next rule).

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from re import Pattern
from typing import TYPE_CHECKING, Any, Optional, Union

from markweave.ast.nodes import Node

if TYPE_CHECKING:
    from markweave.block_parser import BlockParser


class _NoMatch:
    """Type of the ``NO_MATCH`` refusal sentinel."""

    _instance: Optional[_NoMatch] = None

    def __new__(cls) -> _NoMatch:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_MATCH"

    def __bool__(self) -> bool:
        return False


NO_MATCH = _NoMatch()

ParseResult = Union[Node, None, _NoMatch]


class BlockSyntax(ABC):
    """Abstract base class for block grammar rules.

    Subclasses set ``pattern`` (or override ``can_parse``) and implement
    ``parse``. Configuration is passed to ``__init__``, stored on private
    attributes and reported by ``_config()`` so that two rules of the same
    class and configuration compare equal.

    """

    pattern: Optional[Pattern[str]] = None

    @property
    def name(self) -> str:
        """Rule name used in log records and error context."""
        return type(self).__name__

    def can_parse(self, parser: BlockParser) -> bool:
        """Return True when this rule can start a block at the current line."""
        return self.pattern is not None and parser.matches(self.pattern) is not None

    def can_end_block(self, parser: BlockParser) -> bool:
        """Return True when a match of this rule interrupts an open block."""
        return True

    @abstractmethod
    def parse(self, parser: BlockParser) -> ParseResult:
        """Consume the block at the cursor.

        Parameters
        ----------
        parser : BlockParser
            The parser whose cursor sits on the first line of the block

        Returns
        -------
        Node, None or NO_MATCH
            The block node; None when lines were consumed without producing
            a node; NO_MATCH to refuse

        Raises
        ------
        StructuralError
            If the rule would build a tree that breaks a node invariant

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
    "BlockSyntax",
    "NO_MATCH",
    "ParseResult",
]
