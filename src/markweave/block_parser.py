#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/block_parser.py
"""Line-cursor block parser.

``BlockParser`` walks a list of lines with a cursor and, at every position,
asks the configured block syntaxes in priority order whether they can start a
block there. The first rule that accepts consumes its lines and parsing
resumes at the new cursor position. Rules never backtrack once they commit,
which keeps parsing linear in the number of lines; a rule that refuses with
``NO_MATCH`` has the cursor rewound and the next rule is tried.

Container rules (block quotes, list items) strip their markers and hand the
inner lines to ``parse_child``, which runs a nested parser one level deeper
and enforces the configured nesting limit.

Block parsing never touches inline markup: text regions end up as
``UnparsedContent`` leaves that the inline resolver replaces later.
"""

from __future__ import annotations

import logging
from re import Match, Pattern
from typing import TYPE_CHECKING, Optional, Sequence

from markweave.ast.nodes import Node, Paragraph, SourceLocation, UnparsedContent
from markweave.block_syntaxes.base import NO_MATCH, BlockSyntax
from markweave.exceptions import NestingDepthError, StructuralError

if TYPE_CHECKING:
    from markweave.session import ParseSession

logger = logging.getLogger(__name__)


class BlockParser:
    """Cursor over the lines of one document (or one container's contents).

    Parameters
    ----------
    lines : sequence of str
        Lines to parse, without line endings
    session : ParseSession
        Per-parse state: configured rules, limits and link references
    depth : int, default = 0
        Container nesting depth of these lines (0 for the document itself)
    line_offset : int, default = 0
        Number of source lines before ``lines[0]``, used for line numbers

    """

    def __init__(
        self,
        lines: Sequence[str],
        session: ParseSession,
        depth: int = 0,
        line_offset: int = 0,
    ):
        """Initialize the parser at the first line."""
        self.lines = list(lines)
        self.session = session
        self.depth = depth
        self.line_offset = line_offset
        self.pos = 0

    @property
    def block_syntaxes(self) -> tuple[BlockSyntax, ...]:
        """Rules consulted by this parser, in priority order."""
        return self.session.block_syntaxes

    @property
    def current(self) -> str:
        """The line under the cursor."""
        return self.lines[self.pos]

    @property
    def next(self) -> Optional[str]:
        """The line after the cursor, or None at the last line."""
        return self.peek(1)

    def peek(self, offset: int) -> Optional[str]:
        """Return the line ``offset`` lines after the cursor, or None."""
        index = self.pos + offset
        if 0 <= index < len(self.lines):
            return self.lines[index]
        return None

    def advance(self) -> None:
        """Move the cursor to the next line."""
        self.pos += 1

    @property
    def is_done(self) -> bool:
        """True when every line has been consumed."""
        return self.pos >= len(self.lines)

    @property
    def line_number(self) -> int:
        """1-based source line number of the cursor."""
        return self.line_offset + self.pos + 1

    def matches(self, pattern: Pattern[str]) -> Optional[Match[str]]:
        """Match ``pattern`` against the current line."""
        if self.is_done:
            return None
        return pattern.match(self.current)

    def matches_next(self, pattern: Pattern[str]) -> Optional[Match[str]]:
        """Match ``pattern`` against the line after the cursor."""
        line = self.next
        if line is None:
            return None
        return pattern.match(line)

    def location(self) -> SourceLocation:
        """Source location of the cursor."""
        return SourceLocation(line=self.line_number)

    def is_at_block_end(self) -> bool:
        """Return True if the current line interrupts an open block.

        A line ends the open block when input is exhausted, or when some rule
        that may interrupt blocks can parse it. ``can_end_block`` is asked
        first because it is cheap and most rules that look ahead answer False.

        """
        if self.is_done:
            return True
        return any(syntax.can_end_block(self) and syntax.can_parse(self) for syntax in self.block_syntaxes)

    def parse_lines(self) -> list[Node]:
        """Parse every remaining line into block nodes.

        Returns
        -------
        list of Node
            Block nodes in document order, with UnparsedContent leaves for
            every text region

        Raises
        ------
        StructuralError
            If a rule breaks a tree invariant; the error names the rule and
            the source line

        """
        blocks: list[Node] = []
        while not self.is_done:
            for syntax in self.block_syntaxes:
                if not syntax.can_parse(self):
                    continue
                if self._run_syntax(syntax, blocks):
                    break
            else:
                self._run_syntax(self.session.fallback_block_syntax, blocks)
        return blocks

    def _run_syntax(self, syntax: BlockSyntax, blocks: list[Node]) -> bool:
        start = self.pos
        start_line = self.line_number
        try:
            result = syntax.parse(self)
        except StructuralError as exc:
            raise exc.with_context(rule=syntax.name, line=start_line)

        if result is NO_MATCH:
            logger.debug("%s refused line %d", syntax.name, start_line)
            self.pos = start
            return False

        if self.pos <= start:
            raise StructuralError("Block rule consumed no input", rule=syntax.name, line=start_line)

        logger.debug("%s consumed lines %d-%d", syntax.name, start_line, self.line_number - 1)
        if result is not None:
            blocks.append(result)  # type: ignore[arg-type]
        return True

    def parse_child(self, lines: Sequence[str], line_offset: int, rule: Optional[str] = None) -> list[Node]:
        """Parse the inner lines of a container one nesting level deeper.

        Parameters
        ----------
        lines : sequence of str
            Container contents with the container markers removed
        line_offset : int
            Number of source lines before ``lines[0]``
        rule : str, optional
            Name of the container rule, for diagnostics

        Returns
        -------
        list of Node
            Block nodes of the container. When the nesting limit is exceeded
            under the ``truncate`` policy this is a single paragraph holding
            the raw lines.

        Raises
        ------
        NestingDepthError
            When the nesting limit is exceeded under the ``error`` policy

        """
        depth = self.depth + 1
        limit = self.session.max_nesting_depth
        if depth > limit:
            line = line_offset + 1
            if self.session.nesting_policy == "error":
                raise NestingDepthError(depth, limit, line=line, rule=rule)
            logger.warning(
                "Nesting depth %d exceeds limit %d at line %d; keeping contents as text",
                depth,
                limit,
                line,
            )
            text = "\n".join(raw.strip() for raw in lines).strip()
            if not text:
                return []
            location = SourceLocation(line=line)
            return [Paragraph(children=[UnparsedContent(text, source_location=location)], source_location=location)]

        child = BlockParser(lines, self.session, depth=depth, line_offset=line_offset)
        return child.parse_lines()


__all__ = [
    "BlockParser",
]
