#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/block_syntaxes/table.py
"""Pipe table rule (GitHub Flavored Markdown extension).

A table is a header row, a separator row of hyphens, pipes and colons, and
one or more body rows::

    | a | b |
    |:--|--:|
    | 1 | 2 |

Detection needs look-ahead: a line only starts a table when the *next* line
is a separator row, so ordinary text containing a pipe is never taken for a
table.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from markweave.ast.nodes import Node, Table, TableCell, TableHeader, TableRow, UnparsedContent
from markweave.block_syntaxes.base import NO_MATCH, BlockSyntax, ParseResult
from markweave.constants import DEFAULT_ALIGNMENT, Alignment
from markweave.exceptions import StructuralError
from markweave.patterns import TABLE_SEPARATOR_PATTERN, is_blank

if TYPE_CHECKING:
    from markweave.block_parser import BlockParser

logger = logging.getLogger(__name__)


def parse_alignments(line: str) -> list[Optional[Alignment]]:
    """Read column alignments from a separator row.

    Parameters
    ----------
    line : str
        Separator row, e.g. ``|:---|:---:|---:|---|``

    Returns
    -------
    list
        One entry per column: ``"left"`` for ``:--``, ``"center"`` for
        ``:-:``, ``"right"`` for ``--:`` and None for ``---``

    Examples
    --------
    >>> parse_alignments("|:--|:-:|--:|--|")
    ['left', 'center', 'right', None]

    """
    body = line.strip()
    if body.startswith("|"):
        body = body[1:]
    if body.endswith("|"):
        body = body[:-1]

    alignments: list[Optional[Alignment]] = []
    for column in body.split("|"):
        column = column.strip()
        if column.startswith(":") and column.endswith(":"):
            alignments.append("center")
        elif column.startswith(":"):
            alignments.append("left")
        elif column.endswith(":"):
            alignments.append("right")
        else:
            alignments.append(None)
    return alignments


def _walk_past_whitespace(line: str, index: int) -> int:
    while index < len(line) and line[index] in " \t":
        index += 1
    return index


def split_row(line: str) -> list[str]:
    r"""Split a table row into raw cell texts.

    Leading and trailing pipes are optional and never produce empty cells.
    ``\|`` becomes a literal pipe inside the cell before any inline parsing;
    other backslash escapes are kept as they are for the inline pass. A row
    ending in a lone backslash keeps it as text of the last cell. Cell text
    is stripped of trailing whitespace, and whitespace after each pipe is
    skipped.

    Examples
    --------
    >>> split_row(r"| a | b\|c |")
    ['a', 'b|c']
    >>> split_row(r"x | \*y\*")
    ['x', '\\*y\\*']

    """
    cells: list[str] = []
    index = _walk_past_whitespace(line, 0)
    if index < len(line) and line[index] == "|":
        index = _walk_past_whitespace(line, index + 1)

    buffer: list[str] = []
    while True:
        if index >= len(line):
            cells.append("".join(buffer).rstrip())
            break
        ch = line[index]
        if ch == "\\":
            if index == len(line) - 1:
                buffer.append(ch)
                cells.append("".join(buffer).rstrip())
                break
            escaped = line[index + 1]
            if escaped == "|":
                buffer.append(escaped)
            else:
                buffer.append(ch)
                buffer.append(escaped)
            index += 2
        elif ch == "|":
            cells.append("".join(buffer).rstrip())
            buffer = []
            index = _walk_past_whitespace(line, index + 1)
            if index >= len(line):
                break
        else:
            buffer.append(ch)
            index += 1
    return cells


class TableSyntax(BlockSyntax):
    """Parses pipe tables.

    The separator row fixes the column count. A header row with a different
    number of cells is not a table and the rule refuses. Body rows continue
    until a line that ends a block (a blank line, a header, ...) and are
    padded with empty left-aligned cells when short or cut when long. A
    header without any body row is refused as well.
    """

    def can_parse(self, parser: BlockParser) -> bool:
        if parser.is_done or is_blank(parser.current):
            return False
        return parser.matches_next(TABLE_SEPARATOR_PATTERN) is not None

    def can_end_block(self, parser: BlockParser) -> bool:
        return False

    def parse(self, parser: BlockParser) -> ParseResult:
        separator = parser.next
        if separator is None:
            return NO_MATCH
        location = parser.location()
        alignments = parse_alignments(separator)
        column_count = len(alignments)

        header_cells = split_row(parser.current)
        if len(header_cells) != column_count:
            logger.debug(
                "Table header at line %d has %d cells but separator has %d columns",
                parser.line_number,
                len(header_cells),
                column_count,
            )
            return NO_MATCH
        header = TableHeader(
            children=self._build_cells(header_cells, alignments, parser),
            source_location=location,
        )
        parser.advance()
        parser.advance()

        rows: list[Node] = []
        while not parser.is_done and not parser.is_at_block_end():
            row_location = parser.location()
            cells = self._build_cells(split_row(parser.current)[:column_count], alignments, parser)
            while len(cells) < column_count:
                # Same shape as a written empty cell once resolved.
                cells.append(
                    TableCell(
                        children=[],
                        alignment=DEFAULT_ALIGNMENT,
                        column_index=len(cells),
                        source_location=row_location,
                    )
                )
            rows.append(TableRow(children=cells, source_location=row_location))
            parser.advance()

        if not rows:
            logger.debug("Table at line %d has no body rows", location.line)
            return NO_MATCH

        table = Table(children=[header, *rows], column_count=column_count, source_location=location)
        self._check_shape(table)
        return table

    @staticmethod
    def _build_cells(texts: list[str], alignments: list[Optional[Alignment]], parser: BlockParser) -> list[Node]:
        location = parser.location()
        return [
            TableCell(
                children=[UnparsedContent(text, source_location=location)],
                alignment=alignments[index],
                column_index=index,
                source_location=location,
            )
            for index, text in enumerate(texts)
        ]

    @staticmethod
    def _check_shape(table: Table) -> None:
        for index, row in enumerate(table.children):
            if len(row.children) != table.column_count:
                raise StructuralError(
                    f"Table row {index} has {len(row.children)} cells after normalization, "
                    f"expected {table.column_count}"
                )


__all__ = [
    "TableSyntax",
    "parse_alignments",
    "split_row",
]
