#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/patterns.py
"""Compiled line patterns shared by the block grammar.

Every pattern is matched against a single line without its line ending.
"""

from __future__ import annotations

import re

# Whitespace-only line.
EMPTY_PATTERN = re.compile(r"^[ \t]*$")

# ATX header: 1-6 '#', then a space or end of line, with optional closing '#'s.
HEADER_PATTERN = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?(?:[ \t]+#+)?[ \t]*$")

# Setext underline below paragraph text.
SETEXT_PATTERN = re.compile(r"^ {0,3}(=+|-+)[ \t]*$")

# Table separator row, e.g. ``|:---|---:|``. At least one pipe is required.
TABLE_SEPARATOR_PATTERN = re.compile(r"^ {0,3}\|?(?: *:?-+:? *\|)+(?: *:?-+:? *)?$")

# Horizontal rule: three or more '-', '*' or '_', optionally spaced.
HORIZONTAL_RULE_PATTERN = re.compile(r"^ {0,3}([-*_])[ \t]*\1[ \t]*\1(?:\1|[ \t])*$")

# Block quote line; group 1 is the quoted content.
BLOCKQUOTE_PATTERN = re.compile(r"^ {0,3}>[ \t]?(.*)$")

# Indented code line; group 1 is the code.
INDENT_PATTERN = re.compile(r"^(?:    | {0,3}\t)(.*)$")

# Opening code fence; groups are indentation, fence run and info string.
CODE_FENCE_PATTERN = re.compile(r"^( {0,3})(`{3,}|~{3,})(.*)$")

# List items; groups are indentation, marker and content.
UNORDERED_LIST_PATTERN = re.compile(r"^( {0,3})([*+-])(?:([ \t]+)(.*))?$")
ORDERED_LIST_PATTERN = re.compile(r"^( {0,3})(\d{1,9})([.)])(?:([ \t]+)(.*))?$")

# Task-list checkbox at the start of a list item.
CHECKBOX_PATTERN = re.compile(r"^\[([ xX])\](?:[ \t]+(.*)|$)")

# Link reference definition, ``[label]: destination "title"``.
LINK_REFERENCE_PATTERN = re.compile(
    r"^ {0,3}\[((?:[^\[\]\\]|\\.)+)\]:"
    r"[ \t]*(<[^<>]*>|\S+)"
    r"""(?:[ \t]+("[^"]*"|'[^']*'|\([^()]*\)))?[ \t]*$"""
)


def is_blank(line: str) -> bool:
    """Return True for empty or whitespace-only lines."""
    return EMPTY_PATTERN.match(line) is not None


def indentation(line: str, tab_size: int = 4) -> int:
    """Return the width of the leading whitespace of ``line``."""
    width = 0
    for ch in line:
        if ch == " ":
            width += 1
        elif ch == "\t":
            width += tab_size - (width % tab_size)
        else:
            break
    return width


def strip_indentation(line: str, width: int, tab_size: int = 4) -> str:
    """Remove up to ``width`` columns of leading whitespace from ``line``.

    Tabs are expanded to the next tab stop; a tab that straddles the cut is
    replaced by the spaces left over.
    """
    column = 0
    index = 0
    while index < len(line) and column < width:
        ch = line[index]
        if ch == " ":
            column += 1
        elif ch == "\t":
            stop = column + tab_size - (column % tab_size)
            if stop > width:
                return " " * (stop - width) + line[index + 1 :]
            column = stop
        else:
            break
        index += 1
    return line[index:]
