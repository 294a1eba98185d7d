#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/inline_syntaxes/links.py
"""Links, images and autolinks.

Bracketed links come in four forms::

    [text](/url "title")     inline
    [text][label]            full reference
    [text][]                 collapsed reference
    [text]                   shortcut reference

Reference forms are looked up in the link reference table of the parse
session. The table is complete before any inline parsing starts, so a
definition may appear anywhere in the document, including after its first
use. A reference without a definition is handed to the configured resolver
callback as ``resolver(label, text)``, where ``text`` is the bracketed link
text when it differs from the label and None otherwise. If the resolver is
missing or returns None the brackets stay plain text.

Images use the same forms with a leading ``!``.
"""

from __future__ import annotations

import logging
import re
from abc import abstractmethod
from re import Match
from typing import TYPE_CHECKING, Optional

from markweave.ast.nodes import Image, Link, Node, Text
from markweave.inline_syntaxes.base import InlineParseResult, InlineSyntax
from markweave.inline_syntaxes.code import ESCAPABLE
from markweave.references import normalize_label

if TYPE_CHECKING:
    from markweave.inline_parser import InlineParser
    from markweave.session import Resolver

logger = logging.getLogger(__name__)

_ESCAPE = re.compile(rf"\\([{ESCAPABLE}])")
_TITLE_CLOSERS = {'"': '"', "'": "'", "(": ")"}


def unescape(text: str) -> str:
    """Remove backslashes in front of escapable punctuation."""
    return _ESCAPE.sub(r"\1", text)


def match_brackets(source: str, start: int = 0) -> dict[int, Optional[int]]:
    """Pair every ``[`` from ``start`` on with its closing ``]`` in one pass.

    Nested brackets are balanced with a stack, backslash escapes are skipped
    and code spans are treated as opaque.

    Parameters
    ----------
    source : str
        Text to scan
    start : int, default = 0
        Offset the scan starts at

    Returns
    -------
    dict of int to int or None
        Maps the index of each opening bracket seen by the scan to the index
        of its closing bracket, or None if it is never closed

    """
    matches: dict[int, Optional[int]] = {}
    stack: list[int] = []
    # Shortest backtick run with no copy left in the rest of the text.
    unclosed_run: Optional[int] = None
    index = start
    length = len(source)
    while index < length:
        char = source[index]
        if char == "\\":
            index += 2
            continue
        if char == "`":
            run_end = index
            while run_end < length and source[run_end] == "`":
                run_end += 1
            width = run_end - index
            closing = -1
            if unclosed_run is None or width < unclosed_run:
                closing = source.find(source[index:run_end], run_end)
                if closing < 0:
                    unclosed_run = width
            index = closing + width if closing >= 0 else run_end
            continue
        if char == "[":
            stack.append(index)
            matches[index] = None
        elif char == "]" and stack:
            matches[stack.pop()] = index
        index += 1
    return matches


def find_closing_bracket(source: str, open_index: int) -> Optional[int]:
    """Find the ``]`` matching the ``[`` at ``open_index``.

    Returns
    -------
    int or None
        Index of the closing bracket, or None if it is missing

    """
    return match_brackets(source, open_index).get(open_index)


def _skip_whitespace(source: str, index: int) -> int:
    while index < len(source) and source[index].isspace():
        index += 1
    return index


def parse_inline_destination(source: str, open_paren: int) -> Optional[tuple[str, Optional[str], int]]:
    """Parse ``(destination "title")`` starting at ``open_paren``.

    Returns
    -------
    tuple of (str, str or None, int) or None
        Destination, title and the index just past ``)``, or None when the
        text is not a valid inline destination

    """
    length = len(source)
    index = _skip_whitespace(source, open_paren + 1)

    if index < length and source[index] == "<":
        close = source.find(">", index + 1)
        if close < 0 or "\n" in source[index + 1 : close]:
            return None
        destination = source[index + 1 : close]
        index = close + 1
    else:
        start = index
        depth = 0
        while index < length:
            char = source[index]
            if char == "\\" and index + 1 < length:
                index += 2
                continue
            if char.isspace():
                break
            if char == "(":
                depth += 1
            elif char == ")":
                if depth == 0:
                    break
                depth -= 1
            index += 1
        destination = source[start:index]

    destination_end = index
    index = _skip_whitespace(source, index)
    title: Optional[str] = None
    if index < length and index > destination_end and source[index] in _TITLE_CLOSERS:
        closer = _TITLE_CLOSERS[source[index]]
        cursor = index + 1
        while cursor < length and source[cursor] != closer:
            cursor += 2 if source[cursor] == "\\" else 1
        if cursor >= length:
            return None
        title = unescape(source[index + 1 : cursor])
        index = _skip_whitespace(source, cursor + 1)

    if index < length and source[index] == ")":
        return unescape(destination), title, index + 1
    return None


class _BracketSyntax(InlineSyntax):
    """Shared parsing of the four bracketed forms for links and images."""

    #: Characters before the opening bracket (``!`` for images).
    prefix_length = 0

    def parse(self, parser: InlineParser, match: Match[str]) -> InlineParseResult:
        source = parser.source
        open_index = match.start() + self.prefix_length
        close = parser.closing_bracket(open_index)
        if close is None:
            return None
        text = source[open_index + 1 : close]
        after = close + 1

        if after < len(source) and source[after] == "(":
            inline = parse_inline_destination(source, after)
            if inline is not None:
                destination, title, end = inline
                return [self._build(parser, text, destination, title)], end

        label = text
        end = after
        if after < len(source) and source[after] == "[":
            label_close = source.find("]", after + 1)
            if label_close >= 0 and "[" not in source[after + 1 : label_close]:
                full_label = source[after + 1 : label_close]
                end = label_close + 1
                if full_label.strip():
                    label = full_label

        if not label.strip():
            return None

        reference = parser.session.link_references.get(normalize_label(label))
        if reference is not None:
            return [self._build(parser, text, reference.destination, reference.title)], end

        resolver = self._resolver(parser)
        if resolver is None:
            return None
        hint = text if normalize_label(text) != normalize_label(label) else None
        resolved = resolver(label, hint)
        if resolved is None:
            logger.debug("%s: unresolved reference %r left as text", self.name, label)
            return None
        return [resolved], end

    @abstractmethod
    def _resolver(self, parser: InlineParser) -> Optional[Resolver]:
        """Return the session callback for unresolved references."""

    @abstractmethod
    def _build(self, parser: InlineParser, text: str, destination: str, title: Optional[str]) -> Node:
        """Build the node for a resolved destination."""


class LinkSyntax(_BracketSyntax):
    """Parses ``[text](url)`` and reference-style links."""

    pattern = re.compile(r"\[")
    trigger_characters = "["

    def _resolver(self, parser: InlineParser) -> Optional[Resolver]:
        return parser.session.link_resolver

    def _build(self, parser: InlineParser, text: str, destination: str, title: Optional[str]) -> Node:
        return Link(children=parser.parse_nested(text), url=destination, title=title)


class ImageSyntax(_BracketSyntax):
    """Parses ``![alt](src)`` and reference-style images.

    The alt text is the plain text of the bracketed content with its inline
    markup resolved and flattened.
    """

    pattern = re.compile(r"!\[")
    trigger_characters = "!"
    prefix_length = 1

    def _resolver(self, parser: InlineParser) -> Optional[Resolver]:
        return parser.session.image_resolver

    def _build(self, parser: InlineParser, text: str, destination: str, title: Optional[str]) -> Node:
        alt = "".join(_plain_text(node) for node in parser.parse_nested(text))
        return Image(destination=destination, alt=alt, title=title)


def _plain_text(node: Node) -> str:
    if isinstance(node, Image):
        return node.alt
    if isinstance(node, Text) or not node.children:
        return node.text_content
    return "".join(_plain_text(child) for child in node.children)


class AutolinkSyntax(InlineSyntax):
    """Parses ``<scheme:...>`` URIs and ``<user@example.com>`` addresses."""

    pattern = re.compile(
        r"<([A-Za-z][A-Za-z0-9+.\-]{1,31}:[^\s<>]*)>"
        r"|<([A-Za-z0-9.!#$%&'*+/=?^_`{|}~\-]+@[A-Za-z0-9](?:[A-Za-z0-9\-]{0,61}[A-Za-z0-9])?"
        r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9\-]{0,61}[A-Za-z0-9])?)*)>"
    )
    trigger_characters = "<"

    def parse(self, parser: InlineParser, match: Match[str]) -> InlineParseResult:
        if match.group(1) is not None:
            uri = match.group(1)
            return [Link(children=[Text(uri)], url=uri)], match.end()
        email = match.group(2)
        return [Link(children=[Text(email)], url=f"mailto:{email}")], match.end()


class AutolinkExtensionSyntax(InlineSyntax):
    """Links bare ``http://``, ``https://``, ``ftp://`` and ``www.`` URLs.

    A URL only starts at the beginning of the text, after whitespace or
    after one of ``*_~(``. Trailing punctuation and unbalanced closing
    parentheses are not part of the link. ``www.`` links get ``http://``
    prepended to their destination.
    """

    pattern = re.compile(r"(?:https?://|ftp://|www\.)[^\s<]*")
    trigger_characters = "hfw"

    _TRAILING = "?!.,:*_~'\""

    def parse(self, parser: InlineParser, match: Match[str]) -> InlineParseResult:
        source = parser.source
        start = match.start()
        if start > 0 and not (source[start - 1].isspace() or source[start - 1] in "*_~("):
            return None

        text = match.group(0)
        while text:
            if text[-1] in self._TRAILING:
                text = text[:-1]
            elif text.endswith(")") and text.count(")") > text.count("("):
                text = text[:-1]
            else:
                break

        prefix = "www." if text.startswith("www.") else text.split("//", 1)[0] + "//"
        if len(text) <= len(prefix):
            return None
        url = f"http://{text}" if prefix == "www." else text
        return [Link(children=[Text(text)], url=url)], start + len(text)


__all__ = [
    "LinkSyntax",
    "ImageSyntax",
    "AutolinkSyntax",
    "AutolinkExtensionSyntax",
    "find_closing_bracket",
    "match_brackets",
    "parse_inline_destination",
    "unescape",
]
