#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/references.py
"""Link reference definitions.

A definition is a line of the form::

    [label]: destination "optional title"

The title may be wrapped in ``"``, ``'`` or parentheses, and the destination
in angle brackets. Definitions appear as the first lines of a paragraph; the
block parser leaves them in the paragraph's placeholder text and this module
peels them off during the collection pass.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Optional

from markweave.ast.nodes import ListParagraph, Node, Paragraph, UnparsedContent, iter_nodes
from markweave.patterns import LINK_REFERENCE_PATTERN

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class LinkReference:
    """A resolved ``[label]: destination "title"`` definition.

    Parameters
    ----------
    label : str
        Label as written in the definition
    destination : str
        Link destination, angle brackets removed
    title : str, optional
        Title without its quotes

    """

    label: str
    destination: str
    title: Optional[str] = None


def normalize_label(label: str) -> str:
    """Normalize a reference label for lookup.

    Labels match case-insensitively and with runs of whitespace collapsed.

    Examples
    --------
    >>> normalize_label("  Foo\\n  Bar ")
    'foo bar'

    """
    return _WHITESPACE.sub(" ", label.strip()).casefold()


def _parse_definition(line: str) -> Optional[LinkReference]:
    match = LINK_REFERENCE_PATTERN.match(line)
    if match is None:
        return None
    label, destination, title = match.groups()
    if not label.strip():
        return None
    if destination.startswith("<") and destination.endswith(">"):
        destination = destination[1:-1]
    if title is not None:
        title = title[1:-1]
    return LinkReference(label=label, destination=destination, title=title)


def split_link_reference_definitions(text: str) -> tuple[list[LinkReference], str]:
    """Peel leading reference definitions off a paragraph's raw text.

    Parameters
    ----------
    text : str
        Placeholder text of a paragraph, lines separated by ``\\n``

    Returns
    -------
    tuple of (list of LinkReference, str)
        The definitions in order and the remaining text (possibly empty)

    """
    lines = text.split("\n")
    references: list[LinkReference] = []
    index = 0
    while index < len(lines):
        reference = _parse_definition(lines[index])
        if reference is None:
            break
        references.append(reference)
        index += 1
    return references, "\n".join(lines[index:])


def _definition_text(node: Node) -> Optional[str]:
    if not isinstance(node, (Paragraph, ListParagraph)):
        return None
    if len(node.children) != 1 or not isinstance(node.children[0], UnparsedContent):
        return None
    return node.children[0].content


def collect_link_references(nodes: Iterable[Node]) -> dict[str, LinkReference]:
    """Collect every reference definition in a preliminary tree.

    Paragraphs are searched at any depth, so definitions inside block quotes
    and list items count too. When a label is defined more than once the
    first definition in document order wins.

    Parameters
    ----------
    nodes : iterable of Node
        Top-level blocks of the preliminary tree

    Returns
    -------
    dict
        Definitions keyed by normalized label

    """
    table: dict[str, LinkReference] = {}
    for root in nodes:
        for node in iter_nodes(root):
            text = _definition_text(node)
            if text is None:
                continue
            references, _ = split_link_reference_definitions(text)
            for reference in references:
                key = normalize_label(reference.label)
                if key in table:
                    logger.debug("Ignoring duplicate definition of reference %r", reference.label)
                    continue
                table[key] = reference
    logger.debug("Collected %d link reference definitions", len(table))
    return table


__all__ = [
    "LinkReference",
    "normalize_label",
    "split_link_reference_definitions",
    "collect_link_references",
]
