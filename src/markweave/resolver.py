#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/resolver.py
"""Inline resolution: the second phase of parsing.

The block phase leaves every text region as an ``UnparsedContent``
placeholder. Resolution runs in two passes over that preliminary tree:

1. collect every link reference definition in the document into the
   session's reference table, so links may use labels defined further down;
2. build a new tree in which each placeholder is replaced by the inline
   nodes of its text, parsed against the now complete table.

Paragraphs made up only of definitions disappear from the result, and
definition lines at the start of other paragraphs are removed. The
preliminary tree is not modified; every node of the result is a fresh
instance.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from markweave.ast.nodes import Document, LeafNode, ListParagraph, Node, Paragraph, UnparsedContent, replace_node_children
from markweave.exceptions import StructuralError
from markweave.inline_parser import InlineParser
from markweave.references import collect_link_references, split_link_reference_definitions
from markweave.session import ParseSession, PreliminaryTree

logger = logging.getLogger(__name__)


class InlineResolver:
    """Turn a ``PreliminaryTree`` into a placeholder-free ``Document``.

    Parameters
    ----------
    session : ParseSession
        Session of the parse that produced the tree. Its reference table is
        filled by ``resolve``.

    """

    def __init__(self, session: ParseSession):
        """Initialize the resolver for one parse session."""
        self.session = session
        self._placeholders = 0

    def resolve(self, tree: PreliminaryTree) -> Document:
        """Collect references and resolve every placeholder.

        Parameters
        ----------
        tree : PreliminaryTree
            Output of the block phase

        Returns
        -------
        Document
            The finished tree

        """
        for label, reference in collect_link_references(tree.nodes).items():
            self.session.link_references.setdefault(label, reference)

        children: list[Node] = []
        for node in tree.nodes:
            resolved = self._resolve_block(node)
            if resolved is not None:
                children.append(resolved)
        logger.debug(
            "Resolved %d placeholders with %d references",
            self._placeholders,
            len(self.session.link_references),
        )
        return Document(children=children)

    def resolve_text(self, text: str, line: Optional[int] = None) -> list[Node]:
        """Parse the inline markup of a text fragment.

        Parameters
        ----------
        text : str
            Raw text of a placeholder
        line : int, optional
            Source line of the text, added to any ``StructuralError``

        """
        self._placeholders += 1
        try:
            return InlineParser(text, self.session).parse()
        except StructuralError as exc:
            raise exc.with_context(line=line)

    def _resolve_block(self, node: Node) -> Optional[Node]:
        if isinstance(node, (Paragraph, ListParagraph)) and _is_placeholder_only(node):
            placeholder = node.children[0]
            references, rest = split_link_reference_definitions(placeholder.content)  # type: ignore[attr-defined]
            if references and not rest.strip():
                return None
            return replace_node_children(node, self.resolve_text(rest, _line(placeholder)))
        return self._resolve_node(node)

    def _resolve_node(self, node: Node) -> Node:
        if isinstance(node, LeafNode):
            return replace(node)

        children: list[Node] = []
        for child in node.children:
            if isinstance(child, UnparsedContent):
                children.extend(self.resolve_text(child.content, _line(child)))
                continue
            resolved = self._resolve_block(child)
            if resolved is not None:
                children.append(resolved)
        return replace_node_children(node, children)


def _is_placeholder_only(node: Node) -> bool:
    return len(node.children) == 1 and isinstance(node.children[0], UnparsedContent)


def _line(node: Node) -> Optional[int]:
    return node.source_location.line if node.source_location is not None else None


__all__ = [
    "InlineResolver",
]
