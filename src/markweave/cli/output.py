#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/cli/output.py
"""Output formatting for the markweave CLI."""

from __future__ import annotations

import json
from typing import Any, Union

from markweave.ast.dump import DumpEntry, TreeDumper, dump_tree
from markweave.ast.nodes import Node
from markweave.ast.serialization import SCHEMA_VERSION, ast_to_dict, ast_to_json
from markweave.constants import OutputFormat

ParseOutput = Union[Node, list[Node]]


def format_json(result: ParseOutput, include_source: bool = False) -> str:
    """Serialize a parse result as indented JSON.

    A document is serialized as one object. The node list of an inline-only
    parse becomes ``{"schema_version": 1, "nodes": [...]}``.
    """
    if isinstance(result, list):
        payload: dict[str, Any] = {
            "schema_version": SCHEMA_VERSION,
            "nodes": [ast_to_dict(node, include_source=include_source) for node in result],
        }
        return json.dumps(payload, indent=2, ensure_ascii=False)
    return ast_to_json(result, indent=2, include_source=include_source)


def format_plain(result: ParseOutput, output_format: OutputFormat, include_source: bool = False) -> str:
    """Format a parse result as plain text."""
    if output_format == "json":
        return format_json(result, include_source=include_source)
    return dump_tree(result)


def build_rich_tree(result: ParseOutput) -> Any:
    """Build a ``rich.tree.Tree`` mirroring the text outline.

    Node kinds are printed in bold and their parameters dimmed.
    """
    from rich.text import Text
    from rich.tree import Tree

    def styled(label: str) -> Text:
        name, paren, params = label.partition("(")
        text = Text(name, style="bold cyan")
        if paren:
            text.append(paren + params, style="dim")
        return text

    def add_entries(branch: Tree, entries: list[DumpEntry]) -> None:
        for entry in entries:
            add_entries(branch.add(styled(entry.label)), entry.children)

    dumper = TreeDumper()
    roots = result if isinstance(result, list) else [result]
    entries = [dumper.visit(root) for root in roots]
    if len(entries) == 1:
        tree = Tree(styled(entries[0].label))
        add_entries(tree, entries[0].children)
    else:
        tree = Tree(Text("inline", style="bold magenta"))
        add_entries(tree, entries)
    return tree


def print_rich(result: ParseOutput, output_format: OutputFormat, include_source: bool = False) -> None:
    """Print a parse result to stdout with rich formatting."""
    from rich.console import Console
    from rich.syntax import Syntax

    console = Console()
    if output_format == "json":
        console.print(Syntax(format_json(result, include_source=include_source), "json", word_wrap=True))
    else:
        console.print(build_rich_tree(result))


__all__ = [
    "format_json",
    "format_plain",
    "build_rich_tree",
    "print_rich",
]
