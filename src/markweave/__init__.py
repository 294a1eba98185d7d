"""markweave - an extensible two-phase Markdown parser.

markweave turns Markdown text into a typed syntax tree. Output formats are
not part of the library: consumers walk the tree with a ``NodeVisitor``
subclass that handles every node kind.

Parsing happens in two phases. The block phase segments lines into
headers, lists, tables, quotes and code blocks using pluggable,
priority-ordered grammar rules, leaving text regions as placeholders. The
inline phase then collects every link reference definition in the document
and resolves emphasis, links, images and code spans, so a reference link may
use a label defined anywhere, even further down.

Key Features
------------
- Pluggable block and inline grammar rules
- Named extension sets (``gfm`` tables, strikethrough, task lists, autolinks)
- Forward-referenced link and image definitions
- Resolver callbacks for references without a definition
- Configurable nesting limit with truncate or error policies
- Structural validation, JSON serialization and text outlines of trees

Examples
--------
Parse a document:

    >>> from markweave import parse_markdown
    >>> doc = parse_markdown("# Title\\n\\nSome *emphasis*.")
    >>> doc.children[0].level
    1

Write a consumer:

    >>> from markweave.ast import NodeVisitor
    >>> class TextCollector(NodeVisitor):
    ...     def visit_text(self, node):
    ...         return node.content
    ...     # one visit_* method per node kind

See Also
--------
markweave.ast : node definitions, visitors and tree utilities
markweave.block_syntaxes : block grammar rules
markweave.inline_syntaxes : inline grammar rules

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "markweave requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from markweave.ast import Document, NodeVisitor, walk
from markweave.exceptions import MarkweaveError, NestingDepthError, StructuralError, ValidationError
from markweave.extension_set import ExtensionSet, get_extension_set
from markweave.options import ParserOptions
from markweave.parser import MarkdownParser, ParseSession, PreliminaryTree, parse_inline, parse_markdown
from markweave.resolver import InlineResolver

__all__ = [
    "__version__",
    "parse_markdown",
    "parse_inline",
    "MarkdownParser",
    "ParserOptions",
    "ParseSession",
    "PreliminaryTree",
    "InlineResolver",
    "ExtensionSet",
    "get_extension_set",
    "Document",
    "NodeVisitor",
    "walk",
    "MarkweaveError",
    "ValidationError",
    "StructuralError",
    "NestingDepthError",
]
