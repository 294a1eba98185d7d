"""Command-line interface for the markweave Markdown parser.

Parses a Markdown file (or standard input) and prints the resulting syntax
tree as an indented outline or as JSON.

Environment Variable Support
----------------------------
Options support environment variable defaults using the pattern
MARKWEAVE_<OPTION_NAME>, where option names are converted to uppercase with
hyphens replaced by underscores. CLI arguments always override environment
variables.

Exit Codes
----------
0 success, 1 parse or validation error, 2 usage error, 3 unreadable input.

Examples
--------
Print the tree of a file::

    $ markweave README.md

Read from standard input and print JSON::

    $ cat README.md | markweave - --format json

Parse a fragment as inline markup only::

    $ echo '**bold** and [link](/x)' | markweave --inline

Use rich formatting::

    $ markweave README.md --rich

Use environment variables for defaults::

    $ export MARKWEAVE_RICH=true
    $ export MARKWEAVE_EXTENSION_SET=commonmark
    $ markweave README.md  # Uses environment defaults

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import sys
from typing import Optional

from markweave.cli.actions import PositiveIntAction, create_env_aware_argument
from markweave.constants import (
    DEFAULT_EXTENSION_SET,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_NESTING_DEPTH,
    DEFAULT_NESTING_POLICY,
    EXIT_ERROR,
    EXIT_INPUT_ERROR,
    EXIT_SUCCESS,
    NESTING_POLICIES,
)
from markweave.exceptions import MarkweaveError
from markweave.logging_utils import configure_logging

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

__all__ = [
    "main",
    "create_parser",
]


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    from markweave import __version__
    from markweave.extension_set import registry

    parser = argparse.ArgumentParser(
        prog="markweave",
        description="Parse Markdown into a syntax tree and print it.",
        epilog="Options can be set through MARKWEAVE_<OPTION> environment variables.",
    )
    parser.add_argument("input", nargs="?", default="-", help="Markdown file to parse, or '-' for stdin (default)")
    parser.add_argument("--version", "-v", action="version", version=f"markweave {__version__}")

    create_env_aware_argument(
        parser,
        "--format",
        choices=["tree", "json"],
        default="tree",
        help="Output format: indented outline or JSON (default: tree)",
    )
    create_env_aware_argument(parser, "--rich", action="store_true", help="Pretty-print output with rich")
    create_env_aware_argument(
        parser, "--inline", action="store_true", help="Parse the input as inline markup only, without blocks"
    )
    create_env_aware_argument(
        parser, "--include-source", action="store_true", help="Include source line numbers in JSON output"
    )

    grammar = parser.add_argument_group("grammar options")
    create_env_aware_argument(
        grammar,
        "--extension-set",
        choices=registry.list_names(),
        default=DEFAULT_EXTENSION_SET,
        help=f"Extension set to enable (default: {DEFAULT_EXTENSION_SET})",
    )
    create_env_aware_argument(
        grammar,
        "--no-default-syntaxes",
        action="store_false",
        help="Disable the built-in block and inline rules; only extension rules and paragraphs remain",
    )
    grammar.add_argument(
        "--max-nesting-depth",
        action=PositiveIntAction,
        default=DEFAULT_MAX_NESTING_DEPTH,
        metavar="N",
        help=f"Maximum nesting depth of quotes, lists and inline markup (default: {DEFAULT_MAX_NESTING_DEPTH})",
    )
    create_env_aware_argument(
        grammar,
        "--nesting-policy",
        choices=list(NESTING_POLICIES),
        default=DEFAULT_NESTING_POLICY,
        help="Truncate over-deep nesting to text, or fail with an error (default: truncate)",
    )
    create_env_aware_argument(
        grammar, "--validate", action="store_true", help="Check structural invariants of the parsed tree"
    )

    logging_group = parser.add_argument_group("logging options")
    create_env_aware_argument(
        logging_group,
        "--log-level",
        choices=list(LOG_LEVELS),
        type=str.upper,
        default=DEFAULT_LOG_LEVEL,
        help=f"Logging level (default: {DEFAULT_LOG_LEVEL})",
    )
    create_env_aware_argument(logging_group, "--log-file", help="Also write log records to this file")
    create_env_aware_argument(
        logging_group, "--trace", action="store_true", help="Debug logging with timestamps, showing every rule decision"
    )
    return parser


def _read_input(source: str) -> str:
    """Read Markdown text from a file path or ``-`` for stdin."""
    if source == "-":
        return sys.stdin.read()
    with open(source, encoding="utf-8") as f:
        return f.read()


def main(args: Optional[list[str]] = None) -> int:
    """Execute the CLI.

    Parameters
    ----------
    args : list of str, optional
        Command-line arguments; ``sys.argv[1:]`` when None

    Returns
    -------
    int
        Process exit code

    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    configure_logging(parsed_args.log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)

    try:
        text = _read_input(parsed_args.input)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read {parsed_args.input}: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    # Lazy import so --help and --version stay fast
    from markweave.cli.output import format_plain, print_rich
    from markweave.options import ParserOptions
    from markweave.parser import MarkdownParser

    try:
        options = ParserOptions(
            extension_set=parsed_args.extension_set,
            with_default_block_syntaxes=parsed_args.default_syntaxes,
            with_default_inline_syntaxes=parsed_args.default_syntaxes,
            max_nesting_depth=parsed_args.max_nesting_depth,
            nesting_policy=parsed_args.nesting_policy,
            validate_output=parsed_args.validate,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    try:
        markdown_parser = MarkdownParser(options)
        result = markdown_parser.parse_inline(text) if parsed_args.inline else markdown_parser.parse(text)
    except MarkweaveError as e:
        logger.debug("Parse failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if parsed_args.rich:
        print_rich(result, parsed_args.format, include_source=parsed_args.include_source)
    else:
        print(format_plain(result, parsed_args.format, include_source=parsed_args.include_source))
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
