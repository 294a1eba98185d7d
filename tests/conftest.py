"""Pytest configuration and shared fixtures for the markweave test suite.

This module provides shared fixtures, test configuration, and helpers that
are used across the entire test suite.
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import logging
import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from markweave.options import ParserOptions
from markweave.parser import MarkdownParser

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")


@pytest.fixture
def gfm_parser() -> MarkdownParser:
    """Provide a parser with the default (gfm) configuration."""
    return MarkdownParser()


@pytest.fixture
def commonmark_parser() -> MarkdownParser:
    """Provide a parser without the gfm extensions."""
    return MarkdownParser(ParserOptions(extension_set="commonmark"))


@pytest.fixture
def markdown_file(tmp_path: Path):
    """Provide a factory that writes Markdown text to a temporary file."""

    def _write(text: str, name: str = "input.md") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def restore_root_logging():
    """Restore root logger handlers and level changed by the CLI."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
