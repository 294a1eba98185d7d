#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/options/__init__.py
"""Configuration options for the markweave parser.

Options are frozen dataclasses. Use ``create_updated`` to derive a modified
copy instead of mutating an instance.
"""

from __future__ import annotations

from markweave.options.base import CloneFrozenMixin
from markweave.options.parser import ParserOptions

__all__ = [
    "CloneFrozenMixin",
    "ParserOptions",
]
