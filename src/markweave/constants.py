#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/constants.py
"""Constants and default values for markweave.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Parser Defaults - Limits and policies used by the parsing engine
3. CLI Defaults - Environment variable prefix and exit codes
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

Alignment = Literal["left", "center", "right"]
NestingPolicy = Literal["truncate", "error"]
ExtensionSetName = Literal["none", "commonmark", "gfm"]
OutputFormat = Literal["tree", "json"]

# =============================================================================
# Parser Defaults
# =============================================================================

DEFAULT_EXTENSION_SET: ExtensionSetName = "gfm"
DEFAULT_MAX_NESTING_DEPTH = 32
MAX_NESTING_DEPTH_LIMIT = 100
DEFAULT_NESTING_POLICY: NestingPolicy = "truncate"
NESTING_POLICIES: tuple[NestingPolicy, ...] = ("truncate", "error")

HEADER_LEVELS = range(1, 7)
DEFAULT_ALIGNMENT: Alignment = "left"
TAB_SIZE = 4

# =============================================================================
# CLI Defaults
# =============================================================================

ENV_PREFIX = "MARKWEAVE_"
DEFAULT_LOG_LEVEL = "WARNING"

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_USAGE = 2
EXIT_INPUT_ERROR = 3
