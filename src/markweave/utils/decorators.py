#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/utils/decorators.py
"""Timing helpers for debug logging."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Generator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Context manager for timing operations with DEBUG-level logging.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance to use for DEBUG messages
    operation : str
        Description of the operation being timed (e.g., "Block phase")

    Yields
    ------
    None
        Control flow to the code block being timed

    Examples
    --------
        >>> with debug_timer(logger, "Block phase"):
        ...     tree = parser.parse_blocks(lines)
        ... # Logs: "Block phase completed in 0.01s" at DEBUG level

    Notes
    -----
    Nothing is measured when the logger has DEBUG disabled.

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug("%s completed in %.2fs", operation, elapsed)
    else:
        yield
