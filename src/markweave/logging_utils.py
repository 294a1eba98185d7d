#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/logging_utils.py
"""Logging setup for the markweave command-line interface.

Library modules only create module-level loggers; handlers are installed here
and only by entry points.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from markweave.constants import DEFAULT_LOG_LEVEL


def resolve_log_level(log_level: int | str) -> int:
    """Turn a numeric level or a level name into a numeric level.

    Unknown names fall back to the default level.

    """
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), getattr(logging, DEFAULT_LOG_LEVEL))


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure root logging handlers for the CLI.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Optional path to a log file for teeing log output.
    trace_mode : bool, default False
        When true, log at DEBUG with timestamps and logger names, which shows
        every grammar rule decision the parser makes.

    Returns
    -------
    logging.Logger
        The configured root logger instance.

    """
    resolved_level = logging.DEBUG if trace_mode else resolve_log_level(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    format_str = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s" if trace_mode else "%(levelname)s: %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S" if trace_mode else None
    formatter = logging.Formatter(format_str, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            root_logger.info("Logging to file: %s", log_file)

    return root_logger
