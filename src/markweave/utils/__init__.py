#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/utils/__init__.py
"""Internal helpers shared across markweave modules."""
