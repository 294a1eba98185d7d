#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/exceptions.py
"""Custom exceptions for the markweave library.

This module defines the exception classes raised by the parsing engine. Only
two situations ever surface as exceptions: a caller handing the engine bad
parameters, and an internal invariant of the grammar or of a tree consumer
being broken. Malformed user markup is never an error; it falls back to
paragraph text, padded table rows, or plain-text brackets.

Exception Hierarchy
-------------------
- MarkweaveError (base exception)

  - ValidationError (parameter/option validation)

  - StructuralError (internal invariant violations)
    - NestingDepthError (nesting limit exceeded under the ``error`` policy)

"""

from typing import Any


class MarkweaveError(Exception):
    """Base exception class for all markweave-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(MarkweaveError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class StructuralError(MarkweaveError):
    """Exception raised when an internal invariant of the tree is violated.

    A structural error points at a bug in a grammar rule or in a tree
    consumer, never at malformed input: a header rule producing a level
    outside 1-6, a table rule producing rows of the wrong width, or a visitor
    traversing the children of a node twice. These are fatal for the parse
    (or for the single traversal) that hit them.

    Parameters
    ----------
    message : str
        Description of the violated invariant
    rule : str, optional
        Name of the grammar rule that was running
    line : int, optional
        1-based source line the rule was looking at
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        rule: str | None = None,
        line: int | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the structural error with rule and line context."""
        self.detail = message
        self.rule = rule
        self.line = line
        super().__init__(self._format(message, rule, line), original_error=original_error)

    @staticmethod
    def _format(message: str, rule: str | None, line: int | None) -> str:
        context = []
        if rule is not None:
            context.append(f"rule {rule}")
        if line is not None:
            context.append(f"line {line}")
        if not context:
            return message
        return f"{message} ({', '.join(context)})"

    def with_context(self, rule: str | None = None, line: int | None = None) -> "StructuralError":
        """Return this error with missing rule/line context filled in.

        Context already present on the error is kept; only absent fields are
        taken from the arguments. The error is updated in place and returned
        so callers can ``raise err.with_context(...)``.

        """
        if self.rule is None:
            self.rule = rule
        if self.line is None:
            self.line = line
        self.message = self._format(self.detail, self.rule, self.line)
        self.args = (self.message,)
        return self


class NestingDepthError(StructuralError):
    """Exception raised when container nesting exceeds the configured limit.

    Only raised when the parser runs with ``nesting_policy="error"``; the
    default policy truncates nesting and logs a warning instead.

    Parameters
    ----------
    depth : int
        Depth the document tried to reach
    limit : int
        Configured maximum nesting depth
    line : int, optional
        1-based source line of the container that went too deep

    """

    def __init__(self, depth: int, limit: int, line: int | None = None, rule: str | None = None):
        """Initialize the nesting error with depth information."""
        super().__init__(
            f"Maximum nesting depth exceeded: {depth} > {limit}",
            rule=rule,
            line=line,
        )
        self.depth = depth
        self.limit = limit
