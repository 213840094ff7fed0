"""
Custom exception definitions.

This module defines the exception hierarchy for jnibind-specific
errors. Transformation failures are reported as diagnostics; these
exceptions cover malformed input and callers that opt into exception
flow at their own boundary.
"""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .diagnostics import Diagnostic, Span


class JnibindError(Exception):
    """
    Base exception for all jnibind-related errors.

    This is the root exception class for all jnibind-specific
    errors, providing common functionality and error handling.
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        """
        Initialize jnibind error.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class ParseError(JnibindError):
    """
    Raised when source text cannot be tokenized.

    Covers unterminated literals or comments and unbalanced delimiters.
    Well-formed text that simply is not a function is not a parse error.
    """

    def __init__(self, message: str, span: Optional["Span"] = None):
        """
        Initialize parse error.

        Args:
            message: Error description
            span: Location of the offending token, if known
        """
        details = {}
        if span is not None:
            details["line"] = span.line
            details["column"] = span.column

        super().__init__(message, details)
        self.span = span


class TransformError(JnibindError):
    """Raised by ``TransformResult.unwrap()`` when the result is a diagnostic."""

    def __init__(self, diagnostic: "Diagnostic"):
        super().__init__(
            diagnostic.message,
            {"kind": diagnostic.kind.name, "line": diagnostic.span.line},
        )
        self.diagnostic = diagnostic


class InvalidNamespaceError(JnibindError):
    """Raised by strict naming helpers when handed an invalid namespace."""

    def __init__(self, namespace: str, problems: Optional[list] = None):
        message = f"Invalid package namespace '{namespace}'"
        if problems:
            message += f": {'; '.join(problems)}"

        super().__init__(message, {"namespace": namespace})
        self.namespace = namespace
        self.problems = list(problems or [])
