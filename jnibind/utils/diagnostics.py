"""
Diagnostic reporting for rejected declarations.

Every precondition the transformer checks maps to a fixed message
template and to the source span that best explains the failure. A
diagnostic is a plain value; turning it into a build failure is up to
whoever consumes it (the CLI, the source expander or a caller's own
pipeline).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from .logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Span:
    """A location in source text.

    ``start``/``end`` are 0-based character offsets into the source;
    ``line``/``column`` are 1-based and refer to ``start``.
    """

    line: int = 1
    column: int = 1
    start: int = 0
    end: int = 0
    source_name: str = "<input>"

    @classmethod
    def from_offsets(cls, source: str, start: int, end: int, source_name: str = "<input>") -> "Span":
        """Build a span for ``source[start:end]``."""
        line = source.count("\n", 0, start) + 1
        line_start = source.rfind("\n", 0, start) + 1
        return cls(
            line=line,
            column=start - line_start + 1,
            start=start,
            end=end,
            source_name=source_name,
        )

    def __str__(self) -> str:
        return f"{self.source_name}:{self.line}:{self.column}"


class DiagnosticKind(Enum):
    """Reasons a declaration can be rejected, in the order they are checked."""

    NOT_A_FUNCTION = auto()
    # Covers both an absent argument and one that is not a single string literal.
    MISSING_NAMESPACE_ARGUMENT = auto()
    INVALID_NAMESPACE = auto()
    CONVENTION_ALREADY_SPECIFIED = auto()
    NOT_PUBLIC = auto()


_EXPORT_TEMPLATES = {
    DiagnosticKind.NOT_A_FUNCTION:
        "The `{attribute}` attribute can only be applied to `fn` items",
    DiagnosticKind.MISSING_NAMESPACE_ARGUMENT:
        "The `{attribute}` attribute must have a single string literal supplied to specify the namespace",
    DiagnosticKind.INVALID_NAMESPACE:
        "Invalid package namespace supplied to `{attribute}` attribute",
    DiagnosticKind.CONVENTION_ALREADY_SPECIFIED:
        "Don't specify an ABI for `{attribute}` attributed functions - "
        "the correct ABI will be added automatically",
    DiagnosticKind.NOT_PUBLIC:
        "`{attribute}` attributed functions must have public visibility (`pub`)",
}

_HOOK_TEMPLATES = {
    DiagnosticKind.NOT_A_FUNCTION:
        "The `{attribute}` attribute can only be applied to `fn` items",
    DiagnosticKind.CONVENTION_ALREADY_SPECIFIED:
        "Don't specify an ABI for JNI hook functions - "
        "the correct ABI will be added automatically",
    DiagnosticKind.NOT_PUBLIC:
        "JNI hook functions must have public visibility (`pub`)",
}


@dataclass(frozen=True)
class Diagnostic:
    """A located, human-readable rejection."""

    kind: DiagnosticKind
    span: Span
    message: str

    def __str__(self) -> str:
        return f"{self.span}: error: {self.message}"


class DiagnosticReporter:
    """
    Maps rejection kinds to messages.

    The reporter is stateless; ``message_for`` and ``report`` are pure.
    """

    def message_for(self, kind: DiagnosticKind, attribute: str, hook: bool = False) -> str:
        """
        Get the fixed message for a rejection kind.

        Args:
            kind: Rejection kind
            attribute: Attribute name the user wrote (``jni``, ``on_load``...)
            hook: Whether the failing export is a lifecycle hook

        Returns:
            Message text

        Raises:
            ValueError: If ``kind`` cannot occur for hook exports
        """
        templates = _HOOK_TEMPLATES if hook else _EXPORT_TEMPLATES
        if kind not in templates:
            raise ValueError(f"{kind.name} is not reported for hook exports")
        return templates[kind].format(attribute=attribute)

    def report(
        self, kind: DiagnosticKind, span: Span, attribute: str, hook: bool = False
    ) -> Diagnostic:
        """Build the diagnostic for ``kind`` located at ``span``."""
        diagnostic = Diagnostic(kind=kind, span=span, message=self.message_for(kind, attribute, hook))
        logger.debug(f"Reporting {kind.name} at {span}")
        return diagnostic


def format_diagnostic(diagnostic: Diagnostic, source: Optional[str] = None) -> str:
    """
    Render a diagnostic for a terminal.

    Args:
        diagnostic: Diagnostic to render
        source: Full source text the span refers to; when given, the
            offending line is shown with a caret underline

    Returns:
        Rendered text (no trailing newline)
    """
    header = str(diagnostic)
    if source is None:
        return header

    span = diagnostic.span
    lines = source.split("\n")
    if not 1 <= span.line <= len(lines):
        return header

    text = lines[span.line - 1]
    gutter = str(span.line)
    # Underline up to the end of the span or the end of the line, whichever is first.
    width = max(1, min(span.end - span.start, len(text) - span.column + 1))
    caret = " " * (span.column - 1) + "^" * width
    pad = " " * len(gutter)
    return "\n".join(
        [
            header,
            f"{pad} |",
            f"{gutter} | {text}",
            f"{pad} | {caret}",
        ]
    )
