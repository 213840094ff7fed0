"""
Package namespace validation.

A namespace is a '.'-separated identifier list such as
``com.example.RustBindings``. JVM languages disagree slightly on what a
valid identifier is, so the checks here only catch strings that are
obviously wrong for all of them: a fixed set of forbidden characters,
empty identifiers and identifiers starting with a digit.
"""

from __future__ import annotations

from ..utils.constants import (
    FORBIDDEN_NAMESPACE_CHARS,
    FORBIDDEN_IDENT_START_CHARS,
    NAMESPACE_SEPARATOR,
)


def split_namespace(namespace: str) -> list[str]:
    """Split a namespace into its identifiers (no validation)."""
    return namespace.split(NAMESPACE_SEPARATOR)


def is_valid_identifier(ident: str) -> bool:
    """Check one namespace identifier: non-empty, not starting with a digit."""
    if not ident:
        return False
    return ident[0] not in FORBIDDEN_IDENT_START_CHARS


def validate_namespace(namespace: str) -> bool:
    """
    Check whether ``namespace`` looks like a package name.

    Args:
        namespace: Candidate namespace, e.g. ``"com.example.Foo"``

    Returns:
        True if the namespace is acceptable
    """
    if any(c in FORBIDDEN_NAMESPACE_CHARS for c in namespace):
        return False

    return all(is_valid_identifier(ident) for ident in split_namespace(namespace))


def namespace_problems(namespace: str) -> list[str]:
    """
    Explain why a namespace is rejected.

    Returns an empty list exactly when ``validate_namespace`` accepts the
    namespace.
    """
    problems = []

    forbidden = sorted({c for c in namespace if c in FORBIDDEN_NAMESPACE_CHARS})
    if forbidden:
        shown = ", ".join(repr(c) for c in forbidden)
        problems.append(f"contains forbidden character(s) {shown}")

    for position, ident in enumerate(split_namespace(namespace)):
        if not ident:
            problems.append(f"identifier {position} is empty")
        elif ident[0] in FORBIDDEN_IDENT_START_CHARS:
            problems.append(f"identifier '{ident}' starts with a digit")

    return problems
