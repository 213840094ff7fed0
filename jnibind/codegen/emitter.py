"""
Rust source emission.

Renders transformed declarations back to Rust text, and rejected ones
as a ``compile_error!`` invocation so that a failed export still fails
the build at the right place when spliced into a source file.
"""

from __future__ import annotations

from typing import Any

from ..utils.diagnostics import Diagnostic
from .declaration import Declaration, Visibility
from .transformer import TransformResult


def render_signature(decl: Declaration) -> str:
    """Render everything from the visibility keyword to the return clause."""
    parts = []
    if decl.visibility is not Visibility.PRIVATE:
        parts.append(decl.visibility_text or decl.visibility.value)
    parts.extend(decl.qualifiers)
    if decl.abi is not None:
        parts.append(f'extern "{decl.abi}"' if decl.abi else "extern")
    parts.append("fn")
    parts.append(f"{decl.ident}{decl.generics}({decl.params})")
    if decl.output:
        parts.append(decl.output)
    return " ".join(parts)


def render_declaration(decl: Declaration, indent: str = "") -> str:
    """
    Render a declaration as Rust source.

    Args:
        decl: Declaration to render
        indent: Prefix for each attribute line and the signature line; the
            body is emitted verbatim

    Returns:
        Rust source text without a trailing newline
    """
    lines = [f"{indent}{attribute}" for attribute in decl.attributes]
    lines.append(f"{indent}{render_signature(decl)} {decl.body}")
    return "\n".join(lines)


def escape_rust_string(text: str) -> str:
    """Escape ``text`` for use inside a Rust string literal."""
    return (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )


def render_compile_error(diagnostic: Diagnostic, indent: str = "") -> str:
    """Render a diagnostic as a ``compile_error!`` invocation."""
    return f'{indent}::core::compile_error! {{ "{escape_rust_string(diagnostic.message)}" }}'


def render_result(result: TransformResult, indent: str = "") -> str:
    """Render whichever side of ``result`` is present."""
    if result.ok:
        return render_declaration(result.declaration, indent)
    return render_compile_error(result.diagnostic, indent)


def result_to_dict(result: TransformResult) -> dict[str, Any]:
    """Describe a result as JSON-compatible data."""
    if result.ok:
        return {
            "ok": True,
            "symbol": result.symbol,
            "declaration": render_declaration(result.declaration),
        }

    diagnostic = result.diagnostic
    return {
        "ok": False,
        "diagnostic": {
            "kind": diagnostic.kind.name,
            "message": diagnostic.message,
            "source": diagnostic.span.source_name,
            "line": diagnostic.span.line,
            "column": diagnostic.span.column,
        },
    }
