"""
Codegen module for JNI export generation.

This module provides the naming convention, namespace validation and
the declaration transformer that together turn a plain Rust function
into a JNI entry point.
"""

from .declaration import (
    AttributeArgs,
    Declaration,
    ExportKind,
    Hook,
    Item,
    Namespaced,
    Visibility,
)
from .namespace import validate_namespace, namespace_problems
from .naming import (
    escape_identifier,
    escape_namespace,
    mangle,
    mangle_checked,
    mangle_export,
    mangle_hook,
)
from .transformer import (
    DeclarationTransformer,
    TransformResult,
    TransformState,
    transform_item,
)
from .emitter import (
    render_compile_error,
    render_declaration,
    render_result,
    result_to_dict,
)

__all__ = [
    # Declaration model
    "AttributeArgs",
    "Declaration",
    "ExportKind",
    "Hook",
    "Item",
    "Namespaced",
    "Visibility",
    # Namespaces and naming
    "validate_namespace",
    "namespace_problems",
    "escape_identifier",
    "escape_namespace",
    "mangle",
    "mangle_checked",
    "mangle_export",
    "mangle_hook",
    # Transformation
    "DeclarationTransformer",
    "TransformResult",
    "TransformState",
    "transform_item",
    # Emission
    "render_compile_error",
    "render_declaration",
    "render_result",
    "result_to_dict",
]
