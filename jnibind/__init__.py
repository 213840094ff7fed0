"""
jnibind: JNI export generation for Rust functions.

Turns plain Rust functions into entry points the JVM can call: the
function is renamed to its ``Java_<package>_<method>`` symbol (or to
``JNI_OnLoad`` / ``JNI_OnUnload`` for lifecycle hooks), given the
``extern "system"`` calling convention and marked ``#[no_mangle]``.

Usage:
    from jnibind import mangle, parse_item, DeclarationTransformer, AttributeArgs

    mangle("com.example.Bar", "close_it")  # 'Java_com_example_Bar_close_1it'

    item = parse_item('pub fn sayHello(env: JNIEnv, _: JClass) -> jstring { todo!() }')
    result = DeclarationTransformer().transform_export(item, AttributeArgs('"com.example.Hello"'))
"""

__version__ = "0.1.0"
__author__ = "jnibind Team"
__email__ = "jnibind@example.com"

# Public API exports
from .codegen import (
    AttributeArgs,
    Declaration,
    DeclarationTransformer,
    Hook,
    Namespaced,
    TransformResult,
    mangle,
    mangle_hook,
    render_result,
    validate_namespace,
)
from .frontend import expand_source, parse_item
from .utils.constants import HookKind
from .utils.diagnostics import Diagnostic, DiagnosticKind

from .utils.config import (
    get_config,
    JnibindConfig
)

__all__ = [
    "AttributeArgs",
    "Declaration",
    "DeclarationTransformer",
    "Hook",
    "Namespaced",
    "TransformResult",
    "mangle",
    "mangle_hook",
    "render_result",
    "validate_namespace",
    "expand_source",
    "parse_item",
    "HookKind",
    "Diagnostic",
    "DiagnosticKind",
    "get_config",
    "JnibindConfig",
]
