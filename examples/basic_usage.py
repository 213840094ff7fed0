#!/usr/bin/env python3
"""
Basic usage example for jnibind.

This example demonstrates how to compute JNI symbol names, export a
single function and expand every export attribute in a Rust source file.
"""

from jnibind import (
    AttributeArgs,
    DeclarationTransformer,
    HookKind,
    expand_source,
    mangle,
    mangle_hook,
    parse_item,
    render_result,
)
from jnibind.utils.diagnostics import format_diagnostic

LIB_RS = """\
/// Closes the file with the given name.
#[jni("com.example.Bar")]
pub fn close_it(env: JNIEnv, _: JClass, filename: JString) -> jboolean {
    unimplemented!()
}

#[on_load]
pub unsafe fn on_load(vm: JavaVM, _: *mut c_void) -> jint {
    JNI_VERSION_1_6
}

#[jni("com.example.Bar")]
fn not_public(env: JNIEnv) {}
"""


def main():
    """Demonstrate basic jnibind usage."""
    print("jnibind - Basic Usage Example")
    print("=" * 60)

    print("\n1. Symbol names:")
    print(f"  {mangle('com.example.Bar', 'close_it')}")
    print(f"  {mangle('a.b.c.Test$', 'show')}")
    print(f"  {mangle_hook(HookKind.ON_LOAD, 'example')}")

    print("\n2. Exporting one function:")
    item = parse_item("pub fn sayHello(env: JNIEnv, _: JClass) -> jstring { unimplemented!() }")
    result = DeclarationTransformer().transform_export(item, AttributeArgs('"com.example.Hello"'))
    print(render_result(result))

    print("\n3. Expanding a source file:")
    expansion = expand_source(LIB_RS, "lib.rs")
    print(expansion.source)
    print(f"Exported symbols: {expansion.symbols}")
    for diagnostic in expansion.diagnostics:
        print(format_diagnostic(diagnostic, LIB_RS))


if __name__ == "__main__":
    main()
