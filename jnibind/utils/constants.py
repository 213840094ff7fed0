"""
Constants and Enumerations for jnibind.

This module holds the fixed tables the naming convention is built on:
forbidden namespace characters, hook symbol templates, escape sequences
and the markers attached to every exported declaration.
"""

from __future__ import annotations

from enum import Enum


# =============================================================================
# Namespace Validation
# =============================================================================

# Characters that must not occur anywhere in a package namespace.
FORBIDDEN_NAMESPACE_CHARS: frozenset[str] = frozenset(
    [
        " ", ",", ":", ";", "|", "\\", "/", "!", "@", "#", "%", "^", "&", "*",
        "(", ")", "{", "}", "[", "]", "-", "`", "~", "\t", "\n", "\r",
    ]
)

# Characters that must not start a namespace identifier.
FORBIDDEN_IDENT_START_CHARS: frozenset[str] = frozenset("0123456789")

NAMESPACE_SEPARATOR = "."


# =============================================================================
# Symbol Naming
# =============================================================================

JAVA_SYMBOL_PREFIX = "Java_"
SYMBOL_SEPARATOR = "_"

# Escape sequences, applied in this order to namespaces.
UNDERSCORE_ESCAPE = "_1"
DOLLAR_ESCAPE = "_00024"


class HookKind(Enum):
    """Lifecycle hooks the JVM resolves by fixed name."""

    ON_LOAD = "JNI_OnLoad"
    ON_UNLOAD = "JNI_OnUnload"

    @property
    def symbol(self) -> str:
        """Base symbol name for this hook."""
        return self.value

    @property
    def attribute_name(self) -> str:
        """Attribute that requests this hook (`on_load` / `on_unload`)."""
        return HOOK_ATTRIBUTE_NAMES[self]


HOOK_ATTRIBUTE_NAMES = {
    HookKind.ON_LOAD: "on_load",
    HookKind.ON_UNLOAD: "on_unload",
}

EXPORT_ATTRIBUTE_NAME = "jni"


# =============================================================================
# Declaration Decorations
# =============================================================================

SYSTEM_CALLING_CONVENTION = "system"
LINKAGE_MARKER = "#[no_mangle]"
CASING_LINT_MARKER = "#[allow(non_snake_case)]"

# Attribute markers appended to every exported declaration, in emit order.
EXPORT_MARKERS: tuple[str, ...] = (LINKAGE_MARKER, CASING_LINT_MARKER)


# =============================================================================
# Item Parsing
# =============================================================================

FUNCTION_KEYWORD = "fn"
VISIBILITY_KEYWORD = "pub"
EXTERN_KEYWORD = "extern"

# Qualifiers allowed between visibility and `fn`, in source order.
FUNCTION_QUALIFIERS: tuple[str, ...] = ("const", "async", "unsafe")

# Keywords that introduce items the transformer can only reject.
OTHER_ITEM_KEYWORDS: frozenset[str] = frozenset(
    [
        "struct", "enum", "union", "trait", "impl", "mod", "type", "static",
        "const", "use", "macro_rules", "extern",
    ]
)
