"""
JNI symbol naming.

The JVM finds a native method by looking up
``Java_<escaped namespace>_<escaped method name>`` in the loaded
library. Escaping must happen in a fixed order: literal underscores
become ``_1`` first, then '.' separators become '_', then '$' (used by
Scala and Kotlin for nested or synthetic classes) becomes ``_00024``.
Converting separators before escaping underscores would make the two
indistinguishable.
"""

from __future__ import annotations

from typing import Optional

from ..utils.constants import (
    DOLLAR_ESCAPE,
    HookKind,
    JAVA_SYMBOL_PREFIX,
    NAMESPACE_SEPARATOR,
    SYMBOL_SEPARATOR,
    UNDERSCORE_ESCAPE,
)
from ..utils.exceptions import InvalidNamespaceError
from .declaration import ExportKind, Hook, Namespaced
from .namespace import namespace_problems, validate_namespace


def escape_identifier(name: str) -> str:
    """Escape literal underscores in a single identifier."""
    return name.replace("_", UNDERSCORE_ESCAPE)


def escape_namespace(namespace: str) -> str:
    """Escape a whole namespace: underscores, then separators, then '$'."""
    return (
        escape_identifier(namespace)
        .replace(NAMESPACE_SEPARATOR, SYMBOL_SEPARATOR)
        .replace("$", DOLLAR_ESCAPE)
    )


def mangle(namespace: str, function_name: str) -> str:
    """
    Create the JNI symbol for a native method.

    The function name is not converted to any particular case; exported
    declarations carry a lint marker instead.

    Args:
        namespace: Package namespace, e.g. ``"com.example.Bar"``
        function_name: Method name as declared, e.g. ``"close_it"``

    Returns:
        Symbol name, e.g. ``"Java_com_example_Bar_close_1it"``
    """
    return (
        f"{JAVA_SYMBOL_PREFIX}{escape_namespace(namespace)}"
        f"{SYMBOL_SEPARATOR}{escape_identifier(function_name)}"
    )


def mangle_checked(namespace: str, function_name: str) -> str:
    """Like ``mangle`` but raise ``InvalidNamespaceError`` for a bad namespace."""
    if not validate_namespace(namespace):
        raise InvalidNamespaceError(namespace, namespace_problems(namespace))
    return mangle(namespace, function_name)


def strip_suffix_quotes(suffix: str) -> str:
    """Remove enclosing double quotes from a hook suffix."""
    return suffix.strip('"')


def mangle_hook(kind: HookKind, suffix: Optional[str] = None) -> str:
    """
    Create the symbol for a lifecycle hook.

    Statically linked libraries export ``JNI_OnLoad_<libname>`` so that
    several of them can coexist in one executable.

    Args:
        kind: Which hook
        suffix: Optional library name, quoted or not

    Returns:
        ``JNI_OnLoad``, ``JNI_OnUnload`` or the suffixed form
    """
    if suffix is None:
        return kind.symbol
    return f"{kind.symbol}{SYMBOL_SEPARATOR}{strip_suffix_quotes(suffix)}"


def mangle_export(export: ExportKind, function_name: str) -> str:
    """Create the exported symbol for ``function_name`` under ``export``."""
    if isinstance(export, Namespaced):
        return mangle(export.namespace, function_name)
    if isinstance(export, Hook):
        return mangle_hook(export.kind, export.suffix)
    raise TypeError(f"Unsupported export kind: {type(export).__name__}")
