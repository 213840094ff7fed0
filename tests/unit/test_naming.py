"""
Unit tests for JNI symbol naming.

Tests the escaping rules for namespaces and method names, lifecycle hook
names and export-kind dispatch.
"""

import pytest

from jnibind.codegen.declaration import Hook, Namespaced
from jnibind.codegen.naming import (
    escape_identifier,
    escape_namespace,
    mangle,
    mangle_checked,
    mangle_export,
    mangle_hook,
)
from jnibind.utils.constants import HookKind
from jnibind.utils.exceptions import InvalidNamespaceError


class TestMangle:
    """Test namespaced symbol generation."""

    def test_simple_name(self):
        """Test a namespace and method without special characters."""
        assert mangle("com.example.Foo", "init") == "Java_com_example_Foo_init"

    def test_camel_case_name_is_kept(self):
        """Test that method names are not case-converted."""
        assert mangle("com.example.Bar", "closeIt") == "Java_com_example_Bar_closeIt"

    def test_underscore_in_function_name(self):
        """Test underscore escaping in the method name."""
        assert mangle("com.example.Bar", "close_it") == "Java_com_example_Bar_close_1it"

    def test_underscore_in_longer_name(self):
        """Test a real-world method name with an underscore."""
        assert (
            mangle("org.signal.client.internal.Native", "IdentityKeyPair_Deserialize")
            == "Java_org_signal_client_internal_Native_IdentityKeyPair_1Deserialize"
        )

    def test_dollar_in_namespace(self):
        """Test '$' escaping for nested or synthetic classes."""
        assert mangle("a.b.c.Test$", "show") == "Java_a_b_c_Test_00024_show"

    def test_underscore_escaped_before_separators(self):
        """Test that literal underscores and separators stay distinguishable."""
        assert mangle("net.under_score", "f") == "Java_net_under_1score_f"
        assert mangle("net.under.score", "f") == "Java_net_under_score_f"

    def test_dollar_escaped_after_underscores(self):
        """Test that the '_' in the '$' escape is not escaped again."""
        assert escape_namespace("a_b.C$D") == "a_1b_C_00024D"

    def test_function_name_only_escapes_underscores(self):
        """Test that the method name escaping only touches underscores."""
        assert escape_identifier("a_b_c") == "a_1b_1c"
        assert escape_identifier("plain") == "plain"

    @pytest.mark.parametrize(
        "namespace,function",
        [
            ("com.example.Foo", "init"),
            ("org.signal.client.internal.Native", "IdentityKeyPair_Deserialize"),
            ("net.under_score", "close_it"),
            ("single", "x"),
            ("a.b.c.Test$", "show"),
        ],
    )
    def test_symbol_shape(self, namespace, function):
        """Test that every symbol starts with Java_ and contains no dots."""
        symbol = mangle(namespace, function)
        assert symbol.startswith("Java_")
        assert "." not in symbol

    def test_mangle_is_pure(self):
        """Test that repeated calls give the same result."""
        first = mangle("com.example.Bar", "close_it")
        mangle("other.pkg", "other_fn")
        assert mangle("com.example.Bar", "close_it") == first

    def test_mangle_checked_accepts_valid_namespace(self):
        """Test strict mangling with a valid namespace."""
        assert mangle_checked("com.example.Foo", "init") == "Java_com_example_Foo_init"

    def test_mangle_checked_rejects_invalid_namespace(self):
        """Test strict mangling with an invalid namespace."""
        with pytest.raises(InvalidNamespaceError) as exc_info:
            mangle_checked("com.example.1Foo", "init")

        assert exc_info.value.namespace == "com.example.1Foo"
        assert any("starts with a digit" in p for p in exc_info.value.problems)


class TestMangleHook:
    """Test lifecycle hook symbol generation."""

    def test_on_load_without_suffix(self):
        assert mangle_hook(HookKind.ON_LOAD) == "JNI_OnLoad"

    def test_on_unload_without_suffix(self):
        assert mangle_hook(HookKind.ON_UNLOAD) == "JNI_OnUnload"

    def test_on_load_with_suffix(self):
        assert mangle_hook(HookKind.ON_LOAD, "example") == "JNI_OnLoad_example"

    def test_on_unload_with_suffix(self):
        assert mangle_hook(HookKind.ON_UNLOAD, "example") == "JNI_OnUnload_example"

    def test_quoted_and_bare_suffix_agree(self):
        """Test that enclosing quotes are stripped from the suffix."""
        assert mangle_hook(HookKind.ON_LOAD, '"example"') == mangle_hook(HookKind.ON_LOAD, "example")
        assert mangle_hook(HookKind.ON_UNLOAD, '"example"') == "JNI_OnUnload_example"

    def test_empty_quoted_suffix_still_appends_separator(self):
        """Test that a supplied but empty suffix keeps the separator."""
        assert mangle_hook(HookKind.ON_LOAD, '""') == "JNI_OnLoad_"


class TestMangleExport:
    """Test dispatch on export kinds."""

    def test_namespaced(self):
        assert mangle_export(Namespaced("com.example.Bar"), "close_it") == "Java_com_example_Bar_close_1it"

    def test_hook_ignores_function_name(self):
        assert mangle_export(Hook(HookKind.ON_LOAD), "whatever") == "JNI_OnLoad"
        assert mangle_export(Hook(HookKind.ON_UNLOAD, "lib"), "whatever") == "JNI_OnUnload_lib"

    def test_unknown_export_kind(self):
        with pytest.raises(TypeError):
            mangle_export("com.example.Foo", "init")
