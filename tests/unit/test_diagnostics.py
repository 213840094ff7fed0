"""
Unit tests for diagnostic reporting.

Tests message templates for namespaced exports and lifecycle hooks,
span arithmetic and terminal rendering.
"""

import pytest

from jnibind.utils.diagnostics import (
    Diagnostic,
    DiagnosticKind,
    DiagnosticReporter,
    Span,
    format_diagnostic,
)


class TestSpan:
    """Test source locations."""

    def test_from_offsets_first_line(self):
        span = Span.from_offsets("pub fn f() {}", 4, 6)
        assert (span.line, span.column, span.start, span.end) == (1, 5, 4, 6)

    def test_from_offsets_later_line(self):
        source = "mod m {\n    pub fn f() {}\n}"
        start = source.index("fn")
        span = Span.from_offsets(source, start, start + 2, "lib.rs")

        assert span.line == 2
        assert span.column == 9
        assert span.source_name == "lib.rs"

    def test_str(self):
        assert str(Span(line=3, column=7, source_name="lib.rs")) == "lib.rs:3:7"


class TestDiagnosticReporter:
    """Test message selection."""

    @pytest.mark.parametrize(
        "kind,message",
        [
            (DiagnosticKind.NOT_A_FUNCTION, "The `jni` attribute can only be applied to `fn` items"),
            (
                DiagnosticKind.MISSING_NAMESPACE_ARGUMENT,
                "The `jni` attribute must have a single string literal supplied to specify the namespace",
            ),
            (DiagnosticKind.INVALID_NAMESPACE, "Invalid package namespace supplied to `jni` attribute"),
            (
                DiagnosticKind.CONVENTION_ALREADY_SPECIFIED,
                "Don't specify an ABI for `jni` attributed functions - the correct ABI will be added automatically",
            ),
            (DiagnosticKind.NOT_PUBLIC, "`jni` attributed functions must have public visibility (`pub`)"),
        ],
    )
    def test_export_messages(self, reporter, kind, message):
        assert reporter.message_for(kind, "jni") == message

    @pytest.mark.parametrize("attribute", ["on_load", "on_unload"])
    def test_hook_not_a_function_names_the_attribute(self, reporter, attribute):
        message = reporter.message_for(DiagnosticKind.NOT_A_FUNCTION, attribute, hook=True)
        assert message == f"The `{attribute}` attribute can only be applied to `fn` items"

    def test_hook_messages(self, reporter):
        assert reporter.message_for(DiagnosticKind.NOT_PUBLIC, "on_load", hook=True) == (
            "JNI hook functions must have public visibility (`pub`)"
        )
        assert reporter.message_for(DiagnosticKind.CONVENTION_ALREADY_SPECIFIED, "on_unload", hook=True) == (
            "Don't specify an ABI for JNI hook functions - the correct ABI will be added automatically"
        )

    @pytest.mark.parametrize(
        "kind", [DiagnosticKind.MISSING_NAMESPACE_ARGUMENT, DiagnosticKind.INVALID_NAMESPACE]
    )
    def test_namespace_kinds_do_not_apply_to_hooks(self, reporter, kind):
        with pytest.raises(ValueError):
            reporter.message_for(kind, "on_load", hook=True)

    def test_report(self, reporter):
        span = Span(line=2, column=5, start=12, end=14)
        diagnostic = reporter.report(DiagnosticKind.NOT_PUBLIC, span, "jni")

        assert diagnostic.kind is DiagnosticKind.NOT_PUBLIC
        assert diagnostic.span == span
        assert diagnostic.message == reporter.message_for(DiagnosticKind.NOT_PUBLIC, "jni")

    def test_report_is_pure(self, reporter):
        span = Span()
        first = reporter.report(DiagnosticKind.INVALID_NAMESPACE, span, "jni")
        second = reporter.report(DiagnosticKind.INVALID_NAMESPACE, span, "jni")
        assert first == second


class TestFormatDiagnostic:
    """Test terminal rendering."""

    def test_header_only(self):
        diagnostic = Diagnostic(DiagnosticKind.NOT_PUBLIC, Span(line=1, column=1), "must be pub")
        assert format_diagnostic(diagnostic) == "<input>:1:1: error: must be pub"

    def test_with_source(self):
        source = "fn close_it() {}"
        diagnostic = Diagnostic(
            DiagnosticKind.NOT_PUBLIC, Span.from_offsets(source, 0, 2), "must be pub"
        )

        assert format_diagnostic(diagnostic, source) == "\n".join(
            [
                "<input>:1:1: error: must be pub",
                "  |",
                "1 | fn close_it() {}",
                "  | ^^",
            ]
        )

    def test_caret_is_clipped_to_the_line(self):
        source = "struct S {\n    x: u8,\n}"
        diagnostic = Diagnostic(
            DiagnosticKind.NOT_A_FUNCTION, Span.from_offsets(source, 0, len(source)), "not a fn"
        )

        rendered = format_diagnostic(diagnostic, source).splitlines()
        assert rendered[-1] == "  | " + "^" * len("struct S {")

    def test_line_out_of_range(self):
        diagnostic = Diagnostic(DiagnosticKind.NOT_PUBLIC, Span(line=9, column=1), "must be pub")
        assert format_diagnostic(diagnostic, "fn f() {}") == "<input>:9:1: error: must be pub"
