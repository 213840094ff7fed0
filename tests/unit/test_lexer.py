"""
Unit tests for the Rust token scanner.
"""

import pytest

from jnibind.utils.exceptions import ParseError
from jnibind.utils.lexer import TokenKind, match_delimiters, string_literal_value, tokenize


def kinds(source):
    return [(t.kind, t.text) for t in tokenize(source)]


class TestTokenize:
    """Test token recognition."""

    def test_identifiers_and_punctuation(self):
        assert kinds("pub fn f() -> u8") == [
            (TokenKind.IDENT, "pub"),
            (TokenKind.IDENT, "fn"),
            (TokenKind.IDENT, "f"),
            (TokenKind.PUNCT, "("),
            (TokenKind.PUNCT, ")"),
            (TokenKind.PUNCT, "->"),
            (TokenKind.IDENT, "u8"),
        ]

    def test_offsets_are_absolute(self):
        tokens = tokenize("  fn  f")
        assert [(t.start, t.end) for t in tokens] == [(2, 4), (6, 7)]

    def test_window(self):
        source = "xx fn f yy"
        tokens = tokenize(source, start=3, end=7)
        assert [t.text for t in tokens] == ["fn", "f"]
        assert tokens[0].start == 3

    def test_comments_are_dropped(self):
        assert [t.text for t in tokenize("a // line\nb /* block /* nested */ */ c")] == ["a", "b", "c"]

    def test_doc_comments_are_kept(self):
        tokens = tokenize("/// outer doc\n//// not doc\n/** block doc */ fn")
        assert [(t.kind, t.text) for t in tokens] == [
            (TokenKind.DOC_COMMENT, "/// outer doc"),
            (TokenKind.DOC_COMMENT, "/** block doc */"),
            (TokenKind.IDENT, "fn"),
        ]

    def test_lifetimes_and_chars(self):
        tokens = tokenize("fn f<'a>(x: &'a str) -> char { 'x' }")
        lifetimes = [t.text for t in tokens if t.kind is TokenKind.LIFETIME]
        chars = [t.text for t in tokens if t.kind is TokenKind.CHAR]
        assert lifetimes == ["'a", "'a"]
        assert chars == ["'x'"]

    def test_escaped_char(self):
        tokens = tokenize(r"'\n' '\''")
        assert [t.kind for t in tokens] == [TokenKind.CHAR, TokenKind.CHAR]

    def test_strings(self):
        tokens = tokenize(r'"a \"q\" }" r#"raw "# b"bytes" br"raw bytes"')
        assert [t.kind for t in tokens] == [TokenKind.STRING] * 4
        assert tokens[0].text == r'"a \"q\" }"'
        assert tokens[1].text == 'r#"raw "#'

    def test_raw_identifier(self):
        assert kinds("r#type") == [(TokenKind.IDENT, "r#type")]

    def test_keywords_starting_with_literal_prefixes(self):
        assert [t.text for t in tokenize("return break crate bool r b")] == [
            "return", "break", "crate", "bool", "r", "b",
        ]

    def test_numbers(self):
        assert [t.text for t in tokenize("1u32 0x1F 1.5 x.0")] == ["1u32", "0x1F", "1.5", "x", ".", "0"]

    def test_unterminated_string(self):
        with pytest.raises(ParseError):
            tokenize('fn f() { "abc }')

    def test_unterminated_raw_string(self):
        with pytest.raises(ParseError):
            tokenize('r#"abc"')

    def test_unterminated_block_comment(self):
        with pytest.raises(ParseError) as exc_info:
            tokenize("fn f() /* open")
        assert exc_info.value.span.column == 8


class TestMatchDelimiters:
    """Test delimiter pairing."""

    def test_pairs(self):
        tokens = tokenize("f(a[1]) { }")
        pairs = match_delimiters(tokens)
        assert pairs == {1: 6, 3: 5, 7: 8}

    def test_mismatched(self):
        with pytest.raises(ParseError):
            match_delimiters(tokenize("f(a]"))

    def test_unclosed(self):
        source = "pub fn f() {"
        with pytest.raises(ParseError) as exc_info:
            match_delimiters(tokenize(source), source)
        assert "unclosed" in str(exc_info.value)
        assert exc_info.value.span.column == 12


class TestStringLiteralValue:
    """Test decoding of attribute string literals."""

    def test_plain(self):
        assert string_literal_value('"com.example.Foo"') == "com.example.Foo"

    def test_surrounding_whitespace(self):
        assert string_literal_value('  "com.example.Foo" ') == "com.example.Foo"

    def test_raw(self):
        assert string_literal_value('r#"a.b"#') == "a.b"
        assert string_literal_value('r"a.b"') == "a.b"

    def test_escapes(self):
        assert string_literal_value(r'"a\nb\t\\\"\x41\u{42}"') == 'a\nb\t\\"AB'

    @pytest.mark.parametrize(
        "text",
        ["", "com.example.Foo", '"a" "b"', 'b"bytes"', '"a",', "42", '"unterminated', r'"\q"'],
    )
    def test_not_a_single_string_literal(self, text):
        assert string_literal_value(text) is None
