"""
Rust token scanner.

Just enough lexing to find item boundaries in Rust source: identifiers,
lifetimes, literals (strings, raw strings, byte strings, chars, numbers),
punctuation and doc comments. Ordinary comments and whitespace are
dropped. Tokens keep absolute character offsets so callers can slice
the original text verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from .diagnostics import Span
from .exceptions import ParseError


class TokenKind(Enum):
    IDENT = auto()
    LIFETIME = auto()
    STRING = auto()
    CHAR = auto()
    NUMBER = auto()
    PUNCT = auto()
    DOC_COMMENT = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    start: int
    end: int

    def is_punct(self, text: str) -> bool:
        return self.kind is TokenKind.PUNCT and self.text == text

    def is_ident(self, text: Optional[str] = None) -> bool:
        return self.kind is TokenKind.IDENT and (text is None or self.text == text)


_MULTI_CHAR_PUNCT = ("->", "=>", "::")
_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {v: k for k, v in _OPENERS.items()}

_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "\\": "\\",
    "0": "\0",
    "'": "'",
    '"': '"',
}


def _is_ident_start(c: str) -> bool:
    return c == "_" or c.isalpha()


def _is_ident_continue(c: str) -> bool:
    return c == "_" or c.isalnum()


class Lexer:
    """Scans ``source[start:end]`` into tokens."""

    def __init__(self, source: str, source_name: str = "<input>",
                 start: int = 0, end: Optional[int] = None):
        self.source = source
        self.source_name = source_name
        self.pos = start
        self.end = len(source) if end is None else end

    def _error(self, message: str, start: int) -> ParseError:
        span = Span.from_offsets(self.source, start, min(start + 1, len(self.source)), self.source_name)
        return ParseError(message, span)

    def _peek(self, offset: int = 0) -> str:
        index = self.pos + offset
        return self.source[index] if index < self.end else ""

    def tokenize(self) -> list[Token]:
        tokens = []
        while True:
            token = self._next_token()
            if token is None:
                return tokens
            tokens.append(token)

    def _next_token(self) -> Optional[Token]:
        while self.pos < self.end:
            c = self._peek()
            if c.isspace():
                self.pos += 1
            elif c == "/" and self._peek(1) == "/":
                doc = self._line_comment()
                if doc is not None:
                    return doc
            elif c == "/" and self._peek(1) == "*":
                doc = self._block_comment()
                if doc is not None:
                    return doc
            else:
                return self._scan(c)
        return None

    def _line_comment(self) -> Optional[Token]:
        start = self.pos
        newline = self.source.find("\n", start, self.end)
        self.pos = self.end if newline == -1 else newline
        text = self.source[start:self.pos]
        # `///` is an outer doc comment, `////` is not
        if text.startswith("///") and not text.startswith("////"):
            return Token(TokenKind.DOC_COMMENT, text, start, self.pos)
        return None

    def _block_comment(self) -> Optional[Token]:
        start = self.pos
        self.pos += 2
        depth = 1
        while depth:
            if self.pos >= self.end:
                raise self._error("unterminated block comment", start)
            if self._peek() == "/" and self._peek(1) == "*":
                depth += 1
                self.pos += 2
            elif self._peek() == "*" and self._peek(1) == "/":
                depth -= 1
                self.pos += 2
            else:
                self.pos += 1
        text = self.source[start:self.pos]
        if text.startswith("/**") and not text.startswith("/***") and text != "/**/":
            return Token(TokenKind.DOC_COMMENT, text, start, self.pos)
        return None

    def _scan(self, c: str) -> Token:
        start = self.pos

        # Literal prefixes: r"", r#""#, b"", br"", b'', c"", cr""
        if c in "rbc":
            token = self._prefixed_literal()
            if token is not None:
                return token

        if _is_ident_start(c):
            self.pos += 1
            while self.pos < self.end and _is_ident_continue(self._peek()):
                self.pos += 1
            return Token(TokenKind.IDENT, self.source[start:self.pos], start, self.pos)

        if c.isdigit():
            return self._number()

        if c == '"':
            self._quoted('"', start)
            return Token(TokenKind.STRING, self.source[start:self.pos], start, self.pos)

        if c == "'":
            return self._char_or_lifetime()

        for punct in _MULTI_CHAR_PUNCT:
            if self.source.startswith(punct, start) and start + len(punct) <= self.end:
                self.pos += len(punct)
                return Token(TokenKind.PUNCT, punct, start, self.pos)

        self.pos += 1
        return Token(TokenKind.PUNCT, c, start, self.pos)

    def _prefixed_literal(self) -> Optional[Token]:
        start = self.pos
        i = start
        if self.source.startswith(("br", "cr"), i):
            i += 2
            raw = True
        elif self.source.startswith(("b", "c"), i):
            i += 1
            raw = False
        else:
            i += 1  # r
            raw = True

        if raw:
            hashes = 0
            while i < self.end and self.source[i] == "#":
                hashes += 1
                i += 1
            if i >= self.end or self.source[i] != '"':
                # `r#ident` is a raw identifier
                if self.source[start] == "r" and hashes == 1 and i < self.end and _is_ident_start(self.source[i]):
                    self.pos = i
                    while self.pos < self.end and _is_ident_continue(self._peek()):
                        self.pos += 1
                    return Token(TokenKind.IDENT, self.source[start:self.pos], start, self.pos)
                return None
            terminator = '"' + "#" * hashes
            close = self.source.find(terminator, i + 1, self.end)
            if close == -1:
                raise self._error("unterminated raw string literal", start)
            self.pos = close + len(terminator)
            return Token(TokenKind.STRING, self.source[start:self.pos], start, self.pos)

        if i < self.end and self.source[i] == '"':
            self.pos = i
            self._quoted('"', start)
            return Token(TokenKind.STRING, self.source[start:self.pos], start, self.pos)
        if self.source[start] == "b" and i < self.end and self.source[i] == "'":
            self.pos = i
            self._quoted("'", start)
            return Token(TokenKind.CHAR, self.source[start:self.pos], start, self.pos)
        return None

    def _quoted(self, quote: str, start: int) -> None:
        """Advance past a quoted literal whose opening quote is at ``self.pos``."""
        self.pos += 1
        while True:
            if self.pos >= self.end:
                raise self._error("unterminated literal", start)
            c = self._peek()
            if c == "\\":
                self.pos += 2
            elif c == quote:
                self.pos += 1
                return
            else:
                self.pos += 1

    def _char_or_lifetime(self) -> Token:
        start = self.pos
        nxt = self._peek(1)
        if nxt == "\\" or (nxt and self._peek(2) == "'"):
            self._quoted("'", start)
            return Token(TokenKind.CHAR, self.source[start:self.pos], start, self.pos)
        if nxt and _is_ident_start(nxt):
            self.pos += 1
            while self.pos < self.end and _is_ident_continue(self._peek()):
                self.pos += 1
            return Token(TokenKind.LIFETIME, self.source[start:self.pos], start, self.pos)
        raise self._error("unterminated character literal", start)

    def _number(self) -> Token:
        start = self.pos
        while self.pos < self.end:
            c = self._peek()
            if _is_ident_continue(c):
                self.pos += 1
            elif c == "." and self._peek(1).isdigit():
                self.pos += 1
            else:
                break
        return Token(TokenKind.NUMBER, self.source[start:self.pos], start, self.pos)


def tokenize(source: str, source_name: str = "<input>",
             start: int = 0, end: Optional[int] = None) -> list[Token]:
    """Tokenize ``source[start:end]``; offsets are absolute in ``source``."""
    return Lexer(source, source_name, start, end).tokenize()


def match_delimiters(tokens: list[Token], source: str = "",
                     source_name: str = "<input>") -> dict[int, int]:
    """
    Pair up ``()``, ``[]`` and ``{}`` tokens.

    Returns:
        Mapping from the index of each opening token to the index of its
        closing token

    Raises:
        ParseError: If the delimiters are unbalanced
    """
    pairs = {}
    stack = []
    for index, token in enumerate(tokens):
        if token.kind is not TokenKind.PUNCT:
            continue
        if token.text in _OPENERS:
            stack.append(index)
        elif token.text in _CLOSERS:
            if not stack or tokens[stack[-1]].text != _CLOSERS[token.text]:
                span = Span.from_offsets(source, token.start, token.end, source_name) if source else None
                raise ParseError(f"unexpected closing delimiter '{token.text}'", span)
            pairs[stack.pop()] = index

    if stack:
        token = tokens[stack[-1]]
        span = Span.from_offsets(source, token.start, token.end, source_name) if source else None
        raise ParseError(f"unclosed delimiter '{token.text}'", span)
    return pairs


def _unescape(body: str) -> Optional[str]:
    out = []
    i = 0
    while i < len(body):
        c = body[i]
        if c != "\\":
            out.append(c)
            i += 1
            continue
        if i + 1 >= len(body):
            return None
        esc = body[i + 1]
        if esc in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[esc])
            i += 2
        elif esc == "x":
            digits = body[i + 2:i + 4]
            if len(digits) != 2:
                return None
            try:
                out.append(chr(int(digits, 16)))
            except ValueError:
                return None
            i += 4
        elif esc == "u" and body[i + 2:i + 3] == "{":
            close = body.find("}", i + 3)
            if close == -1:
                return None
            try:
                out.append(chr(int(body[i + 3:close].replace("_", ""), 16)))
            except ValueError:
                return None
            i = close + 1
        elif esc == "\n":
            # line continuation: skip the newline and leading whitespace
            i += 2
            while i < len(body) and body[i].isspace():
                i += 1
        else:
            return None
    return "".join(out)


def string_literal_value(text: str) -> Optional[str]:
    """
    Decode text consisting of exactly one Rust string literal.

    Byte and C strings are not accepted.

    Returns:
        The literal's value, or None if ``text`` is anything else
    """
    try:
        tokens = tokenize(text)
    except ParseError:
        return None
    if len(tokens) != 1 or tokens[0].kind is not TokenKind.STRING:
        return None

    literal = tokens[0].text
    if literal.startswith('"'):
        return _unescape(literal[1:-1])
    if literal.startswith("r"):
        hashes = len(literal) - len(literal[1:].lstrip("#")) - 1
        return literal[2 + hashes:len(literal) - 1 - hashes]
    return None
