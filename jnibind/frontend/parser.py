"""
Function item parser.

Reads one Rust item into a ``Declaration``. Only the signature shape the
transformer needs is recognised:

    [attrs] [vis] [const] [async] [unsafe] [extern ["abi"]] fn name[<..>](..) [-> T] [where ..] { .. }

Parameters, return clause and body are kept as verbatim source slices.
Anything else that tokenizes cleanly comes back as an ``Item`` so the
transformer can reject it.
"""

from __future__ import annotations

from typing import Optional

from ..codegen.declaration import AttributeArgs, Declaration, Item, ParsedItem, Visibility
from ..utils.constants import (
    EXTERN_KEYWORD,
    FUNCTION_KEYWORD,
    FUNCTION_QUALIFIERS,
    OTHER_ITEM_KEYWORDS,
    VISIBILITY_KEYWORD,
)
from ..utils.diagnostics import Span
from ..utils.lexer import Token, TokenKind, match_delimiters, string_literal_value, tokenize
from ..utils.logging import get_logger

logger = get_logger(__name__)


class ItemParser:
    """
    Parses a single item from ``source[start:end]``.

    Spans are computed against the whole ``source``, so an item cut out
    of a larger file reports file-relative lines and columns.
    """

    def __init__(self, source: str, source_name: str = "<input>",
                 start: int = 0, end: Optional[int] = None):
        self.source = source
        self.source_name = source_name
        self.start = start
        self.end = len(source) if end is None else end
        self.tokens = tokenize(source, source_name, start, self.end)
        self.pairs = match_delimiters(self.tokens, source, source_name)
        self.index = 0

    # -- helpers -----------------------------------------------------------

    def _span(self, start: int, end: int) -> Span:
        return Span.from_offsets(self.source, start, end, self.source_name)

    def _token_span(self, first: Token, last: Optional[Token] = None) -> Span:
        return self._span(first.start, (last or first).end)

    def _peek(self, offset: int = 0) -> Optional[Token]:
        index = self.index + offset
        return self.tokens[index] if index < len(self.tokens) else None

    def _whole_span(self) -> Span:
        if not self.tokens:
            return self._span(self.start, self.end)
        return self._token_span(self.tokens[0], self.tokens[-1])

    def _other(self, kind: Optional[str] = None) -> Item:
        if kind is None:
            token = self._peek()
            kind = token.text if token is not None else ""
        text = self.source[self.start:self.end].strip()
        logger.debug(f"Parsed non-function item '{kind}'")
        return Item(kind=kind, text=text, span=self._whole_span())

    # -- grammar -----------------------------------------------------------

    def _attributes(self) -> tuple[str, ...]:
        attributes = []
        while True:
            token = self._peek()
            if token is None:
                break
            if token.kind is TokenKind.DOC_COMMENT:
                attributes.append(token.text)
                self.index += 1
            elif token.is_punct("#") and self._peek(1) is not None and self._peek(1).is_punct("["):
                close = self.pairs[self.index + 1]
                attributes.append(self.source[token.start:self.tokens[close].end])
                self.index = close + 1
            else:
                break
        return tuple(attributes)

    def _visibility(self) -> tuple[Visibility, str, Optional[Span]]:
        token = self._peek()
        if token is None or not token.is_ident(VISIBILITY_KEYWORD):
            return Visibility.PRIVATE, "", None

        self.index += 1
        nxt = self._peek()
        if nxt is not None and nxt.is_punct("("):
            close = self.pairs[self.index]
            last = self.tokens[close]
            self.index = close + 1
            return (
                Visibility.RESTRICTED,
                self.source[token.start:last.end],
                self._token_span(token, last),
            )
        return Visibility.PUBLIC, token.text, self._token_span(token)

    def _generics(self) -> str:
        token = self._peek()
        if token is None or not token.is_punct("<"):
            return ""

        first = token
        depth = 0
        while self.index < len(self.tokens):
            token = self.tokens[self.index]
            if token.is_punct("<"):
                depth += 1
            elif token.is_punct(">"):
                depth -= 1
                if depth == 0:
                    self.index += 1
                    return self.source[first.start:token.end]
            elif self.index in self.pairs:
                self.index = self.pairs[self.index]
            self.index += 1
        return ""

    def parse(self) -> ParsedItem:
        attributes = self._attributes()

        head = self._peek()
        if head is None:
            return self._other("")

        visibility, visibility_text, visibility_span = self._visibility()

        qualifiers = []
        while self._peek() is not None and self._peek().kind is TokenKind.IDENT \
                and self._peek().text in FUNCTION_QUALIFIERS:
            qualifiers.append(self._peek().text)
            self.index += 1

        abi = None
        abi_span = None
        token = self._peek()
        if token is not None and token.is_ident(EXTERN_KEYWORD):
            self.index += 1
            literal = self._peek()
            abi = ""
            abi_span = self._token_span(token)
            if literal is not None and literal.kind is TokenKind.STRING:
                value = string_literal_value(literal.text)
                if value is None:
                    return self._other(EXTERN_KEYWORD)
                abi = value
                abi_span = self._token_span(token, literal)
                self.index += 1

        keyword = self._peek()
        if keyword is None or not keyword.is_ident(FUNCTION_KEYWORD):
            if keyword is not None and keyword.is_ident() and keyword.text in OTHER_ITEM_KEYWORDS:
                return self._other(keyword.text)
            if qualifiers:
                return self._other(qualifiers[0])
            if abi is not None:
                return self._other(EXTERN_KEYWORD)
            return self._other()
        self.index += 1

        name = self._peek()
        if name is None or name.kind is not TokenKind.IDENT:
            return self._other(FUNCTION_KEYWORD)
        self.index += 1

        generics = self._generics()

        open_paren = self._peek()
        if open_paren is None or not open_paren.is_punct("("):
            return self._other(FUNCTION_KEYWORD)
        close_index = self.pairs[self.index]
        close_paren = self.tokens[close_index]
        params = self.source[open_paren.end:close_paren.start].strip()
        self.index = close_index + 1

        # Return clause and where clause run up to the body.
        output_start = close_paren.end
        while self.index < len(self.tokens):
            token = self.tokens[self.index]
            if token.is_punct("{") or token.is_punct(";"):
                break
            if self.index in self.pairs:
                self.index = self.pairs[self.index]
            self.index += 1

        brace = self._peek()
        if brace is None or not brace.is_punct("{"):
            # `fn f();` has no body and cannot be exported
            return self._other(FUNCTION_KEYWORD)
        output = self.source[output_start:brace.start].strip()

        body_end_index = self.pairs[self.index]
        if body_end_index != len(self.tokens) - 1:
            return self._other(FUNCTION_KEYWORD)
        body = self.source[brace.start:self.tokens[body_end_index].end]

        return Declaration(
            ident=name.text,
            params=params,
            body=body,
            visibility=visibility,
            visibility_text=visibility_text,
            abi=abi,
            qualifiers=tuple(qualifiers),
            generics=generics,
            output=output,
            attributes=attributes,
            span=self._whole_span(),
            ident_span=self._token_span(name),
            head_span=self._token_span(head),
            visibility_span=visibility_span,
            abi_span=abi_span,
        )


def parse_item(source: str, source_name: str = "<input>",
               start: int = 0, end: Optional[int] = None) -> ParsedItem:
    """
    Parse exactly one item.

    Args:
        source: Source text
        source_name: Name used in spans (usually a file path)
        start: Offset where the item begins
        end: Offset where the item ends (defaults to the end of ``source``)

    Returns:
        A ``Declaration`` for a function item, otherwise an ``Item``

    Raises:
        ParseError: If the text cannot be tokenized
    """
    return ItemParser(source, source_name, start, end).parse()


def parse_attribute_args(text: str, span: Optional[Span] = None) -> AttributeArgs:
    """Wrap attribute argument text (the part between the parentheses)."""
    if span is None:
        span = Span.from_offsets(text, 0, len(text))
    return AttributeArgs(text=text.strip(), span=span)
