"""
Source file expansion.

Finds items annotated with ``#[jni("...")]``, ``#[on_load]`` or
``#[on_unload]`` (bare or path-qualified, e.g. ``#[java_native::jni(..)]``)
in a Rust source file, transforms each one and splices the result back
in place. Text outside the annotated items is left untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..codegen.declaration import AttributeArgs
from ..codegen.emitter import render_result
from ..codegen.transformer import DeclarationTransformer, TransformResult
from ..utils.constants import EXPORT_ATTRIBUTE_NAME, HOOK_ATTRIBUTE_NAMES, HookKind
from ..utils.diagnostics import Diagnostic, Span
from ..utils.lexer import Token, TokenKind, match_delimiters, tokenize
from ..utils.logging import JnibindLogger
from .parser import parse_item

_HOOKS_BY_ATTRIBUTE = {name: kind for kind, name in HOOK_ATTRIBUTE_NAMES.items()}


@dataclass(frozen=True)
class ExportSite:
    """An annotated item found in a source file."""

    attribute: str
    hook: Optional[HookKind]
    attr_start: int
    attr_end: int
    item_start: int
    item_end: int
    args: AttributeArgs


@dataclass
class ExpansionResult:
    """Outcome of expanding one source file."""

    source: str
    results: list[TransformResult] = field(default_factory=list)

    @property
    def symbols(self) -> list[str]:
        return [r.symbol for r in self.results if r.ok]

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return [r.diagnostic for r in self.results if not r.ok]

    @property
    def ok(self) -> bool:
        return not self.diagnostics


def _mask(source: str, start: int, end: int) -> str:
    """Blank out ``source[start:end]`` while keeping line structure."""
    blank = "".join("\n" if c == "\n" else " " for c in source[start:end])
    return source[:start] + blank + source[end:]


def _line_indent(source: str, offset: int) -> str:
    line_start = source.rfind("\n", 0, offset) + 1
    prefix = source[line_start:offset]
    return prefix if not prefix.strip() else ""


class SourceExpander:
    """
    Expands every export attribute in a source file.

    Args:
        transformer: Transformer to apply; a default one is created if None
    """

    def __init__(self, transformer: Optional[DeclarationTransformer] = None):
        self.transformer = transformer or DeclarationTransformer()
        self._log = JnibindLogger(__name__)

    def find_sites(self, source: str, source_name: str = "<input>") -> list[ExportSite]:
        """
        Locate annotated items.

        Raises:
            ParseError: If the file cannot be tokenized
        """
        tokens = tokenize(source, source_name)
        pairs = match_delimiters(tokens, source, source_name)

        sites = []
        index = 0
        while index < len(tokens):
            site = self._site_at(source, source_name, tokens, pairs, index)
            if site is None:
                index += 1
                continue
            sites.append(site)
            # Skip the item so annotations inside its body are not expanded twice.
            while index < len(tokens) and tokens[index].start < site.item_end:
                index += 1
        return sites

    def _site_at(
        self, source: str, source_name: str, tokens: list[Token], pairs: dict[int, int], index: int
    ) -> Optional[ExportSite]:
        token = tokens[index]
        if not token.is_punct("#") or index + 1 >= len(tokens) or not tokens[index + 1].is_punct("["):
            return None

        close = pairs[index + 1]
        path = []
        cursor = index + 2
        while cursor < close and (tokens[cursor].is_ident() or tokens[cursor].is_punct("::")):
            if tokens[cursor].is_ident():
                path.append(tokens[cursor].text)
            cursor += 1
        if not path:
            return None

        name = path[-1]
        if name != EXPORT_ATTRIBUTE_NAME and name not in _HOOKS_BY_ATTRIBUTE:
            return None

        if cursor == close:
            attr_end = tokens[close].end
            args = AttributeArgs(
                text="", span=Span.from_offsets(source, token.start, attr_end, source_name)
            )
        elif tokens[cursor].is_punct("(") and pairs.get(cursor) == close - 1:
            open_paren = tokens[cursor]
            close_paren = tokens[close - 1]
            text = source[open_paren.end:close_paren.start]
            if text.strip():
                inner = tokens[cursor + 1:close - 1]
                span = Span.from_offsets(source, inner[0].start, inner[-1].end, source_name)
            else:
                span = Span.from_offsets(source, token.start, tokens[close].end, source_name)
            args = AttributeArgs(text=text.strip(), span=span)
        else:
            return None

        item_start = self._item_start(tokens, pairs, index)
        item_end = self._item_end(tokens, pairs, close + 1)
        if item_end is None:
            item_end = tokens[-1].end

        return ExportSite(
            attribute=name,
            hook=_HOOKS_BY_ATTRIBUTE.get(name),
            attr_start=token.start,
            attr_end=tokens[close].end,
            item_start=item_start,
            item_end=item_end,
            args=args,
        )

    def _item_start(self, tokens: list[Token], pairs: dict[int, int], index: int) -> int:
        """Walk back over attributes and doc comments preceding ``index``."""
        openers = {close: open_ for open_, close in pairs.items()}
        start = index
        while start > 0:
            prev = tokens[start - 1]
            if prev.kind is TokenKind.DOC_COMMENT:
                start -= 1
            elif prev.is_punct("]") and (start - 1) in openers:
                open_index = openers[start - 1]
                if open_index > 0 and tokens[open_index - 1].is_punct("#"):
                    start = open_index - 1
                else:
                    break
            else:
                break
        return tokens[start].start

    def _item_end(self, tokens: list[Token], pairs: dict[int, int], index: int) -> Optional[int]:
        """End offset of the item whose tokens begin at ``index``."""
        while index < len(tokens):
            token = tokens[index]
            if token.is_punct(";"):
                return token.end
            if token.is_punct("{"):
                return tokens[pairs[index]].end
            if token.is_punct("#") and index + 1 < len(tokens) and tokens[index + 1].is_punct("["):
                index = pairs[index + 1] + 1
                continue
            if index in pairs:
                index = pairs[index]
            index += 1
        return None

    def transform_site(self, source: str, site: ExportSite, source_name: str = "<input>") -> TransformResult:
        """Parse and transform the item at ``site``."""
        masked = _mask(source, site.attr_start, site.attr_end)
        item = parse_item(masked, source_name, site.item_start, site.item_end)
        if site.hook is None:
            return self.transformer.transform_export(item, site.args)
        return self.transformer.transform_hook(item, site.hook, site.args)

    def expand(self, source: str, source_name: str = "<input>") -> ExpansionResult:
        """
        Expand all annotated items in ``source``.

        Rejected items are replaced by a ``compile_error!`` invocation.

        Raises:
            ParseError: If the file cannot be tokenized
        """
        sites = self.find_sites(source, source_name)

        pieces = []
        results = []
        cursor = 0
        for site in sites:
            result = self.transform_site(source, site, source_name)
            results.append(result)

            indent = _line_indent(source, site.item_start)
            pieces.append(source[cursor:site.item_start])
            pieces.append(render_result(result, indent)[len(indent):])
            cursor = site.item_end
        pieces.append(source[cursor:])

        expansion = ExpansionResult(source="".join(pieces), results=results)
        self._log.log_expansion_summary(source_name, len(expansion.symbols), len(expansion.diagnostics))
        return expansion


def expand_source(source: str, source_name: str = "<input>") -> ExpansionResult:
    """Expand ``source`` with a default transformer."""
    return SourceExpander().expand(source, source_name)
