"""
Declaration model.

Immutable values describing the function item being exported, the raw
attribute argument that requested the export, and the kind of export.
Only the parts of a function the transformer touches are modelled
structurally; everything else is carried as verbatim source text.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Union

from ..utils.constants import EXPORT_ATTRIBUTE_NAME, HookKind
from ..utils.diagnostics import Span


class Visibility(Enum):
    """Declared visibility of an item."""

    PUBLIC = "pub"
    RESTRICTED = "pub(...)"  # pub(crate), pub(super), pub(in path)
    PRIVATE = ""

    @property
    def is_public(self) -> bool:
        return self is Visibility.PUBLIC


@dataclass(frozen=True)
class Declaration:
    """A parsed function item.

    ``abi`` is the calling-convention string of an ``extern "abi"``
    annotation; an empty string stands for a bare ``extern`` and None for
    no annotation at all.
    """

    ident: str
    params: str = ""
    body: str = "{}"
    visibility: Visibility = Visibility.PUBLIC
    visibility_text: str = "pub"
    abi: Optional[str] = None
    qualifiers: tuple[str, ...] = ()
    generics: str = ""
    output: str = ""
    attributes: tuple[str, ...] = ()
    span: Span = field(default_factory=Span)
    ident_span: Optional[Span] = None
    # First signature token after the attributes.
    head_span: Optional[Span] = None
    visibility_span: Optional[Span] = None
    abi_span: Optional[Span] = None

    @property
    def is_unsafe(self) -> bool:
        return "unsafe" in self.qualifiers

    @property
    def has_abi(self) -> bool:
        return self.abi is not None

    def with_changes(self, **changes) -> "Declaration":
        """Return a copy with ``changes`` applied; the original is untouched."""
        return replace(self, **changes)


@dataclass(frozen=True)
class Item:
    """A parsed item that is not function-like (struct, enum, bodyless fn...)."""

    kind: str
    text: str
    span: Span = field(default_factory=Span)


ParsedItem = Union[Declaration, Item]


@dataclass(frozen=True)
class AttributeArgs:
    """Raw argument tokens of the attribute that requested an export."""

    text: str = ""
    span: Span = field(default_factory=Span)

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()


@dataclass(frozen=True)
class Namespaced:
    """An ordinary export under a package namespace."""

    namespace: str

    @property
    def attribute_name(self) -> str:
        return EXPORT_ATTRIBUTE_NAME

    @property
    def is_hook(self) -> bool:
        return False

    def describe(self) -> str:
        return f"export in '{self.namespace}'"


@dataclass(frozen=True)
class Hook:
    """A lifecycle hook export, optionally suffixed with a library name."""

    kind: HookKind
    suffix: Optional[str] = None

    @property
    def attribute_name(self) -> str:
        return self.kind.attribute_name

    @property
    def is_hook(self) -> bool:
        return True

    def describe(self) -> str:
        if self.suffix is None:
            return f"{self.kind.symbol} hook"
        return f"{self.kind.symbol} hook for library '{self.suffix}'"


ExportKind = Union[Namespaced, Hook]
