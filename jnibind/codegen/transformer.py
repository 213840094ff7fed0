"""
Declaration Transformer.

Turns a function declaration into a JNI export: checks the
preconditions in a fixed order, renames the function to its exported
symbol and attaches the calling convention and markers the JVM loader
needs. The input declaration is never modified; the result carries
either a new declaration or a diagnostic, never both.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional, Union

from ..utils.constants import (
    EXPORT_ATTRIBUTE_NAME,
    EXPORT_MARKERS,
    SYSTEM_CALLING_CONVENTION,
    HookKind,
)
from ..utils.diagnostics import Diagnostic, DiagnosticKind, DiagnosticReporter, Span
from ..utils.exceptions import TransformError
from ..utils.lexer import string_literal_value
from ..utils.logging import JnibindLogger, get_logger
from .declaration import (
    AttributeArgs,
    Declaration,
    ExportKind,
    Hook,
    Item,
    Namespaced,
    ParsedItem,
)
from .namespace import namespace_problems, validate_namespace
from .naming import mangle_export

logger = get_logger(__name__)


class TransformState(Enum):
    """Stages a declaration passes through."""

    PARSED = auto()
    VALIDATED = auto()
    RENAMED = auto()
    DECORATED = auto()
    EMITTED = auto()
    REJECTED = auto()


@dataclass(frozen=True)
class TransformResult:
    """Outcome of one transformation: a declaration or a diagnostic."""

    declaration: Optional[Declaration] = None
    diagnostic: Optional[Diagnostic] = None
    symbol: Optional[str] = None
    states: tuple[TransformState, ...] = ()

    def __post_init__(self):
        if (self.declaration is None) == (self.diagnostic is None):
            raise ValueError("TransformResult needs exactly one of declaration or diagnostic")

    @property
    def ok(self) -> bool:
        return self.declaration is not None

    @property
    def final_state(self) -> Optional[TransformState]:
        return self.states[-1] if self.states else None

    def unwrap(self) -> Declaration:
        """Return the declaration or raise ``TransformError``."""
        if self.declaration is None:
            raise TransformError(self.diagnostic)
        return self.declaration


_Resolution = Union[Namespaced, Hook, Diagnostic]


class DeclarationTransformer:
    """
    Applies JNI export rules to declarations.

    Checks run in this order and the first failure wins:

    1. the item is a function;
    2. (namespaced exports) the attribute holds one valid namespace literal;
    3. no calling convention is declared;
    4. the function is ``pub``.

    The transformer keeps no per-call state; one instance can serve any
    number of declarations.
    """

    def __init__(self, reporter: Optional[DiagnosticReporter] = None):
        """
        Initialize the transformer.

        Args:
            reporter: Diagnostic reporter; a default one is created if None
        """
        self.reporter = reporter or DiagnosticReporter()
        self._log = JnibindLogger(__name__)

    def transform_export(self, item: ParsedItem, args: AttributeArgs) -> TransformResult:
        """
        Export ``item`` under the namespace given as attribute argument.

        Args:
            item: Parsed item
            args: Attribute argument, expected to be one string literal

        Returns:
            Transformation result
        """
        return self._transform(
            item,
            EXPORT_ATTRIBUTE_NAME,
            hook=False,
            resolve=lambda: self._resolve_namespace(args),
        )

    def transform_hook(
        self, item: ParsedItem, kind: HookKind, args: Optional[AttributeArgs] = None
    ) -> TransformResult:
        """
        Export ``item`` as a lifecycle hook.

        Args:
            item: Parsed item
            kind: Hook to export
            args: Optional library name argument (quoted or bare)

        Returns:
            Transformation result
        """
        suffix = None if args is None or args.is_empty else args.text.strip()
        return self._transform(
            item,
            kind.attribute_name,
            hook=True,
            resolve=lambda: Hook(kind, suffix),
        )

    def transform(self, item: ParsedItem, export: ExportKind) -> TransformResult:
        """
        Export ``item`` using an already-built export kind.

        A ``Namespaced`` export is still validated; its diagnostic points
        at the whole item because there is no attribute argument to blame.
        """

        def resolve() -> _Resolution:
            if isinstance(export, Namespaced) and not validate_namespace(export.namespace):
                return self.reporter.report(
                    DiagnosticKind.INVALID_NAMESPACE, item.span, export.attribute_name
                )
            return export

        return self._transform(item, export.attribute_name, export.is_hook, resolve)

    def _resolve_namespace(self, args: AttributeArgs) -> _Resolution:
        namespace = None if args.is_empty else string_literal_value(args.text)
        if namespace is None:
            return self.reporter.report(
                DiagnosticKind.MISSING_NAMESPACE_ARGUMENT, args.span, EXPORT_ATTRIBUTE_NAME
            )

        if not validate_namespace(namespace):
            logger.debug(f"Namespace '{namespace}' rejected: {'; '.join(namespace_problems(namespace))}")
            return self.reporter.report(
                DiagnosticKind.INVALID_NAMESPACE, args.span, EXPORT_ATTRIBUTE_NAME
            )

        return Namespaced(namespace)

    def _reject(
        self,
        item: ParsedItem,
        diagnostic: Diagnostic,
        states: list[TransformState],
    ) -> TransformResult:
        states.append(TransformState.REJECTED)
        name = item.ident if isinstance(item, Declaration) else item.kind
        self._log.log_rejection(name, diagnostic.kind.name, diagnostic.message)
        return TransformResult(diagnostic=diagnostic, states=tuple(states))

    def _transform(
        self,
        item: ParsedItem,
        attribute: str,
        hook: bool,
        resolve: Callable[[], _Resolution],
    ) -> TransformResult:
        states = [TransformState.PARSED]

        if not isinstance(item, Declaration):
            diagnostic = self.reporter.report(
                DiagnosticKind.NOT_A_FUNCTION, item.span, attribute, hook
            )
            return self._reject(item, diagnostic, states)

        export = resolve()
        if isinstance(export, Diagnostic):
            return self._reject(item, export, states)
        self._log.log_transform_start(item.ident, export.describe())

        if item.has_abi:
            diagnostic = self.reporter.report(
                DiagnosticKind.CONVENTION_ALREADY_SPECIFIED,
                item.abi_span or item.span,
                attribute,
                hook,
            )
            return self._reject(item, diagnostic, states)

        if not item.visibility.is_public:
            diagnostic = self.reporter.report(
                DiagnosticKind.NOT_PUBLIC,
                _first_span(item.visibility_span, item.head_span, item.span),
                attribute,
                hook,
            )
            return self._reject(item, diagnostic, states)
        states.append(TransformState.VALIDATED)

        symbol = mangle_export(export, item.ident)
        renamed = item.with_changes(ident=symbol)
        states.append(TransformState.RENAMED)
        self._log.log_rename(item.ident, symbol)

        decorated = renamed.with_changes(
            abi=SYSTEM_CALLING_CONVENTION,
            attributes=item.attributes + EXPORT_MARKERS,
        )
        states.append(TransformState.DECORATED)

        states.append(TransformState.EMITTED)
        return TransformResult(declaration=decorated, symbol=symbol, states=tuple(states))


def _first_span(*spans: Optional[Span]) -> Span:
    for span in spans:
        if span is not None:
            return span
    return Span()


def transform_item(item: Union[Declaration, Item], export: ExportKind) -> TransformResult:
    """Convenience wrapper around ``DeclarationTransformer().transform``."""
    return DeclarationTransformer().transform(item, export)
