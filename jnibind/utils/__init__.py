"""
Utils package for jnibind.

This module provides the shared building blocks used by the code
generator and the front end: constants, diagnostics, exceptions,
configuration, logging and the Rust token scanner.
"""

# Core utilities
from .exceptions import JnibindError, ParseError, TransformError, InvalidNamespaceError
from .constants import (
    HookKind,
    FORBIDDEN_NAMESPACE_CHARS,
    SYSTEM_CALLING_CONVENTION,
    LINKAGE_MARKER,
    CASING_LINT_MARKER,
)
from .diagnostics import (
    Span,
    Diagnostic,
    DiagnosticKind,
    DiagnosticReporter,
    format_diagnostic,
)

# Configuration and system utilities
from .config import (
    JnibindConfig,
    LoggingConfig,
    DiagnosticsConfig,
    OutputConfig,
    get_config,
    set_config,
    load_config,
)

from .logging import get_logger, setup_logging

__all__ = [
    # Core exceptions
    "JnibindError",
    "ParseError",
    "TransformError",
    "InvalidNamespaceError",

    # Constants
    "HookKind",
    "FORBIDDEN_NAMESPACE_CHARS",
    "SYSTEM_CALLING_CONVENTION",
    "LINKAGE_MARKER",
    "CASING_LINT_MARKER",

    # Diagnostics
    "Span",
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticReporter",
    "format_diagnostic",

    # Configuration
    "JnibindConfig",
    "LoggingConfig",
    "DiagnosticsConfig",
    "OutputConfig",
    "get_config",
    "set_config",
    "load_config",

    # Logging
    "get_logger",
    "setup_logging",
]
