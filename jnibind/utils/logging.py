"""
Logging configuration and utilities.

This module provides centralized logging configuration for the
jnibind package with appropriate formatting and levels.
"""

import logging
import os
from typing import Optional


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    Configure logging for the jnibind package.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output
    """
    # Determine log level
    if level is None:
        level = os.environ.get("JNIBIND_LOG_LEVEL", "INFO")

    log_level = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logger = logging.getLogger("jnibind")
    logger.setLevel(log_level)

    # Remove existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Prevent propagation to root logger
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the given module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(f"jnibind.{name}")


class JnibindLogger:
    """
    Centralized logging for the transformation pipeline.

    Wraps a module logger with helpers for the events the transformer
    and the source expander report.
    """

    def __init__(self, name: str):
        """
        Initialize logger for specific component.

        Args:
            name: Component name for logging context
        """
        self.logger = get_logger(name)

    def log_transform_start(self, item_name: str, export: str) -> None:
        """
        Log beginning of a declaration transformation.

        Args:
            item_name: Identifier (or kind) of the item being transformed
            export: Human-readable description of the requested export
        """
        self.logger.debug(f"Transforming '{item_name}' as {export}")

    def log_rename(self, old_name: str, new_name: str) -> None:
        """
        Log the identifier rewrite applied to a declaration.

        Args:
            old_name: Identifier as declared
            new_name: Exported symbol name
        """
        self.logger.debug(f"Renamed '{old_name}' -> '{new_name}'")

    def log_rejection(self, item_name: str, kind: str, message: str) -> None:
        """
        Log a rejected declaration.

        Args:
            item_name: Identifier (or kind) of the rejected item
            kind: Diagnostic kind name
            message: Diagnostic message
        """
        self.logger.info(f"Rejected '{item_name}' ({kind}): {message}")

    def log_expansion_summary(self, source_name: str, exported: int, failed: int) -> None:
        """
        Log the outcome of expanding a whole source file.

        Args:
            source_name: Name of the expanded source
            exported: Number of items successfully exported
            failed: Number of items that produced diagnostics
        """
        if failed:
            self.logger.warning(
                f"Expanded {source_name}: {exported} exported, {failed} failed"
            )
        else:
            self.logger.info(f"Expanded {source_name}: {exported} exported")


# Initialize logging on module import
setup_logging()
