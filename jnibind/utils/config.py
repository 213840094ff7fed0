"""
Configuration System for jnibind.

Settings come from a single JSON or YAML file, with a few environment
variable overrides. Every section has defaults, so running without a
configuration file is the normal case.
"""

import json
import os
from typing import Dict, Any, Optional
from pathlib import Path
from dataclasses import dataclass

import yaml

from .logging import get_logger

logger = get_logger(__name__)

OUTPUT_FORMATS = ("rust", "json")

_TRUE_STRINGS = ("true", "yes", "on", "1")
_FALSE_STRINGS = ("false", "no", "off", "0")


def _read_bool(data: Dict[str, Any], key: str, default: bool) -> bool:
    """
    Read a boolean setting, accepting the usual string spellings.

    Args:
        data: Section of the loaded configuration
        key: Setting name within the section
        default: Value used when the setting is absent or unreadable

    Returns:
        The setting as a bool
    """
    value = data.get(key, default)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    logger.warning(f"Invalid value {value!r} for '{key}', using {default}")
    return default


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    enable_file_logging: bool = False
    log_file: str = "jnibind.log"


@dataclass
class DiagnosticsConfig:
    """Diagnostic rendering configuration."""

    # Show the offending source line under each diagnostic.
    show_source: bool = True
    # Emit `compile_error!` in place of a rejected item instead of failing.
    emit_compile_error: bool = False


@dataclass
class OutputConfig:
    """Output configuration."""

    format: str = "rust"
    trailing_newline: bool = True


class JnibindConfig:
    """
    Unified configuration manager for jnibind.

    Lookup order for the configuration file: the explicit argument, the
    ``JNIBIND_CONFIG`` environment variable, then ``jnibind_config.yaml``
    or ``jnibind_config.json`` in the working directory.
    """

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration file. If None, uses default location.
        """
        self.config_file = self._get_config_file_path(config_file)
        self._config_data = self._load_config()

        self.logging = self._create_logging_config()
        self.diagnostics = self._create_diagnostics_config()
        self.output = self._create_output_config()

    def _get_config_file_path(self, config_file: Optional[str]) -> Path:
        """Get the configuration file path."""
        if config_file:
            return Path(config_file)

        env_file = os.getenv("JNIBIND_CONFIG")
        if env_file:
            return Path(env_file)

        yaml_config = Path.cwd() / "jnibind_config.yaml"
        json_config = Path.cwd() / "jnibind_config.json"

        if yaml_config.exists():
            return yaml_config
        else:
            return json_config

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from file (JSON or YAML)."""
        try:
            if self.config_file.exists():
                with open(self.config_file, "r") as f:
                    if self.config_file.suffix.lower() in [".yaml", ".yml"]:
                        config_data = yaml.safe_load(f)
                    else:
                        config_data = json.load(f)
                if not isinstance(config_data, dict):
                    logger.error(f"Configuration in {self.config_file} is not a mapping, using defaults")
                    return {}
                logger.info(f"Loaded configuration from {self.config_file}")
                return config_data
            else:
                logger.debug(f"Configuration file {self.config_file} not found, using defaults")
                return {}
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error(f"Failed to load configuration: {e}")
            return {}

    def _create_logging_config(self) -> LoggingConfig:
        """Create logging configuration from loaded data."""
        log_data = self._config_data.get("logging", {})

        level = os.getenv("JNIBIND_LOG_LEVEL") or log_data.get("level", "INFO")

        return LoggingConfig(
            level=level,
            enable_file_logging=_read_bool(log_data, "enable_file_logging", False),
            log_file=log_data.get("log_file", "jnibind.log"),
        )

    def _create_diagnostics_config(self) -> DiagnosticsConfig:
        """Create diagnostics configuration from loaded data."""
        diag_data = self._config_data.get("diagnostics", {})

        return DiagnosticsConfig(
            show_source=_read_bool(diag_data, "show_source", True),
            emit_compile_error=_read_bool(diag_data, "emit_compile_error", False),
        )

    def _create_output_config(self) -> OutputConfig:
        """Create output configuration from loaded data."""
        output_data = self._config_data.get("output", {})

        output_format = os.getenv("JNIBIND_OUTPUT_FORMAT") or output_data.get("format", "rust")
        if output_format not in OUTPUT_FORMATS:
            logger.warning(f"Unknown output format '{output_format}', using 'rust'")
            output_format = "rust"

        return OutputConfig(
            format=output_format,
            trailing_newline=_read_bool(output_data, "trailing_newline", True),
        )

    def save_config(self) -> None:
        """Save current configuration to file as JSON."""
        config_data = {
            "version": "1.0",
            "description": "jnibind configuration",
            "logging": {
                "level": self.logging.level,
                "enable_file_logging": self.logging.enable_file_logging,
                "log_file": self.logging.log_file,
            },
            "diagnostics": {
                "show_source": self.diagnostics.show_source,
                "emit_compile_error": self.diagnostics.emit_compile_error,
            },
            "output": {
                "format": self.output.format,
                "trailing_newline": self.output.trailing_newline,
            },
        }

        try:
            with open(self.config_file, "w") as f:
                json.dump(config_data, f, indent=2)
            logger.info(f"Configuration saved to {self.config_file}")
        except OSError as e:
            logger.error(f"Failed to save configuration: {e}")


# Global configuration instance
_global_config: Optional[JnibindConfig] = None


def get_config() -> JnibindConfig:
    """Get the global configuration instance."""
    global _global_config
    if _global_config is None:
        _global_config = JnibindConfig()
    return _global_config


def set_config(config: Optional[JnibindConfig]) -> None:
    """Set (or, with None, reset) the global configuration instance."""
    global _global_config
    _global_config = config


def load_config(config_file: str) -> JnibindConfig:
    """Load configuration from a specific file."""
    return JnibindConfig(config_file)
