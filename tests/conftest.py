"""
Pytest configuration and shared fixtures for jnibind tests.

This module provides common test fixtures, configuration, and utilities
used across the test suite.
"""

import pytest

from jnibind.codegen.transformer import DeclarationTransformer
from jnibind.frontend.parser import parse_attribute_args, parse_item
from jnibind.utils.config import set_config
from jnibind.utils.diagnostics import DiagnosticReporter
from jnibind.utils.logging import setup_logging


CLOSE_IT_SOURCE = (
    "pub fn close_it(env: JNIEnv, _: JClass, filename: JString) -> jboolean { unimplemented!() }"
)


@pytest.fixture
def transformer():
    """Create a fresh DeclarationTransformer."""
    return DeclarationTransformer()


@pytest.fixture
def reporter():
    """Create a DiagnosticReporter."""
    return DiagnosticReporter()


@pytest.fixture
def close_it():
    """Parsed `pub fn close_it(...)` declaration."""
    return parse_item(CLOSE_IT_SOURCE)


@pytest.fixture
def bar_namespace():
    """Attribute argument for the ``com.example.Bar`` namespace."""
    return parse_attribute_args('"com.example.Bar"')


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Run with no configuration file and a clean global config."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("JNIBIND_CONFIG", raising=False)
    monkeypatch.delenv("JNIBIND_LOG_LEVEL", raising=False)
    monkeypatch.delenv("JNIBIND_OUTPUT_FORMAT", raising=False)
    set_config(None)
    yield tmp_path
    set_config(None)
    # The CLI may have bound handlers to captured streams.
    setup_logging()


# Pytest hooks for test collection and reporting
def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test path."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests for complete workflows"
    )
