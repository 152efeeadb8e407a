"""pytest plugin for decoratable.

Provides fixtures for testing decorated classes:
    decoration_log: Messages logged by decoratable during the test
    decorator_namespace: Namespace for decoration_engine (override in conftest.py)
    decoration_engine: Strict DecorationEngine over decorator_namespace
    decoration_report: Renders the active decorations of an instance
"""

from __future__ import annotations

from typing import TYPE_CHECKING

# Register fixtures from fixtures module
from decoratable.presentation.pytest_plugin.fixtures import (
    decoration_engine,
    decoration_log,
    decoration_report,
    decorator_namespace,
)

if TYPE_CHECKING:
    import pytest

# Export fixtures for pytest discovery
__all__ = [
    "decoration_engine",
    "decoration_log",
    "decoration_report",
    "decorator_namespace",
]


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest plugin with markers."""
    config.addinivalue_line(
        "markers",
        "decoratable: mark test as exercising decorated members",
    )
