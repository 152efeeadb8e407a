"""Shared fixtures.

Plugin fixtures are imported here so the suite also runs from a source
checkout where the pytest11 entry point is not installed.
"""

from decoratable.presentation.pytest_plugin.fixtures import (  # noqa: F401
    decoration_engine,
    decoration_log,
    decoration_report,
    decorator_namespace,
)
