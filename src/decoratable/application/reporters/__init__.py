"""Reporters for active decorations.

Output is str; callers decide where it goes.
"""

from decoratable.application.reporters.console import DecorationReporter, ReportConfig

__all__ = [
    "DecorationReporter",
    "ReportConfig",
]
