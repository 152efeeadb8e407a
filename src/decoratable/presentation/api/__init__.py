"""Public decoration API.

Public exports:
    Decoratable/DecoratableMeta: Declarative base class
    DecorationEngine: Composition root for one configuration
    decorate/read/write/invoke/report: Module-level functions for any object
"""

from decoratable.presentation.api.decoratable import Decoratable, DecoratableMeta
from decoratable.presentation.api.engine import (
    DecorationEngine,
    decorate,
    default_engine,
    engine_of,
    invoke,
    read,
    report,
    write,
)

__all__ = [
    "Decoratable",
    "DecoratableMeta",
    "DecorationEngine",
    "decorate",
    "default_engine",
    "engine_of",
    "invoke",
    "read",
    "report",
    "write",
]
