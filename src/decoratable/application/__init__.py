"""Application layer for decoration.

Components:
- registry: per-instance active chains
- services: resolver, chain builder, decoration service
- dispatch: interception dispatcher and default access
- reporters: rich rendering of active decorations
"""

from decoratable.application.dispatch import Dispatcher, default_access
from decoratable.application.registry import (
    REGISTRY_ATTR,
    Registry,
    RegistryEntry,
    attach_registry,
    ensure_registry,
    registry_of,
)
from decoratable.application.reporters import DecorationReporter, ReportConfig
from decoratable.application.services import (
    ChainBuilder,
    DecorationService,
    DecoratorResolver,
    ResolvedDecorator,
    check_chain,
    check_decorator,
    flatten_decorators,
)

__all__ = [
    # Registry
    "REGISTRY_ATTR",
    "Registry",
    "RegistryEntry",
    "attach_registry",
    "ensure_registry",
    "registry_of",
    # Services
    "ChainBuilder",
    "DecorationService",
    "DecoratorResolver",
    "ResolvedDecorator",
    "check_chain",
    "check_decorator",
    "flatten_decorators",
    # Dispatch
    "Dispatcher",
    "default_access",
    # Reporters
    "DecorationReporter",
    "ReportConfig",
]
