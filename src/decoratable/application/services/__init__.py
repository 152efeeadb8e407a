"""Application services: resolve, build and install decorated chains.

DecorationService is the entry point used by the presentation layer.
"""

from decoratable.application.services.chain_builder import (
    ChainBuilder,
    check_chain,
    check_decorator,
    flatten_decorators,
)
from decoratable.application.services.decoration import DecorationService
from decoratable.application.services.resolver import DecoratorResolver, ResolvedDecorator

__all__ = [
    # Resolution
    "DecoratorResolver",
    "ResolvedDecorator",
    # Composition
    "ChainBuilder",
    "check_chain",
    "check_decorator",
    "flatten_decorators",
    # Installation
    "DecorationService",
]
