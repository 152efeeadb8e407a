"""pytest fixtures for testing decorated classes.

User overrides decorator_namespace in their conftest.py to make project
decorators resolvable by bare name.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from loguru import logger

from decoratable.application.reporters import DecorationReporter, ReportConfig
from decoratable.domain.model.configuration import DecorationConfig
from decoratable.infrastructure.namespaces import MappingNamespace
from decoratable.policies import POLICIES
from decoratable.presentation.api.engine import DecorationEngine

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from loguru import Message

    from decoratable.domain.ports.namespace import DecoratorNamespace


@pytest.fixture
def decoration_log() -> Iterator[list[str]]:
    """Messages logged by decoratable (and its policies) during the test.

    Enables the "decoratable" loguru logger for the duration of the test
    and collects formatted messages in order.

    Returns:
        List receiving each message text
    """
    messages: list[str] = []

    def sink(message: Message) -> None:
        messages.append(message.record["message"])

    handler_id = logger.add(sink, level="DEBUG", format="{message}", filter="decoratable")
    logger.enable("decoratable")
    try:
        yield messages
    finally:
        logger.disable("decoratable")
        logger.remove(handler_id)


@pytest.fixture
def decorator_namespace() -> DecoratorNamespace:
    """Namespace used by decoration_engine.

    User overrides this fixture in their conftest.py to provide
    project decorators.

    Returns:
        Namespace of the reference policies
    """
    return MappingNamespace(POLICIES)


@pytest.fixture
def decoration_engine(decorator_namespace: DecoratorNamespace) -> DecorationEngine:
    """Strict engine resolving names in decorator_namespace.

    Returns:
        DecorationEngine for runtime decoration and dispatch
    """
    return DecorationEngine(DecorationConfig(namespace=decorator_namespace, strict=True))


@pytest.fixture
def decoration_report() -> Callable[[object], str]:
    """Renderer of active decorations (plain text, no color).

    Returns:
        report(receiver) -> str
    """
    return DecorationReporter(ReportConfig(color=False)).report
