"""Decoration engine: composition root of the decoration stack.

Wires parser, metadata source, resolver, chain builder, decoration
service, dispatcher and reporter for one DecorationConfig. Each
Decoratable class holds the engine of its configuration; plain objects
use the default engine through the module-level functions.
"""

from __future__ import annotations

from functools import cache
from typing import TYPE_CHECKING, Any

from decoratable.application.dispatch import Dispatcher
from decoratable.application.registry import ensure_registry
from decoratable.application.reporters import DecorationReporter
from decoratable.application.services import DecorationService, DecoratorResolver
from decoratable.domain.model.batch import first_of
from decoratable.domain.model.configuration import DecorationConfig
from decoratable.infrastructure.metadata import ClassMetadataSource
from decoratable.infrastructure.namespaces import default_namespace
from decoratable.infrastructure.parsing import AttributeParser, evaluate_arguments

if TYPE_CHECKING:
    from collections.abc import MutableMapping, Sequence

    from decoratable.application.reporters import ReportConfig
    from decoratable.domain.model.enums import Kind
    from decoratable.domain.model.member import TypeRegistration
    from decoratable.domain.model.spec import ParsedAttribute
    from decoratable.domain.ports.metadata import MetadataSourcePort


class DecorationEngine:
    """Facade over the decoration stack for one configuration.

    Example:
        engine = DecorationEngine(DecorationConfig(strict=True))
        engine.decorate(obj, "value", "getter", [audit, cache])
        engine.read(obj, "value")
    """

    __slots__ = ("_config", "_dispatcher", "_metadata", "_parser", "_service")

    def __init__(
        self,
        config: DecorationConfig | None = None,
        *,
        metadata: MetadataSourcePort | None = None,
        dispatcher: Dispatcher | None = None,
    ) -> None:
        """Initialize engine.

        Args:
            config: Decoration configuration. None = defaults.
            metadata: Class metadata source. None = ClassMetadataSource().
            dispatcher: Dispatcher. None = Dispatcher().
        """
        self._config = config or DecorationConfig()
        namespace = self._config.namespace or default_namespace()
        self._parser = AttributeParser(strict=self._config.strict)
        self._metadata = metadata or ClassMetadataSource()
        self._service = DecorationService(DecoratorResolver(namespace, evaluate_arguments))
        self._dispatcher = dispatcher or Dispatcher()

    @property
    def config(self) -> DecorationConfig:
        """Configuration this engine was built for."""
        return self._config

    @property
    def dispatcher(self) -> Dispatcher:
        """Dispatcher routing access to decorated chains."""
        return self._dispatcher

    @property
    def service(self) -> DecorationService:
        """Service installing chains."""
        return self._service

    # =========================================================================
    # Static registration
    # =========================================================================

    def register(
        self,
        namespace: MutableMapping[str, Any],
        inherited: TypeRegistration,
    ) -> TypeRegistration:
        """Parse the decorator metadata of a class body.

        Rewrites the namespace (member markers become their defaults).

        Args:
            namespace: Class body namespace
            inherited: Registration of the base classes

        Returns:
            Registration of the new class
        """
        descriptions = self._metadata.describe(namespace)
        attributes: list[ParsedAttribute] = []
        for description in descriptions:
            if not description.text:
                continue
            for kind in description.kinds:
                parsed = self._parser.parse_member(description.name, description.text, kind)
                if parsed is not None:
                    attributes.append(parsed)
        return inherited.extend((d.name for d in descriptions), attributes)

    def install(self, instance: object, registration: TypeRegistration) -> None:
        """Attach a registry to a new instance and install its chains.

        Raises:
            ResolutionError: If a registered reference cannot be resolved
            ContractViolationError: If registered decorators break the contract
        """
        ensure_registry(instance)
        for attribute in registration.attributes:
            self._service.decorate_specs(instance, attribute)

    # =========================================================================
    # Runtime decoration and dispatch
    # =========================================================================

    def decorate[T](
        self,
        instance: T,
        name: str,
        kind: Kind | str,
        decorator_or_list: object,
        args_per_decorator: Sequence[object] | None = None,
    ) -> T:
        """Decorate one member. See DecorationService.decorate()."""
        return self._service.decorate(instance, name, kind, decorator_or_list, args_per_decorator)

    def undecorate(self, instance: object, name: str, kind: Kind | str) -> bool:
        """Remove the chain of (kind, member). See DecorationService.undecorate()."""
        return self._service.undecorate(instance, name, kind)

    def read(self, receiver: object, path: object, nargout: int | None = None) -> Any:
        """Evaluate a read expression. See Dispatcher.read()."""
        return self._dispatcher.read(receiver, path, nargout)

    def write(self, receiver: object, path: object, value: object) -> object:
        """Evaluate an assignment. See Dispatcher.write()."""
        return self._dispatcher.write(receiver, path, value)

    def invoke(self, receiver: object, name: str, /, *args: Any, **kwargs: Any) -> Any:
        """Call a method. See Dispatcher.invoke()."""
        return self._dispatcher.invoke(receiver, name, *args, **kwargs)

    def report(self, receiver: object, config: ReportConfig | None = None) -> str:
        """Render the active decorations of receiver."""
        return DecorationReporter(config).report(receiver)


@cache
def default_engine() -> DecorationEngine:
    """Engine for the default configuration (shared)."""
    return DecorationEngine()


def engine_of(receiver: object) -> DecorationEngine:
    """Engine of the receiver's class, default engine for plain objects."""
    engine = getattr(type(first_of(receiver)), "__decoratable_engine__", None)
    return engine if isinstance(engine, DecorationEngine) else default_engine()


# =============================================================================
# Module-level API
# =============================================================================


def decorate[T](
    instance: T,
    name: str,
    kind: Kind | str,
    decorator_or_list: object,
    args_per_decorator: Sequence[object] | None = None,
) -> T:
    """Decorate a member of any object with an instance dict.

    Args:
        instance: Instance or Batch of instances
        name: Member name
        kind: "getter", "setter", "method" or Kind
        decorator_or_list: Decorator callable or (nested) list of them
        args_per_decorator: Extra arguments aligned with the flattened list

    Returns:
        The instance
    """
    return engine_of(instance).decorate(instance, name, kind, decorator_or_list, args_per_decorator)


def read(receiver: object, path: object, nargout: int | None = None) -> Any:
    """Read through decorated getters: ``read(obj, "a.b")``."""
    return engine_of(receiver).read(receiver, path, nargout)


def write(receiver: object, path: object, value: object) -> object:
    """Assign through decorated setters; returns the receiver after assignment."""
    return engine_of(receiver).write(receiver, path, value)


def invoke(receiver: object, name: str, /, *args: Any, **kwargs: Any) -> Any:
    """Call a method through its decorated chain."""
    return engine_of(receiver).invoke(receiver, name, *args, **kwargs)


def report(receiver: object, config: ReportConfig | None = None) -> str:
    """Render the active decorations of receiver as a table."""
    return engine_of(receiver).report(receiver, config)
