"""Decoration service: builds chains and installs them in registries."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from loguru import logger

from decoratable.application.dispatch import default_access
from decoratable.application.registry import RegistryEntry, ensure_registry, registry_of
from decoratable.application.services.chain_builder import ChainBuilder, check_decorator, flatten_decorators
from decoratable.application.services.resolver import ResolvedDecorator
from decoratable.domain.model.arguments import Arguments
from decoratable.domain.model.batch import instances_of
from decoratable.domain.model.context import Context
from decoratable.domain.model.enums import Kind

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from decoratable.application.services.resolver import DecoratorResolver
    from decoratable.domain.model.spec import ParsedAttribute

_BASES: dict[Kind, Callable[[str], Callable[..., Any]]] = {
    Kind.GETTER: default_access.make_getter,
    Kind.SETTER: default_access.make_setter,
    Kind.METHOD: default_access.make_method,
}


class DecorationService:
    """Installs decorated chains on instances.

    Two entry points:
    - decorate(): decorators given as callables (runtime decoration)
    - decorate_specs(): decorators given as parsed references (static
      registration, resolved through the resolver's namespace)

    Each call builds a fresh Context and ChainState. On success the chain
    replaces any previous one for (kind, member); on failure the registry
    keeps its previous entry.
    """

    __slots__ = ("_builder", "_resolver")

    def __init__(self, resolver: DecoratorResolver, builder: ChainBuilder | None = None) -> None:
        """Initialize service.

        Args:
            resolver: Resolves parsed references
            builder: Composes chains. None = ChainBuilder()
        """
        self._resolver = resolver
        self._builder = builder or ChainBuilder()

    @property
    def resolver(self) -> DecoratorResolver:
        """Resolver used by decorate_specs()."""
        return self._resolver

    def decorate[T](
        self,
        instance: T,
        name: str,
        kind: Kind | str,
        decorator_or_list: object,
        args_per_decorator: Sequence[object] | None = None,
    ) -> T:
        """Decorate one member of an instance (or of every instance of a Batch).

        Args:
            instance: Instance, or Batch of instances
            name: Member name (existence is not checked)
            kind: Kind or "getter" / "setter" / "method"
            decorator_or_list: Decorator callable or (nested) list of them
            args_per_decorator: Extra arguments aligned with the flattened
                decorator list; each a tuple/list, mapping, Arguments or None

        Returns:
            The instance

        Raises:
            ValueError: If kind is unknown or argument count mismatches
            TypeError: If the instance cannot hold a registry
            ContractViolationError: If the decorators break the contract
        """
        kind = Kind.parse(kind)
        decorators = flatten_decorators(decorator_or_list)

        if args_per_decorator is None:
            arguments = [Arguments()] * len(decorators)
        else:
            arguments = [Arguments.coerce(a) for a in args_per_decorator]
            if len(arguments) != len(decorators):
                raise ValueError(
                    f"{len(arguments)} argument set(s) given for {len(decorators)} decorator(s)"
                )

        links: list[ResolvedDecorator] = []
        for step, (decorator, args) in enumerate(zip(decorators, arguments, strict=True)):
            check_decorator(decorator, kind, name, step, args)
            links.append(
                ResolvedDecorator(
                    reference_name=_reference_name(decorator),
                    decorator=decorator,  # type: ignore[arg-type]
                    arguments=args,
                )
            )

        self._install_all(instance, name, kind, links)
        return instance

    def decorate_specs[T](self, instance: T, attribute: ParsedAttribute) -> T:
        """Resolve a parsed attribute and decorate the member with it.

        Raises:
            ResolutionError: If a reference cannot be resolved
            ContractViolationError: If the decorators break the contract
        """
        links = self._resolver.resolve_all(attribute.specs)
        self._install_all(instance, attribute.member, attribute.kind, links)
        return instance

    def undecorate(self, instance: object, name: str, kind: Kind | str) -> bool:
        """Remove the chain of (kind, member), restoring default access.

        Returns:
            True if a chain was removed from any instance
        """
        kind = Kind.parse(kind)
        removed = False
        for target in instances_of(instance):
            registry = registry_of(target)
            if registry is not None and registry.remove(kind, name) is not None:
                logger.debug("Removed {} chain of {}.{}", kind.value, type(target).__name__, name)
                removed = True
        return removed

    def _install_all(
        self,
        instance: object,
        name: str,
        kind: Kind,
        links: Sequence[ResolvedDecorator],
    ) -> None:
        """Build one chain per instance, then install them all.

        Nothing is installed unless every chain builds, so a Batch is
        never left half decorated.
        """
        labels = tuple(link.label for link in links)
        built = [(target, self._build(target, name, kind, links, labels)) for target in instances_of(instance)]

        for target, entry in built:
            previous = ensure_registry(target).install(entry)
            logger.debug(
                "{} {} chain of {}.{}: {}",
                "Replaced" if previous is not None else "Installed",
                kind.value,
                type(target).__name__,
                name,
                " -> ".join(labels),
            )

    def _build(
        self,
        target: object,
        name: str,
        kind: Kind,
        links: Sequence[ResolvedDecorator],
        labels: tuple[str, ...],
    ) -> RegistryEntry:
        """Build the entry for one instance without installing it."""
        ensure_registry(target)
        context = Context(kind=kind, name=name, source=target)
        chain = self._builder.build(_BASES[kind](name), context, links)
        return RegistryEntry(chain=chain, context=context, labels=labels)


def _reference_name(decorator: object) -> str:
    """Name a decorator given as a callable."""
    return getattr(decorator, "__name__", None) or type(decorator).__name__
