"""Decorator resolver: DecoratorSpec -> callable decorator + arguments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from decoratable.domain.exceptions import ResolutionError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from decoratable.domain.model.arguments import Arguments
    from decoratable.domain.model.spec import DecoratorSpec
    from decoratable.domain.ports.namespace import DecoratorNamespace

    type Evaluator = Callable[[str, str], Arguments]


@dataclass(frozen=True, slots=True)
class ResolvedDecorator:
    """Decorator reference bound to its callable and evaluated arguments.

    Attributes:
        reference_name: Name as written (without '@')
        decorator: Callable found in the namespace
        arguments: Evaluated extra arguments
    """

    reference_name: str
    decorator: Callable[..., Any]
    arguments: Arguments

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not callable(self.decorator):
            raise TypeError(f"decorator '@{self.reference_name}' is not callable")

    @property
    def label(self) -> str:
        """Reference as shown in reports: name(args)."""
        return f"{self.reference_name}({self.arguments})" if self.arguments else self.reference_name


class DecoratorResolver:
    """Resolves decorator references through a namespace port.

    Argument text is evaluated by an injected evaluator (the composition
    root injects the literal-only evaluator).
    """

    __slots__ = ("_evaluate", "_namespace")

    def __init__(
        self,
        namespace: DecoratorNamespace,
        evaluate: Evaluator,
    ) -> None:
        """Initialize resolver.

        Args:
            namespace: Where decorator names are looked up
            evaluate: (raw_args_text, reference_name) -> Arguments
        """
        self._namespace = namespace
        self._evaluate = evaluate

    @property
    def namespace(self) -> DecoratorNamespace:
        """Namespace names are resolved in."""
        return self._namespace

    def resolve(self, spec: DecoratorSpec) -> ResolvedDecorator:
        """Resolve one reference.

        Raises:
            ResolutionError: If the name is unknown or not callable
            ArgumentEvaluationError: If the argument text is not literal
        """
        found = self._namespace.lookup(spec.reference_name)
        if found is None:
            raise ResolutionError(spec.reference_name, "not found in decorator namespace")
        if not callable(found):
            raise ResolutionError(spec.reference_name, f"{type(found).__name__} is not callable")
        arguments = self._evaluate(spec.raw_args_text, spec.reference_name)
        return ResolvedDecorator(
            reference_name=spec.reference_name,
            decorator=found,
            arguments=arguments,
        )

    def resolve_all(self, specs: Iterable[DecoratorSpec]) -> tuple[ResolvedDecorator, ...]:
        """Resolve references in order. The first failure aborts."""
        return tuple(self.resolve(spec) for spec in specs)
