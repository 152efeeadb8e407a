"""Per-class decoration configuration.

None = use the default, value = override.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from decoratable.domain.ports.namespace import DecoratorNamespace


@dataclass(frozen=True, slots=True)
class DecorationConfig:
    """Decoration configuration DTO.

    Immutable configuration object. Given to a Decoratable subclass through
    class keywords and inherited by its subclasses:

        class Sensor(Decoratable, strict=True, value_semantics=False): ...

    Attributes:
        namespace: Where decorator names resolve. None = default namespace
            (reference policies, then dotted import paths).
        strict: Ambiguous attribute text raises ParseAmbiguityError instead
            of leaving the member undecorated.
        value_semantics: Instances behave as values: setters return the
            updated instance instead of mutating in place.
    """

    namespace: DecoratorNamespace | None = None
    strict: bool = False
    value_semantics: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.namespace is not None and not callable(getattr(self.namespace, "lookup", None)):
            raise TypeError(
                f"namespace must provide lookup(name), got {type(self.namespace).__name__}"
            )

    def merged(
        self,
        *,
        namespace: DecoratorNamespace | None = None,
        strict: bool | None = None,
        value_semantics: bool | None = None,
    ) -> DecorationConfig:
        """Config of a subclass: explicit options override inherited ones."""
        changes: dict[str, object] = {}
        if namespace is not None:
            changes["namespace"] = namespace
        if strict is not None:
            changes["strict"] = strict
        if value_semantics is not None:
            changes["value_semantics"] = value_semantics
        return replace(self, **changes) if changes else self
