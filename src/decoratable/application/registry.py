"""Per-instance registry of active decorated chains."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final

from decoratable.domain.model.enums import Kind

if TYPE_CHECKING:
    from collections.abc import Callable

    from decoratable.domain.model.context import ChainState, Context

REGISTRY_ATTR: Final = "_decoratable_registry"


@dataclass(frozen=True, slots=True)
class RegistryEntry:
    """Active chain of one (kind, member).

    Attributes:
        chain: Composed callable invoked instead of the default accessor
        context: Context shared by the decorators of this chain
        labels: Decorator labels in source order (for reports)
    """

    chain: Callable[..., Any]
    context: Context
    labels: tuple[str, ...]

    @property
    def kind(self) -> Kind:
        """Kind of the decorated member."""
        return self.context.kind

    @property
    def name(self) -> str:
        """Decorated member name."""
        return self.context.name

    @property
    def state(self) -> ChainState:
        """State owned by this chain."""
        return self.context.state


class Registry:
    """Maps (kind, member name) to the active RegistryEntry.

    Three independent maps, one per kind. Installing an entry replaces the
    previous one for the same key; the replaced entry and its state are
    dropped. Not thread-safe: one instance is decorated and dispatched from
    one thread.
    """

    __slots__ = ("_maps",)

    def __init__(self) -> None:
        """Initialize empty."""
        self._maps: dict[Kind, dict[str, RegistryEntry]] = {kind: {} for kind in Kind}

    def get(self, kind: Kind, name: str) -> RegistryEntry | None:
        """Entry for (kind, name), None if undecorated."""
        return self._maps[kind].get(name)

    def chain(self, kind: Kind, name: str) -> Callable[..., Any] | None:
        """Chain for (kind, name), None if undecorated."""
        entry = self._maps[kind].get(name)
        return None if entry is None else entry.chain

    def has(self, kind: Kind, name: str) -> bool:
        """Check if (kind, name) is decorated."""
        return name in self._maps[kind]

    def intercepts(self, name: str) -> bool:
        """Check if any kind of the member is decorated."""
        return any(name in entries for entries in self._maps.values())

    def install(self, entry: RegistryEntry) -> RegistryEntry | None:
        """Install entry, replacing any previous one for its key.

        Returns:
            Replaced entry, or None
        """
        entries = self._maps[entry.kind]
        previous = entries.get(entry.name)
        entries[entry.name] = entry
        return previous

    def remove(self, kind: Kind, name: str) -> RegistryEntry | None:
        """Remove the entry for (kind, name).

        Returns:
            Removed entry, or None if undecorated
        """
        return self._maps[kind].pop(name, None)

    def entries(self) -> tuple[RegistryEntry, ...]:
        """All entries: getters, setters, then methods, each in install order."""
        return tuple(entry for kind in Kind for entry in self._maps[kind].values())

    def copy(self) -> Registry:
        """Independent registry sharing the same (immutable) entries."""
        clone = Registry()
        for kind, entries in self._maps.items():
            clone._maps[kind] = dict(entries)
        return clone

    def __len__(self) -> int:
        """Number of installed entries."""
        return sum(len(entries) for entries in self._maps.values())

    def __repr__(self) -> str:
        """Show keys per kind."""
        parts = [f"{kind.value}={sorted(entries)}" for kind, entries in self._maps.items() if entries]
        return f"Registry({', '.join(parts)})"


def registry_of(obj: object) -> Registry | None:
    """Registry attached to obj, None if it was never decorated."""
    try:
        registry = object.__getattribute__(obj, REGISTRY_ATTR)
    except AttributeError:
        return None
    return registry if isinstance(registry, Registry) else None


def ensure_registry(obj: object) -> Registry:
    """Registry attached to obj, attaching an empty one if needed.

    Raises:
        TypeError: If obj cannot hold instance attributes
    """
    registry = registry_of(obj)
    if registry is not None:
        return registry
    registry = Registry()
    attach_registry(obj, registry)
    return registry


def attach_registry(obj: object, registry: Registry) -> None:
    """Attach registry to obj, bypassing any __setattr__ override.

    Raises:
        TypeError: If obj cannot hold instance attributes
    """
    try:
        object.__setattr__(obj, REGISTRY_ATTR, registry)
    except (AttributeError, TypeError):
        raise TypeError(f"{type(obj).__name__} instances cannot be decorated (no instance dict)") from None
