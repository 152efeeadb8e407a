"""Decorator namespace implementations.

- MappingNamespace: fixed name -> callable table
- ImportNamespace: dotted import paths (``@mypkg.policies.audit``)
- ChainedNamespace: first namespace that knows the name wins
"""

from __future__ import annotations

import importlib
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from decoratable.domain.ports.namespace import DecoratorNamespace


class MappingNamespace:
    """Namespace backed by an immutable name -> decorator table."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, Callable[..., Any]]) -> None:
        """Initialize with a table of decorators.

        Raises:
            TypeError: If any entry is not callable (FAIL-FIRST)
        """
        for name, entry in entries.items():
            if not callable(entry):
                raise TypeError(f"namespace entry {name!r} must be callable, got {type(entry).__name__}")
        self._entries = MappingProxyType(dict(entries))

    def lookup(self, name: str) -> Callable[..., Any] | None:
        """Resolve a decorator by exact name."""
        return self._entries.get(name)

    @property
    def names(self) -> frozenset[str]:
        """All names in the table."""
        return frozenset(self._entries)


class ImportNamespace:
    """Namespace resolving dotted paths ``package.module.attribute``.

    The longest importable module prefix is imported and the remaining
    parts are read as attributes. Undotted names never resolve here.
    """

    __slots__ = ()

    def lookup(self, name: str) -> Callable[..., Any] | None:
        """Resolve a dotted path, None if nothing importable matches."""
        parts = name.split(".")
        for split in range(len(parts) - 1, 0, -1):
            module_name = ".".join(parts[:split])
            try:
                target: object = importlib.import_module(module_name)
            except ImportError:
                continue
            for attribute in parts[split:]:
                target = getattr(target, attribute, None)
                if target is None:
                    return None
            return target if callable(target) else None
        return None


class ChainedNamespace:
    """Namespace that asks its members in order."""

    __slots__ = ("_namespaces",)

    def __init__(self, *namespaces: DecoratorNamespace) -> None:
        """Initialize with namespaces in priority order.

        Raises:
            ValueError: If no namespace given (FAIL-FIRST)
        """
        if not namespaces:
            raise ValueError("at least one namespace required")
        self._namespaces = namespaces

    def lookup(self, name: str) -> Callable[..., Any] | None:
        """First non-None answer of the chained namespaces."""
        for namespace in self._namespaces:
            found = namespace.lookup(name)
            if found is not None:
                return found
        return None


def default_namespace() -> ChainedNamespace:
    """Reference policies by bare name, then dotted import paths."""
    from decoratable.policies import POLICIES

    return ChainedNamespace(MappingNamespace(POLICIES), ImportNamespace())
