"""Decorator namespace port.

The namespace is the external collaborator that maps the names written in
member metadata (``@nshot``, ``@mypkg.policies.audit``) to decorator
callables. The core only looks names up and invokes what it gets.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any


class DecoratorNamespace(Protocol):
    """Contract for decorator namespaces.

    Example:
        class TeamPolicies:
            def lookup(self, name: str) -> Callable[..., Any] | None:
                return {"audit": audit, "retry": retry}.get(name)
    """

    def lookup(self, name: str) -> Callable[..., Any] | None:
        """Resolve a decorator by name.

        Args:
            name: Reference name without the leading '@'

        Returns:
            Decorator callable, or None if the name is unknown
        """
        ...
