"""Concrete decorator arguments."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True, slots=True)
class Arguments:
    """Extra arguments passed to a decorator after (wrapped, context).

    Attributes:
        args: Positional arguments in order
        kwargs: Keyword arguments (read-only view)
    """

    args: tuple[Any, ...] = ()
    kwargs: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not isinstance(self.args, tuple):
            raise TypeError(f"args must be tuple, got {type(self.args).__name__}")
        if not isinstance(self.kwargs, MappingProxyType):
            object.__setattr__(self, "kwargs", MappingProxyType(dict(self.kwargs)))

    def __bool__(self) -> bool:
        """True if any argument is present."""
        return bool(self.args or self.kwargs)

    def __str__(self) -> str:
        """Format as a call argument list."""
        parts = [repr(a) for a in self.args]
        parts.extend(f"{k}={v!r}" for k, v in self.kwargs.items())
        return ", ".join(parts)

    @classmethod
    def coerce(cls, value: object) -> Arguments:
        """Build Arguments from the loose forms accepted by decorate().

        None -> empty, Arguments -> itself, Mapping -> keyword arguments,
        tuple/list -> positional arguments.

        Raises:
            TypeError: If value has none of these forms (FAIL-FIRST)
        """
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls(kwargs=value)
        if isinstance(value, (tuple, list)):
            return cls(args=tuple(value))
        raise TypeError(
            f"decorator arguments must be a tuple, list, mapping or Arguments, "
            f"got {type(value).__name__}"
        )
