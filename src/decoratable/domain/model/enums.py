"""Domain enumerations."""

from __future__ import annotations

from enum import Enum


class Kind(Enum):
    """Kind of decorated member.

    Determines the attribute keyword and the calling convention of the chain:
    - GETTER: chain(receiver) -> value
    - SETTER: chain(receiver, value) -> None | new receiver
    - METHOD: chain(receiver, *args, **kwargs) -> anything
    """

    GETTER = "getter"
    SETTER = "setter"
    METHOD = "method"

    @property
    def keyword(self) -> str:
        """Attribute keyword introducing decorators of this kind."""
        return _KEYWORDS[self]

    @classmethod
    def parse(cls, value: Kind | str) -> Kind:
        """Convert "getter" / "setter" / "method" (or a Kind) to Kind.

        Raises:
            ValueError: If value names no kind (FAIL-FIRST)
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(repr(k.value) for k in cls)
            raise ValueError(f"kind must be one of {valid}, got {value!r}") from None


_KEYWORDS = {
    Kind.GETTER: "GetDecorator",
    Kind.SETTER: "SetDecorator",
    Kind.METHOD: "Decorator",
}
