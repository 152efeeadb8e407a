"""Class metadata source: ``member()`` markers and ``description()``.

Properties carry their metadata through a marker in the class body:

    class Sensor(Decoratable):
        reading = member(0.0, description="GetDecorator = @count")

Methods carry it through a decorator:

    @description("Decorator = [@nshot, @delay(3)]")
    def fire(self) -> None: ...

A Python property is described by decorating its getter function
beneath ``@property`` (``@property`` / ``@description(...)`` / ``def``).
"""

from __future__ import annotations

from collections.abc import Callable, MutableMapping
from dataclasses import dataclass
from typing import Any, Final

from decoratable.domain.model.member import MemberDescription
from decoratable.domain.ports.metadata import MetadataSourcePort

DESCRIPTION_ATTR: Final = "__decoratable_description__"


class _Missing:
    """Sentinel type: member without default value."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing()


@dataclass(frozen=True, slots=True)
class Member:
    """Class-body marker for a described property.

    Replaced by its default value when the class is created (removed
    if it has none, the instance then sets the attribute in __init__).

    Attributes:
        default: Class-level default value, MISSING for none
        description: Free-text metadata
    """

    default: Any = MISSING
    description: str = ""

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not isinstance(self.description, str):
            raise TypeError(f"description must be str, got {type(self.description).__name__}")


def member(default: Any = MISSING, *, description: str = "") -> Any:
    """Declare a property with decorator metadata.

    Args:
        default: Class-level default value (optional)
        description: Metadata text, e.g. "SetDecorator = [@trace, @immutable]"

    Returns:
        Member marker (typed Any so it can stand in a class body)
    """
    return Member(default=default, description=description)


def description[F: Callable[..., Any]](text: str) -> Callable[[F], F]:
    """Attach decorator metadata to a method (or a property getter).

    Args:
        text: Metadata text, e.g. "Decorator = @nshot(3)"

    Returns:
        Decorator storing the text on the function, unchanged otherwise
    """
    if not isinstance(text, str):
        raise TypeError(f"description must be str, got {type(text).__name__}")

    def attach(fn: F) -> F:
        target = fn.__func__ if isinstance(fn, (staticmethod, classmethod)) else fn
        setattr(target, DESCRIPTION_ATTR, text)
        return fn

    return attach


class ClassMetadataSource(MetadataSourcePort):
    """Reads member descriptions from a class body namespace.

    Rewrites the namespace: Member markers become their default values.
    """

    def describe(self, namespace: MutableMapping[str, Any]) -> tuple[MemberDescription, ...]:
        """Collect descriptions of every non-dunder member in the namespace.

        Args:
            namespace: Class body namespace (rewritten in place)

        Returns:
            One MemberDescription per member, in definition order
        """
        described: list[MemberDescription] = []

        for name, value in list(namespace.items()):
            if name.startswith("__") and name.endswith("__"):
                continue

            match value:
                case Member():
                    if value.default is MISSING:
                        del namespace[name]
                    else:
                        namespace[name] = value.default
                    described.append(MemberDescription(name=name, text=value.description))
                case property():
                    text = getattr(value.fget, DESCRIPTION_ATTR, "")
                    described.append(MemberDescription(name=name, text=text))
                case staticmethod() | classmethod():
                    text = getattr(value.__func__, DESCRIPTION_ATTR, "")
                    described.append(MemberDescription(name=name, text=text, is_method=True))
                case _ if callable(value) and not isinstance(value, type):
                    text = getattr(value, DESCRIPTION_ATTR, "")
                    described.append(MemberDescription(name=name, text=text, is_method=True))
                case _:
                    described.append(MemberDescription(name=name))

        return tuple(described)
