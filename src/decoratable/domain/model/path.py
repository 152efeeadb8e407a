"""Access path segments.

An access expression such as ``obj.items[0].close()`` is the path
``(Attr("items"), Index(0), Attr("close"), Call())``. The dispatcher
consumes paths segment by segment.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True, slots=True)
class Attr:
    """Member access: ``.name``.

    Attributes:
        name: Attribute name (must be an identifier)
    """

    name: str

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not isinstance(self.name, str) or not self.name.isidentifier():
            raise ValueError(f"attribute name must be an identifier, got {self.name!r}")

    def __str__(self) -> str:
        """Format as written."""
        return f".{self.name}"


@dataclass(frozen=True, slots=True)
class Index:
    """Subscript: ``[key]``.

    Attributes:
        key: Subscript key (int, slice, mapping key, ...)
    """

    key: Any

    def __str__(self) -> str:
        """Format as written."""
        return f"[{self.key!r}]"


@dataclass(frozen=True, slots=True)
class Call:
    """Call parentheses: ``(*args, **kwargs)``.

    Attributes:
        args: Positional call arguments
        kwargs: Keyword call arguments (read-only view)
    """

    args: tuple[Any, ...] = ()
    kwargs: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        """Freeze kwargs."""
        if not isinstance(self.kwargs, MappingProxyType):
            object.__setattr__(self, "kwargs", MappingProxyType(dict(self.kwargs)))

    @classmethod
    def of(cls, *args: Any, **kwargs: Any) -> Call:
        """Build a Call segment from call-style arguments."""
        return cls(args=args, kwargs=kwargs)

    def __str__(self) -> str:
        """Format as written."""
        parts = [repr(a) for a in self.args]
        parts.extend(f"{k}={v!r}" for k, v in self.kwargs.items())
        return f"({', '.join(parts)})"


type Segment = Attr | Index | Call

_NO_CALL = Call()


def as_path(path: object) -> tuple[Segment, ...]:
    """Normalize a path to a tuple of segments.

    Accepted forms:
        "a.b.c"               -> Attr("a"), Attr("b"), Attr("c")
        Attr/Index/Call       -> one-segment path
        sequence of the above -> concatenated; ints become Index

    Raises:
        ValueError: If the path is empty (FAIL-FIRST)
        TypeError: If an element has no segment form
    """
    items = (path,) if isinstance(path, (str, int, Attr, Index, Call)) else tuple(path)  # type: ignore[arg-type]
    segments: list[Segment] = []
    for item in items:
        match item:
            case Attr() | Index() | Call():
                segments.append(item)
            case str():
                segments.extend(Attr(part) for part in item.split("."))
            case int():
                segments.append(Index(item))
            case _:
                raise TypeError(f"path element must be str, int or segment, got {type(item).__name__}")
    if not segments:
        raise ValueError("path must not be empty")
    return tuple(segments)


def split_call(segments: tuple[Segment, ...]) -> tuple[Call, tuple[Segment, ...]]:
    """Split an immediately following Call segment off the path.

    Returns:
        (call, tail) where call is an empty Call if the path does not start
        with one
    """
    if segments and isinstance(segments[0], Call):
        return segments[0], segments[1:]
    return _NO_CALL, segments


def format_path(segments: tuple[Segment, ...]) -> str:
    """Format segments as an access expression (leading dot stripped)."""
    return "".join(str(s) for s in segments).removeprefix(".")
