"""Guard policies: immutable, nshot, private.

Guards refuse an access by raising; the dispatcher reports the refusal
as a DecoratedCallbackError wrapping the guard's error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from decoratable.domain.exceptions import (
    AccessRestrictedError,
    ImmutablePropertyError,
    ShotLimitExceededError,
)
from decoratable.domain.model.enums import Kind
from decoratable.policies._kinds import select

if TYPE_CHECKING:
    from collections.abc import Callable

    from decoratable.domain.model.context import Context


def immutable(wrapped: Callable[..., Any], ctx: Context) -> Callable[..., Any]:
    """Allow a property to be set only once (setters only)."""
    slot = ctx.state.claim("immutable", assigned=False)

    def setter(receiver: Any, value: Any) -> Any:
        if slot.assigned:
            raise ImmutablePropertyError(ctx.name)
        result = wrapped(receiver, value)
        slot.assigned = True
        return result

    return select("immutable", ctx, setter=setter)


def nshot(wrapped: Callable[..., Any], ctx: Context, limit: int = 1) -> Callable[..., Any]:
    """Allow a method to be called at most limit times (methods only).

    Raises:
        ValueError: If limit is not a positive int
    """
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValueError(f"@nshot limit must be a positive int, got {limit!r}")
    slot = ctx.state.claim("nshot", calls=0, limit=limit)

    def method(receiver: Any, *args: Any, **kwargs: Any) -> Any:
        if slot.calls >= limit:
            raise ShotLimitExceededError(ctx.name, limit)
        result = wrapped(receiver, *args, **kwargs)
        slot.calls += 1
        return result

    return select("nshot", ctx, method=method)


def private(wrapped: Callable[..., Any], ctx: Context) -> Callable[..., Any]:
    """Refuse every access to the member."""
    owner = type(ctx.source).__name__

    def getter(receiver: Any) -> Any:
        raise AccessRestrictedError(ctx.name, Kind.GETTER, owner)

    def setter(receiver: Any, value: Any) -> Any:
        raise AccessRestrictedError(ctx.name, Kind.SETTER, owner)

    def method(receiver: Any, *args: Any, **kwargs: Any) -> Any:
        raise AccessRestrictedError(ctx.name, Kind.METHOD, owner)

    return select("private", ctx, getter=getter, setter=setter, method=method)
