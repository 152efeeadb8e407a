"""Kind selection shared by the reference policies."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from decoratable.domain.exceptions import PolicyKindError
from decoratable.domain.model.enums import Kind

if TYPE_CHECKING:
    from collections.abc import Callable

    from decoratable.domain.model.context import Context


def select(
    policy: str,
    ctx: Context,
    *,
    getter: Callable[[Any], Any] | None = None,
    setter: Callable[[Any, Any], Any] | None = None,
    method: Callable[..., Any] | None = None,
) -> Callable[..., Any]:
    """Return the wrapper matching ctx.kind.

    Raises:
        PolicyKindError: If the policy has no wrapper for ctx.kind
    """
    wrappers = {Kind.GETTER: getter, Kind.SETTER: setter, Kind.METHOD: method}
    wrapper = wrappers[ctx.kind]
    if wrapper is None:
        supported = tuple(kind for kind, fn in wrappers.items() if fn is not None)
        raise PolicyKindError(policy, ctx.kind, supported)
    return wrapper


def check_seconds(policy: str, seconds: object) -> float:
    """Validate a delay argument. FAIL-FIRST."""
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
        raise TypeError(f"@{policy} seconds must be a number, got {type(seconds).__name__}")
    if seconds < 0:
        raise ValueError(f"@{policy} seconds must be >= 0, got {seconds}")
    return float(seconds)
