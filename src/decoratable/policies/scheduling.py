"""Scheduling policies: delay, debounce, throttle (methods only).

Deferred calls run on daemon threading.Timer threads. They are
fire-and-forget: the wrapper returns None immediately and the outcome
of the deferred call is not reported back. Exceptions raised there go
to threading.excepthook.
"""

from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING, Any

from loguru import logger

from decoratable.policies._kinds import check_seconds, select

if TYPE_CHECKING:
    from collections.abc import Callable

    from decoratable.domain.model.context import Context


def _start(seconds: float, fn: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]) -> threading.Timer:
    """Start a daemon single-shot timer."""
    timer = threading.Timer(seconds, fn, args=args, kwargs=kwargs)
    timer.daemon = True
    timer.start()
    return timer


def delay(wrapped: Callable[..., Any], ctx: Context, seconds: float = 0.5) -> Callable[..., Any]:
    """Run the method after a fixed delay."""
    seconds = check_seconds("delay", seconds)
    slot = ctx.state.claim("delay", seconds=seconds, scheduled=0)

    def method(receiver: Any, *args: Any, **kwargs: Any) -> None:
        _start(seconds, wrapped, (receiver, *args), kwargs)
        slot.scheduled += 1
        logger.debug("Scheduled {} in {}s", ctx.name, seconds)

    return select("delay", ctx, method=method)


def debounce(wrapped: Callable[..., Any], ctx: Context, seconds: float = 1) -> Callable[..., Any]:
    """Run the method once it has not been called again for seconds.

    Each call cancels the pending one and restarts the countdown.
    """
    seconds = check_seconds("debounce", seconds)
    slot = ctx.state.claim("debounce", seconds=seconds, pending=None)

    def method(receiver: Any, *args: Any, **kwargs: Any) -> None:
        if slot.pending is not None:
            slot.pending.cancel()
        slot.pending = _start(seconds, wrapped, (receiver, *args), kwargs)

    return select("debounce", ctx, method=method)


def throttle(wrapped: Callable[..., Any], ctx: Context, seconds: float = 0.5) -> Callable[..., Any]:
    """Run the method at most once per seconds; calls in between are dropped."""
    seconds = check_seconds("throttle", seconds)
    slot = ctx.state.claim("throttle", seconds=seconds, ready_at=0.0, dropped=0)

    def method(receiver: Any, *args: Any, **kwargs: Any) -> Any:
        now = time.monotonic()
        if now < slot.ready_at:
            slot.dropped += 1
            logger.debug("Dropped throttled call to {}", ctx.name)
            return None
        slot.ready_at = now + seconds
        return wrapped(receiver, *args, **kwargs)

    return select("throttle", ctx, method=method)
