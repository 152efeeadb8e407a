"""Observing policies: count, trace, timer, twice.

They leave the outcome of the member unchanged (twice repeats it) and
report through loguru at INFO.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

from loguru import logger

from decoratable.policies._kinds import select

if TYPE_CHECKING:
    from collections.abc import Callable

    from decoratable.domain.model.context import Context


def count(wrapped: Callable[..., Any], ctx: Context) -> Callable[..., Any]:
    """Count and log how many times the member is accessed.

    Applies to getters, setters and methods.
    """
    slot = ctx.state.claim("count", calls=0)

    def getter(receiver: Any) -> Any:
        slot.calls += 1
        value = wrapped(receiver)
        logger.info("Object property <{}> has been gotten {} times", ctx.name, slot.calls)
        return value

    def setter(receiver: Any, value: Any) -> Any:
        result = wrapped(receiver, value)
        slot.calls += 1
        logger.info("Object property <{}> has been set {} times", ctx.name, slot.calls)
        return result

    def method(receiver: Any, *args: Any, **kwargs: Any) -> Any:
        slot.calls += 1
        result = wrapped(receiver, *args, **kwargs)
        logger.info("Object method <{}> has been called {} times", ctx.name, slot.calls)
        return result

    return select("count", ctx, getter=getter, setter=setter, method=method)


def trace(wrapped: Callable[..., Any], ctx: Context) -> Callable[..., Any]:
    """Log the inputs and outputs of the member."""

    def getter(receiver: Any) -> Any:
        value = wrapped(receiver)
        logger.info("Calling getter of {} => {!r}", ctx.name, value)
        return value

    def setter(receiver: Any, value: Any) -> Any:
        logger.info("Calling set({}, {!r})", ctx.name, value)
        return wrapped(receiver, value)

    def method(receiver: Any, *args: Any, **kwargs: Any) -> Any:
        shown = [repr(a) for a in args]
        shown.extend(f"{k}={v!r}" for k, v in kwargs.items())
        logger.info("Calling {}({})", ctx.name, ", ".join(shown))
        result = wrapped(receiver, *args, **kwargs)
        logger.info("{} => {!r}", ctx.name, result)
        return result

    return select("trace", ctx, getter=getter, setter=setter, method=method)


def timer(wrapped: Callable[..., Any], ctx: Context) -> Callable[..., Any]:
    """Log how long the member takes to execute."""
    slot = ctx.state.claim("timer", last=None)

    def _report(label: str, started: float) -> None:
        slot.last = time.perf_counter() - started
        logger.info("{} took {:.6f} seconds to execute", label, slot.last)

    def getter(receiver: Any) -> Any:
        started = time.perf_counter()
        value = wrapped(receiver)
        _report(f"'{ctx.name}' getter", started)
        return value

    def setter(receiver: Any, value: Any) -> Any:
        started = time.perf_counter()
        result = wrapped(receiver, value)
        _report(f"'{ctx.name}' setter", started)
        return result

    def method(receiver: Any, *args: Any, **kwargs: Any) -> Any:
        started = time.perf_counter()
        result = wrapped(receiver, *args, **kwargs)
        _report(f"Method '{ctx.name}'", started)
        return result

    return select("timer", ctx, getter=getter, setter=setter, method=method)


def twice(wrapped: Callable[..., Any], ctx: Context) -> Callable[..., Any]:
    """Run the member two times; the second outcome is returned."""

    def getter(receiver: Any) -> Any:
        wrapped(receiver)
        return wrapped(receiver)

    def setter(receiver: Any, value: Any) -> Any:
        wrapped(receiver, value)
        return wrapped(receiver, value)

    def method(receiver: Any, *args: Any, **kwargs: Any) -> Any:
        wrapped(receiver, *args, **kwargs)
        return wrapped(receiver, *args, **kwargs)

    return select("twice", ctx, getter=getter, setter=setter, method=method)
