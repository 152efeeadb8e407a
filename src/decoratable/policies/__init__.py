"""Reference decorator policies.

Every policy follows the decorator contract:

    policy(wrapped, context, *args) -> wrapper

POLICIES maps bare names to policies; it backs the default namespace,
so ``GetDecorator = @count`` or ``Decorator = [@nshot(3), @delay(0.1)]``
resolve without configuration.
"""

from types import MappingProxyType

from decoratable.policies.guards import immutable, nshot, private
from decoratable.policies.observing import count, timer, trace, twice
from decoratable.policies.scheduling import debounce, delay, throttle

POLICIES = MappingProxyType(
    {
        "count": count,
        "trace": trace,
        "timer": timer,
        "twice": twice,
        "immutable": immutable,
        "nshot": nshot,
        "private": private,
        "delay": delay,
        "debounce": debounce,
        "throttle": throttle,
    }
)

__all__ = [
    "POLICIES",
    "count",
    "debounce",
    "delay",
    "immutable",
    "nshot",
    "private",
    "throttle",
    "timer",
    "trace",
    "twice",
]
