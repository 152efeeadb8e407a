"""Default (undecorated) member access.

These functions are the behavior the decorated chains wrap: they read,
write and call members without consulting any registry. Receivers whose
class sets ``__decoratable_intercepts__`` route their own attribute hooks
through the dispatcher, so default access bypasses those hooks and uses
``object`` directly.
"""

from __future__ import annotations

import copy
import inspect
from typing import TYPE_CHECKING, Any

from decoratable.application.registry import attach_registry, registry_of
from decoratable.domain.model.batch import Batch

if TYPE_CHECKING:
    from collections.abc import Mapping

_IMMUTABLE_TYPES = (int, float, complex, str, bytes, bool, tuple, frozenset, range, type(None))
_DETACHED_TYPES = (dict, list, set, bytearray)


# =============================================================================
# Semantics
# =============================================================================


def intercepts(receiver: object) -> bool:
    """Check if the receiver's attribute hooks route through the dispatcher."""
    return bool(getattr(type(receiver), "__decoratable_intercepts__", False))


def has_value_semantics(obj: object) -> bool:
    """Check if assignments into obj produce a new object.

    True for classes declaring ``__value_semantics__``, frozen dataclasses
    and immutable builtins.
    """
    if getattr(type(obj), "__value_semantics__", False):
        return True
    if isinstance(obj, _IMMUTABLE_TYPES):
        return True
    params = getattr(type(obj), "__dataclass_params__", None)
    return bool(params is not None and params.frozen)


def has_reference_semantics(obj: object) -> bool:
    """Check if assignments into obj mutate it in place."""
    return not has_value_semantics(obj)


def detach(value: object) -> object:
    """Copy mutable builtin containers before a nested assignment."""
    if isinstance(value, _DETACHED_TYPES):
        return copy.copy(value)
    return value


# =============================================================================
# Attributes
# =============================================================================


def get_attribute(receiver: object, name: str) -> Any:
    """Read an attribute without decoration.

    Raises:
        AttributeError: If the attribute does not exist
    """
    if not intercepts(receiver):
        return getattr(receiver, name)
    try:
        return object.__getattribute__(receiver, name)
    except AttributeError:
        fallback = getattr(type(receiver), "__getattr__", None)
        if fallback is None:
            raise
        return fallback(receiver, name)


def set_attribute(receiver: object, name: str, value: object) -> object:
    """Assign an attribute without decoration.

    Reference receivers are mutated in place; value receivers are copied.

    Returns:
        The receiver after assignment (a new object for value semantics)
    """
    if has_value_semantics(receiver):
        return replaced(receiver, name, value)
    if intercepts(receiver):
        object.__setattr__(receiver, name, value)
    else:
        setattr(receiver, name, value)
    return receiver


def replaced(receiver: object, name: str, value: object) -> object:
    """Copy of a value receiver with one attribute replaced.

    The copy gets its own registry holding the same chains.
    """
    clone = copy.copy(receiver)
    object.__setattr__(clone, name, value)
    registry = registry_of(receiver)
    if registry is not None:
        attach_registry(clone, registry.copy())
    return clone


# =============================================================================
# Items and calls
# =============================================================================


def get_item(receiver: object, key: object) -> Any:
    """Subscript without decoration (Batch slices give sub-batches)."""
    return receiver[key]  # type: ignore[index]


def set_item(receiver: object, key: object, value: object) -> object:
    """Assign a subscript without decoration.

    Returns:
        The receiver after assignment (a new tuple for tuples)
    """
    if type(receiver) is tuple:
        items = list(receiver)
        items[key] = value  # type: ignore[index]
        return tuple(items)
    receiver[key] = value  # type: ignore[index]
    return receiver


def call(receiver: object, args: tuple[Any, ...], kwargs: Mapping[str, Any]) -> Any:
    """Call the receiver."""
    return receiver(*args, **kwargs)  # type: ignore[operator]


def call_method(receiver: object, name: str, args: tuple[Any, ...], kwargs: Mapping[str, Any]) -> Any:
    """Call a method without decoration.

    A Batch receiver is passed as ``self`` to the method of its first
    instance's class.
    """
    if isinstance(receiver, Batch):
        owner = type(receiver.first)
        attribute = inspect.getattr_static(owner, name)
        binder = getattr(type(attribute), "__get__", None)
        method = attribute if binder is None else binder(attribute, receiver, owner)
        return method(*args, **kwargs)
    return get_attribute(receiver, name)(*args, **kwargs)


# =============================================================================
# Base accessors wrapped by decorated chains
# =============================================================================


def make_getter(name: str) -> Any:
    """Base getter: chain(receiver) -> value."""

    def getter(receiver: object) -> Any:
        return get_attribute(receiver, name)

    getter.__qualname__ = f"getter<{name}>"
    return getter


def make_setter(name: str) -> Any:
    """Base setter: chain(receiver, value) -> None | new receiver.

    Returns nothing for reference receivers (mutated in place) and the
    updated copy for value receivers.
    """

    def setter(receiver: object, value: object) -> object | None:
        updated = set_attribute(receiver, name, value)
        return updated if has_value_semantics(receiver) else None

    setter.__qualname__ = f"setter<{name}>"
    return setter


def make_method(name: str) -> Any:
    """Base method: chain(receiver, *args, **kwargs) -> result."""

    def method(receiver: object, *args: Any, **kwargs: Any) -> Any:
        return call_method(receiver, name, args, kwargs)

    method.__qualname__ = f"method<{name}>"
    return method


__all__ = [
    "call",
    "call_method",
    "detach",
    "get_attribute",
    "get_item",
    "has_reference_semantics",
    "has_value_semantics",
    "intercepts",
    "make_getter",
    "make_method",
    "make_setter",
    "replaced",
    "set_attribute",
    "set_item",
]
