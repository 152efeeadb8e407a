"""Interception dispatcher: routes member access to decorated chains.

Every read, write and call against a decorable receiver goes through
one Dispatcher. For each attribute segment it asks the registry of the
(first) instance whether a decorated chain exists for that member and
kind; if not, default access applies. Remaining segments of a nested
path are dispatched onto the intermediate result.

Read:
    1. Index/Call head -> default subscript or call, dispatch the rest
    2. Decorated getter -> k outputs from the first k instances, or one
       intermediate value (N must be 1) when segments remain
    3. Decorated method -> first instance's chain with the whole receiver
    4. Undecorated method followed by a Call -> called with the whole receiver
    5. Otherwise -> default access, same aggregate rules as getters

Write:
    1. Decorated setter -> single instance only, nested values computed
       on a detached copy of the current value; setter output replaces
       value receivers
    2. Decorated method -> tail applied in place onto the method output
    3. Otherwise -> default assignment through the live containers; value
       intermediates (tuples, frozen objects) are rebuilt and set back

Errors raised inside a chain are wrapped in DecoratedCallbackError.
Receiver-shape errors are raised by the dispatcher itself, unwrapped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from decoratable.application.dispatch import default_access
from decoratable.application.registry import registry_of
from decoratable.domain.exceptions import (
    AmbiguousIntermediateIndexError,
    AssignmentToTemporaryError,
    ContractViolationError,
    DecoratedCallbackError,
    MultiAssignError,
    TooManyOutputsError,
)
from decoratable.domain.model.batch import Batch, first_of, instances_of
from decoratable.domain.model.enums import Kind
from decoratable.domain.model.path import Attr, Call, Index, as_path, format_path, split_call

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from decoratable.application.registry import Registry, RegistryEntry
    from decoratable.domain.model.path import Segment


class Dispatcher:
    """Routes read/write/invoke expressions to decorated chains.

    Stateless apart from the registry lookup: all decoration state lives
    in the per-instance registries.
    """

    __slots__ = ("_registry_lookup",)

    def __init__(self, registry_lookup: Callable[[object], Registry | None] = registry_of) -> None:
        """Initialize dispatcher.

        Args:
            registry_lookup: Returns the registry of an instance (None if
                the instance was never decorated)
        """
        self._registry_lookup = registry_lookup

    # =========================================================================
    # Public API
    # =========================================================================

    def read(self, receiver: object, path: object, nargout: int | None = None) -> Any:
        """Evaluate a read expression.

        Args:
            receiver: Instance or Batch of instances
            path: Access path ("a.b", segment, or sequence of segments)
            nargout: Number of outputs requested. None returns one bare
                value; an int k returns a tuple of k values. A call
                result counts as one output unless k > 1 and it is a tuple,
                whose first k items are returned.

        Returns:
            Bare value, or tuple of nargout values

        Raises:
            TooManyOutputsError: If more outputs requested than available
            AmbiguousIntermediateIndexError: If chained access goes through
                a member of more than one instance
            DecoratedCallbackError: If a decorated chain raises
        """
        if nargout is not None and (isinstance(nargout, bool) or not isinstance(nargout, int) or nargout < 1):
            raise ValueError(f"nargout must be a positive int or None, got {nargout!r}")
        return self._read(receiver, as_path(path), nargout)

    def write(self, receiver: object, path: object, value: object) -> object:
        """Evaluate an assignment expression.

        Args:
            receiver: Instance or Batch of instances
            path: Assignment target path
            value: Value assigned

        Returns:
            Receiver after assignment: the same object for reference
            semantics, the updated object for value semantics

        Raises:
            MultiAssignError: If the target member spans several instances
            AssignmentToTemporaryError: If the target is the value result
                of a method call
            ContractViolationError: If a value-semantics setter returns None
            DecoratedCallbackError: If a decorated chain raises
        """
        return self._write(receiver, as_path(path), value)

    def invoke(self, receiver: object, name: str, /, *args: Any, **kwargs: Any) -> Any:
        """Call a method on the receiver through its decorated chain.

        Undecorated methods are called directly.
        """
        entry = self._entry(receiver, Kind.METHOD, name)
        if entry is None:
            return default_access.call_method(receiver, name, args, kwargs)
        return self._invoke(entry, receiver, *args, **kwargs)

    def entry(self, receiver: object, kind: Kind, name: str) -> RegistryEntry | None:
        """Active entry governing (kind, name) for the receiver."""
        return self._entry(receiver, kind, name)

    # =========================================================================
    # Read
    # =========================================================================

    def _read(self, receiver: object, segments: tuple[Segment, ...], nargout: int | None) -> Any:
        """Dispatch a read of segments onto receiver."""
        head, tail = segments[0], segments[1:]

        match head:
            case Index(key=key):
                value = default_access.get_item(receiver, key)
            case Call(args=args, kwargs=kwargs):
                value = default_access.call(receiver, args, kwargs)
                if not tail:
                    return _call_outputs(format_path(segments), value, nargout)
            case Attr(name=name):
                return self._read_attribute(receiver, name, tail, nargout)
            case _:  # pragma: no cover - as_path only yields segments
                raise TypeError(f"unknown path segment {head!r}")

        if tail:
            return self._read(value, tail, nargout)
        return _outputs(format_path(segments), (value,), nargout)

    def _read_attribute(
        self,
        receiver: object,
        name: str,
        tail: tuple[Segment, ...],
        nargout: int | None,
    ) -> Any:
        """Dispatch a read whose head is an attribute."""
        instances = instances_of(receiver)

        if self._entry(receiver, Kind.GETTER, name) is None:
            method = self._entry(receiver, Kind.METHOD, name)
            if method is not None or (tail and isinstance(tail[0], Call)):
                call, rest = split_call(tail)
                if method is None:
                    result = default_access.call_method(receiver, name, call.args, call.kwargs)
                else:
                    result = self._invoke(method, receiver, *call.args, **call.kwargs)
                if rest:
                    return self._read(result, rest, nargout)
                return _call_outputs(name, result, nargout)

        if tail:
            if len(instances) != 1:
                raise AmbiguousIntermediateIndexError(name, len(instances))
            return self._read(self._get(instances[0], name), tail, nargout)

        requested = 1 if nargout is None else nargout
        if requested > len(instances):
            raise TooManyOutputsError(name, requested, len(instances))
        values = tuple(self._get(instance, name) for instance in instances[:requested])
        return values[0] if nargout is None else values

    def _get(self, instance: object, name: str) -> Any:
        """Read one member of one instance through its own getter chain."""
        entry = self._entry(instance, Kind.GETTER, name)
        if entry is None:
            return default_access.get_attribute(instance, name)
        return self._invoke(entry, instance)

    # =========================================================================
    # Write
    # =========================================================================

    def _write(
        self,
        receiver: object,
        segments: tuple[Segment, ...],
        value: object,
        *,
        fresh: bool = False,
    ) -> object:
        """Dispatch an assignment of value to segments of receiver.

        With fresh, nested containers are copied before assignment; the
        result feeds a decorated setter, which must see a new value.
        Otherwise nested writes go through the live containers.
        """
        head, tail = segments[0], segments[1:]

        match head:
            case Index(key=key):
                if tail:
                    current = default_access.get_item(receiver, key)
                    if fresh:
                        current = default_access.detach(current)
                    updated = self._write(current, tail, value, fresh=fresh)
                    if updated is current and not fresh:
                        return receiver
                    value = updated
                return default_access.set_item(receiver, key, value)
            case Call(args=args, kwargs=kwargs):
                output = default_access.call(receiver, args, kwargs)
                label = format_path(segments)
                if not tail or default_access.has_value_semantics(output):
                    raise AssignmentToTemporaryError(label)
                self._write(output, tail, value)
                return receiver
            case Attr(name=name):
                return self._write_attribute(receiver, name, tail, value, fresh)
            case _:  # pragma: no cover - as_path only yields segments
                raise TypeError(f"unknown path segment {head!r}")

    def _write_attribute(
        self,
        receiver: object,
        name: str,
        tail: tuple[Segment, ...],
        value: object,
        fresh: bool,
    ) -> object:
        """Dispatch an assignment whose head is an attribute."""
        setter = self._entry(receiver, Kind.SETTER, name)

        if setter is None:
            method = self._entry(receiver, Kind.METHOD, name)
            if method is not None:
                call, rest = split_call(tail)
                if not rest:
                    raise AssignmentToTemporaryError(name)
                output = self._invoke(method, receiver, *call.args, **call.kwargs)
                if default_access.has_value_semantics(output):
                    raise AssignmentToTemporaryError(name)
                self._write(output, rest, value)
                return receiver

        instances = instances_of(receiver)
        if len(instances) != 1:
            raise MultiAssignError(name, len(instances))
        target = instances[0]

        if tail:
            current = default_access.get_attribute(target, name)
            copied = fresh or setter is not None
            if copied:
                current = default_access.detach(current)
            updated = self._write(current, tail, value, fresh=copied)
            if updated is current and not copied:
                return receiver
            value = updated

        if setter is None:
            updated = default_access.set_attribute(target, name, value)
        else:
            updated = self._set(setter, target, value)

        if isinstance(receiver, Batch):
            receiver[0] = updated
            return receiver
        return updated

    def _set(self, entry: RegistryEntry, target: object, value: object) -> object:
        """Invoke a setter chain and return the receiver after assignment."""
        output = self._invoke(entry, target, value)
        if not default_access.has_value_semantics(target):
            return target
        if output is None:
            raise ContractViolationError(
                kind=Kind.SETTER,
                name=entry.name,
                step=None,
                reason="setter chain of a value-semantics receiver returned no updated receiver",
            )
        return output

    # =========================================================================
    # Helpers
    # =========================================================================

    def _entry(self, receiver: object, kind: Kind, name: str) -> RegistryEntry | None:
        """Entry of the first instance for (kind, name)."""
        registry = self._registry_lookup(first_of(receiver))
        if registry is None:
            return None
        return registry.get(kind, name)

    @staticmethod
    def _invoke(entry: RegistryEntry, *args: Any, **kwargs: Any) -> Any:
        """Call a chain, wrapping anything it raises.

        Raises:
            DecoratedCallbackError: Wrapping the chain's exception
        """
        try:
            return entry.chain(*args, **kwargs)
        except Exception as exc:
            raise DecoratedCallbackError(kind=entry.kind, name=entry.name, original=exc) from exc


def _outputs(name: str, values: Sequence[Any], nargout: int | None) -> Any:
    """Shape single-result outputs for the requested count."""
    if nargout is None:
        return values[0]
    if nargout > len(values):
        raise TooManyOutputsError(name, nargout, len(values))
    return tuple(values[:nargout])


def _call_outputs(name: str, result: Any, nargout: int | None) -> Any:
    """Shape a call result; a tuple result supplies several outputs."""
    if nargout is not None and nargout > 1 and isinstance(result, tuple):
        return _outputs(name, result, nargout)
    return _outputs(name, (result,), nargout)
