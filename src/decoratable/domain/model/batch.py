"""Aggregate receiver: an ordered batch of instances."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import overload


class Batch[T](Sequence[T]):
    """Ordered aggregate of N >= 1 instances addressed as one receiver.

    Reading a member through a Batch fans out over the first k instances
    (k = requested outputs). Chained access and assignment require N == 1.
    Decorated methods are governed by the first instance and receive the
    whole Batch as their receiver.

    Elements can be replaced in place (``batch[i] = new``); the size is
    fixed at construction.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[T]) -> None:
        """Initialize from an iterable of instances.

        Raises:
            ValueError: If items is empty (FAIL-FIRST)
        """
        self._items: list[T] = list(items)
        if not self._items:
            raise ValueError("Batch must contain at least one instance")

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> Batch[T]: ...

    def __getitem__(self, index: int | slice) -> T | Batch[T]:
        """Select one instance, or a sub-batch for a slice."""
        if isinstance(index, slice):
            return Batch(self._items[index])
        return self._items[index]

    def __setitem__(self, index: int, value: T) -> None:
        """Replace one instance."""
        self._items[index] = value

    def __len__(self) -> int:
        """Number of instances."""
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        """Iterate instances in order."""
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        """Batches are equal if they hold the same instances in order."""
        if not isinstance(other, Batch):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        """Show contained instances."""
        return f"Batch({self._items!r})"

    @property
    def first(self) -> T:
        """First instance (governs decorated method dispatch)."""
        return self._items[0]


def instances_of(receiver: object) -> Sequence[object]:
    """Instances denoted by a receiver: the batch itself or a 1-tuple."""
    if isinstance(receiver, Batch):
        return receiver
    return (receiver,)


def first_of(receiver: object) -> object:
    """First instance denoted by a receiver."""
    if isinstance(receiver, Batch):
        return receiver.first
    return receiver
