"""Decoration context and the state owned by one registry entry."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from decoratable.domain.model.enums import Kind


class ChainState:
    """Mutable state owned by one composed chain.

    One ChainState is created per decoration call and shared by every
    decorator of that chain. Each decorator claims its own slot and keeps
    counters, timers or flags there. The state lives as long as the
    registry entry; re-decorating the member discards it.
    """

    __slots__ = ("_slots",)

    def __init__(self) -> None:
        """Initialize with no claimed slots."""
        self._slots: list[tuple[str, SimpleNamespace]] = []

    def claim(self, owner: str, **initial: object) -> SimpleNamespace:
        """Claim a private slot.

        Args:
            owner: Label of the claiming decorator (shown in reports)
            **initial: Initial slot attributes

        Returns:
            Fresh namespace private to the caller
        """
        if not owner:
            raise ValueError("owner must not be empty")
        slot = SimpleNamespace(**initial)
        self._slots.append((owner, slot))
        return slot

    @property
    def slots(self) -> tuple[tuple[str, SimpleNamespace], ...]:
        """Claimed slots in claim order as (owner, slot) pairs."""
        return tuple(self._slots)

    def __len__(self) -> int:
        """Number of claimed slots."""
        return len(self._slots)

    def __repr__(self) -> str:
        """Show owners only."""
        owners = ", ".join(owner for owner, _ in self._slots)
        return f"ChainState([{owners}])"


@dataclass(frozen=True, slots=True)
class Context:
    """Record passed as second argument to every decorator.

    Attributes:
        kind: Kind of the decorated member
        name: Member name
        source: Instance being decorated
        state: State owned by this chain
    """

    kind: Kind
    name: str
    source: object = field(repr=False, compare=False)
    state: ChainState = field(default_factory=ChainState, compare=False)

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")
