"""Class member metadata value objects."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from decoratable.domain.model.enums import Kind

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from decoratable.domain.model.spec import ParsedAttribute


@dataclass(frozen=True, slots=True)
class MemberDescription:
    """Free-text metadata of one class member.

    Attributes:
        name: Member name
        text: Metadata text ("" if the member is not described)
        is_method: True for methods, False for properties
    """

    name: str
    text: str = ""
    is_method: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")

    @property
    def kinds(self) -> tuple[Kind, ...]:
        """Decorator kinds that apply to this member."""
        if self.is_method:
            return (Kind.METHOD,)
        return (Kind.SETTER, Kind.GETTER)


@dataclass(frozen=True, slots=True)
class TypeRegistration:
    """Decorable members of one class, parsed once at class definition.

    Attributes:
        members: Names of every member the class (and its bases) defines
            through the metadata source, described or not
        attributes: Parsed decorator lists in registration order
    """

    members: frozenset[str]
    attributes: tuple[ParsedAttribute, ...]

    @classmethod
    def empty(cls) -> TypeRegistration:
        """Registration without members."""
        return cls(members=frozenset(), attributes=())

    def extend(
        self,
        members: Iterable[str],
        attributes: Iterable[ParsedAttribute],
    ) -> TypeRegistration:
        """Registration of a subclass.

        Members redefined by the subclass drop every inherited entry,
        even when the redefinition carries no description.

        Args:
            members: Names defined by the subclass body
            attributes: Parsed attributes of the subclass body

        Returns:
            New registration (self unchanged)
        """
        own = frozenset(members)
        inherited = tuple(a for a in self.attributes if a.member not in own)
        return TypeRegistration(
            members=self.members | own,
            attributes=inherited + tuple(attributes),
        )

    def by_kind(self) -> Mapping[Kind, tuple[str, ...]]:
        """Decorated member names grouped by kind."""
        grouped: dict[Kind, list[str]] = {kind: [] for kind in Kind}
        for attribute in self.attributes:
            grouped[attribute.kind].append(attribute.member)
        return MappingProxyType({kind: tuple(names) for kind, names in grouped.items()})
