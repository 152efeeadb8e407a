"""Decorator reference value objects produced by attribute parsing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from decoratable.domain.model.enums import Kind


@dataclass(frozen=True, slots=True)
class DecoratorSpec:
    """One decorator reference as written in member metadata.

    Attributes:
        reference_name: Name after '@' (e.g., "nshot", "pkg.policies.delay")
        raw_args_text: Text between the parentheses, unparsed ("" if none)
    """

    reference_name: str
    raw_args_text: str = ""

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.reference_name:
            raise ValueError("reference_name must not be empty")

    def __str__(self) -> str:
        """Format as written in the attribute."""
        if self.raw_args_text:
            return f"@{self.reference_name}({self.raw_args_text})"
        return f"@{self.reference_name}"


@dataclass(frozen=True, slots=True)
class ParsedAttribute:
    """Ordered decorator references of one (member, kind).

    Attributes:
        member: Member name
        kind: Getter, setter or method
        specs: References in source order (never empty)
    """

    member: str
    kind: Kind
    specs: tuple[DecoratorSpec, ...]

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.member:
            raise ValueError("member must not be empty")
        if not self.specs:
            raise ValueError("specs must not be empty")
