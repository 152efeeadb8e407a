"""Class metadata port (interface)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import MutableMapping
    from typing import Any

    from decoratable.domain.model.member import MemberDescription


class MetadataSourcePort(ABC):
    """Port for reading the free-text metadata of class members.

    Infrastructure layer must provide implementation.
    """

    @abstractmethod
    def describe(self, namespace: MutableMapping[str, Any]) -> tuple[MemberDescription, ...]:
        """Collect member descriptions from a class body namespace.

        Called once per class, before the class object is created.
        Implementations may rewrite the namespace (e.g., replace marker
        objects with plain default values).

        Args:
            namespace: Class body namespace

        Returns:
            Descriptions of every member defined in the namespace,
            described or not, in definition order
        """
        ...
