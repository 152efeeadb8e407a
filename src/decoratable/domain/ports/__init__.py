"""Domain ports (interfaces/protocols)."""

from decoratable.domain.ports.metadata import MetadataSourcePort
from decoratable.domain.ports.namespace import DecoratorNamespace

__all__ = [
    "DecoratorNamespace",
    "MetadataSourcePort",
]
