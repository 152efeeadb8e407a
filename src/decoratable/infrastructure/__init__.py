"""Infrastructure layer: parsing, namespaces and class metadata."""

from decoratable.infrastructure.metadata import (
    MISSING,
    ClassMetadataSource,
    Member,
    description,
    member,
)
from decoratable.infrastructure.namespaces import (
    ChainedNamespace,
    ImportNamespace,
    MappingNamespace,
    default_namespace,
)
from decoratable.infrastructure.parsing import AttributeParser, evaluate_arguments

__all__ = [
    # Parsing
    "AttributeParser",
    "evaluate_arguments",
    # Namespaces
    "ChainedNamespace",
    "ImportNamespace",
    "MappingNamespace",
    "default_namespace",
    # Class metadata
    "MISSING",
    "ClassMetadataSource",
    "Member",
    "description",
    "member",
]
