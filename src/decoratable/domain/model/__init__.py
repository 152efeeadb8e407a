"""Domain model value objects."""

from decoratable.domain.model.arguments import Arguments
from decoratable.domain.model.batch import Batch, first_of, instances_of
from decoratable.domain.model.configuration import DecorationConfig
from decoratable.domain.model.context import ChainState, Context
from decoratable.domain.model.enums import Kind
from decoratable.domain.model.member import MemberDescription, TypeRegistration
from decoratable.domain.model.path import (
    Attr,
    Call,
    Index,
    Segment,
    as_path,
    format_path,
    split_call,
)
from decoratable.domain.model.spec import DecoratorSpec, ParsedAttribute

__all__ = [
    # Decoration
    "Arguments",
    "ChainState",
    "Context",
    "DecorationConfig",
    "DecoratorSpec",
    "Kind",
    "MemberDescription",
    "ParsedAttribute",
    "TypeRegistration",
    # Dispatch
    "Attr",
    "Batch",
    "Call",
    "Index",
    "Segment",
    "as_path",
    "first_of",
    "format_path",
    "instances_of",
    "split_call",
]
