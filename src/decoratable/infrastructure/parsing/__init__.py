"""Metadata text parsing: attribute clauses and literal arguments."""

from decoratable.infrastructure.parsing.arguments import evaluate_arguments
from decoratable.infrastructure.parsing.attribute_parser import AttributeParser

__all__ = [
    "AttributeParser",
    "evaluate_arguments",
]
