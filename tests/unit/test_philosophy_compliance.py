"""Philosophy compliance tests.

Tests verifying the package-wide conventions:
- FAIL-FIRST: invalid values raise at construction, never fall back
- Immutability: value objects are frozen
- Error hierarchy: every error is a DecoratableError and a builtin
"""

from __future__ import annotations

import dataclasses
from typing import Any

import pytest

from decoratable.application.registry import RegistryEntry
from decoratable.application.reporters import ReportConfig
from decoratable.application.services.resolver import ResolvedDecorator
from decoratable.domain import exceptions
from decoratable.domain.model.arguments import Arguments
from decoratable.domain.model.batch import Batch
from decoratable.domain.model.configuration import DecorationConfig
from decoratable.domain.model.enums import Kind
from decoratable.domain.model.member import MemberDescription, TypeRegistration
from decoratable.domain.model.path import Attr, Call, Index, as_path
from decoratable.domain.model.spec import DecoratorSpec, ParsedAttribute
from decoratable.infrastructure.metadata import Member
from tests.factories import getter_offset, make_context

# =============================================================================
# FAIL-FIRST Validation
# =============================================================================


class TestFailFirstValidation:
    """Invalid construction raises immediately."""

    def test_empty_reference_name(self) -> None:
        with pytest.raises(ValueError, match="reference_name"):
            DecoratorSpec("")

    def test_parsed_attribute_without_specs(self) -> None:
        with pytest.raises(ValueError, match="specs"):
            ParsedAttribute("value", Kind.GETTER, ())

    def test_member_description_without_name(self) -> None:
        with pytest.raises(ValueError, match="name"):
            MemberDescription("")

    def test_context_without_name(self) -> None:
        with pytest.raises(ValueError, match="name"):
            make_context(name="")

    def test_arguments_args_must_be_tuple(self) -> None:
        with pytest.raises(TypeError, match="args"):
            Arguments(args=[1])  # type: ignore[arg-type]

    def test_config_namespace_needs_lookup(self) -> None:
        with pytest.raises(TypeError, match="lookup"):
            DecorationConfig(namespace=object())  # type: ignore[arg-type]

    def test_attr_must_be_identifier(self) -> None:
        with pytest.raises(ValueError, match="identifier"):
            Attr("not valid")

    def test_empty_path(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            as_path([])

    def test_empty_batch(self) -> None:
        with pytest.raises(ValueError, match="at least one"):
            Batch([])

    def test_unknown_kind(self) -> None:
        with pytest.raises(ValueError, match="kind"):
            Kind.parse("property")

    def test_member_description_type(self) -> None:
        with pytest.raises(TypeError, match="description"):
            Member(description=3)  # type: ignore[arg-type]

    def test_report_width(self) -> None:
        with pytest.raises(ValueError, match="width"):
            ReportConfig(width=10)


# =============================================================================
# Immutability
# =============================================================================


def _value_objects() -> list[Any]:
    return [
        DecoratorSpec("count"),
        ParsedAttribute("value", Kind.GETTER, (DecoratorSpec("count"),)),
        Arguments(args=(1,)),
        make_context(),
        MemberDescription("value"),
        TypeRegistration.empty(),
        DecorationConfig(),
        Attr("value"),
        Index(0),
        Call.of(1),
        ReportConfig(),
        Member(),
        RegistryEntry(chain=len, context=make_context(), labels=()),
        ResolvedDecorator("offset", getter_offset, Arguments()),
    ]


class TestImmutability:
    """Value objects are frozen dataclasses."""

    @pytest.mark.parametrize("obj", _value_objects(), ids=lambda obj: type(obj).__name__)
    def test_frozen(self, obj: Any) -> None:
        field = dataclasses.fields(obj)[0].name
        with pytest.raises(dataclasses.FrozenInstanceError):
            setattr(obj, field, None)

    def test_keyword_arguments_read_only(self) -> None:
        arguments = Arguments(kwargs={"limit": 1})
        with pytest.raises(TypeError):
            arguments.kwargs["limit"] = 2  # type: ignore[index]

    def test_call_kwargs_read_only(self) -> None:
        call = Call.of(limit=1)
        with pytest.raises(TypeError):
            call.kwargs["limit"] = 2  # type: ignore[index]


# =============================================================================
# Error hierarchy
# =============================================================================


def _error_classes() -> list[type[BaseException]]:
    return [
        obj
        for obj in vars(exceptions).values()
        if isinstance(obj, type) and issubclass(obj, BaseException) and obj is not exceptions.DecoratableError
    ]


class TestErrorHierarchy:
    """Every error derives from DecoratableError."""

    @pytest.mark.parametrize("cls", _error_classes(), ids=lambda cls: cls.__name__)
    def test_root(self, cls: type[BaseException]) -> None:
        assert issubclass(cls, exceptions.DecoratableError)

    @pytest.mark.parametrize(
        "cls",
        [c for c in _error_classes() if c not in (exceptions.DecoratedCallbackError, exceptions.DispatchError)],
        ids=lambda cls: cls.__name__,
    )
    def test_builtin_counterpart(self, cls: type[BaseException]) -> None:
        builtins = [b for b in cls.__mro__ if b.__module__ == "builtins" and b not in (Exception, BaseException, object)]
        assert builtins, f"{cls.__name__} has no builtin counterpart"
