"""Tests for infrastructure/metadata.py."""

from typing import Any

import pytest

from decoratable.domain.model.member import MemberDescription
from decoratable.infrastructure.metadata import (
    DESCRIPTION_ATTR,
    MISSING,
    ClassMetadataSource,
    Member,
    description,
    member,
)


class TestMarkers:
    """Tests for member() and description()."""

    def test_member_defaults(self) -> None:
        marker = member()
        assert marker == Member(default=MISSING, description="")

    def test_member_rejects_non_string(self) -> None:
        with pytest.raises(TypeError, match="description must be str"):
            member(0, description=3)  # type: ignore[arg-type]

    def test_description_attaches_text(self) -> None:
        @description("Decorator = @nshot")
        def fire(self: Any) -> None: ...

        assert getattr(fire, DESCRIPTION_ATTR) == "Decorator = @nshot"

    def test_description_on_staticmethod(self) -> None:
        marked = description("Decorator = @trace")(staticmethod(lambda: None))
        assert getattr(marked.__func__, DESCRIPTION_ATTR) == "Decorator = @trace"

    def test_description_rejects_non_string(self) -> None:
        with pytest.raises(TypeError, match="description must be str"):
            description(None)  # type: ignore[arg-type]


class TestClassMetadataSource:
    """Tests for namespace scanning."""

    def test_member_replaced_by_default(self) -> None:
        namespace: dict[str, Any] = {"value": member(5, description="GetDecorator = @count")}
        described = ClassMetadataSource().describe(namespace)
        assert namespace["value"] == 5
        assert described == (MemberDescription("value", "GetDecorator = @count"),)

    def test_member_without_default_removed(self) -> None:
        namespace: dict[str, Any] = {"value": member(description="SetDecorator = @immutable")}
        ClassMetadataSource().describe(namespace)
        assert "value" not in namespace

    def test_methods(self) -> None:
        @description("Decorator = @nshot")
        def fire(self: Any) -> None: ...

        def plain(self: Any) -> None: ...

        described = ClassMetadataSource().describe({"fire": fire, "plain": plain})
        assert described == (
            MemberDescription("fire", "Decorator = @nshot", is_method=True),
            MemberDescription("plain", "", is_method=True),
        )

    def test_property_reads_getter_description(self) -> None:
        @description("GetDecorator = @trace")
        def area(self: Any) -> int:
            return 1

        described = ClassMetadataSource().describe({"area": property(area)})
        assert described == (MemberDescription("area", "GetDecorator = @trace"),)

    def test_dunders_skipped(self) -> None:
        described = ClassMetadataSource().describe({"__module__": "m", "__init__": lambda self: None})
        assert described == ()

    def test_plain_values_and_nested_classes(self) -> None:
        class Inner: ...

        described = ClassMetadataSource().describe({"LIMIT": 3, "Inner": Inner})
        assert described == (MemberDescription("LIMIT"), MemberDescription("Inner"))
