"""Tests for policies/guards.py."""

from typing import Any

import pytest

from decoratable.domain.exceptions import (
    AccessRestrictedError,
    ImmutablePropertyError,
    PolicyKindError,
    ShotLimitExceededError,
)
from decoratable.domain.model.enums import Kind
from decoratable.policies import immutable, nshot, private
from tests.factories import Plain, make_context


def _setter(receiver: Any, value: Any) -> None:
    receiver.value = value


def _method(receiver: Any) -> str:
    return "done"


class TestImmutable:
    """Tests for @immutable."""

    def test_first_set_allowed(self) -> None:
        chain = immutable(_setter, make_context(Kind.SETTER))
        obj = Plain()
        chain(obj, 1)
        assert obj.value == 1

    def test_second_set_refused(self) -> None:
        chain = immutable(_setter, make_context(Kind.SETTER))
        obj = Plain()
        chain(obj, 1)
        with pytest.raises(ImmutablePropertyError, match="can only be set once"):
            chain(obj, 2)
        assert obj.value == 1

    def test_failed_set_does_not_count(self) -> None:
        def broken(receiver: Any, value: Any) -> None:
            raise OSError("disk full")

        chain = immutable(broken, make_context(Kind.SETTER))
        with pytest.raises(OSError):
            chain(Plain(), 1)
        with pytest.raises(OSError):
            chain(Plain(), 1)

    @pytest.mark.parametrize("kind", [Kind.GETTER, Kind.METHOD])
    def test_other_kinds_refused(self, kind: Kind) -> None:
        with pytest.raises(PolicyKindError, match="@immutable cannot decorate"):
            immutable(_setter, make_context(kind))


class TestNshot:
    """Tests for @nshot."""

    def test_default_single_shot(self) -> None:
        chain = nshot(_method, make_context(Kind.METHOD, "fire"))
        assert chain(Plain()) == "done"
        with pytest.raises(ShotLimitExceededError, match="'fire' is 1-shot"):
            chain(Plain())

    def test_limit(self) -> None:
        chain = nshot(_method, make_context(Kind.METHOD, "fire"), 3)
        for _ in range(3):
            chain(Plain())
        with pytest.raises(ShotLimitExceededError) as exc_info:
            chain(Plain())
        assert exc_info.value.limit == 3

    def test_failed_call_not_counted(self) -> None:
        outcomes = iter([ValueError("flaky"), None])

        def flaky(receiver: Any) -> str:
            outcome = next(outcomes)
            if outcome is not None:
                raise outcome
            return "ok"

        chain = nshot(flaky, make_context(Kind.METHOD, "fire"))
        with pytest.raises(ValueError):
            chain(Plain())
        assert chain(Plain()) == "ok"

    @pytest.mark.parametrize("limit", [0, -2, 1.5, True, "3"])
    def test_invalid_limit(self, limit: Any) -> None:
        with pytest.raises(ValueError, match="limit"):
            nshot(_method, make_context(Kind.METHOD), limit)

    def test_getter_refused(self) -> None:
        with pytest.raises(PolicyKindError, match="supported: method"):
            nshot(_method, make_context(Kind.GETTER))


class TestPrivate:
    """Tests for @private."""

    @pytest.mark.parametrize(
        ("kind", "args", "action"),
        [
            (Kind.GETTER, (), "read"),
            (Kind.SETTER, (1,), "set"),
            (Kind.METHOD, (), "called"),
        ],
    )
    def test_refuses_every_kind(self, kind: Kind, args: tuple[Any, ...], action: str) -> None:
        obj = Plain()
        chain = private(_method, make_context(kind, "secret", source=obj))
        with pytest.raises(AccessRestrictedError, match=f"'secret' of Plain is private and cannot be {action}"):
            chain(obj, *args)

    def test_is_permission_error(self) -> None:
        chain = private(_method, make_context(Kind.GETTER, "secret", source=Plain()))
        with pytest.raises(PermissionError):
            chain(Plain())
