"""Tests for application/services/chain_builder.py."""

from typing import Any

import pytest

from decoratable.application.services.chain_builder import (
    ChainBuilder,
    check_chain,
    check_decorator,
    flatten_decorators,
)
from decoratable.application.services.resolver import ResolvedDecorator
from decoratable.domain.exceptions import ContractViolationError
from decoratable.domain.model.arguments import Arguments
from decoratable.domain.model.enums import Kind
from tests.factories import failing, getter_offset, make_context, recorder, returns_nothing


def _link(decorator: Any, *args: Any, **kwargs: Any) -> ResolvedDecorator:
    name = getattr(decorator, "__name__", "link")
    return ResolvedDecorator(name, decorator, Arguments(args=args, kwargs=kwargs))


def _base_getter(receiver: Any) -> Any:
    return receiver


def _base_setter(receiver: Any, value: Any) -> None:
    return None


def _two_positional_getter(wrapped: Any, ctx: Any) -> Any:
    def getter(receiver: Any, extra: Any) -> Any:
        return wrapped(receiver)

    return getter


class TestFlatten:
    """Tests for flatten_decorators."""

    def test_single(self) -> None:
        assert flatten_decorators(getter_offset) == (getter_offset,)

    def test_nested_lists_in_order(self) -> None:
        a, b, c = recorder("a", []), recorder("b", []), recorder("c", [])
        assert flatten_decorators([a, [b, (c,)]]) == (a, b, c)


class TestCheckDecorator:
    """Tests for check_decorator."""

    def test_accepts_contract(self) -> None:
        check_decorator(getter_offset, Kind.GETTER, "value", 0, Arguments(args=(3,)))

    def test_rejects_non_callable(self) -> None:
        with pytest.raises(ContractViolationError, match="must be callable") as exc_info:
            check_decorator("count", Kind.GETTER, "value", 2)
        assert exc_info.value.step == 2

    def test_rejects_single_parameter(self) -> None:
        with pytest.raises(ContractViolationError, match="cannot take"):
            check_decorator(lambda wrapped: wrapped, Kind.GETTER, "value", 0)

    def test_rejects_unexpected_arguments(self) -> None:
        with pytest.raises(ContractViolationError, match="cannot take"):
            check_decorator(getter_offset, Kind.GETTER, "value", 0, Arguments(args=(1, 2)))

    def test_list_checked_element_wise(self) -> None:
        with pytest.raises(ContractViolationError) as exc_info:
            check_decorator([getter_offset, [getter_offset, 7]], Kind.GETTER, "value", 0)
        assert exc_info.value.step == 2

    def test_uninspectable_accepted(self) -> None:
        check_decorator(print, Kind.METHOD, "fire", 0)


class TestCheckChain:
    """Tests for check_chain."""

    def test_getter_needs_one_positional(self) -> None:
        check_chain(_base_getter, Kind.GETTER, "value", 0)
        with pytest.raises(ContractViolationError, match="exactly 1 positional"):
            check_chain(_base_setter, Kind.GETTER, "value", 0)

    def test_setter_needs_two_positionals(self) -> None:
        check_chain(_base_setter, Kind.SETTER, "value", 0)
        with pytest.raises(ContractViolationError, match="exactly 2 positional"):
            check_chain(_base_getter, Kind.SETTER, "value", 0)

    def test_optional_extra_parameter_rejected(self) -> None:
        def getter(receiver: Any, extra: Any = None) -> Any:
            return receiver

        with pytest.raises(ContractViolationError):
            check_chain(getter, Kind.GETTER, "value", 0)

    def test_variadic_accepted(self) -> None:
        def wrapper(*args: Any, **kwargs: Any) -> Any: ...

        check_chain(wrapper, Kind.GETTER, "value", 0)
        check_chain(wrapper, Kind.SETTER, "value", 0)

    def test_method_only_needs_callable(self) -> None:
        check_chain(lambda: None, Kind.METHOD, "fire", 0)

    def test_none_rejected(self) -> None:
        with pytest.raises(ContractViolationError, match="returned nothing"):
            check_chain(None, Kind.METHOD, "fire", 3)


class TestBuild:
    """Tests for ChainBuilder.build."""

    def test_leftmost_is_outermost(self) -> None:
        calls: list[str] = []
        ctx = make_context(Kind.GETTER)
        chain = ChainBuilder().build(
            _base_getter,
            ctx,
            [_link(recorder("d1", calls)), _link(recorder("d2", calls))],
        )
        assert chain("receiver") == "receiver"
        assert calls == ["d1", "d2"]

    def test_arguments_passed(self) -> None:
        chain = ChainBuilder().build(
            _base_getter,
            make_context(Kind.GETTER),
            [_link(getter_offset, 10), _link(getter_offset, offset=100)],
        )
        assert chain(1) == 111

    def test_context_shared_by_links(self) -> None:
        seen: list[Any] = []

        def capture(wrapped: Any, ctx: Any) -> Any:
            seen.append(ctx)
            return wrapped

        ctx = make_context(Kind.METHOD, "fire")
        ChainBuilder().build(lambda r: r, ctx, [_link(capture), _link(capture)])
        assert seen == [ctx, ctx]
        assert seen[0] is seen[1]

    def test_empty_links(self) -> None:
        with pytest.raises(ContractViolationError, match="no decorators"):
            ChainBuilder().build(_base_getter, make_context(), [])

    def test_zero_output_decorator(self) -> None:
        with pytest.raises(ContractViolationError, match="returned nothing") as exc_info:
            ChainBuilder().build(
                _base_getter,
                make_context(),
                [_link(getter_offset), _link(returns_nothing)],
            )
        assert exc_info.value.step == 1

    def test_arity_checked_after_each_step(self) -> None:
        calls: list[str] = []
        with pytest.raises(ContractViolationError) as exc_info:
            ChainBuilder().build(
                _base_getter,
                make_context(),
                [_link(recorder("outer", calls)), _link(_two_positional_getter)],
            )
        assert exc_info.value.step == 1

    def test_decorator_raising_is_contract_violation(self) -> None:
        def explode(wrapped: Any, ctx: Any) -> Any:
            raise ValueError("cannot wrap")

        with pytest.raises(ContractViolationError, match="raised ValueError") as exc_info:
            ChainBuilder().build(_base_getter, make_context(), [_link(explode)])
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_invalid_decorator_detected_before_any_apply(self) -> None:
        applied: list[str] = []

        def track(wrapped: Any, ctx: Any) -> Any:
            applied.append("track")
            return wrapped

        with pytest.raises(ContractViolationError) as exc_info:
            ChainBuilder().build(
                _base_getter,
                make_context(),
                [_link(getter_offset, 1, 2), _link(track)],
            )
        assert exc_info.value.step == 0
        assert applied == []

    def test_runtime_failure_not_checked_at_build(self) -> None:
        chain = ChainBuilder().build(_base_getter, make_context(), [_link(failing)])
        with pytest.raises(RuntimeError, match="value failed"):
            chain(object())
