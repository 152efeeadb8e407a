"""Tests for presentation/api/decoratable.py."""

from typing import Any

import pytest

from decoratable import (
    Batch,
    Decoratable,
    Index,
    Kind,
    MappingNamespace,
    description,
    member,
    read,
)
from decoratable.application.registry import registry_of
from decoratable.domain.exceptions import (
    AssignmentToTemporaryError,
    ContractViolationError,
    DecoratedCallbackError,
    FrozenReceiverError,
    ImmutablePropertyError,
    ParseAmbiguityError,
    ResolutionError,
    ShotLimitExceededError,
)
from decoratable.presentation.api import default_engine
from tests.factories import getter_offset, recorder, setter_scale

LOCAL = MappingNamespace({"offset": getter_offset, "scale": setter_scale})


class Sensor(Decoratable):
    reading = member(1.0, description="GetDecorator = @count")
    label = member(description="SetDecorator = [@trace, @immutable]")
    notes = member("", description="free text, no decorators")

    def __init__(self, label: str = "s1") -> None:
        self.label = label
        self.fired = 0

    @description("Decorator = @nshot(2)")
    def fire(self) -> int:
        self.fired += 1
        return self.fired

    def plain(self) -> str:
        return "plain"


class Gauge(Decoratable, decorators=LOCAL):
    level = member(10, description="GetDecorator = [@offset(1), @offset(100)]")


class Money(Decoratable, decorators=LOCAL, value_semantics=True):
    amount = member(0, description="SetDecorator = @scale(10)")

    def __init__(self, amount: int = 0, currency: str = "EUR") -> None:
        self.amount = amount
        self.currency = currency


class TestStaticRegistration:
    """Class creation parses member metadata once."""

    def test_registration(self) -> None:
        grouped = Sensor.__decoratable_registration__.by_kind()
        assert grouped[Kind.GETTER] == ("reading",)
        assert grouped[Kind.SETTER] == ("label",)
        assert grouped[Kind.METHOD] == ("fire",)

    def test_markers_replaced_by_defaults(self) -> None:
        assert Sensor.__dict__["reading"] == 1.0
        assert "label" not in Sensor.__dict__

    def test_default_config_uses_shared_engine(self) -> None:
        assert Sensor.__decoratable_engine__ is default_engine()

    def test_unresolvable_reference_fails_at_construction(self) -> None:
        class Broken(Decoratable):
            value = member(0, description="GetDecorator = @no_such_policy")

        with pytest.raises(ResolutionError):
            Broken()

    def test_non_strict_ignores_ambiguous_text(self) -> None:
        class Loose(Decoratable):
            value = member(0, description="GetDecorator = count")

        assert Loose.__decoratable_registration__.attributes == ()

    def test_strict_rejects_ambiguous_text(self) -> None:
        with pytest.raises(ParseAmbiguityError):

            class Strict(Decoratable, strict=True):
                value = member(0, description="GetDecorator = count")


class TestConstruction:
    """Chains are installed after __init__."""

    def test_init_writes_are_plain(self) -> None:
        sensor = Sensor("first")
        assert object.__getattribute__(sensor, "label") == "first"
        sensor.label = "second"
        assert sensor.label == "second"

    def test_each_instance_has_own_state(self) -> None:
        first, second = Sensor(), Sensor()
        first.fire()
        first.fire()
        assert second.fire() == 1

    def test_registry_installed(self) -> None:
        registry = registry_of(Sensor())
        assert registry is not None
        assert len(registry) == 3


class TestInterception:
    """Attribute hooks route decorated members through their chains."""

    def test_decorated_getter(self, decoration_log: list[str]) -> None:
        sensor = Sensor()
        decoration_log.clear()
        assert sensor.reading == 1.0
        assert sensor.reading == 1.0
        assert decoration_log == [
            "Object property <reading> has been gotten 1 times",
            "Object property <reading> has been gotten 2 times",
        ]

    def test_decorated_setter(self) -> None:
        sensor = Sensor()
        sensor.label = "once"
        with pytest.raises(DecoratedCallbackError) as exc_info:
            sensor.label = "twice"
        assert isinstance(exc_info.value.original, ImmutablePropertyError)
        assert sensor.label == "once"

    def test_decorated_method(self) -> None:
        sensor = Sensor()
        assert sensor.fire() == 1
        assert sensor.fire() == 2
        with pytest.raises(DecoratedCallbackError) as exc_info:
            sensor.fire()
        assert isinstance(exc_info.value.original, ShotLimitExceededError)
        assert object.__getattribute__(sensor, "fired") == 2

    def test_undecorated_members(self) -> None:
        sensor = Sensor()
        sensor.notes = "n"
        assert sensor.notes == "n"
        assert sensor.plain() == "plain"

    def test_assigning_decorated_method(self) -> None:
        with pytest.raises(AssignmentToTemporaryError):
            Sensor().fire = None

    def test_class_namespace(self) -> None:
        assert Gauge().level == 111


class TestRuntimeDecoration:
    """decorate() / undecorate() on instances."""

    def test_decorate_replaces_registered_chain(self) -> None:
        calls: list[str] = []
        sensor = Sensor()
        assert sensor.decorate("reading", "getter", recorder("r", calls)) is sensor
        assert sensor.reading == 1.0
        assert calls == ["r"]

    def test_decorate_undescribed_member(self) -> None:
        sensor = Sensor()
        sensor.decorate("notes", Kind.GETTER, getter_offset, [(0,)])
        sensor.notes = 5
        assert sensor.notes == 5
        assert Sensor().notes == ""

    def test_contract_violation_keeps_chain(self) -> None:
        sensor = Sensor()
        with pytest.raises(ContractViolationError):
            sensor.decorate("fire", "method", lambda wrapped, ctx: None)
        sensor.fire()
        sensor.fire()
        with pytest.raises(DecoratedCallbackError):
            sensor.fire()

    def test_undecorate(self) -> None:
        sensor = Sensor()
        assert sensor.undecorate("fire", "method")
        for _ in range(3):
            sensor.fire()
        assert sensor.fired == 3


class TestPaths:
    """fetch() / assign() with nested paths."""

    def test_fetch_nested(self) -> None:
        sensor = Sensor()
        sensor.notes = {"unit": "C"}
        assert sensor.fetch(["notes", Index("unit")]) == "C"

    def test_assign_nested_writes_through(self) -> None:
        sensor = Sensor()
        shared = {"unit": "C"}
        sensor.notes = shared
        assert sensor.assign(["notes", Index("unit")], "F") is sensor
        assert sensor.notes is shared
        assert shared == {"unit": "F"}

    def test_read_batch(self, decoration_log: list[str]) -> None:
        batch = Batch([Sensor(), Sensor(), Sensor()])
        decoration_log.clear()
        assert read(batch, "reading", nargout=2) == (1.0, 1.0)
        assert len(decoration_log) == 2


class TestValueSemantics:
    """value_semantics=True classes."""

    def test_in_place_assignment_refused(self) -> None:
        money = Money(1)
        with pytest.raises(FrozenReceiverError, match="use assign"):
            money.currency = "USD"

    def test_assign_returns_new_instance(self) -> None:
        money = Money(1)
        changed = money.assign("currency", "USD")
        assert changed is not money
        assert (changed.currency, money.currency) == ("USD", "EUR")

    def test_setter_chain_on_value(self) -> None:
        money = Money(1)
        changed = money.assign("amount", 2)
        assert changed.amount == 20
        assert money.amount == 1

    def test_clone_keeps_chains(self) -> None:
        changed = Money().assign("amount", 1)
        assert changed.assign("amount", 1).amount == 10
        assert registry_of(changed).has(Kind.SETTER, "amount")  # type: ignore[union-attr]


class TestInheritance:
    """Subclasses inherit registration and options."""

    def test_inherited_members(self) -> None:
        class Probe(Sensor):
            pass

        probe = Probe()
        probe.fire()
        probe.fire()
        with pytest.raises(DecoratedCallbackError):
            probe.fire()

    def test_redefined_member_drops_inherited_entry(self) -> None:
        class Quiet(Sensor):
            def fire(self) -> int:
                return 0

        quiet = Quiet()
        assert [quiet.fire() for _ in range(3)] == [0, 0, 0]

    def test_options_inherited(self) -> None:
        class Coin(Money):
            pass

        assert Coin.__decoratable_config__.value_semantics
        with pytest.raises(FrozenReceiverError):
            Coin().amount = 2

    def test_engine_reused_for_equal_config(self) -> None:
        class Dial(Gauge):
            pass

        assert Dial.__decoratable_engine__ is Gauge.__decoratable_engine__
        assert Dial().level == 111

    def test_explicit_option_overrides(self) -> None:
        class Mutable(Money, value_semantics=False):
            pass

        assert not Mutable.__decoratable_config__.value_semantics
        assert Mutable.__decoratable_config__.namespace is LOCAL
        mutable = Mutable(1)
        mutable.amount = 2
        assert mutable.amount == 20

    def test_class_keywords_not_passed_to_type(self) -> None:
        class Strictish(Decoratable, strict=True):
            value: Any = member(0)

        assert Strictish().value == 0
