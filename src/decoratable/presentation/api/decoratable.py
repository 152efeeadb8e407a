"""Decoratable base class: declarative decoration of class members.

    class Sensor(Decoratable):
        reading = member(0.0, description="GetDecorator = @count")
        label = member("", description="SetDecorator = [@trace, @immutable]")

        @description("Decorator = [@nshot, @delay(3)]")
        def fire(self) -> None: ...

Class creation parses the metadata once per type. Construction runs
__init__ with plain attribute access, then installs every registered
chain on the new instance. From then on, attribute hooks route decorated
members through the dispatcher.
"""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Any, ClassVar, Self

from decoratable.application.registry import REGISTRY_ATTR, registry_of
from decoratable.domain.exceptions import FrozenReceiverError
from decoratable.domain.model.configuration import DecorationConfig
from decoratable.domain.model.enums import Kind
from decoratable.domain.model.member import TypeRegistration
from decoratable.domain.model.path import Attr
from decoratable.presentation.api.engine import DecorationEngine, default_engine

if TYPE_CHECKING:
    from collections.abc import Sequence

    from decoratable.domain.ports.namespace import DecoratorNamespace

_CLASS_OPTIONS = ("decorators", "strict", "value_semantics")


class DecoratableMeta(type):
    """Metaclass performing static registration and post-init installation.

    Class keywords:
        decorators: DecoratorNamespace names resolve in
        strict: Raise on ambiguous metadata text
        value_semantics: Instances are values (setters return new instances)

    Options are inherited by subclasses; explicit keywords override them.
    """

    def __new__(
        mcs,
        name: str,
        bases: tuple[type, ...],
        namespace: dict[str, Any],
        *,
        decorators: DecoratorNamespace | None = None,
        strict: bool | None = None,
        value_semantics: bool | None = None,
        **kwargs: Any,
    ) -> DecoratableMeta:
        """Create a class and register its decorated members."""
        inherited_config = _inherited(bases, "__decoratable_config__", DecorationConfig())
        config = inherited_config.merged(
            namespace=decorators,
            strict=strict,
            value_semantics=value_semantics,
        )

        inherited_engine = _inherited(bases, "__decoratable_engine__", None)
        if inherited_engine is not None and inherited_engine.config == config:
            engine = inherited_engine
        elif config == DecorationConfig():
            engine = default_engine()
        else:
            engine = DecorationEngine(config)

        registration = engine.register(
            namespace,
            _inherited(bases, "__decoratable_registration__", TypeRegistration.empty()),
        )

        namespace["__decoratable_config__"] = config
        namespace["__decoratable_engine__"] = engine
        namespace["__decoratable_registration__"] = registration
        namespace["__value_semantics__"] = config.value_semantics
        return super().__new__(mcs, name, bases, namespace, **kwargs)

    def __init__(cls, name: str, bases: tuple[type, ...], namespace: dict[str, Any], **kwargs: Any) -> None:
        """Drop decoration keywords before type.__init__."""
        for option in _CLASS_OPTIONS:
            kwargs.pop(option, None)
        super().__init__(name, bases, namespace, **kwargs)

    def __call__(cls, *args: Any, **kwargs: Any) -> Any:
        """Construct an instance, then install its registered chains."""
        instance = super().__call__(*args, **kwargs)
        cls.__decoratable_engine__.install(instance, cls.__decoratable_registration__)
        return instance


def _inherited(bases: tuple[type, ...], attribute: str, default: Any) -> Any:
    """Attribute of the first base defining it (MRO order)."""
    for base in bases:
        value = getattr(base, attribute, None)
        if value is not None:
            return value
    return default


class Decoratable(metaclass=DecoratableMeta):
    """Base class for objects with decorated members.

    Reads of a member with a decorated getter return the chain's result.
    Decorated methods are returned as callables dispatching on call.
    Assignments to a member with a decorated setter run the setter chain.

    Accesses from inside the class's own methods go through the chains
    too; the undecorated value is reachable with object.__getattribute__.

    Value-semantics classes (``value_semantics=True``) refuse in-place
    assignment once constructed: use assign(), which returns the updated
    instance.
    """

    __decoratable_intercepts__: ClassVar[bool] = True
    __decoratable_config__: ClassVar[DecorationConfig]
    __decoratable_engine__: ClassVar[DecorationEngine]
    __decoratable_registration__: ClassVar[TypeRegistration]
    __value_semantics__: ClassVar[bool]

    def __getattribute__(self, name: str) -> Any:
        """Route decorated getters and methods through the dispatcher."""
        if name.startswith("__") or name == REGISTRY_ATTR:
            return object.__getattribute__(self, name)
        registry = registry_of(self)
        if registry is None or not registry.intercepts(name):
            return object.__getattribute__(self, name)

        dispatcher = type(self).__decoratable_engine__.dispatcher
        if registry.has(Kind.GETTER, name):
            return dispatcher.read(self, (Attr(name),))
        if registry.has(Kind.METHOD, name):
            return partial(dispatcher.invoke, self, name)
        return object.__getattribute__(self, name)

    def __setattr__(self, name: str, value: Any) -> None:
        """Route assignments to decorated setters through the dispatcher."""
        registry = registry_of(self)
        if registry is None:
            object.__setattr__(self, name, value)
            return
        cls = type(self)
        if cls.__value_semantics__:
            raise FrozenReceiverError(name, cls.__name__)
        if registry.has(Kind.SETTER, name) or registry.has(Kind.METHOD, name):
            cls.__decoratable_engine__.dispatcher.write(self, (Attr(name),), value)
            return
        object.__setattr__(self, name, value)

    def decorate(
        self,
        name: str,
        kind: Kind | str,
        decorator_or_list: object,
        args_per_decorator: Sequence[object] | None = None,
    ) -> Self:
        """Decorate one member of this instance at runtime.

        Args:
            name: Member name
            kind: "getter", "setter", "method" or Kind
            decorator_or_list: Decorator callable or (nested) list of them
            args_per_decorator: Extra arguments aligned with the flattened list

        Returns:
            self
        """
        return type(self).__decoratable_engine__.decorate(self, name, kind, decorator_or_list, args_per_decorator)

    def undecorate(self, name: str, kind: Kind | str) -> bool:
        """Remove the chain of (kind, member); True if one was removed."""
        return type(self).__decoratable_engine__.undecorate(self, name, kind)

    def fetch(self, path: object, nargout: int | None = None) -> Any:
        """Read a (nested) path through decorated getters."""
        return type(self).__decoratable_engine__.read(self, path, nargout)

    def assign(self, path: object, value: object) -> Any:
        """Assign a (nested) path through decorated setters.

        Returns:
            self for reference semantics, the updated instance for value
            semantics
        """
        return type(self).__decoratable_engine__.write(self, path, value)
