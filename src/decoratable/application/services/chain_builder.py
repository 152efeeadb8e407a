"""Chain builder: composes decorators around a base accessor.

Decorator contract:
    decorator(wrapped, context, *args, **kwargs) -> callable

For links [l1, ..., ln] around base b the chain is l1(l2(...ln(b))):
ln wraps first, l1 ends up outermost and runs first.

Every decorator is checked before anything is applied, then the chain
is checked after every wrap step:
    - getter chain: callable taking exactly one positional (receiver)
    - setter chain: callable taking exactly two positionals (receiver, value)
    - method chain: callable

Failures raise ContractViolationError with the 0-based source position
of the offending decorator. Nothing is stored here: the caller installs
the returned chain only on success.
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any

from decoratable.domain.exceptions import ContractViolationError
from decoratable.domain.model.arguments import Arguments
from decoratable.domain.model.enums import Kind

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from decoratable.application.services.resolver import ResolvedDecorator
    from decoratable.domain.model.context import Context

_ARITY: dict[Kind, int] = {Kind.GETTER: 1, Kind.SETTER: 2}
_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


# =============================================================================
# Contract checks
# =============================================================================


def flatten_decorators(value: object) -> tuple[object, ...]:
    """Flatten nested lists/tuples of decorators in order."""
    if isinstance(value, (list, tuple)):
        return tuple(item for element in value for item in flatten_decorators(element))
    return (value,)


def check_decorator(
    decorator: object,
    kind: Kind,
    name: str,
    step: int,
    arguments: Arguments | None = None,
) -> None:
    """Check a decorator (or list of decorators) against the contract.

    The decorator must be callable with (wrapped, context, *args, **kwargs).
    Lists are checked element-wise, steps counted from step.

    Raises:
        ContractViolationError: If the decorator cannot be applied
    """
    if isinstance(decorator, (list, tuple)):
        for offset, element in enumerate(flatten_decorators(decorator)):
            check_decorator(element, kind, name, step + offset, arguments)
        return

    if not callable(decorator):
        raise ContractViolationError(
            kind=kind,
            name=name,
            step=step,
            reason=f"decorator must be callable, got {type(decorator).__name__}",
        )

    arguments = arguments or Arguments()
    signature = _signature(decorator)
    if signature is None:
        return
    try:
        signature.bind(None, None, *arguments.args, **arguments.kwargs)
    except TypeError as exc:
        raise ContractViolationError(
            kind=kind,
            name=name,
            step=step,
            reason=f"{_label(decorator)} cannot take (wrapped, context{_extra(arguments)}): {exc}",
        ) from None


def check_chain(chain: object, kind: Kind, name: str, step: int) -> None:
    """Check a composed chain against the calling convention of kind.

    Raises:
        ContractViolationError: If the chain is not callable or has the
            wrong positional arity
    """
    if not callable(chain):
        found = "nothing" if chain is None else type(chain).__name__
        raise ContractViolationError(
            kind=kind,
            name=name,
            step=step,
            reason=f"decorator returned {found}, expected a callable",
        )

    arity = _ARITY.get(kind)
    if arity is None or _takes_positionals(chain, arity):
        return
    raise ContractViolationError(
        kind=kind,
        name=name,
        step=step,
        reason=f"{kind.value} chain must take exactly {arity} positional argument(s), "
        f"got signature {_signature(chain)}",
    )


# =============================================================================
# Builder
# =============================================================================


class ChainBuilder:
    """Builds validated chains from resolved decorators."""

    __slots__ = ()

    def build(
        self,
        base: Callable[..., Any],
        context: Context,
        links: Sequence[ResolvedDecorator],
    ) -> Callable[..., Any]:
        """Compose links around base.

        Args:
            base: Default accessor for (context.kind, context.name)
            context: Context passed to every decorator
            links: Decorators in source order

        Returns:
            Composed chain

        Raises:
            ContractViolationError: If no link is given, a decorator breaks
                the contract, raises while applied, or produces an invalid
                chain
        """
        kind, name = context.kind, context.name
        if not links:
            raise ContractViolationError(kind=kind, name=name, step=None, reason="no decorators given")

        for step, link in enumerate(links):
            check_decorator(link.decorator, kind, name, step, link.arguments)

        chain = base
        for step in reversed(range(len(links))):
            link = links[step]
            try:
                chain = link.decorator(chain, context, *link.arguments.args, **link.arguments.kwargs)
            except Exception as exc:
                raise ContractViolationError(
                    kind=kind,
                    name=name,
                    step=step,
                    reason=f"@{link.label} raised {type(exc).__name__}: {exc}",
                ) from exc
            check_chain(chain, kind, name, step)

        return chain


# =============================================================================
# Helpers
# =============================================================================


def _signature(fn: object) -> inspect.Signature | None:
    """Signature of fn, None if it cannot be inspected."""
    try:
        return inspect.signature(fn)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None


def _takes_positionals(fn: object, count: int) -> bool:
    """Check fn can be called with exactly count positional arguments.

    Uninspectable callables pass. Variadic callables pass if their
    required positionals fit in count.
    """
    signature = _signature(fn)
    if signature is None:
        return True
    try:
        signature.bind(*([None] * count))
    except TypeError:
        return False
    params = signature.parameters.values()
    if any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params):
        return True
    return sum(1 for p in params if p.kind in _POSITIONAL) == count


def _label(decorator: object) -> str:
    """Readable name of a decorator callable."""
    return getattr(decorator, "__qualname__", None) or type(decorator).__name__


def _extra(arguments: Arguments) -> str:
    """Extra arguments formatted after (wrapped, context)."""
    return f", {arguments}" if arguments else ""
