"""Domain exceptions: all public errors of decoratable.

Hexagonal architecture: all exceptions visible to users defined in domain.
Application/Infrastructure raise these, not define their own public exceptions.

Each error also inherits the closest builtin exception so callers that do not
know about decoratable still catch it (LookupError, TypeError, ...).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from decoratable.domain.model.enums import Kind


class DecoratableError(Exception):
    """Base for all decoratable error exceptions.

    Allows: except DecoratableError to catch all library errors.
    """


# =============================================================================
# Decoration-time errors
# =============================================================================


class ParseAmbiguityError(DecoratableError, ValueError):
    """Attribute text mentions a decorator keyword but has no unique clause.

    Only raised by a strict parser. The default parser logs a warning and
    treats the member as undecorated.

    Attributes:
        keyword: Keyword searched for (SetDecorator, GetDecorator, Decorator).
        text: Full metadata text.
        matches: Number of clauses found (0 or > 1).
    """

    def __init__(self, *, keyword: str, text: str, matches: int) -> None:
        """Initialize with keyword, text and match count."""
        self.keyword = keyword
        self.text = text
        self.matches = matches
        super().__init__(f"ambiguous {keyword} clause ({matches} matches) in {text!r}")


class ResolutionError(DecoratableError, LookupError):
    """Named decorator cannot be resolved.

    Attributes:
        reference_name: Reference as written in the attribute (without '@').
        reason: Why resolution failed.
    """

    def __init__(self, reference_name: str, reason: str) -> None:
        """Initialize with reference name and reason."""
        self.reference_name = reference_name
        self.reason = reason
        super().__init__(f"cannot resolve decorator '@{reference_name}': {reason}")


class ArgumentEvaluationError(ResolutionError):
    """Decorator argument text is not a literal argument list.

    Attributes:
        text: Raw argument text.
    """

    def __init__(self, reference_name: str, text: str, reason: str) -> None:
        """Initialize with reference name, raw text and reason."""
        self.text = text
        super().__init__(reference_name, f"invalid arguments ({text}): {reason}")


class ContractViolationError(DecoratableError, TypeError):
    """Decorator or composed chain does not satisfy the calling contract.

    Raised at decoration time (the registry entry is left untouched) and,
    for value-semantics setters that return nothing, at dispatch time.

    Attributes:
        kind: Member kind being decorated.
        name: Member name.
        step: 0-based source position of the failing decorator.
            None when the failure is not tied to one step.
        reason: What the contract check found.
    """

    def __init__(self, *, kind: Kind, name: str, step: int | None, reason: str) -> None:
        """Initialize with kind, name, step and reason."""
        self.kind = kind
        self.name = name
        self.step = step
        self.reason = reason
        where = "" if step is None else f" (step {step})"
        super().__init__(f"cannot decorate the {kind.value} of '{name}'{where}: {reason}")


# =============================================================================
# Dispatch-time errors
# =============================================================================


class DecoratedCallbackError(DecoratableError):
    """Exception raised from inside a decorated chain.

    Wraps the original exception. Preserves original traceback via __cause__.

    Attributes:
        kind: Kind of the decorated member.
        name: Member name.
        original: Original exception from the chain.
    """

    def __init__(self, *, kind: Kind, name: str, original: BaseException) -> None:
        """Initialize with kind, name and original exception."""
        self.kind = kind
        self.name = name
        self.original = original
        super().__init__(
            f"Error while evaluating the decorated {kind.value} of '{name}'\n"
            f">> {type(original).__name__}: {original}"
        )
        self.__cause__ = original


class DispatchError(DecoratableError):
    """Base for receiver-shape errors detected by the dispatcher.

    These propagate with their own identity, never wrapped.

    Attributes:
        name: Member name being accessed.
    """

    def __init__(self, name: str, message: str) -> None:
        """Initialize with member name and message."""
        self.name = name
        super().__init__(message)


class MultiAssignError(DispatchError, ValueError):
    """Assignment into a member of an aggregate of more than one instance.

    Attributes:
        count: Number of instances in the receiver.
    """

    def __init__(self, name: str, count: int) -> None:
        """Initialize with member name and receiver size."""
        self.count = count
        super().__init__(name, f"cannot assign '{name}' on {count} instances at once")


class AmbiguousIntermediateIndexError(DispatchError, IndexError):
    """Chained access through a member of an aggregate of more than one instance.

    Attributes:
        count: Number of instances in the receiver.
    """

    def __init__(self, name: str, count: int) -> None:
        """Initialize with member name and receiver size."""
        self.count = count
        super().__init__(
            name,
            f"intermediate access to '{name}' must yield one value, receiver has {count} instances",
        )


class AssignmentToTemporaryError(DispatchError, TypeError):
    """Assignment into the value-semantics result of a method call."""

    def __init__(self, name: str) -> None:
        """Initialize with member name."""
        super().__init__(name, f"cannot assign into the temporary result of '{name}'")


class TooManyOutputsError(DispatchError, ValueError):
    """More outputs requested than instances in the receiver.

    Attributes:
        requested: Number of outputs requested.
        available: Number of instances in the receiver.
    """

    def __init__(self, name: str, requested: int, available: int) -> None:
        """Initialize with member name, requested and available outputs."""
        self.requested = requested
        self.available = available
        super().__init__(
            name,
            f"too many outputs requested from '{name}': {requested} > {available}",
        )


class FrozenReceiverError(DispatchError, AttributeError):
    """In-place assignment on a value-semantics instance.

    Value-semantics instances are updated with assign(), which returns
    the new instance.
    """

    def __init__(self, name: str, type_name: str) -> None:
        """Initialize with member name and receiver type name."""
        super().__init__(
            name,
            f"cannot assign '{name}' in place on value-semantics {type_name}; use assign()",
        )


# =============================================================================
# Policy errors (reference decorators)
# =============================================================================


class PolicyKindError(DecoratableError, TypeError):
    """Policy applied to a kind of member it does not support.

    Raised while the chain is built, so the decoration is reported as a
    ContractViolationError for that step.

    Attributes:
        policy: Policy name.
        kind: Kind of the decorated member.
        supported: Kinds the policy supports.
    """

    def __init__(self, policy: str, kind: Kind, supported: tuple[Kind, ...]) -> None:
        """Initialize with policy name, kind and supported kinds."""
        self.policy = policy
        self.kind = kind
        self.supported = supported
        allowed = ", ".join(k.value for k in supported)
        super().__init__(f"@{policy} cannot decorate a {kind.value} (supported: {allowed})")


class ShotLimitExceededError(DecoratableError, RuntimeError):
    """Method called more often than its shot limit allows.

    Attributes:
        name: Method name.
        limit: Maximum number of calls.
    """

    def __init__(self, name: str, limit: int) -> None:
        """Initialize with method name and limit."""
        self.name = name
        self.limit = limit
        super().__init__(
            f"'{name}' is {limit}-shot and has already been called the maximum number of times allowed"
        )


class ImmutablePropertyError(DecoratableError, AttributeError):
    """Property set a second time.

    Attributes:
        name: Property name.
    """

    def __init__(self, name: str) -> None:
        """Initialize with property name."""
        self.name = name
        super().__init__(f"property '{name}' can only be set once")


class AccessRestrictedError(DecoratableError, PermissionError):
    """Access to a member marked private.

    Attributes:
        name: Member name.
        kind: Kind of access refused.
        owner: Name of the class owning the member.
    """

    def __init__(self, name: str, kind: Kind, owner: str) -> None:
        """Initialize with member name, kind and owner class name."""
        self.name = name
        self.kind = kind
        self.owner = owner
        action = {"getter": "read", "setter": "set", "method": "called"}[kind.value]
        super().__init__(f"'{name}' of {owner} is private and cannot be {action}")
