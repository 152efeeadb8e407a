"""decoratable domain layer.

Pure domain logic with no external dependencies.
Only imports: typing, abc, dataclasses, enum, types, collections.abc
"""

from decoratable.domain.exceptions import (
    AccessRestrictedError,
    AmbiguousIntermediateIndexError,
    ArgumentEvaluationError,
    AssignmentToTemporaryError,
    ContractViolationError,
    DecoratableError,
    DecoratedCallbackError,
    DispatchError,
    FrozenReceiverError,
    ImmutablePropertyError,
    MultiAssignError,
    ParseAmbiguityError,
    PolicyKindError,
    ResolutionError,
    ShotLimitExceededError,
    TooManyOutputsError,
)

__all__ = [
    # Decoration time
    "ArgumentEvaluationError",
    "ContractViolationError",
    "DecoratableError",
    "ParseAmbiguityError",
    "ResolutionError",
    # Dispatch time
    "AmbiguousIntermediateIndexError",
    "AssignmentToTemporaryError",
    "DecoratedCallbackError",
    "DispatchError",
    "FrozenReceiverError",
    "MultiAssignError",
    "TooManyOutputsError",
    # Policies
    "AccessRestrictedError",
    "ImmutablePropertyError",
    "PolicyKindError",
    "ShotLimitExceededError",
]
