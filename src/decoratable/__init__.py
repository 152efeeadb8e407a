"""decoratable - declarative decorator chains for properties and methods.

    class Sensor(Decoratable):
        reading = member(0.0, description="GetDecorator = @count")

        @description("Decorator = [@nshot, @delay(3)]")
        def fire(self) -> None: ...

Logging goes through loguru and is disabled by default; enable it with
``logger.enable("decoratable")``.
"""

__version__ = "0.1.0"

from loguru import logger

from decoratable.application.reporters import DecorationReporter, ReportConfig
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
from decoratable.domain.model import (
    Arguments,
    Attr,
    Batch,
    Call,
    ChainState,
    Context,
    DecorationConfig,
    Index,
    Kind,
)
from decoratable.infrastructure import (
    ChainedNamespace,
    ImportNamespace,
    MappingNamespace,
    description,
    member,
)
from decoratable.presentation.api import (
    Decoratable,
    DecorationEngine,
    decorate,
    invoke,
    read,
    report,
    write,
)

logger.disable("decoratable")

__all__ = [
    "__version__",
    # Declaration
    "Decoratable",
    "description",
    "member",
    # Runtime API
    "DecorationEngine",
    "decorate",
    "invoke",
    "read",
    "report",
    "write",
    # Model
    "Arguments",
    "Attr",
    "Batch",
    "Call",
    "ChainState",
    "Context",
    "DecorationConfig",
    "Index",
    "Kind",
    # Namespaces
    "ChainedNamespace",
    "ImportNamespace",
    "MappingNamespace",
    # Reporting
    "DecorationReporter",
    "ReportConfig",
    # Errors
    "AccessRestrictedError",
    "AmbiguousIntermediateIndexError",
    "ArgumentEvaluationError",
    "AssignmentToTemporaryError",
    "ContractViolationError",
    "DecoratableError",
    "DecoratedCallbackError",
    "DispatchError",
    "FrozenReceiverError",
    "ImmutablePropertyError",
    "MultiAssignError",
    "ParseAmbiguityError",
    "PolicyKindError",
    "ResolutionError",
    "ShotLimitExceededError",
    "TooManyOutputsError",
]
