"""
Error handling for schema extraction.

Every error raised while building a schema is a build-time configuration
error: it points at how a host type declares its API, and the type's
author fixes it. Nothing here is transient or retryable, so errors carry
a stable code, a user-facing message and the member they concern.

Subclasses only differ in their defaults (code, severity, user message,
suggested fixes); all of them share DslSchemaError's constructor.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum, IntEnum
from typing import Any, ClassVar


class ErrorCode(IntEnum):
    """Stable error codes, grouped by error class."""

    # Scope (1xxx): a type is missing from the schema
    TYPE_NOT_IN_SCOPE = 1001
    TYPE_NOT_INDEXED = 1002

    # Semantics conflicts (2xxx): a role tag contradicts the signature
    RECEIVER_REQUIRED = 2001
    ADDING_UNIT_WITH_BLOCK = 2002
    CONFIGURING_PARAMETER_COUNT = 2003
    CONFIGURING_NOT_A_BLOCK = 2004
    PROPERTY_TYPE_MISMATCH = 2005
    PROPERTY_NOT_FOUND = 2006
    AMBIGUOUS_RETURN_TYPE = 2007
    BUILDER_PARAMETER_COUNT = 2008

    # Shape (3xxx): a declaration the schema cannot express
    UNEXPECTED_RECEIVER = 3001
    NOT_A_CLASS = 3002
    UNCLASSIFIABLE_TYPE = 3003
    MISSING_ANNOTATION = 3004
    VARIADIC_PARAMETER = 3005

    # Configuration (4xxx): misuse of tags or extraction targets
    INVALID_TAG = 4001
    INVALID_TARGET = 4002


class ErrorSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class RecoveryAction:
    """A suggested fix, optionally with a command to run."""

    description: str
    command: str | None = None


@dataclass
class ErrorContext:
    """Where in the schema an error was detected."""

    operation: str | None = None
    type_name: str | None = None
    member_name: str | None = None
    component: str | None = None
    additional_info: dict[str, Any] = field(default_factory=dict)


# Context fields shown by get_formatted_message, with their labels.
_CONTEXT_LABELS = (
    ("operation", "Operation"),
    ("type_name", "Type"),
    ("member_name", "Member"),
    ("component", "Component"),
)


class DslSchemaError(Exception):
    """Base error class for dslschema.

    Args:
        message: Developer-facing detail, naming the type and member.
        code: Overrides the class default code.
        user_message: Overrides the class default one-line summary.
        context: Where the error was detected.
        recovery_actions: Overrides the class default suggested fixes.
        original_error: The exception this one wraps, if any.
    """

    default_code: ClassVar[ErrorCode | None] = None
    default_user_message: ClassVar[str] = "Schema extraction failed."
    default_recovery_actions: ClassVar[tuple[RecoveryAction, ...]] = ()
    severity: ClassVar[ErrorSeverity] = ErrorSeverity.MEDIUM

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode | None = None,
        user_message: str | None = None,
        context: ErrorContext | None = None,
        recovery_actions: list[RecoveryAction] | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        resolved_code = code if code is not None else self.default_code
        if resolved_code is None:
            raise TypeError(f"{type(self).__name__} requires an error code")
        self.code = resolved_code
        self.user_message = user_message or self.default_user_message
        self.context = context or ErrorContext()
        self.recovery_actions = (
            list(recovery_actions)
            if recovery_actions is not None
            else list(self.default_recovery_actions)
        )
        self.original_error = original_error

    def get_formatted_message(self) -> str:
        """Multi-line report for terminals (used by the CLI on stderr)."""
        lines = [f"[Error] {self.user_message}", f"   Code: {self.code.value}", f"   Detail: {self}"]
        lines += [
            f"   {label}: {getattr(self.context, attr)}"
            for attr, label in _CONTEXT_LABELS
            if getattr(self.context, attr)
        ]
        if self.recovery_actions:
            lines += ["", "Suggested actions:"]
            for number, action in enumerate(self.recovery_actions, 1):
                lines.append(f"   {number}. {action.description}")
                if action.command:
                    lines.append(f"      Run: {action.command}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable form of the error."""
        return {
            "name": type(self).__name__,
            "code": self.code.value,
            "message": str(self),
            "user_message": self.user_message,
            "severity": self.severity.value,
            "context": asdict(self.context),
            "recovery_actions": [asdict(action) for action in self.recovery_actions],
            "original_error": None if self.original_error is None else str(self.original_error),
        }


class ScopeError(DslSchemaError):
    """A referenced type is not registered in the schema under construction."""

    default_code = ErrorCode.TYPE_NOT_IN_SCOPE
    default_user_message = "Type is not part of the schema."
    default_recovery_actions = (
        RecoveryAction("Register the type with the pre-index before extraction"),
    )
    severity = ErrorSeverity.HIGH


class SemanticsConflictError(DslSchemaError):
    """A role tag contradicts the static shape of the function it is on."""

    default_user_message = "Function tags conflict with its signature."
    severity = ErrorSeverity.HIGH


class ShapeError(DslSchemaError):
    """A function or type does not have the structural shape the schema needs."""

    default_user_message = "Unsupported declaration shape."
    severity = ErrorSeverity.HIGH


class ConfigurationError(DslSchemaError):
    """Misuse of tags or extraction targets."""

    default_code = ErrorCode.INVALID_TARGET
    default_user_message = "Configuration error occurred."
