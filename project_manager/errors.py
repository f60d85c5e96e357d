"""Error values and exceptions for project manager.

Validation functions return :class:`Result` values instead of raising. Services
turn failed results into :class:`ValidationError` via :meth:`Result.unwrap`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


class ErrorKind(str, Enum):
    """Kinds of rejected input."""

    UNKNOWN_DEPENDENCY = "UnknownDependency"
    SELF_DEPENDENCY = "SelfDependency"
    CIRCULAR_DEPENDENCY = "CircularDependency"
    BLOCKED_BY_DEPENDENCIES = "BlockedByDependencies"
    UNKNOWN_STATUS = "UnknownStatus"
    ILLEGAL_TRANSITION = "IllegalTransition"


@dataclass(frozen=True)
class DependencyError:
    """A rejected set of dependency edges."""

    kind: ErrorKind
    task_id: str | None
    ids: tuple[str, ...] = ()
    cycle: tuple[str, ...] = ()

    @property
    def message(self) -> str:
        subject = f"Task {self.task_id}" if self.task_id else "New task"
        if self.kind is ErrorKind.UNKNOWN_DEPENDENCY:
            return f"Unknown dependency: {', '.join(self.ids)}"
        if self.kind is ErrorKind.SELF_DEPENDENCY:
            return f"{subject} cannot depend on itself"
        if self.kind is ErrorKind.CIRCULAR_DEPENDENCY:
            return f"Circular dependency detected: {' -> '.join(self.cycle)}"
        return f"{subject} is blocked by unfinished dependencies: {', '.join(self.ids)}"


@dataclass(frozen=True)
class TransitionError:
    """A rejected status change."""

    kind: ErrorKind
    current: str
    proposed: str
    status: str | None = None

    @property
    def message(self) -> str:
        if self.kind is ErrorKind.UNKNOWN_STATUS:
            return f"Unknown status: {self.status}"
        return f"Illegal transition: {self.current} -> {self.proposed}"


@dataclass(frozen=True)
class Result(Generic[T, E]):
    """Outcome of a validation: either a value or an error, never both."""

    value: T | None = None
    error: E | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising ValidationError if the result failed."""
        if self.error is not None:
            raise ValidationError(self.error)
        return self.value  # type: ignore[return-value]


class ValidationError(ValueError):
    """Raised by services when a validation result is rejected."""

    def __init__(self, error: DependencyError | TransitionError) -> None:
        self.error = error
        super().__init__(error.message)

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind


class NotFoundError(LookupError):
    """Raised when a record does not exist in the backend."""

    def __init__(self, kind: str, record_id: str) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind.capitalize()} {record_id} not found")
