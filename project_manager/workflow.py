"""Configurable status workflows shared by tasks and tickets."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

import structlog

from project_manager.errors import ErrorKind, Result, TransitionError

logger = structlog.get_logger()


@dataclass(frozen=True)
class WorkflowConfig:
    """Valid statuses and the transitions allowed between them.

    ``transitions`` maps each status to the statuses it may move to. Statuses
    without an entry have no outgoing transitions. Staying in the same status
    is always allowed and is not listed.
    """

    statuses: tuple[str, ...]
    transitions: Mapping[str, frozenset[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        statuses = tuple(dict.fromkeys(self.statuses))
        if not statuses:
            raise ValueError("Workflow needs at least one status")

        members = set(statuses)
        table: dict[str, frozenset[str]] = {status: frozenset() for status in statuses}
        for source, targets in self.transitions.items():
            if source not in members:
                raise ValueError(f"Transition source '{source}' is not a workflow status")
            targets = frozenset(targets)
            undefined = sorted(targets - members)
            if undefined:
                raise ValueError(f"Transition targets {undefined} from '{source}' are not workflow statuses")
            table[source] = targets

        object.__setattr__(self, "statuses", statuses)
        object.__setattr__(self, "transitions", MappingProxyType(table))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WorkflowConfig":
        """Build a workflow from ``{"statuses": [...], "transitions": {...}}``."""
        if "statuses" not in data:
            raise ValueError("Workflow configuration requires 'statuses'")
        statuses = data["statuses"]
        if not isinstance(statuses, (list, tuple)):
            raise ValueError(f"Workflow 'statuses' must be a list, got {type(statuses).__name__}: {statuses!r}")
        transitions = data.get("transitions") or {}
        if not isinstance(transitions, Mapping):
            raise ValueError(f"Workflow 'transitions' must be a mapping, got {type(transitions).__name__}")
        for source, targets in transitions.items():
            if targets is not None and not isinstance(targets, (list, tuple)):
                raise ValueError(f"Transition targets from '{source}' must be a list, got {targets!r}")
        return cls(
            statuses=tuple(statuses),
            transitions={source: frozenset(targets or ()) for source, targets in transitions.items()},
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain representation, targets in status order."""
        return {
            "statuses": list(self.statuses),
            "transitions": {
                source: [status for status in self.statuses if status in targets]
                for source, targets in self.transitions.items()
                if targets
            },
        }


@dataclass(frozen=True)
class TransitionRequest:
    """A proposed status change."""

    current_status: str
    proposed_status: str


TASK_WORKFLOW = WorkflowConfig(
    statuses=("todo", "in-progress", "review", "done"),
    transitions={
        "todo": frozenset({"in-progress"}),
        "in-progress": frozenset({"review", "todo"}),
        "review": frozenset({"done", "in-progress"}),
    },
)

TICKET_WORKFLOW = WorkflowConfig(
    statuses=("open", "in-progress", "resolved", "closed"),
    transitions={
        "open": frozenset({"in-progress", "closed"}),
        "in-progress": frozenset({"resolved", "open"}),
        "resolved": frozenset({"closed", "in-progress"}),
        "closed": frozenset({"open"}),
    },
)

DEFAULT_WORKFLOWS = {"task": TASK_WORKFLOW, "ticket": TICKET_WORKFLOW}


def transition(config: WorkflowConfig, current_status: str, proposed_status: str) -> Result[str, TransitionError]:
    """Check a status change against a workflow.

    Returns:
        Result holding the accepted status, or a TransitionError of kind
        UnknownStatus or IllegalTransition
    """
    for status in (current_status, proposed_status):
        if status not in config.statuses:
            logger.warning("Unknown status", status=status, statuses=list(config.statuses))
            return Result(error=TransitionError(ErrorKind.UNKNOWN_STATUS, current_status, proposed_status, status))

    if proposed_status == current_status or proposed_status in config.transitions[current_status]:
        return Result(value=proposed_status)

    logger.warning("Illegal transition", current=current_status, proposed=proposed_status)
    return Result(error=TransitionError(ErrorKind.ILLEGAL_TRANSITION, current_status, proposed_status))


def can_transition(config: WorkflowConfig, current_status: str, proposed_status: str) -> bool:
    """Return True if the status change is legal."""
    return transition(config, current_status, proposed_status).ok


def check_request(config: WorkflowConfig, request: TransitionRequest) -> Result[str, TransitionError]:
    return transition(config, request.current_status, request.proposed_status)


def allowed_transitions(config: WorkflowConfig, current_status: str) -> list[str]:
    """List the statuses reachable in one step, in workflow order."""
    targets = config.transitions.get(current_status, frozenset())
    return [status for status in config.statuses if status in targets]


def statuses_in(config: WorkflowConfig, names: Iterable[str]) -> frozenset[str]:
    """Return the names as a set, all of which must be statuses of the workflow.

    Raises:
        ValueError: If no names are given or one of them is not a workflow status
    """
    names = list(dict.fromkeys(names))
    if not names:
        raise ValueError("At least one status is required")
    unknown = [name for name in names if name not in config.statuses]
    if unknown:
        logger.error("Statuses not in workflow", unknown=unknown, statuses=list(config.statuses))
        raise ValueError(
            f"Status(es) {', '.join(unknown)} not in the workflow, expected some of: {', '.join(config.statuses)}"
        )
    return frozenset(names)
