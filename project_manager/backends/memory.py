"""In-memory backend implementation."""

import copy
from typing import Any, TypeVar

import structlog

from project_manager.backend import Backend
from project_manager.errors import NotFoundError
from project_manager.models import Project, Task, Team, Ticket

logger = structlog.get_logger()

Record = TypeVar("Record", Project, Team, Task, Ticket)

ID_PREFIXES = {"project": "P", "team": "TM", "task": "T", "ticket": "TK"}


class MemoryBackend(Backend):
    """Backend keeping every record in dictionaries.

    Records are copied on the way in and on the way out, so callers never
    mutate stored state without calling ``save_*``.
    """

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._records: dict[str, dict[str, Any]] = {kind: {} for kind in ID_PREFIXES}
        self._counters: dict[str, int] = {kind: 0 for kind in ID_PREFIXES}
        logger.debug("Memory backend initialized")

    def _changed(self) -> None:
        """Hook called after every mutation."""

    def _next_id(self, kind: str) -> str:
        self._counters[kind] += 1
        return f"{ID_PREFIXES[kind]}-{self._counters[kind]}"

    def _add(self, kind: str, record: Record) -> Record:
        stored = copy.deepcopy(record)
        stored.id = self._next_id(kind)
        if stored.id in self._records[kind]:
            raise ValueError(f"Cannot add {kind} {stored.id}: id is already in use")
        self._records[kind][stored.id] = stored
        logger.debug("Record added", kind=kind, record_id=stored.id)
        self._changed()
        return copy.deepcopy(stored)

    def _get(self, kind: str, record_id: str) -> Any:
        try:
            return copy.deepcopy(self._records[kind][record_id])
        except KeyError:
            raise NotFoundError(kind, record_id) from None

    def _list(self, kind: str, project_id: str | None = None) -> list[Any]:
        records = self._records[kind].values()
        if project_id is not None:
            records = [record for record in records if record.project_id == project_id]
        return [copy.deepcopy(record) for record in records]

    def _save(self, kind: str, record: Record) -> None:
        if record.id not in self._records[kind]:
            raise NotFoundError(kind, record.id)
        self._records[kind][record.id] = copy.deepcopy(record)
        logger.debug("Record saved", kind=kind, record_id=record.id)
        self._changed()

    def _delete(self, kind: str, record_id: str) -> None:
        if self._records[kind].pop(record_id, None) is None:
            raise NotFoundError(kind, record_id)
        logger.debug("Record deleted", kind=kind, record_id=record_id)
        self._changed()

    def add_project(self, project: Project) -> Project:
        return self._add("project", project)

    def get_project(self, project_id: str) -> Project:
        return self._get("project", project_id)

    def list_projects(self) -> list[Project]:
        return self._list("project")

    def save_project(self, project: Project) -> None:
        self._save("project", project)

    def delete_project(self, project_id: str) -> None:
        self._delete("project", project_id)

    def add_team(self, team: Team) -> Team:
        return self._add("team", team)

    def get_team(self, team_id: str) -> Team:
        return self._get("team", team_id)

    def list_teams(self) -> list[Team]:
        return self._list("team")

    def save_team(self, team: Team) -> None:
        self._save("team", team)

    def delete_team(self, team_id: str) -> None:
        self._delete("team", team_id)

    def add_task(self, task: Task) -> Task:
        return self._add("task", task)

    def get_task(self, task_id: str) -> Task:
        return self._get("task", task_id)

    def list_tasks(self, project_id: str | None = None) -> list[Task]:
        return self._list("task", project_id)

    def save_task(self, task: Task) -> None:
        self._save("task", task)

    def delete_task(self, task_id: str) -> None:
        self._delete("task", task_id)

    def add_ticket(self, ticket: Ticket) -> Ticket:
        return self._add("ticket", ticket)

    def get_ticket(self, ticket_id: str) -> Ticket:
        return self._get("ticket", ticket_id)

    def list_tickets(self, project_id: str | None = None) -> list[Ticket]:
        return self._list("ticket", project_id)

    def save_ticket(self, ticket: Ticket) -> None:
        self._save("ticket", ticket)

    def delete_ticket(self, ticket_id: str) -> None:
        self._delete("ticket", ticket_id)
