"""Data models for project manager."""

from dataclasses import dataclass, field
from datetime import date

PRIORITIES = ("low", "medium", "high", "urgent")


@dataclass
class Project:
    """Represents a project owning tasks and tickets."""

    id: str
    name: str
    description: str = ""
    client: str | None = None
    team_id: str | None = None
    labels: dict[str, str] = field(default_factory=dict)


@dataclass
class Team:
    """Represents a team of people working on projects."""

    id: str
    name: str
    members: list[str] = field(default_factory=list)


@dataclass
class Task:
    """Represents a unit of work inside a project."""

    id: str
    project_id: str
    title: str
    description: str = ""
    status: str = "todo"
    dependencies: list[str] = field(default_factory=list)
    priority: str = "medium"
    start_date: date | None = None
    due_date: date | None = None
    assignee: str | None = None
    labels: dict[str, str] = field(default_factory=dict)


@dataclass
class Ticket:
    """Represents a support or change request raised against a project."""

    id: str
    project_id: str
    title: str
    description: str = ""
    status: str = "open"
    priority: str = "medium"
    reporter: str | None = None
    assignee: str | None = None
    task_ids: list[str] = field(default_factory=list)
