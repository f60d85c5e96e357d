"""Backend interface for project manager storage."""

from abc import ABC, abstractmethod

from project_manager.models import Project, Task, Team, Ticket


class Backend(ABC):
    """Abstract base class for storage backends.

    ``add_*`` methods assign an id and return the stored record. ``get_*`` and
    ``save_*`` raise NotFoundError for unknown ids.
    """

    @abstractmethod
    def add_project(self, project: Project) -> Project:
        """Store a new project."""
        pass

    @abstractmethod
    def get_project(self, project_id: str) -> Project:
        """Read a project by ID."""
        pass

    @abstractmethod
    def list_projects(self) -> list[Project]:
        """List all projects."""
        pass

    @abstractmethod
    def save_project(self, project: Project) -> None:
        """Replace an existing project."""
        pass

    @abstractmethod
    def delete_project(self, project_id: str) -> None:
        """Delete a project."""
        pass

    @abstractmethod
    def add_team(self, team: Team) -> Team:
        """Store a new team."""
        pass

    @abstractmethod
    def get_team(self, team_id: str) -> Team:
        """Read a team by ID."""
        pass

    @abstractmethod
    def list_teams(self) -> list[Team]:
        """List all teams."""
        pass

    @abstractmethod
    def save_team(self, team: Team) -> None:
        """Replace an existing team."""
        pass

    @abstractmethod
    def delete_team(self, team_id: str) -> None:
        """Delete a team."""
        pass

    @abstractmethod
    def add_task(self, task: Task) -> Task:
        """Store a new task."""
        pass

    @abstractmethod
    def get_task(self, task_id: str) -> Task:
        """Read a task by ID."""
        pass

    @abstractmethod
    def list_tasks(self, project_id: str | None = None) -> list[Task]:
        """List tasks, optionally only those of one project."""
        pass

    @abstractmethod
    def save_task(self, task: Task) -> None:
        """Replace an existing task."""
        pass

    @abstractmethod
    def delete_task(self, task_id: str) -> None:
        """Delete a task."""
        pass

    @abstractmethod
    def add_ticket(self, ticket: Ticket) -> Ticket:
        """Store a new ticket."""
        pass

    @abstractmethod
    def get_ticket(self, ticket_id: str) -> Ticket:
        """Read a ticket by ID."""
        pass

    @abstractmethod
    def list_tickets(self, project_id: str | None = None) -> list[Ticket]:
        """List tickets, optionally only those of one project."""
        pass

    @abstractmethod
    def save_ticket(self, ticket: Ticket) -> None:
        """Replace an existing ticket."""
        pass

    @abstractmethod
    def delete_ticket(self, ticket_id: str) -> None:
        """Delete a ticket."""
        pass
