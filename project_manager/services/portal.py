"""Read-only client portal views."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

import structlog

from project_manager.backend import Backend
from project_manager.models import Project
from project_manager.workflow import WorkflowConfig, statuses_in

logger = structlog.get_logger()


@dataclass
class ProjectSummary:
    """Progress of a project as shown to its client."""

    project_id: str
    name: str
    status_counts: dict[str, int] = field(default_factory=dict)
    total_tasks: int = 0
    completion: float = 0.0
    overdue_task_ids: list[str] = field(default_factory=list)
    open_tickets: int = 0


class ClientPortal:
    """Read-only views over projects for clients. Never writes to the backend."""

    def __init__(
        self,
        backend: Backend,
        task_workflow: WorkflowConfig,
        done_statuses: Iterable[str] = ("done",),
        closed_ticket_statuses: Iterable[str] = ("resolved", "closed"),
        ticket_workflow: WorkflowConfig | None = None,
    ) -> None:
        self.backend = backend
        self.task_workflow = task_workflow
        self.done_statuses = statuses_in(task_workflow, done_statuses)
        if ticket_workflow is not None:
            self.closed_ticket_statuses = statuses_in(ticket_workflow, closed_ticket_statuses)
        else:
            self.closed_ticket_statuses = frozenset(closed_ticket_statuses)

    def list_projects(self, client: str) -> list[Project]:
        return [project for project in self.backend.list_projects() if project.client == client]

    def project_summary(self, project_id: str, today: date | None = None) -> ProjectSummary:
        """Summarize task progress and ticket load for a project.

        Args:
            project_id: Project to summarize
            today: Reference date for overdue tasks (defaults to the current date)

        Returns:
            ProjectSummary with counts in workflow status order
        """
        today = today or date.today()
        project = self.backend.get_project(project_id)
        tasks = self.backend.list_tasks(project_id)
        tickets = self.backend.list_tickets(project_id)
        logger.debug("Building project summary", project_id=project_id, tasks=len(tasks), tickets=len(tickets))

        counts = {status: 0 for status in self.task_workflow.statuses}
        for task in tasks:
            # Tasks stored under a status the workflow no longer has still count
            counts[task.status] = counts.get(task.status, 0) + 1

        done = sum(1 for task in tasks if task.status in self.done_statuses)
        overdue = [
            task.id
            for task in tasks
            if task.due_date is not None and task.due_date < today and task.status not in self.done_statuses
        ]

        return ProjectSummary(
            project_id=project.id,
            name=project.name,
            status_counts=counts,
            total_tasks=len(tasks),
            completion=round(100.0 * done / len(tasks), 1) if tasks else 0.0,
            overdue_task_ids=overdue,
            open_tickets=sum(1 for ticket in tickets if ticket.status not in self.closed_ticket_statuses),
        )
