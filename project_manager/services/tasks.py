"""Task management service.

Status changes go through the task workflow and dependency edits through the
dependency validator before anything is saved.
"""

from collections.abc import Iterable
from datetime import date

import structlog

from project_manager.backend import Backend
from project_manager.dependencies import dependents_of, find_cycles, validate_dependencies
from project_manager.errors import DependencyError, ErrorKind, ValidationError
from project_manager.models import PRIORITIES, Task
from project_manager.workflow import WorkflowConfig, statuses_in, transition

logger = structlog.get_logger()

DEPENDENCY_SCOPES = ("project", "global")


def check_priority(priority: str) -> str:
    if priority not in PRIORITIES:
        raise ValueError(f"Invalid priority '{priority}', expected one of: {', '.join(PRIORITIES)}")
    return priority


def check_date_range(start_date: date | None, due_date: date | None) -> None:
    if start_date is not None and due_date is not None and start_date > due_date:
        raise ValueError(f"Start date {start_date} is after due date {due_date}")


def detach_tasks(backend: Backend, task_ids: Iterable[str]) -> None:
    """Remove task ids from every task's dependencies and every ticket's links.

    Call before deleting the tasks so no stored record points at them.
    """
    removed = set(task_ids)
    if not removed:
        return

    for task in backend.list_tasks():
        if task.id in removed or removed.isdisjoint(task.dependencies):
            continue
        task.dependencies = [dep for dep in task.dependencies if dep not in removed]
        logger.debug("Removing dependency on deleted task", task_id=task.id, removed=sorted(removed))
        backend.save_task(task)

    for ticket in backend.list_tickets():
        if removed.isdisjoint(ticket.task_ids):
            continue
        ticket.task_ids = [tid for tid in ticket.task_ids if tid not in removed]
        logger.debug("Unlinking deleted task", ticket_id=ticket.id, removed=sorted(removed))
        backend.save_ticket(ticket)


class TaskService:
    """Create tasks, change their status and manage their dependencies."""

    def __init__(
        self,
        backend: Backend,
        workflow: WorkflowConfig,
        dependency_scope: str = "project",
        done_statuses: Iterable[str] = ("done",),
        enforce_completion: bool = True,
    ) -> None:
        """Initialize task service.

        Args:
            backend: Storage backend
            workflow: Task workflow
            dependency_scope: "project" to restrict dependencies to the task's project, "global" for all tasks
            done_statuses: Statuses counting as finished
            enforce_completion: Refuse to finish a task while its dependencies are unfinished
        """
        if dependency_scope not in DEPENDENCY_SCOPES:
            raise ValueError(f"Invalid dependency scope '{dependency_scope}', expected one of: project, global")
        self.backend = backend
        self.workflow = workflow
        self.dependency_scope = dependency_scope
        self.done_statuses = statuses_in(workflow, done_statuses)
        self.enforce_completion = enforce_completion

    def _scope(self, project_id: str) -> list[Task]:
        if self.dependency_scope == "project":
            return self.backend.list_tasks(project_id)
        return self.backend.list_tasks()

    def _validated(self, task: Task | None, project_id: str, dependency_ids: Iterable[str]) -> list[str]:
        result = validate_dependencies(task, self._scope(project_id), dependency_ids)
        return list(result.unwrap())

    def create_task(
        self,
        project_id: str,
        title: str,
        description: str = "",
        priority: str = "medium",
        start_date: date | None = None,
        due_date: date | None = None,
        assignee: str | None = None,
        dependencies: Iterable[str] = (),
        status: str | None = None,
        labels: dict[str, str] | None = None,
    ) -> Task:
        """Create a new task in a project."""
        self.backend.get_project(project_id)
        title = title.strip()
        if not title:
            raise ValueError("Task title cannot be empty")
        check_priority(priority)
        check_date_range(start_date, due_date)

        status = status or self.workflow.statuses[0]
        if status not in self.workflow.statuses:
            raise ValueError(f"Unknown status: {status}")

        dependency_ids = self._validated(None, project_id, dependencies)

        logger.info("Creating task", project_id=project_id, title=title, status=status)
        task = self.backend.add_task(
            Task(
                id="",
                project_id=project_id,
                title=title,
                description=description,
                status=status,
                dependencies=dependency_ids,
                priority=priority,
                start_date=start_date,
                due_date=due_date,
                assignee=assignee,
                labels=labels or {},
            )
        )
        logger.info("Task created", task_id=task.id)
        return task

    def get_task(self, task_id: str) -> Task:
        return self.backend.get_task(task_id)

    def list_tasks(
        self,
        project_id: str | None = None,
        status: str | None = None,
        assignee: str | None = None,
    ) -> list[Task]:
        tasks = self.backend.list_tasks(project_id)
        if status is not None:
            tasks = [task for task in tasks if task.status == status]
        if assignee is not None:
            tasks = [task for task in tasks if task.assignee == assignee]
        return tasks

    def update_task(
        self,
        task_id: str,
        title: str | None = None,
        description: str | None = None,
        priority: str | None = None,
        start_date: date | None = None,
        due_date: date | None = None,
        assignee: str | None = None,
    ) -> Task:
        """Update task fields. Fields left as None are unchanged."""
        task = self.backend.get_task(task_id)
        if title is not None:
            if not title.strip():
                raise ValueError("Task title cannot be empty")
            task.title = title.strip()
        if description is not None:
            task.description = description
        if priority is not None:
            task.priority = check_priority(priority)
        if start_date is not None:
            task.start_date = start_date
        if due_date is not None:
            task.due_date = due_date
        check_date_range(task.start_date, task.due_date)
        if assignee is not None:
            task.assignee = assignee

        logger.info("Updating task", task_id=task_id)
        self.backend.save_task(task)
        return task

    def unfinished_dependencies(self, task: Task) -> list[str]:
        """Return dependency ids whose task is not in a done status."""
        unfinished = []
        for dependency_id in task.dependencies:
            dependency = self.backend.get_task(dependency_id)
            if dependency.status not in self.done_statuses:
                unfinished.append(dependency_id)
        return unfinished

    def change_status(self, task_id: str, status: str) -> Task:
        """Move a task to a new status."""
        task = self.backend.get_task(task_id)
        new_status = transition(self.workflow, task.status, status).unwrap()

        if self.enforce_completion and new_status in self.done_statuses and task.status != new_status:
            unfinished = self.unfinished_dependencies(task)
            if unfinished:
                logger.warning("Task blocked by dependencies", task_id=task_id, unfinished=unfinished)
                raise ValidationError(DependencyError(ErrorKind.BLOCKED_BY_DEPENDENCIES, task_id, ids=tuple(unfinished)))

        logger.info("Changing task status", task_id=task_id, current=task.status, proposed=new_status)
        task.status = new_status
        self.backend.save_task(task)
        return task

    def set_dependencies(self, task_id: str, dependency_ids: Iterable[str]) -> Task:
        """Replace the dependencies of a task."""
        task = self.backend.get_task(task_id)
        task.dependencies = self._validated(task, task.project_id, dependency_ids)
        logger.info("Setting task dependencies", task_id=task_id, dependencies=task.dependencies)
        self.backend.save_task(task)
        return task

    def add_dependencies(self, task_id: str, dependency_ids: Iterable[str]) -> Task:
        task = self.backend.get_task(task_id)
        return self.set_dependencies(task_id, [*task.dependencies, *dependency_ids])

    def remove_dependencies(self, task_id: str, dependency_ids: Iterable[str]) -> Task:
        task = self.backend.get_task(task_id)
        removed = set(dependency_ids)
        return self.set_dependencies(task_id, [dep for dep in task.dependencies if dep not in removed])

    def delete_task(self, task_id: str) -> None:
        """Delete a task and drop it from the dependencies of its dependents."""
        self.backend.get_task(task_id)
        detach_tasks(self.backend, [task_id])
        logger.info("Deleting task", task_id=task_id)
        self.backend.delete_task(task_id)

    def dependents(self, task_id: str) -> list[Task]:
        """Tasks that depend directly on a task."""
        self.backend.get_task(task_id)
        return dependents_of(task_id, self.backend.list_tasks())

    def find_cycles(self, project_id: str | None = None) -> list[list[str]]:
        """Find dependency cycles among stored tasks."""
        return find_cycles(self.backend.list_tasks(project_id))

    def blocked_tasks(self, project_id: str | None = None) -> list[Task]:
        """Tasks not yet done that have at least one unfinished dependency."""
        tasks = self.backend.list_tasks(project_id)
        status_by_id = {task.id: task.status for task in self.backend.list_tasks()}
        return [
            task
            for task in tasks
            if task.status not in self.done_statuses
            and any(status_by_id.get(dep) not in self.done_statuses for dep in task.dependencies)
        ]
