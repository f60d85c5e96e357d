"""Tests for the client portal."""

from datetime import date
from unittest.mock import MagicMock

import pytest

from project_manager.backend import Backend
from project_manager.backends import MemoryBackend
from project_manager.models import Project
from project_manager.services import ClientPortal, ProjectService, TaskService, TicketService
from project_manager.workflow import TASK_WORKFLOW, TICKET_WORKFLOW


@pytest.fixture
def portal(backend: MemoryBackend) -> ClientPortal:
    return ClientPortal(backend, TASK_WORKFLOW)


def test_empty_project_summary(portal: ClientPortal, project: Project) -> None:
    """Test a project without tasks has zero completion."""
    summary = portal.project_summary(project.id, today=date(2026, 1, 1))
    assert summary.name == "Website relaunch"
    assert summary.total_tasks == 0
    assert summary.completion == 0.0
    assert summary.status_counts == {"todo": 0, "in-progress": 0, "review": 0, "done": 0}


def test_project_summary(
    portal: ClientPortal, project: Project, task_service: TaskService, ticket_service: TicketService
) -> None:
    """Test counts, completion, overdue tasks and open tickets."""
    design = task_service.create_task(project.id, "Design", due_date=date(2026, 1, 10))
    task_service.create_task(project.id, "Build", due_date=date(2026, 1, 5))
    task_service.create_task(project.id, "Ship", due_date=date(2026, 3, 1))
    task_service.create_task(project.id, "Docs")
    for status in ("in-progress", "review", "done"):
        task_service.change_status(design.id, status)

    resolved = ticket_service.create_ticket(project.id, "Bug")
    ticket_service.create_ticket(project.id, "Question")
    ticket_service.change_status(resolved.id, "in-progress")
    ticket_service.change_status(resolved.id, "resolved")

    summary = portal.project_summary(project.id, today=date(2026, 2, 1))

    assert summary.status_counts == {"todo": 3, "in-progress": 0, "review": 0, "done": 1}
    assert summary.total_tasks == 4
    assert summary.completion == 25.0
    assert summary.overdue_task_ids == ["T-2"]
    assert summary.open_tickets == 1


def test_list_projects_for_client(portal: ClientPortal, backend: MemoryBackend, project: Project) -> None:
    """Test clients only see their own projects."""
    ProjectService(backend).create_project("Intranet", client="globex")
    assert [p.id for p in portal.list_projects("acme")] == [project.id]
    assert portal.list_projects("initech") == []


def test_portal_never_writes() -> None:
    """Test building a summary only reads from the backend."""
    backend = MagicMock(spec=Backend)
    backend.get_project.return_value = Project(id="P-1", name="Website")
    backend.list_tasks.return_value = []
    backend.list_tickets.return_value = []

    ClientPortal(backend, TASK_WORKFLOW).project_summary("P-1", today=date(2026, 1, 1))

    for name in ("add_task", "save_task", "delete_task", "save_project", "add_ticket", "save_ticket"):
        getattr(backend, name).assert_not_called()


def test_portal_checks_statuses_against_workflows(backend: MemoryBackend) -> None:
    """Test completion and ticket statuses must belong to their workflows."""
    with pytest.raises(ValueError, match="finished not in the workflow"):
        ClientPortal(backend, TASK_WORKFLOW, done_statuses=["finished"])
    with pytest.raises(ValueError, match="archived not in the workflow"):
        ClientPortal(backend, TASK_WORKFLOW, closed_ticket_statuses=["archived"], ticket_workflow=TICKET_WORKFLOW)

    portal = ClientPortal(backend, TASK_WORKFLOW, ticket_workflow=TICKET_WORKFLOW)
    assert portal.closed_ticket_statuses == frozenset({"resolved", "closed"})
