"""Shared fixtures."""

import pytest

from project_manager.backends import MemoryBackend
from project_manager.models import Project
from project_manager.services import ProjectService, TaskService, TicketService
from project_manager.workflow import TASK_WORKFLOW, TICKET_WORKFLOW


@pytest.fixture
def backend() -> MemoryBackend:
    """Create an empty in-memory backend."""
    return MemoryBackend()


@pytest.fixture
def project(backend: MemoryBackend) -> Project:
    """Create a project to hold tasks and tickets."""
    return ProjectService(backend).create_project("Website relaunch", client="acme")


@pytest.fixture
def task_service(backend: MemoryBackend) -> TaskService:
    """Create a task service with the default task workflow."""
    return TaskService(backend, TASK_WORKFLOW)


@pytest.fixture
def ticket_service(backend: MemoryBackend) -> TicketService:
    """Create a ticket service with the default ticket workflow."""
    return TicketService(backend, TICKET_WORKFLOW)
