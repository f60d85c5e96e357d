"""Service layer."""

from project_manager.services.portal import ClientPortal, ProjectSummary
from project_manager.services.projects import ProjectService, TeamService
from project_manager.services.tasks import TaskService
from project_manager.services.tickets import TicketService

__all__ = ["ClientPortal", "ProjectService", "ProjectSummary", "TaskService", "TeamService", "TicketService"]
