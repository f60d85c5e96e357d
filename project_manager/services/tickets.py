"""Ticket management service."""

from collections.abc import Iterable

import structlog

from project_manager.backend import Backend
from project_manager.models import Ticket
from project_manager.services.tasks import check_priority
from project_manager.workflow import WorkflowConfig, transition

logger = structlog.get_logger()


class TicketService:
    """Create tickets and move them through the ticket workflow."""

    def __init__(self, backend: Backend, workflow: WorkflowConfig) -> None:
        self.backend = backend
        self.workflow = workflow

    def create_ticket(
        self,
        project_id: str,
        title: str,
        description: str = "",
        priority: str = "medium",
        reporter: str | None = None,
        assignee: str | None = None,
    ) -> Ticket:
        """Create a ticket in the first status of the ticket workflow."""
        self.backend.get_project(project_id)
        title = title.strip()
        if not title:
            raise ValueError("Ticket title cannot be empty")
        check_priority(priority)

        logger.info("Creating ticket", project_id=project_id, title=title, reporter=reporter)
        ticket = self.backend.add_ticket(
            Ticket(
                id="",
                project_id=project_id,
                title=title,
                description=description,
                status=self.workflow.statuses[0],
                priority=priority,
                reporter=reporter,
                assignee=assignee,
            )
        )
        logger.info("Ticket created", ticket_id=ticket.id)
        return ticket

    def get_ticket(self, ticket_id: str) -> Ticket:
        return self.backend.get_ticket(ticket_id)

    def list_tickets(self, project_id: str | None = None, status: str | None = None) -> list[Ticket]:
        tickets = self.backend.list_tickets(project_id)
        if status is not None:
            tickets = [ticket for ticket in tickets if ticket.status == status]
        return tickets

    def change_status(self, ticket_id: str, status: str) -> Ticket:
        ticket = self.backend.get_ticket(ticket_id)
        new_status = transition(self.workflow, ticket.status, status).unwrap()
        logger.info("Changing ticket status", ticket_id=ticket_id, current=ticket.status, proposed=new_status)
        ticket.status = new_status
        self.backend.save_ticket(ticket)
        return ticket

    def assign(self, ticket_id: str, assignee: str | None) -> Ticket:
        ticket = self.backend.get_ticket(ticket_id)
        logger.info("Assigning ticket", ticket_id=ticket_id, assignee=assignee)
        ticket.assignee = assignee
        self.backend.save_ticket(ticket)
        return ticket

    def link_tasks(self, ticket_id: str, task_ids: Iterable[str]) -> Ticket:
        """Link tasks raised for a ticket. Tasks must belong to the ticket's project."""
        ticket = self.backend.get_ticket(ticket_id)
        for task_id in task_ids:
            task = self.backend.get_task(task_id)
            if task.project_id != ticket.project_id:
                raise ValueError(f"Task {task_id} does not belong to project {ticket.project_id}")
            if task_id not in ticket.task_ids:
                ticket.task_ids.append(task_id)

        logger.info("Linking tasks to ticket", ticket_id=ticket_id, task_ids=ticket.task_ids)
        self.backend.save_ticket(ticket)
        return ticket

    def delete_ticket(self, ticket_id: str) -> None:
        logger.info("Deleting ticket", ticket_id=ticket_id)
        self.backend.delete_ticket(ticket_id)
