"""Ticket commands for project manager CLI."""

from cyclopts import App

ticket_app = App(name="ticket", help="Manage tickets")


@ticket_app.command
def create(
    project_id: str,
    title: str,
    description: str = "",
    priority: str = "medium",
    reporter: str | None = None,
    assignee: str | None = None,
) -> None:
    """Create a new ticket."""
    from project_manager.cli import get_ticket_service

    ticket = get_ticket_service().create_ticket(
        project_id,
        title,
        description=description,
        priority=priority,
        reporter=reporter,
        assignee=assignee,
    )
    print(f"Created ticket {ticket.id}: {ticket.title}")


@ticket_app.command
def show(ticket_id: str) -> None:
    """Show a ticket."""
    from project_manager.cli import get_ticket_service

    ticket = get_ticket_service().get_ticket(ticket_id)
    print(f"Ticket: {ticket.id}")
    print(f"Project: {ticket.project_id}")
    print(f"Title: {ticket.title}")
    print(f"Description: {ticket.description}")
    print(f"Status: {ticket.status}")
    print(f"Priority: {ticket.priority}")
    if ticket.reporter:
        print(f"Reporter: {ticket.reporter}")
    if ticket.assignee:
        print(f"Assignee: {ticket.assignee}")
    if ticket.task_ids:
        print(f"Tasks: {', '.join(ticket.task_ids)}")


@ticket_app.command(name="list")
def list_tickets(project: str | None = None, status: str | None = None) -> None:
    """List tickets with optional filtering."""
    from project_manager.cli import get_ticket_service

    tickets = get_ticket_service().list_tickets(project_id=project, status=status)
    print(f"Found {len(tickets)} ticket(s):\n")
    for ticket in tickets:
        print(f"{ticket.id} [{ticket.status}] {ticket.title}")


@ticket_app.command(name="status")
def change_status(ticket_id: str, new_status: str) -> None:
    """Move a ticket to a new status."""
    from project_manager.cli import get_ticket_service

    ticket = get_ticket_service().change_status(ticket_id, new_status)
    print(f"Ticket {ticket.id} is now {ticket.status}")


@ticket_app.command
def assign(ticket_id: str, assignee: str | None = None) -> None:
    """Assign a ticket, or unassign it when no assignee is given."""
    from project_manager.cli import get_ticket_service

    ticket = get_ticket_service().assign(ticket_id, assignee)
    print(f"Ticket {ticket.id} assigned to {ticket.assignee or 'nobody'}")


@ticket_app.command
def link(ticket_id: str, *task_ids: str) -> None:
    """Link tasks to a ticket."""
    from project_manager.cli import get_ticket_service

    ticket = get_ticket_service().link_tasks(ticket_id, task_ids)
    print(f"Ticket {ticket.id} tasks: {', '.join(ticket.task_ids)}")


@ticket_app.command
def delete(*ticket_ids: str) -> None:
    """Delete one or more tickets."""
    from project_manager.cli import get_ticket_service

    service = get_ticket_service()
    for ticket_id in ticket_ids:
        service.delete_ticket(ticket_id)
    print(f"Deleted {len(ticket_ids)} ticket(s)")
