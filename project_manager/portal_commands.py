"""Client portal commands for project manager CLI."""

from cyclopts import App

portal_app = App(name="portal", help="Read-only client views")


@portal_app.command
def projects(client: str) -> None:
    """List the projects of a client."""
    from project_manager.cli import get_portal

    found = get_portal().list_projects(client)
    if not found:
        print(f"No projects for {client}")
        return

    print(f"Projects for {client}:\n")
    for project in found:
        print(f"  {project.id}: {project.name}")


@portal_app.command
def summary(project_id: str) -> None:
    """Show the progress of a project."""
    from project_manager.cli import get_portal

    result = get_portal().project_summary(project_id)
    print(f"Project: {result.project_id} {result.name}")
    print(f"Tasks: {result.total_tasks} ({result.completion}% complete)")
    for status, count in result.status_counts.items():
        print(f"  {status}: {count}")
    if result.overdue_task_ids:
        print(f"Overdue: {', '.join(result.overdue_task_ids)}")
    print(f"Open tickets: {result.open_tickets}")
