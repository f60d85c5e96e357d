"""Task commands for project manager CLI."""

from cyclopts import App

task_app = App(name="task", help="Manage tasks, their status and dependencies")


@task_app.command
def create(
    project_id: str,
    title: str,
    description: str = "",
    priority: str = "medium",
    start: str | None = None,
    due: str | None = None,
    assignee: str | None = None,
    depends_on: str = "",
    labels: str = "",
) -> None:
    """Create a new task.

    Args:
        project_id: Project the task belongs to
        title: Task title
        description: Task description
        priority: low, medium, high or urgent
        start: Start date (YYYY-MM-DD)
        due: Due date (YYYY-MM-DD)
        assignee: Person working on the task
        depends_on: Comma separated ids of tasks this task depends on
        labels: Comma separated key:value labels
    """
    from project_manager.cli import get_task_service, parse_date, parse_ids, parse_labels

    task = get_task_service().create_task(
        project_id,
        title,
        description=description,
        priority=priority,
        start_date=parse_date(start),
        due_date=parse_date(due),
        assignee=assignee,
        dependencies=parse_ids(depends_on),
        labels=parse_labels(labels),
    )
    print(f"Created task {task.id}: {task.title}")


@task_app.command
def show(task_id: str) -> None:
    """Show a task."""
    from project_manager.cli import format_labels, get_task_service

    service = get_task_service()
    task = service.get_task(task_id)
    dependents = service.dependents(task_id)
    print(f"Task: {task.id}")
    print(f"Project: {task.project_id}")
    print(f"Title: {task.title}")
    print(f"Description: {task.description}")
    print(f"Status: {task.status}")
    print(f"Priority: {task.priority}")
    if task.start_date or task.due_date:
        print(f"Dates: {task.start_date or '-'} .. {task.due_date or '-'}")
    if task.assignee:
        print(f"Assignee: {task.assignee}")
    if task.dependencies:
        print(f"Depends on: {', '.join(task.dependencies)}")
    if dependents:
        print(f"Required by: {', '.join(dependent.id for dependent in dependents)}")
    if task.labels:
        print(f"Labels: {format_labels(task.labels)}")


@task_app.command(name="list")
def list_tasks(
    project: str | None = None,
    status: str | None = None,
    assignee: str | None = None,
) -> None:
    """List tasks with optional filtering."""
    from project_manager.cli import get_task_service

    service = get_task_service()
    tasks = service.list_tasks(project_id=project, status=status, assignee=assignee)

    print(f"Found {len(tasks)} task(s):\n")
    for task in tasks:
        status_marker = "○" if task.status in service.done_statuses else "●"
        deps = f" <- {', '.join(task.dependencies)}" if task.dependencies else ""
        print(f"{status_marker} {task.id} [{task.status}] {task.title}{deps}")


@task_app.command
def update(
    task_id: str,
    title: str | None = None,
    description: str | None = None,
    priority: str | None = None,
    start: str | None = None,
    due: str | None = None,
    assignee: str | None = None,
) -> None:
    """Update a task."""
    from project_manager.cli import get_task_service, parse_date

    task = get_task_service().update_task(
        task_id,
        title=title,
        description=description,
        priority=priority,
        start_date=parse_date(start),
        due_date=parse_date(due),
        assignee=assignee,
    )
    print(f"Updated task {task.id}: {task.title}")


@task_app.command
def status(task_id: str, new_status: str) -> None:
    """Move a task to a new status."""
    from project_manager.cli import get_task_service

    task = get_task_service().change_status(task_id, new_status)
    print(f"Task {task.id} is now {task.status}")


@task_app.command
def depend(task_id: str, *dependency_ids: str, replace: bool = False) -> None:
    """Add dependencies to a task, or replace them with --replace."""
    from project_manager.cli import get_task_service

    service = get_task_service()
    if replace:
        task = service.set_dependencies(task_id, dependency_ids)
    else:
        task = service.add_dependencies(task_id, dependency_ids)
    print(f"Task {task.id} depends on: {', '.join(task.dependencies) or 'nothing'}")


@task_app.command
def undepend(task_id: str, *dependency_ids: str) -> None:
    """Remove dependencies from a task."""
    from project_manager.cli import get_task_service

    task = get_task_service().remove_dependencies(task_id, dependency_ids)
    print(f"Task {task.id} depends on: {', '.join(task.dependencies) or 'nothing'}")


@task_app.command
def delete(*task_ids: str) -> None:
    """Delete one or more tasks."""
    from project_manager.cli import get_task_service

    service = get_task_service()
    for task_id in task_ids:
        service.delete_task(task_id)
    print(f"Deleted {len(task_ids)} task(s)")


@task_app.command
def blocked(project: str | None = None) -> None:
    """List tasks waiting on unfinished dependencies."""
    from project_manager.cli import get_task_service

    tasks = get_task_service().blocked_tasks(project)
    if not tasks:
        print("No blocked tasks")
        return

    print(f"Found {len(tasks)} blocked task(s):\n")
    for task in tasks:
        print(f"  {task.id} {task.title} <- {', '.join(task.dependencies)}")


@task_app.command
def cycle(project: str | None = None) -> None:
    """Find and display cycles in task dependencies."""
    from project_manager.cli import get_task_service

    cycles = get_task_service().find_cycles(project)

    if not cycles:
        print("No cycles found")
        return

    print(f"Found {len(cycles)} cycle(s):\n")
    for i, cycle in enumerate(cycles, 1):
        cycle_str = " -> ".join(cycle)
        print(f"{i}. {cycle_str} -> {cycle[0]}")
