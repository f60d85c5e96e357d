"""Project and team commands for project manager CLI."""

from cyclopts import App

project_app = App(name="project", help="Manage projects")
team_app = App(name="team", help="Manage teams")


@project_app.command
def create(
    name: str,
    description: str = "",
    client: str | None = None,
    team: str | None = None,
    labels: str = "",
) -> None:
    """Create a new project."""
    from project_manager.cli import get_project_service, parse_labels

    service = get_project_service()
    project = service.create_project(
        name=name,
        description=description,
        client=client,
        team_id=team,
        labels=parse_labels(labels),
    )
    print(f"Created project {project.id}: {project.name}")


@project_app.command
def show(project_id: str) -> None:
    """Show a project."""
    from project_manager.cli import format_labels, get_project_service

    project = get_project_service().get_project(project_id)
    print(f"Project: {project.id}")
    print(f"Name: {project.name}")
    print(f"Description: {project.description}")
    if project.client:
        print(f"Client: {project.client}")
    if project.team_id:
        print(f"Team: {project.team_id}")
    if project.labels:
        print(f"Labels: {format_labels(project.labels)}")


@project_app.command(name="list")
def list_projects(client: str | None = None) -> None:
    """List projects, optionally only those of one client."""
    from project_manager.cli import get_project_service

    projects = get_project_service().list_projects(client=client)
    print(f"Found {len(projects)} project(s):\n")
    for project in projects:
        client_str = f" ({project.client})" if project.client else ""
        print(f"{project.id}: {project.name}{client_str}")


@project_app.command
def update(
    project_id: str,
    name: str | None = None,
    description: str | None = None,
    client: str | None = None,
    team: str | None = None,
) -> None:
    """Update a project."""
    from project_manager.cli import get_project_service

    project = get_project_service().update_project(
        project_id, name=name, description=description, client=client, team_id=team
    )
    print(f"Updated project {project.id}: {project.name}")


@project_app.command
def delete(*project_ids: str) -> None:
    """Delete one or more projects with their tasks and tickets."""
    from project_manager.cli import get_project_service

    service = get_project_service()
    for project_id in project_ids:
        service.delete_project(project_id)
    print(f"Deleted {len(project_ids)} project(s)")


@team_app.command(name="create")
def create_team(name: str, *members: str) -> None:
    """Create a team with optional members."""
    from project_manager.cli import get_team_service

    team = get_team_service().create_team(name, list(members))
    print(f"Created team {team.id}: {team.name}")


@team_app.command(name="list")
def list_teams() -> None:
    """List teams and their members."""
    from project_manager.cli import get_team_service

    teams = get_team_service().list_teams()
    print(f"Found {len(teams)} team(s):\n")
    for team in teams:
        members = ", ".join(team.members) if team.members else "no members"
        print(f"{team.id}: {team.name} [{members}]")


@team_app.command
def add(team_id: str, *members: str) -> None:
    """Add members to a team."""
    from project_manager.cli import get_team_service

    service = get_team_service()
    for member in members:
        service.add_member(team_id, member)
    print(f"Added {len(members)} member(s) to team {team_id}")


@team_app.command
def remove(team_id: str, *members: str) -> None:
    """Remove members from a team."""
    from project_manager.cli import get_team_service

    service = get_team_service()
    for member in members:
        service.remove_member(team_id, member)
    print(f"Removed {len(members)} member(s) from team {team_id}")


@team_app.command(name="delete")
def delete_team(team_id: str) -> None:
    """Delete a team."""
    from project_manager.cli import get_team_service

    get_team_service().delete_team(team_id)
    print(f"Deleted team {team_id}")
