"""Project and team management services."""

import structlog

from project_manager.backend import Backend
from project_manager.models import Project, Team
from project_manager.services.tasks import detach_tasks

logger = structlog.get_logger()


def _require_name(name: str, kind: str) -> str:
    name = name.strip()
    if not name:
        raise ValueError(f"{kind} name cannot be empty")
    return name


class ProjectService:
    """Create, update and delete projects."""

    def __init__(self, backend: Backend) -> None:
        self.backend = backend

    def create_project(
        self,
        name: str,
        description: str = "",
        client: str | None = None,
        team_id: str | None = None,
        labels: dict[str, str] | None = None,
    ) -> Project:
        """Create a new project."""
        name = _require_name(name, "Project")
        if team_id is not None:
            self.backend.get_team(team_id)

        logger.info("Creating project", name=name, client=client, team_id=team_id)
        project = self.backend.add_project(
            Project(id="", name=name, description=description, client=client, team_id=team_id, labels=labels or {})
        )
        logger.info("Project created", project_id=project.id)
        return project

    def get_project(self, project_id: str) -> Project:
        return self.backend.get_project(project_id)

    def list_projects(self, client: str | None = None) -> list[Project]:
        projects = self.backend.list_projects()
        if client is not None:
            projects = [project for project in projects if project.client == client]
        return projects

    def update_project(
        self,
        project_id: str,
        name: str | None = None,
        description: str | None = None,
        client: str | None = None,
        team_id: str | None = None,
    ) -> Project:
        """Update a project. Fields left as None are unchanged."""
        project = self.backend.get_project(project_id)
        if name is not None:
            project.name = _require_name(name, "Project")
        if description is not None:
            project.description = description
        if client is not None:
            project.client = client
        if team_id is not None:
            self.backend.get_team(team_id)
            project.team_id = team_id

        logger.info("Updating project", project_id=project_id)
        self.backend.save_project(project)
        return project

    def delete_project(self, project_id: str) -> None:
        """Delete a project along with its tasks and tickets."""
        self.backend.get_project(project_id)
        tasks = self.backend.list_tasks(project_id)
        tickets = self.backend.list_tickets(project_id)
        logger.info("Deleting project", project_id=project_id, tasks=len(tasks), tickets=len(tickets))
        detach_tasks(self.backend, [task.id for task in tasks])

        for ticket in tickets:
            self.backend.delete_ticket(ticket.id)
        for task in tasks:
            self.backend.delete_task(task.id)
        self.backend.delete_project(project_id)


class TeamService:
    """Manage teams and their members."""

    def __init__(self, backend: Backend) -> None:
        self.backend = backend

    def create_team(self, name: str, members: list[str] | None = None) -> Team:
        name = _require_name(name, "Team")
        members = list(dict.fromkeys(member.strip() for member in members or [] if member.strip()))
        logger.info("Creating team", name=name, members=members)
        return self.backend.add_team(Team(id="", name=name, members=members))

    def get_team(self, team_id: str) -> Team:
        return self.backend.get_team(team_id)

    def list_teams(self) -> list[Team]:
        return self.backend.list_teams()

    def add_member(self, team_id: str, member: str) -> Team:
        team = self.backend.get_team(team_id)
        member = member.strip()
        if not member:
            raise ValueError("Member name cannot be empty")
        if member not in team.members:
            team.members.append(member)
            logger.info("Adding team member", team_id=team_id, member=member)
            self.backend.save_team(team)
        return team

    def remove_member(self, team_id: str, member: str) -> Team:
        team = self.backend.get_team(team_id)
        member = member.strip()
        if member not in team.members:
            raise ValueError(f"{member} is not a member of team {team_id}")
        team.members.remove(member)
        logger.info("Removing team member", team_id=team_id, member=member)
        self.backend.save_team(team)
        return team

    def delete_team(self, team_id: str) -> None:
        """Delete a team and detach it from its projects."""
        self.backend.get_team(team_id)
        for project in self.backend.list_projects():
            if project.team_id == team_id:
                project.team_id = None
                self.backend.save_project(project)
        logger.info("Deleting team", team_id=team_id)
        self.backend.delete_team(team_id)
