"""Tests for project and team services."""

import pytest

from project_manager.backends import MemoryBackend
from project_manager.errors import NotFoundError
from project_manager.models import Project
from project_manager.services import ProjectService, TaskService, TeamService, TicketService
from project_manager.workflow import TASK_WORKFLOW


@pytest.fixture
def projects(backend: MemoryBackend) -> ProjectService:
    return ProjectService(backend)


@pytest.fixture
def teams(backend: MemoryBackend) -> TeamService:
    return TeamService(backend)


def test_create_project(projects: ProjectService, teams: TeamService) -> None:
    """Test creating a project attached to a team."""
    team = teams.create_team("Web")
    project = projects.create_project(" Website ", client="acme", team_id=team.id, labels={"tier": "gold"})
    assert project.name == "Website"
    assert project.team_id == team.id
    assert projects.get_project(project.id).labels == {"tier": "gold"}


def test_create_project_validation(projects: ProjectService) -> None:
    """Test empty names and unknown teams are rejected."""
    with pytest.raises(ValueError, match="name"):
        projects.create_project("  ")
    with pytest.raises(NotFoundError):
        projects.create_project("Website", team_id="TM-9")


def test_list_projects_by_client(projects: ProjectService) -> None:
    """Test projects can be listed per client."""
    projects.create_project("Website", client="acme")
    projects.create_project("Intranet", client="globex")
    assert [p.name for p in projects.list_projects()] == ["Website", "Intranet"]
    assert [p.name for p in projects.list_projects(client="globex")] == ["Intranet"]


def test_update_project(projects: ProjectService, project: Project) -> None:
    """Test updating project fields."""
    updated = projects.update_project(project.id, name="Website v2", description="Second go")
    assert updated.name == "Website v2"
    assert projects.get_project(project.id).description == "Second go"
    assert projects.get_project(project.id).client == "acme"


def test_delete_project_cascades(
    projects: ProjectService,
    project: Project,
    task_service: TaskService,
    ticket_service: TicketService,
    backend: MemoryBackend,
) -> None:
    """Test deleting a project removes its tasks and tickets."""
    other = projects.create_project("Mobile app")
    task_service.create_task(project.id, "Design")
    task_service.create_task(other.id, "Port")
    ticket_service.create_ticket(project.id, "Bug")

    projects.delete_project(project.id)

    assert [t.title for t in backend.list_tasks()] == ["Port"]
    assert backend.list_tickets() == []
    with pytest.raises(NotFoundError):
        projects.get_project(project.id)


def test_team_members(teams: TeamService) -> None:
    """Test adding and removing members."""
    team = teams.create_team("Web", ["ana", "ana", " ben "])
    assert team.members == ["ana", "ben"]

    team = teams.add_member(team.id, "cleo")
    team = teams.add_member(team.id, "cleo")
    assert team.members == ["ana", "ben", "cleo"]

    team = teams.remove_member(team.id, "ana")
    assert teams.get_team(team.id).members == ["ben", "cleo"]

    with pytest.raises(ValueError, match="not a member"):
        teams.remove_member(team.id, "ana")


def test_delete_team_detaches_projects(teams: TeamService, projects: ProjectService) -> None:
    """Test deleting a team clears it from projects."""
    team = teams.create_team("Web")
    project = projects.create_project("Website", team_id=team.id)

    teams.delete_team(team.id)

    assert teams.list_teams() == []
    assert projects.get_project(project.id).team_id is None


def test_delete_project_strips_cross_project_dependencies(
    projects: ProjectService, project: Project, backend: MemoryBackend
) -> None:
    """Test tasks in other projects stop depending on a deleted project's tasks."""
    service = TaskService(backend, TASK_WORKFLOW, dependency_scope="global")
    design = service.create_task(project.id, "Design")
    other = projects.create_project("Mobile app")
    ui = service.create_task(other.id, "UI", dependencies=[design.id])

    projects.delete_project(project.id)

    assert service.get_task(ui.id).dependencies == []
    assert service.blocked_tasks() == []
    for status in ("in-progress", "review", "done"):
        service.change_status(ui.id, status)
    assert service.get_task(ui.id).status == "done"

    port = service.create_task(other.id, "Port")
    assert service.add_dependencies(ui.id, [port.id]).dependencies == [port.id]


def test_remove_member_strips_whitespace(teams: TeamService) -> None:
    """Test members are matched by their stripped name."""
    team = teams.create_team("Web", [" ana ", "ben"])
    assert team.members == ["ana", "ben"]

    team = teams.remove_member(team.id, " ana ")
    assert teams.get_team(team.id).members == ["ben"]
