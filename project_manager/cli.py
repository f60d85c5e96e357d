"""CLI for project manager."""

import sys
from datetime import date
from typing import Annotated, Literal

import structlog
from cyclopts import App, Parameter

from project_manager.backend import Backend
from project_manager.backends import MemoryBackend, YamlBackend
from project_manager.config import Config, get_config, load_workflow
from project_manager.config_commands import config_app
from project_manager.errors import NotFoundError
from project_manager.portal_commands import portal_app
from project_manager.project_commands import project_app, team_app
from project_manager.services import ClientPortal, ProjectService, TaskService, TeamService, TicketService
from project_manager.task_commands import task_app
from project_manager.ticket_commands import ticket_app
from project_manager.workflow_commands import workflow_app

logger = structlog.get_logger()

app = App(
    help="Project Manager - projects, tasks, teams and tickets",
)

app.command(project_app)
app.command(team_app)
app.command(task_app)
app.command(ticket_app)
app.command(portal_app)
app.command(workflow_app)
app.command(config_app)


def configure_logging(log_level: str) -> None:
    """Configure structlog with the specified log level."""
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(min_level=log_level.lower()))


def get_backend(config: Config | None = None) -> Backend:
    """Get the configured backend."""
    config = config or get_config()
    backend_type = config.get("backend", "yaml")

    if backend_type == "yaml":
        path = config.get("yaml.path") or config.config_dir / "data.yaml"
        return YamlBackend(path)
    elif backend_type == "memory":
        return MemoryBackend()
    else:
        raise ValueError(f"Unknown backend: {backend_type}")


def get_project_service() -> ProjectService:
    return ProjectService(get_backend())


def get_team_service() -> TeamService:
    return TeamService(get_backend())


def get_task_service() -> TaskService:
    """Build the task service from configuration."""
    config = get_config()
    return TaskService(
        get_backend(config),
        load_workflow(config, "task"),
        dependency_scope=config.get("dependencies.scope", "project"),
        done_statuses=config.get_list("tasks.done_statuses", ["done"]),
        enforce_completion=config.feature_enabled("enforce_completion", default=True),
    )


def get_ticket_service() -> TicketService:
    config = get_config()
    return TicketService(get_backend(config), load_workflow(config, "ticket"))


def get_portal() -> ClientPortal:
    """Build the client portal, refusing when the portal feature is off."""
    config = get_config()
    if not config.feature_enabled("portal"):
        raise ValueError("Client portal is disabled. Enable it with:\n  pm config enable portal")
    return ClientPortal(
        get_backend(config),
        load_workflow(config, "task"),
        done_statuses=config.get_list("tasks.done_statuses", ["done"]),
        closed_ticket_statuses=config.get_list("tickets.closed_statuses", ["resolved", "closed"]),
        ticket_workflow=load_workflow(config, "ticket"),
    )


def parse_labels(labels: str) -> dict[str, str]:
    """Parse ``key:value,flag`` into a labels dict."""
    labels_dict = {}
    for label in labels.split(","):
        label = label.strip()
        if not label:
            continue
        if ":" in label:
            key, value = label.split(":", 1)
            labels_dict[key.strip()] = value.strip()
        else:
            labels_dict[label] = ""
    return labels_dict


def format_labels(labels: dict[str, str]) -> str:
    return ", ".join([f"{k}:{v}" if v else k for k, v in labels.items()])


def parse_date(value: str | None) -> date | None:
    """Parse an ISO date (YYYY-MM-DD)."""
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD") from e


def parse_ids(ids: str) -> list[str]:
    return [item.strip() for item in ids.split(",") if item.strip()]


@app.meta.default
def main(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    log_level: Literal["debug", "info", "warning", "error", "critical"] = "critical",
) -> None:
    """Main entry point with global options."""
    configure_logging(log_level)
    try:
        app(tokens)
    except (ValueError, NotFoundError) as e:
        logger.debug("Command failed", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    app.meta()
