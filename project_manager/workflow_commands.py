"""Workflow commands for project manager CLI."""

from typing import Literal

from cyclopts import App

from project_manager.config import get_config, load_workflow
from project_manager.workflow import allowed_transitions, transition

workflow_app = App(name="workflow", help="Inspect task and ticket workflows")


@workflow_app.command
def show(kind: Literal["task", "ticket"] = "task") -> None:
    """Show the statuses and transitions of a workflow."""
    workflow = load_workflow(get_config(), kind)
    print(f"{kind.capitalize()} workflow:\n")
    for status in workflow.statuses:
        targets = allowed_transitions(workflow, status)
        print(f"  {status} -> {', '.join(targets) if targets else '(none)'}")


@workflow_app.command
def check(current: str, proposed: str, kind: Literal["task", "ticket"] = "task") -> None:
    """Check whether a status change is allowed."""
    result = transition(load_workflow(get_config(), kind), current, proposed)
    if result.ok:
        print(f"Allowed: {current} -> {proposed}")
    else:
        print(f"Rejected: {result.error.message}")
