"""Tests for dependency validation."""

import pytest
from structlog.testing import capture_logs

from project_manager.dependencies import dependents_of, find_cycles, validate_dependencies
from project_manager.errors import ErrorKind, ValidationError
from project_manager.models import Task


def make_tasks(graph: dict[str, list[str]]) -> list[Task]:
    """Build tasks from an id -> dependency ids mapping."""
    return [Task(id=task_id, project_id="P-1", title=task_id, dependencies=list(deps)) for task_id, deps in graph.items()]


@pytest.fixture
def chain() -> list[Task]:
    """A depends on nothing, B on A, C on B."""
    return make_tasks({"A": [], "B": ["A"], "C": ["B"]})


def test_empty_proposal_is_valid(chain: list[Task]) -> None:
    """Test an empty dependency set always passes."""
    result = validate_dependencies(chain[0], chain, [])
    assert result.ok
    assert result.value == ()


def test_acyclic_addition_succeeds(chain: list[Task]) -> None:
    """Test C may depend on B and A since nothing leads back to C."""
    result = validate_dependencies(chain[2], chain, ["B", "A"])
    assert result.ok
    assert result.value == ("B", "A")


def test_closing_a_cycle_fails(chain: list[Task]) -> None:
    """Test A depending on C closes A -> C -> B -> A."""
    result = validate_dependencies(chain[0], chain, ["C"])
    assert not result.ok
    assert result.error.kind is ErrorKind.CIRCULAR_DEPENDENCY
    assert result.error.cycle == ("A", "C", "B", "A")
    assert "A -> C -> B -> A" in result.error.message


def test_two_task_cycle_fails() -> None:
    """Test a direct back edge is detected."""
    tasks = make_tasks({"A": ["B"], "B": []})
    result = validate_dependencies("B", tasks, ["A"])
    assert result.error.kind is ErrorKind.CIRCULAR_DEPENDENCY
    assert result.error.cycle == ("B", "A", "B")


def test_self_dependency_fails(chain: list[Task]) -> None:
    """Test a task listing itself fails regardless of its other edges."""
    result = validate_dependencies(chain[1], chain, ["A", "B"])
    assert result.error.kind is ErrorKind.SELF_DEPENDENCY
    assert result.error.task_id == "B"


def test_self_dependency_of_task_outside_scope() -> None:
    """Test the validated task's own id counts as in scope."""
    result = validate_dependencies("X", [], ["X"])
    assert result.error.kind is ErrorKind.SELF_DEPENDENCY


def test_unknown_dependency_fails_even_with_valid_ids(chain: list[Task]) -> None:
    """Test unknown ids are reported even alongside valid ones."""
    result = validate_dependencies(chain[2], chain, ["A", "Z", "Y"])
    assert result.error.kind is ErrorKind.UNKNOWN_DEPENDENCY
    assert result.error.ids == ("Z", "Y")


def test_unknown_is_checked_before_self(chain: list[Task]) -> None:
    """Test existence is checked before self reference."""
    result = validate_dependencies(chain[2], chain, ["C", "Z"])
    assert result.error.kind is ErrorKind.UNKNOWN_DEPENDENCY


def test_duplicates_are_deduplicated(chain: list[Task]) -> None:
    """Test duplicate ids are collapsed, keeping first occurrence order."""
    result = validate_dependencies(chain[2], chain, ["B", "A", "B", "A"])
    assert result.value == ("B", "A")


def test_new_task_without_id() -> None:
    """Test a task that is not stored yet can depend on existing tasks."""
    tasks = make_tasks({"A": [], "B": ["A"]})
    result = validate_dependencies(None, tasks, ["B"])
    assert result.ok
    assert result.value == ("B",)


def test_task_alone_in_scope_passes() -> None:
    """Test a task with no other tasks in scope passes with no dependencies."""
    only = make_tasks({"A": []})
    assert validate_dependencies(only[0], only, []).ok


def test_inputs_are_not_mutated(chain: list[Task]) -> None:
    """Test validation never touches the tasks it is given."""
    validate_dependencies(chain[0], chain, ["C"])
    validate_dependencies(chain[2], chain, ["A"])
    assert [task.dependencies for task in chain] == [[], ["A"], ["B"]]


def test_edges_outside_scope_are_ignored() -> None:
    """Test existing edges to tasks outside the scope do not break validation."""
    tasks = make_tasks({"A": ["elsewhere"], "B": []})
    assert validate_dependencies("B", tasks, ["A"]).ok


def test_proposed_edges_replace_existing_ones() -> None:
    """Test the validated task's stored edges are replaced by the proposal."""
    tasks = make_tasks({"A": ["B"], "B": ["A"]})
    assert validate_dependencies("A", tasks, []).ok
    assert validate_dependencies("A", tasks, ["B"]).error.kind is ErrorKind.CIRCULAR_DEPENDENCY


def test_diamond_is_not_a_cycle() -> None:
    """Test shared dependencies are not mistaken for cycles."""
    tasks = make_tasks({"A": [], "B": ["A"], "C": ["A"], "D": []})
    assert validate_dependencies("D", tasks, ["B", "C"]).ok


def test_unwrap_raises_validation_error(chain: list[Task]) -> None:
    """Test unwrap turns a failed result into ValidationError."""
    result = validate_dependencies(chain[0], chain, ["C"])
    with pytest.raises(ValidationError) as exc_info:
        result.unwrap()
    assert exc_info.value.kind is ErrorKind.CIRCULAR_DEPENDENCY
    assert isinstance(exc_info.value, ValueError)


def test_rejection_is_logged(chain: list[Task]) -> None:
    """Test rejected dependencies are logged as warnings."""
    with capture_logs() as logs:
        validate_dependencies(chain[0], chain, ["Z"])
    assert any(log["event"] == "Unknown dependency" and log["log_level"] == "warning" for log in logs)


def test_find_cycles_none(chain: list[Task]) -> None:
    """Test an acyclic task set has no cycles."""
    assert find_cycles(chain) == []


def test_find_cycles_reports_each_cycle() -> None:
    """Test every independent cycle is reported."""
    tasks = make_tasks({"A": ["B"], "B": ["A"], "C": ["D"], "D": ["E"], "E": ["C"], "F": []})
    cycles = find_cycles(tasks)
    assert ["A", "B"] in cycles
    assert ["C", "D", "E"] in cycles
    assert len(cycles) == 2


def test_find_cycles_self_loop() -> None:
    """Test a stored self reference is reported as a cycle."""
    assert find_cycles(make_tasks({"A": ["A"]})) == [["A"]]


def test_dependents_of(chain: list[Task]) -> None:
    """Test direct dependents are listed."""
    assert [task.id for task in dependents_of("A", chain)] == ["B"]
    assert dependents_of("C", chain) == []
