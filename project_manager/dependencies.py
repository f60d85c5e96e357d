"""Dependency validation for tasks.

An edge ``A -> B`` means "A depends on B". Graphs are built over an index
arena: every task in scope gets a position in a list and edges are lists of
positions, so traversal never follows object references.
"""

from collections.abc import Iterable

import structlog

from project_manager.errors import DependencyError, ErrorKind, Result
from project_manager.models import Task

logger = structlog.get_logger()

UNVISITED, IN_PROGRESS, DONE = 0, 1, 2


def _dedupe(ids: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(ids))


def _build_arena(
    tasks: Iterable[Task],
    task_id: str | None = None,
    proposed: tuple[str, ...] | None = None,
) -> tuple[list[str | None], list[list[int]]]:
    """Build node ids and adjacency lists for a task set.

    When ``proposed`` is given, the edges of ``task_id`` are replaced by it. A
    ``task_id`` of None stands for a task that is not stored yet and gets a
    node of its own at the end of the arena.
    """
    tasks = list(tasks)
    nodes: list[str | None] = [task.id for task in tasks]
    index = {task.id: i for i, task in enumerate(tasks)}
    adjacency: list[list[int]] = [[] for _ in nodes]

    for i, task in enumerate(tasks):
        if proposed is not None and task.id == task_id:
            continue
        # Edges to tasks outside the scope are ignored
        adjacency[i] = [index[dep] for dep in _dedupe(task.dependencies) if dep in index]

    if proposed is not None:
        if task_id is None or task_id not in index:
            nodes.append(task_id)
            adjacency.append([])
            position = len(nodes) - 1
        else:
            position = index[task_id]
        adjacency[position] = [index[dep] for dep in proposed if dep in index]

    return nodes, adjacency


def _walk(adjacency: list[list[int]], roots: Iterable[int], stop_at_first: bool) -> list[list[int]]:
    """Colour-marking depth-first traversal collecting cycles.

    Returns each cycle as the list of node positions along the back edge,
    without repeating the first node.
    """
    colour = [UNVISITED] * len(adjacency)
    cycles: list[list[int]] = []

    for root in roots:
        if colour[root] != UNVISITED:
            continue
        colour[root] = IN_PROGRESS
        path = [root]
        cursors = [0]

        while path:
            node = path[-1]
            if cursors[-1] < len(adjacency[node]):
                successor = adjacency[node][cursors[-1]]
                cursors[-1] += 1
                if colour[successor] == IN_PROGRESS:
                    cycles.append(path[path.index(successor) :])
                    if stop_at_first:
                        return cycles
                elif colour[successor] == UNVISITED:
                    colour[successor] = IN_PROGRESS
                    path.append(successor)
                    cursors.append(0)
            else:
                colour[node] = DONE
                path.pop()
                cursors.pop()

    return cycles


def validate_dependencies(
    task: Task | str | None,
    all_tasks: Iterable[Task],
    proposed_dependency_ids: Iterable[str],
) -> Result[tuple[str, ...], DependencyError]:
    """Validate a proposed set of dependencies for a task.

    Args:
        task: Task being validated, its id, or None for a task not stored yet
        all_tasks: Every task the validated task may depend on
        proposed_dependency_ids: Ids the task should depend on

    Returns:
        Result holding the deduplicated dependency ids, or a DependencyError
        of kind UnknownDependency, SelfDependency or CircularDependency
    """
    task_id = task.id if isinstance(task, Task) else task
    all_tasks = list(all_tasks)
    proposed = _dedupe(proposed_dependency_ids)
    logger.debug("Validating dependencies", task_id=task_id, proposed=list(proposed), scope_size=len(all_tasks))

    if not proposed:
        return Result(value=())

    known = {t.id for t in all_tasks}
    if task_id is not None:
        known.add(task_id)
    unknown = tuple(dep for dep in proposed if dep not in known)
    if unknown:
        logger.warning("Unknown dependency", task_id=task_id, unknown=list(unknown))
        return Result(error=DependencyError(ErrorKind.UNKNOWN_DEPENDENCY, task_id, ids=unknown))

    if task_id is not None and task_id in proposed:
        logger.warning("Self dependency", task_id=task_id)
        return Result(error=DependencyError(ErrorKind.SELF_DEPENDENCY, task_id, ids=(task_id,)))

    nodes, adjacency = _build_arena(all_tasks, task_id, proposed)
    start = nodes.index(task_id)
    roots = [start] + [i for i in range(len(nodes)) if i != start]
    cycles = _walk(adjacency, roots, stop_at_first=True)
    if cycles:
        path = [str(nodes[i]) for i in cycles[0]]
        cycle = tuple(path + [path[0]])
        logger.warning("Circular dependency", task_id=task_id, cycle=list(cycle))
        return Result(error=DependencyError(ErrorKind.CIRCULAR_DEPENDENCY, task_id, ids=tuple(path), cycle=cycle))

    return Result(value=proposed)


def find_cycles(tasks: Iterable[Task]) -> list[list[str]]:
    """Find cycles in an existing task set.

    Each cycle is returned as an open path; the first id follows the last.
    """
    nodes, adjacency = _build_arena(tasks)
    cycles = _walk(adjacency, range(len(nodes)), stop_at_first=False)
    logger.debug("Found cycles", count=len(cycles))
    return [[str(nodes[i]) for i in cycle] for cycle in cycles]


def dependents_of(task_id: str, tasks: Iterable[Task]) -> list[Task]:
    """Return the tasks that depend directly on ``task_id``."""
    return [task for task in tasks if task_id in task.dependencies]
