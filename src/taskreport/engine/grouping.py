"""
Task ordering and section grouping.

Ordering rule: top-level tasks are sorted by (section rank, priority rank) and
every subtask follows its own parent immediately, in input order. Subtasks are
never re-sorted on their own. Section buckets are cut from the final ordering,
so a bucket always agrees with the global order.

Relationships are resolved by name. A subtask whose parent name matches no
task (or its own name) is an orphan and is ordered like a top-level task.
When names are duplicated, subtasks attach to the first task with that name.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Set

from taskreport.models.task import Task

log = logging.getLogger(__name__)


@dataclass
class Grouping:
    """Ordered tasks plus the name-keyed indexes the rendering layer queries."""

    ordered: List[Task]
    sections: Dict[str, List[Task]]
    subtasks_by_parent: Dict[str, List[Task]] = field(default_factory=dict)
    section_task_names: Dict[str, Set[str]] = field(default_factory=dict)
    section_subtasks: Dict[str, Dict[str, List[Task]]] = field(default_factory=dict)
    orphans: List[Task] = field(default_factory=list)


def _sort_key(task: Task):
    return (task.section_order, task.priority_order, task.row)


def _first_rows(tasks: Sequence[Task]) -> Dict[str, int]:
    """Task name → row of its first occurrence."""
    first: Dict[str, int] = {}
    for task in tasks:
        if task.name and task.name not in first:
            first[task.name] = task.row
    return first


def order_tasks(tasks: Sequence[Task]) -> Grouping:
    """
    Order tasks parent-first and collect subtasks by parent name.

    Args:
        tasks: Tasks in input order

    Returns:
        Grouping with ``ordered`` filled in; sections are built separately
    """
    first_rows = _first_rows(tasks)

    parents: List[Task] = []
    orphans: List[Task] = []
    subtasks_by_parent: Dict[str, List[Task]] = {}

    for task in tasks:
        parent = task.parent_name
        if parent and parent in first_rows and parent != task.name:
            subtasks_by_parent.setdefault(parent, []).append(task)
            continue
        if parent:
            orphans.append(task)
        parents.append(task)

    if orphans:
        log.debug("%d subtask(s) reference a parent that does not exist", len(orphans))

    parents.sort(key=_sort_key)

    ordered: List[Task] = []
    emitted: Set[int] = set()

    def emit(root: Task) -> None:
        # Depth-first so nested subtasks stay under their own parent
        stack = [root]
        while stack:
            task = stack.pop()
            if task.row in emitted:
                continue
            emitted.add(task.row)
            ordered.append(task)
            if first_rows.get(task.name) == task.row:
                stack.extend(reversed(subtasks_by_parent.get(task.name, [])))

    for parent in parents:
        emit(parent)

    # Parent chains that loop back on themselves never reach a top-level task
    leftovers = [task for task in tasks if task.row not in emitted]
    if leftovers:
        log.warning(
            "%d task(s) are in a circular parent chain; appended in input order",
            len(leftovers),
        )
        for task in leftovers:
            emit(task)

    return Grouping(
        ordered=ordered,
        sections={},
        subtasks_by_parent=subtasks_by_parent,
        orphans=orphans,
    )


def group_tasks(tasks: Sequence[Task], section_names: Sequence[str]) -> Grouping:
    """
    Order tasks, cut section buckets and build the per-section indexes.

    The per-section maps are filled in one pass over the ordered list so that
    "does this parent have subtasks in this section" is a dict lookup.
    """
    grouping = order_tasks(tasks)

    sections: Dict[str, List[Task]] = {name: [] for name in section_names}
    section_task_names: Dict[str, Set[str]] = {name: set() for name in section_names}
    section_subtasks: Dict[str, Dict[str, List[Task]]] = {name: {} for name in section_names}
    resolved_rows = {t.row for subs in grouping.subtasks_by_parent.values() for t in subs}

    for task in grouping.ordered:
        sections.setdefault(task.section, []).append(task)
        section_task_names.setdefault(task.section, set()).add(task.name)
        if task.row in resolved_rows:
            by_parent = section_subtasks.setdefault(task.section, {})
            by_parent.setdefault(task.parent_name, []).append(task)

    grouping.sections = sections
    grouping.section_task_names = section_task_names
    grouping.section_subtasks = section_subtasks
    return grouping
