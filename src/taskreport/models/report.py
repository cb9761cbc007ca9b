"""
Report-level data models.

ReportData is the single object a pipeline run hands to the rendering layer.
It is built once and never updated; a new CSV snapshot means a new run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Tuple

from taskreport.models.task import Task

# Span used when no task carries a date at all
DEFAULT_PROJECT_DAYS = 30


class LoadErrorKind(str, Enum):
    CSV_NOT_FOUND = "CSV_NOT_FOUND"
    CSV_PARSE_ERROR = "CSV_PARSE_ERROR"


@dataclass(frozen=True)
class LoadError:
    """Why the CSV could not be loaded, with a hint the UI can show as-is."""

    kind: LoadErrorKind
    message: str
    hint: str


@dataclass(frozen=True)
class ProjectRange:
    start: Optional[str] = None
    end: Optional[str] = None
    days: int = DEFAULT_PROJECT_DAYS


@dataclass(frozen=True)
class StatsSnapshot:
    """
    Aggregate counts over all tasks.

    Each ``by_*`` mapping sums to ``total``.
    """

    total: int = 0
    done: int = 0
    overdue: int = 0
    completion_percent: int = 0
    by_status: Dict[str, int] = field(default_factory=dict)
    by_priority: Dict[str, int] = field(default_factory=dict)
    by_assignee: Dict[str, int] = field(default_factory=dict)
    by_section: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class ReportData:
    """
    Result of one pipeline run.

    ``all_tasks`` keeps every subtask directly after its parent. ``name_index``
    maps a task name to the position of its first occurrence in ``all_tasks``
    and is how parent references are resolved.
    """

    all_tasks: Tuple[Task, ...] = ()
    sections: Dict[str, Tuple[Task, ...]] = field(default_factory=dict)
    section_names: Tuple[str, ...] = ()
    stats: StatsSnapshot = field(default_factory=StatsSnapshot)
    timeline: Tuple[Task, ...] = ()
    project_range: ProjectRange = field(default_factory=ProjectRange)
    custom_field_names: Tuple[str, ...] = ()
    name_index: Dict[str, int] = field(default_factory=dict)
    subtasks_by_parent: Dict[str, Tuple[Task, ...]] = field(default_factory=dict)
    section_task_names: Dict[str, FrozenSet[str]] = field(default_factory=dict)
    section_subtasks: Dict[str, Dict[str, Tuple[Task, ...]]] = field(default_factory=dict)
    diagnostics: Tuple[str, ...] = ()
    display: Dict[str, Any] = field(default_factory=dict)
    error: Optional[LoadError] = None

    @classmethod
    def empty(
        cls,
        error: Optional[LoadError] = None,
        display: Optional[Dict[str, Any]] = None,
    ) -> ReportData:
        """An empty report, optionally annotated with a load error."""
        return cls(error=error, display=dict(display or {}))

    def find_task(self, name: str) -> Optional[Task]:
        """Return the first task with this name, or None."""
        index = self.name_index.get(name)
        return self.all_tasks[index] if index is not None else None

    def parent_of(self, task: Task) -> Optional[Task]:
        """Resolve a subtask's parent by name; None for top-level and orphan tasks."""
        if not task.parent_name or task.parent_name == task.name:
            return None
        return self.find_task(task.parent_name)

    def subtasks_of(self, name: str) -> Tuple[Task, ...]:
        return self.subtasks_by_parent.get(name, ())

    def has_subtasks_in_section(self, section: str, name: str) -> bool:
        """True if the named parent has at least one subtask in ``section``."""
        return bool(self.section_subtasks.get(section, {}).get(name))
