"""
Report handler functions shared by MCP tools and REST API.

All handlers are read-only views over the store's current ReportData and
return JSON-serializable dicts using the front end's camelCase keys.
"""

from typing import Any, Dict, List, Optional

from taskreport.engine.sections import is_done_section
from taskreport.models.report import LoadError, ProjectRange, ReportData, StatsSnapshot
from taskreport.models.task import Duration, Task, TimelinePosition


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def _duration_to_dict(duration: Optional[Duration]) -> Optional[dict]:
    if duration is None:
        return None
    return {
        "days": duration.days,
        "elapsed": duration.elapsed,
        "remaining": duration.remaining,
        "percentElapsed": duration.percent_elapsed,
        "hasStarted": duration.has_started,
        "isComplete": duration.is_complete,
    }


def _timeline_to_dict(position: Optional[TimelinePosition]) -> Optional[dict]:
    if position is None:
        return None
    return {"startPercent": position.start_percent, "widthPercent": position.width_percent}


def task_to_dict(task: Task) -> dict:
    """Serialize a Task to a JSON-serializable dict."""
    return {
        "id": task.id,
        "name": task.name,
        "section": task.section,
        "assignee": task.assignee,
        "assigneeEmail": task.assignee_email,
        "startDate": task.start_date,
        "dueDate": task.due_date,
        "priority": task.priority,
        "status": task.status,
        "notes": task.notes,
        "tags": list(task.tags),
        "parentTask": task.parent_name,
        "isSubtask": task.is_subtask,
        "createdAt": task.created_at,
        "completedAt": task.completed_at,
        "modifiedAt": task.modified_at,
        "blockedBy": list(task.blocked_by),
        "blocking": list(task.blocking),
        "isDone": task.is_done,
        "isOverdue": task.is_overdue,
        "daysUntilDue": task.days_until_due,
        "duration": _duration_to_dict(task.duration),
        "priorityOrder": task.priority_order,
        "sectionOrder": task.section_order,
        "customFields": dict(task.custom_fields) if task.custom_fields is not None else None,
        "timeline": _timeline_to_dict(task.timeline),
    }


def stats_to_dict(stats: StatsSnapshot) -> dict:
    return {
        "total": stats.total,
        "done": stats.done,
        "overdue": stats.overdue,
        "completionPercent": stats.completion_percent,
        "byStatus": dict(stats.by_status),
        "byPriority": dict(stats.by_priority),
        "byAssignee": dict(stats.by_assignee),
        "bySection": dict(stats.by_section),
    }


def range_to_dict(project_range: ProjectRange) -> dict:
    return {"start": project_range.start, "end": project_range.end, "days": project_range.days}


def error_to_dict(error: Optional[LoadError]) -> Optional[dict]:
    if error is None:
        return None
    return {"kind": error.kind.value, "message": error.message, "hint": error.hint}


def report_to_dict(report: ReportData) -> dict:
    """
    Serialize a whole report in the shape the templating layer consumes.

    An errored report has the same shape with empty collections.
    """
    return {
        "all": [task_to_dict(t) for t in report.all_tasks],
        "sections": {
            name: [task_to_dict(t) for t in tasks] for name, tasks in report.sections.items()
        },
        "sectionNames": list(report.section_names),
        "stats": stats_to_dict(report.stats),
        "timeline": [task_to_dict(t) for t in report.timeline],
        "projectRange": range_to_dict(report.project_range),
        "customFieldNames": list(report.custom_field_names),
        "diagnostics": list(report.diagnostics),
        "display": dict(report.display),
        "error": error_to_dict(report.error),
    }


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

def handle_report(store) -> dict:
    return report_to_dict(store.report)


def handle_task_list(
    store,
    *,
    section: Optional[str] = None,
    assignee: Optional[str] = None,
    overdue: Optional[bool] = None,
    done: Optional[bool] = None,
    include_subtasks: bool = True,
    limit: int = 500,
) -> List[dict]:
    """Tasks in report order, optionally filtered."""
    results = []
    for task in store.report.all_tasks:
        if section is not None and task.section != section:
            continue
        if assignee is not None and task.assignee != assignee:
            continue
        if overdue is not None and task.is_overdue != overdue:
            continue
        if done is not None and task.is_done != done:
            continue
        if not include_subtasks and task.is_subtask:
            continue
        results.append(task_to_dict(task))
        if len(results) >= limit:
            break
    return results


def handle_task_get(store, *, name: str) -> dict:
    """One task by name (first occurrence), with its parent and subtasks resolved."""
    report = store.report
    task = report.find_task(name)
    if task is None:
        return {"error": f"Task '{name}' not found"}
    result = task_to_dict(task)
    parent = report.parent_of(task)
    result["parent"] = task_to_dict(parent) if parent else None
    result["subtasks"] = [task_to_dict(t) for t in report.subtasks_of(task.name)]
    return result


def handle_sections(store) -> List[dict]:
    report = store.report
    return [
        {
            "name": name,
            "order": index,
            "count": len(report.sections.get(name, ())),
            "isDone": is_done_section(name),
            "tasks": [t.name for t in report.sections.get(name, ())],
        }
        for index, name in enumerate(report.section_names, start=1)
    ]


def handle_stats(store) -> dict:
    report = store.report
    result: Dict[str, Any] = stats_to_dict(report.stats)
    result["error"] = error_to_dict(report.error)
    return result


def handle_timeline(store) -> dict:
    report = store.report
    return {
        "projectRange": range_to_dict(report.project_range),
        "tasks": [task_to_dict(t) for t in report.timeline],
    }


def handle_config(store) -> dict:
    return store.config.model_dump()


def handle_status(store) -> dict:
    return store.status()


def handle_reload(store) -> dict:
    store.reload()
    return store.status()
