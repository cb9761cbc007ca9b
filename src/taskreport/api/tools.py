"""MCP tool registration for the task report."""

import json
import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

from taskreport.api.handlers import (
    handle_reload,
    handle_sections,
    handle_stats,
    handle_task_get,
    handle_task_list,
    handle_timeline,
)

log = logging.getLogger(__name__)


def register_report_tools(mcp: FastMCP, store) -> None:
    """Register all report tools onto the FastMCP instance."""

    @mcp.tool()
    def report_summary() -> str:
        """
        Summary of the current report.

        Returns completion stats, the breakdowns by status, priority, assignee
        and section, and the ordered section list with task counts. When the
        CSV could not be loaded, "error" describes why.
        """
        result = handle_stats(store)
        result["sections"] = [
            {"name": s["name"], "count": s["count"], "isDone": s["isDone"]}
            for s in handle_sections(store)
        ]
        result["customFieldNames"] = list(store.report.custom_field_names)
        return json.dumps(result, indent=2)

    @mcp.tool()
    def task_list(
        section: Optional[str] = None,
        assignee: Optional[str] = None,
        overdue: Optional[bool] = None,
        done: Optional[bool] = None,
        include_subtasks: bool = True,
        limit: int = 100,
    ) -> str:
        """
        List tasks in report order (section, then priority, subtasks after their parent).

        Args:
            section: Only tasks in this section (exact name)
            assignee: Only tasks for this assignee ("Unassigned" for none)
            overdue: Filter by overdue flag
            done: Filter by done flag
            include_subtasks: Include subtasks (default True)
            limit: Max results (default 100)
        """
        results = handle_task_list(
            store,
            section=section,
            assignee=assignee,
            overdue=overdue,
            done=done,
            include_subtasks=include_subtasks,
            limit=limit,
        )
        return json.dumps(results, indent=2)

    @mcp.tool()
    def task_get(name: str) -> str:
        """
        Get one task by name, with its parent and subtasks.

        When several tasks share a name, the first one in the export is returned.

        Args:
            name: Task name
        """
        return json.dumps(handle_task_get(store, name=name), indent=2)

    @mcp.tool()
    def timeline() -> str:
        """
        Tasks in chronological order with their position in the project range.

        Each task's "timeline" holds startPercent/widthPercent (0-100); undated
        tasks come last with a null timeline.
        """
        return json.dumps(handle_timeline(store), indent=2)

    @mcp.tool()
    def report_reload() -> str:
        """Rebuild the report from the CSV export and config file now."""
        result = handle_reload(store)
        log.info("Report reloaded via MCP tool")
        return json.dumps(result, indent=2)
