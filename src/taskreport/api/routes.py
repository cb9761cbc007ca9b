"""REST API routes for the task report."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from taskreport.api.handlers import (
    handle_config,
    handle_reload,
    handle_report,
    handle_sections,
    handle_stats,
    handle_status,
    handle_task_get,
    handle_task_list,
    handle_timeline,
)


def register_routes(app_router: APIRouter, store) -> None:
    """Attach all read-only REST routes that use the shared store."""

    @app_router.get("/report")
    def get_report():
        return handle_report(store)

    @app_router.get("/tasks")
    def list_tasks(
        section: Optional[str] = Query(None),
        assignee: Optional[str] = Query(None),
        overdue: Optional[bool] = Query(None),
        done: Optional[bool] = Query(None),
        include_subtasks: bool = Query(True),
        limit: int = Query(500),
    ):
        return handle_task_list(
            store,
            section=section,
            assignee=assignee,
            overdue=overdue,
            done=done,
            include_subtasks=include_subtasks,
            limit=limit,
        )

    @app_router.get("/tasks/{name}")
    def get_task(name: str):
        result = handle_task_get(store, name=name)
        if "error" in result:
            raise HTTPException(status_code=404, detail=result["error"])
        return result

    @app_router.get("/sections")
    def list_sections():
        return handle_sections(store)

    @app_router.get("/stats")
    def get_stats():
        return handle_stats(store)

    @app_router.get("/timeline")
    def get_timeline():
        return handle_timeline(store)

    @app_router.get("/config")
    def get_config():
        return handle_config(store)

    @app_router.get("/status")
    def get_status():
        return handle_status(store)

    @app_router.post("/reload")
    def reload_report():
        return handle_reload(store)
