"""
Report configuration schema.

The config file is a list of ``KEY=VALUE`` lines. Instead of one branch per
key, CONFIG_SCHEMA maps each external key to the dotted path it sets and the
type its value is parsed as; parse_config_text applies every line through one
generic setter. Adding an option is one schema entry plus a model field.
"""

import copy
import logging
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, Field

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class TabsConfig(BaseModel):
    dashboard: bool = True
    board: bool = True
    tasks: bool = True
    timeline: bool = True


class ViewNamesConfig(BaseModel):
    dashboard: str = "Dashboard"
    board: str = "Board"
    tasks: str = "Tasks"
    timeline: str = "Timeline"


class HeadingsConfig(BaseModel):
    dashboard: str = "Dashboard"
    board: str = "Board"
    tasks: str = "Tasks"
    timeline: str = "Timeline"


class TasksColumnsConfig(BaseModel):
    name: bool = True
    progress: bool = True
    section: bool = True
    assignee: bool = True
    due: bool = True
    priority: bool = True
    status: bool = True
    tags: bool = True
    parent: bool = True
    notes: bool = True
    notes_text: bool = True
    notes_text_mode: str = "preview"
    custom: bool = True


class TimelineColumnsConfig(BaseModel):
    name: bool = True
    progress: bool = True
    section: bool = True
    start: bool = True
    due: bool = True
    duration: bool = True
    status: bool = True
    tags: bool = True
    parent: bool = True
    notes: bool = True
    notes_text: bool = True
    notes_text_mode: str = "preview"
    custom: bool = True


class CardItemsConfig(BaseModel):
    progress: bool = True
    assignee: bool = True
    due: bool = True
    status: bool = True
    priority: bool = True
    tags: bool = True
    parent: bool = True
    notes: bool = True
    custom: bool = True


class ReportConfig(BaseModel):
    """Display options for the report front end."""

    project_name: str = "Project Report"
    customer_name: str = "Customer"
    site_base: str = ""
    notes_text_preview_length: int = 100
    tabs: TabsConfig = Field(default_factory=TabsConfig)
    view_names: ViewNamesConfig = Field(default_factory=ViewNamesConfig)
    headings: HeadingsConfig = Field(default_factory=HeadingsConfig)
    tasks_columns: TasksColumnsConfig = Field(default_factory=TasksColumnsConfig)
    timeline_columns: TimelineColumnsConfig = Field(default_factory=TimelineColumnsConfig)
    card_items: CardItemsConfig = Field(default_factory=CardItemsConfig)


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

def _columns(prefix: str, path: str, names: Tuple[str, ...]) -> Dict[str, Tuple[str, str]]:
    return {f"{prefix}{name.upper()}": (f"{path}.{name}", "boolean") for name in names}


CONFIG_SCHEMA: Dict[str, Tuple[str, str]] = {
    "PROJECT_NAME": ("project_name", "string"),
    "CUSTOMER_NAME": ("customer_name", "string"),
    "SITE_BASE": ("site_base", "string"),
    "NOTES_TEXT_PREVIEW_LENGTH": ("notes_text_preview_length", "number"),
    "TASKS_NOTES_TEXT_MODE": ("tasks_columns.notes_text_mode", "string"),
    "TIMELINE_NOTES_TEXT_MODE": ("timeline_columns.notes_text_mode", "string"),
    **{f"SHOW_{view.upper()}": (f"tabs.{view}", "boolean")
       for view in ("dashboard", "board", "tasks", "timeline")},
    **{f"{view.upper()}_NAME": (f"view_names.{view}", "string")
       for view in ("dashboard", "board", "tasks", "timeline")},
    **{f"{view.upper()}_HEADING": (f"headings.{view}", "string")
       for view in ("dashboard", "board", "tasks", "timeline")},
    **_columns("TASKS_COL_", "tasks_columns", (
        "name", "progress", "section", "assignee", "due", "priority",
        "status", "tags", "parent", "notes", "notes_text", "custom",
    )),
    **_columns("TIMELINE_COL_", "timeline_columns", (
        "name", "progress", "section", "start", "due", "duration",
        "status", "tags", "parent", "notes", "notes_text", "custom",
    )),
    **_columns("CARD_SHOW_", "card_items", (
        "progress", "assignee", "due", "status", "priority",
        "tags", "parent", "notes", "custom",
    )),
}


# ---------------------------------------------------------------------------
# Value parsing
# ---------------------------------------------------------------------------

def parse_yes_no(value: str) -> bool:
    """YES / Y / TRUE / 1 (any case, surrounding spaces ignored) → True; else False."""
    return value.strip().upper() in ("YES", "Y", "TRUE", "1")


def parse_number(value: str, default: int = 0) -> int:
    """Integer value, truncating decimals; ``default`` if it does not parse."""
    try:
        return int(float(value.strip()))
    except (ValueError, OverflowError):
        return default


def set_nested_value(obj: Dict[str, Any], path: str, value: Any) -> None:
    """Set ``obj["a"]["b"]["c"] = value`` for ``path == "a.b.c"``, creating dicts as needed."""
    keys = path.split(".")
    target = obj
    for key in keys[:-1]:
        target = target.setdefault(key, {})
    target[keys[-1]] = value


def get_nested_value(obj: Dict[str, Any], path: str) -> Any:
    target: Any = obj
    for key in path.split("."):
        target = target[key]
    return target


def _convert(raw: str, value_type: str, current: Any) -> Any:
    if value_type == "boolean":
        return parse_yes_no(raw)
    if value_type == "number":
        return parse_number(raw, default=current)
    return raw.strip()


def parse_config_text(content: str, base: Optional[ReportConfig] = None) -> ReportConfig:
    """
    Apply ``KEY=VALUE`` lines on top of ``base`` (defaults if omitted).

    Blank lines, ``#`` comments, lines without ``=``, empty values and unknown
    keys are ignored. A value may itself contain ``=``; only the first one splits.
    """
    data = copy.deepcopy((base or ReportConfig()).model_dump())

    for line_num, line in enumerate(content.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, raw = stripped.split("=", 1)
        key = key.strip()
        if not raw.strip():
            continue
        entry = CONFIG_SCHEMA.get(key)
        if entry is None:
            log.debug("Ignoring unknown config key %s on line %d", key, line_num)
            continue
        path, value_type = entry
        set_nested_value(data, path, _convert(raw, value_type, get_nested_value(data, path)))

    return ReportConfig.model_validate(data)


def display_options(config: ReportConfig) -> Dict[str, Any]:
    """The flags the report engine passes through to the rendering layer."""
    return {
        "notesTextPreviewLength": config.notes_text_preview_length,
        "tasksNotesTextMode": config.tasks_columns.notes_text_mode,
        "timelineNotesTextMode": config.timeline_columns.notes_text_mode,
    }
