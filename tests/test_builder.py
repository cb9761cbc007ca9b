"""
Tests for engine/builder.py.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from datetime import date

from taskreport.engine.builder import (
    build_task,
    days_until,
    is_overdue,
    priority_order,
    split_list,
)

TODAY = date(2026, 1, 15)


def _build(record: dict, section: str = "To do", custom=(), row: int = 0):
    return build_task(
        record,
        row=row,
        section=section,
        section_order=1,
        custom_field_names=list(custom),
        today=TODAY,
    )


class TestPriorityOrder:
    def test_known(self):
        assert priority_order("High") == 1
        assert priority_order("Medium") == 2
        assert priority_order("Low") == 3

    def test_unknown_or_missing(self):
        assert priority_order(None) == 4
        assert priority_order("") == 4
        assert priority_order("Unknown") == 4
        assert priority_order("high") == 4


class TestSplitList:
    def test_trim_and_drop_empty(self):
        assert split_list(" a, b ,, c ,") == ("a", "b", "c")

    def test_duplicates_removed(self):
        assert split_list("a, b, a") == ("a", "b")

    def test_empty(self):
        assert split_list("") == ()
        assert split_list(None) == ()


class TestIsOverdue:
    def test_past_due(self):
        assert is_overdue(date(2026, 1, 10), False, TODAY)
        assert is_overdue(date(2026, 1, 14), False, TODAY)

    def test_future_or_today(self):
        assert not is_overdue(date(2026, 1, 20), False, TODAY)
        assert not is_overdue(date(2026, 1, 15), False, TODAY)

    def test_done_never_overdue(self):
        assert not is_overdue(date(2026, 1, 1), True, TODAY)

    def test_no_due_date(self):
        assert not is_overdue(None, False, TODAY)


class TestDaysUntil:
    def test_values(self):
        assert days_until(date(2026, 1, 20), TODAY) == 5
        assert days_until(date(2026, 1, 10), TODAY) == -5
        assert days_until(TODAY, TODAY) == 0
        assert days_until(None, TODAY) is None


class TestBuildTask:
    def test_full_record(self):
        record = {
            "Task ID": "42",
            "Name": " Write docs ",
            "Assignee": "Alice",
            "Assignee Email": "alice@example.com",
            "Start Date": "2026-01-10",
            "Due Date": "01/20/2026",
            "Priority": "High",
            "Status": "On track",
            "Notes": "Some notes",
            "Tags": "docs, writing",
            "Parent task": "Release",
            "Blocked By (Dependencies)": "Design, Review",
            "Blocking (Dependencies)": "",
            "Created At": "2026-01-01",
            "Last Modified": "2026-01-12",
        }
        task = _build(record, row=3)
        assert task.id == "42"
        assert task.name == "Write docs"
        assert task.row == 3
        assert task.section == "To do"
        assert task.section_order == 1
        assert task.assignee == "Alice"
        assert task.assignee_email == "alice@example.com"
        assert task.start_date == "2026-01-10"
        assert task.due_date == "2026-01-20"
        assert task.priority == "High"
        assert task.priority_order == 1
        assert task.status == "On track"
        assert task.notes == "Some notes"
        assert task.tags == ("docs", "writing")
        assert task.parent_name == "Release"
        assert task.is_subtask
        assert task.blocked_by == ("Design", "Review")
        assert task.blocking == ()
        assert task.created_at == "2026-01-01"
        assert task.modified_at == "2026-01-12"
        assert task.completed_at is None
        assert not task.is_done
        assert not task.is_overdue
        assert task.days_until_due == 5
        assert task.duration is not None
        assert task.duration.days == 10
        assert task.timeline is None

    def test_defaults(self):
        task = _build({"Name": "Bare"})
        assert task.assignee == "Unassigned"
        assert task.priority is None
        assert task.priority_order == 4
        assert task.status is None
        assert task.tags == ()
        assert task.parent_name is None
        assert not task.is_subtask
        assert task.start_date is None
        assert task.due_date is None
        assert task.days_until_due is None
        assert task.duration is None
        assert task.custom_fields is None

    def test_done_by_section(self):
        task = _build({"Name": "A", "Due Date": "2026-01-01"}, section="Done")
        assert task.is_done
        assert not task.is_overdue

    def test_done_by_completed_at(self):
        task = _build({"Name": "A", "Due Date": "2026-01-01", "Completed At": "2026-01-02"})
        assert task.is_done
        assert not task.is_overdue
        assert task.completed_at == "2026-01-02"

    def test_overdue(self):
        task = _build({"Name": "A", "Due Date": "2026-01-10"}, section="In Progress")
        assert task.is_overdue
        assert task.days_until_due == -5

    def test_invalid_due_date_is_absent(self):
        task = _build({"Name": "A", "Due Date": "someday"})
        assert task.due_date is None
        assert not task.is_overdue
        assert task.days_until_due is None

    def test_custom_fields(self):
        task = _build({"Name": "A", "Sprint": "Sprint 2", "Story Points": ""}, custom=["Sprint", "Story Points"])
        assert task.custom_fields == {"Sprint": "Sprint 2", "Story Points": None}

    def test_empty_name_still_builds(self):
        task = _build({"Name": ""})
        assert task.name == ""
