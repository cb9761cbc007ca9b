"""
Tests for store/report_store.py and watcher/file_watcher.py.

Covers:
- initialize / reload: full rebuilds, build counter, status diagnostics
- notify_changed: CSV change, config change, unrelated path
- load errors surfaced through status
- FileWatcher.check_once: mtime changes, appearing / disappearing files
- Thread safety: concurrent reads during reloads don't crash; builds never overlap
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import os
import shutil
import threading
import time
from datetime import date
from unittest.mock import patch

import pytest

from taskreport.config.store import ConfigStore
from taskreport.engine.transform import load_report
from taskreport.store.report_store import ReportStore
from taskreport.watcher.file_watcher import FileWatcher

FIXTURE = Path(__file__).parent / "fixtures" / "test-project.csv"
TODAY = date(2026, 1, 15)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_workspace(tmp_path: Path):
    csv_path = tmp_path / "project.csv"
    shutil.copy(FIXTURE, csv_path)
    config_path = tmp_path / "report.config"
    config_path.write_text("PROJECT_NAME=Test Project\n", encoding="utf-8")
    return csv_path, config_path


def _bump_mtime(path: Path, seconds: int = 10) -> None:
    st = path.stat()
    os.utime(path, (st.st_atime, st.st_mtime + seconds))


@pytest.fixture
def store(tmp_path):
    csv_path, config_path = _make_workspace(tmp_path)
    s = ReportStore(csv_path, ConfigStore(config_path), today_fn=lambda: TODAY)
    s.initialize()
    return s


# ---------------------------------------------------------------------------
# ReportStore
# ---------------------------------------------------------------------------

class TestInitialize:
    def test_builds_report(self, store):
        assert store.report.stats.total == 8
        assert store.report.error is None
        assert store.config.project_name == "Test Project"

    def test_status(self, store):
        st = store.status()
        assert st["tasks"] == 8
        assert st["sections"] == 4
        assert st["custom_fields"] == 2
        assert st["diagnostics"] == 0
        assert st["error"] is None
        assert st["build_count"] == 1
        assert st["last_build"] is not None
        assert st["csv_path"].endswith("project.csv")
        assert st["config_path"].endswith("report.config")

    def test_watched_paths(self, store):
        assert [p.name for p in store.watched_paths] == ["project.csv", "report.config"]

    def test_no_config_store(self, tmp_path):
        csv_path, _ = _make_workspace(tmp_path)
        s = ReportStore(csv_path, today_fn=lambda: TODAY)
        s.initialize()
        assert s.config_path is None
        assert s.watched_paths == [csv_path]
        assert s.status()["config_path"] is None


class TestReload:
    def test_reload_picks_up_new_rows(self, store):
        with store.csv_path.open("a", encoding="utf-8") as f:
            f.write("1009,Task Nine,Backlog,,,,,,,,,,,,,,,,\n")
        report = store.reload()
        assert report.stats.total == 9
        assert "Backlog" in report.section_names
        assert store.status()["build_count"] == 2

    def test_reload_replaces_report_object(self, store):
        before = store.report
        store.reload()
        assert store.report is not before
        assert store.report == before

    def test_missing_csv(self, tmp_path):
        s = ReportStore(tmp_path / "missing.csv", today_fn=lambda: TODAY)
        s.initialize()
        assert s.report.error is not None
        assert s.status()["error"] == "CSV_NOT_FOUND"
        assert s.status()["tasks"] == 0

    def test_csv_deleted_after_start(self, store):
        store.csv_path.unlink()
        store.reload()
        assert store.status()["error"] == "CSV_NOT_FOUND"


class TestNotifyChanged:
    def test_csv_change(self, store):
        store.csv_path.write_text("Name,Section/Column\nOnly,Done\n", encoding="utf-8")
        assert store.notify_changed(store.csv_path) is True
        assert store.report.stats.total == 1
        assert store.report.stats.completion_percent == 100

    def test_config_change_rebuilds(self, store):
        store.config_path.write_text("NOTES_TEXT_PREVIEW_LENGTH=20\n", encoding="utf-8")
        assert store.notify_changed(store.config_path) is True
        assert store.config.notes_text_preview_length == 20
        assert store.report.display["notesTextPreviewLength"] == 20
        assert store.status()["build_count"] == 2

    def test_unrelated_path(self, store, tmp_path):
        assert store.notify_changed(tmp_path / "notes.txt") is False
        assert store.status()["build_count"] == 1


class TestThreadSafety:
    def test_concurrent_reads_during_reload(self, store):
        errors = []

        def reader():
            try:
                for _ in range(50):
                    report = store.report
                    assert len(report.all_tasks) == report.stats.total
                    store.status()
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=reader) for _ in range(4)]
        for t in threads:
            t.start()
        for _ in range(5):
            store.reload()
        for t in threads:
            t.join()

        assert errors == []

    def test_concurrent_reloads_do_not_overlap(self, store):
        active = []
        overlaps = []
        state_lock = threading.Lock()

        def slow_load(*args, **kwargs):
            with state_lock:
                active.append(1)
                if len(active) > 1:
                    overlaps.append(len(active))
            time.sleep(0.02)
            with state_lock:
                active.pop()
            return load_report(*args, **kwargs)

        with patch("taskreport.store.report_store.load_report", side_effect=slow_load):
            threads = [threading.Thread(target=store.reload) for _ in range(4)]
            for t in threads:
                t.start()
            for t in threads:
                t.join()

        assert overlaps == []
        assert store.status()["build_count"] == 5

    def test_older_build_never_lands_last(self, store):
        def read_then_stall(*args, **kwargs):
            report = load_report(*args, **kwargs)
            time.sleep(0.05)
            return report

        with patch("taskreport.store.report_store.load_report", side_effect=read_then_stall):
            stale = threading.Thread(target=store.reload)
            stale.start()
            time.sleep(0.01)
            store.csv_path.write_text("Name\nLatest\n", encoding="utf-8")
            store.reload()
            stale.join()

        assert store.report.stats.total == 1
        assert store.report.all_tasks[0].name == "Latest"


# ---------------------------------------------------------------------------
# FileWatcher
# ---------------------------------------------------------------------------

class TestFileWatcher:
    def test_no_changes(self, store):
        watcher = FileWatcher(store, store.watched_paths, poll_interval=60)
        assert watcher.check_once() == []
        assert store.status()["build_count"] == 1

    def test_csv_change_triggers_rebuild(self, store):
        watcher = FileWatcher(store, store.watched_paths, poll_interval=60)
        store.csv_path.write_text("Name,Section/Column\nA,To do\nB,Done\n", encoding="utf-8")
        _bump_mtime(store.csv_path)

        changed = watcher.check_once()
        assert changed == [store.csv_path]
        assert store.report.stats.total == 2

        assert watcher.check_once() == []

    def test_config_change_triggers_reload(self, store):
        watcher = FileWatcher(store, store.watched_paths, poll_interval=60)
        store.config_path.write_text("PROJECT_NAME=Renamed\n", encoding="utf-8")
        _bump_mtime(store.config_path)

        assert watcher.check_once() == [store.config_path]
        assert store.config.project_name == "Renamed"

    def test_deleted_and_recreated_file(self, store):
        watcher = FileWatcher(store, store.watched_paths, poll_interval=60)
        store.csv_path.unlink()
        assert watcher.check_once() == [store.csv_path]
        assert store.report.error is not None

        shutil.copy(FIXTURE, store.csv_path)
        assert watcher.check_once() == [store.csv_path]
        assert store.report.error is None
        assert store.report.stats.total == 8

    def test_missing_file_at_start(self, tmp_path):
        csv_path = tmp_path / "later.csv"
        s = ReportStore(csv_path, today_fn=lambda: TODAY)
        s.initialize()
        watcher = FileWatcher(s, s.watched_paths, poll_interval=60)
        assert watcher.check_once() == []

        shutil.copy(FIXTURE, csv_path)
        assert watcher.check_once() == [csv_path]
        assert s.report.stats.total == 8

    def test_poll_interval_from_env(self, store, monkeypatch):
        monkeypatch.setenv("POLL_INTERVAL", "0.5")
        watcher = FileWatcher(store, store.watched_paths)
        assert watcher._poll_interval == 0.5

    def test_start_and_stop(self, store):
        watcher = FileWatcher(store, store.watched_paths, poll_interval=0.05)
        watcher.start()
        try:
            store.csv_path.write_text("Name\nSolo\n", encoding="utf-8")
            _bump_mtime(store.csv_path)
            deadline = time.time() + 5
            while store.report.stats.total != 1 and time.time() < deadline:
                time.sleep(0.05)
        finally:
            watcher.stop()
        assert store.report.stats.total == 1
        assert not watcher._thread.is_alive()
