"""
Thread-safe holder of the latest report.

Design:
    Report        : ReportData from the last full build (replaced, never mutated)
    Config        : ConfigStore owning the ReportConfig
    Notifications : notify_changed(path) from the file watcher triggers a
                      config reload and/or a full rebuild

Every rebuild is a full batch run of the pipeline; there are no incremental
updates. Builds are serialized by _build_lock: each one reads the files after
the previous one has been swapped in, so an older build never lands last. The
swap happens under _lock, so readers see one complete ReportData and never
wait on a build.
"""

import logging
import threading
from datetime import date, datetime
from pathlib import Path
from typing import Callable, List, Optional, Union

from taskreport.config.schema import ReportConfig
from taskreport.config.store import ConfigStore
from taskreport.engine.transform import load_report
from taskreport.models.report import ReportData
from taskreport.utils.dates import utc_today

log = logging.getLogger(__name__)


class ReportStore:
    """
    Latest report for one CSV file.

    Call initialize() once at startup; afterwards reload() or notify_changed()
    rebuild on demand.
    """

    def __init__(
        self,
        csv_path: Union[str, Path],
        config_store: Optional[ConfigStore] = None,
        today_fn: Optional[Callable[[], date]] = None,
    ) -> None:
        self._lock = threading.RLock()
        self._build_lock = threading.Lock()
        self._csv_path = Path(csv_path)
        self._config_store = config_store or ConfigStore()
        self._today_fn = today_fn or utc_today
        self._report = ReportData.empty()
        self._last_build: Optional[datetime] = None
        self._build_count = 0

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def initialize(self) -> ReportData:
        """First build. Blocks until complete."""
        log.info("Building report from %s", self._csv_path)
        return self.reload()

    def reload(self) -> ReportData:
        """Rebuild the report from disk and make it current."""
        with self._build_lock:
            report = load_report(
                self._csv_path,
                today=self._today_fn(),
                config=self._config_store.config,
            )
            with self._lock:
                self._report = report
                self._last_build = datetime.now()
                self._build_count += 1
        if report.error:
            log.warning("Report build failed: %s", report.error.kind.value)
        else:
            log.info(
                "Report built: %d tasks, %d sections",
                report.stats.total,
                len(report.section_names),
            )
        return report

    def notify_changed(self, path: Union[str, Path]) -> bool:
        """
        Handle a file-change notification.

        A config change reloads the config and rebuilds (the display flags
        live on the report); a CSV change rebuilds. Other paths are ignored.

        Returns:
            True if the report was rebuilt
        """
        path = Path(path)
        config_changed = self._config_store.notify_changed(path)
        if config_changed or path == self._csv_path:
            self.reload()
            return True
        return False

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def report(self) -> ReportData:
        with self._lock:
            return self._report

    @property
    def config(self) -> ReportConfig:
        return self._config_store.config

    @property
    def csv_path(self) -> Path:
        return self._csv_path

    @property
    def config_path(self) -> Optional[Path]:
        return self._config_store.path

    @property
    def watched_paths(self) -> List[Path]:
        paths = [self._csv_path]
        if self._config_store.path:
            paths.append(self._config_store.path)
        return paths

    # ------------------------------------------------------------------
    # Status / diagnostics
    # ------------------------------------------------------------------

    def status(self) -> dict:
        with self._lock:
            report = self._report
            return {
                "csv_path": str(self._csv_path),
                "config_path": str(self._config_store.path) if self._config_store.path else None,
                "tasks": report.stats.total,
                "sections": len(report.section_names),
                "custom_fields": len(report.custom_field_names),
                "diagnostics": len(report.diagnostics),
                "error": report.error.kind.value if report.error else None,
                "last_build": self._last_build.isoformat() if self._last_build else None,
                "build_count": self._build_count,
            }
