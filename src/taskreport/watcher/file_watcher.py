"""
Polling file watcher.

Polls the mtimes of a fixed set of files (the CSV export and the config file)
and hands each change to the store as an explicit notification. Polling keeps
this working on mounted volumes that do not forward filesystem events.

The watcher runs a daemon thread that:
1. Sleeps POLL_INTERVAL seconds
2. Compares each watched file's mtime with the last one seen
3. Calls store.notify_changed(path) for every file that changed, appeared or
   disappeared
"""

import logging
import os
import threading
from pathlib import Path
from typing import Dict, Iterable, List, Optional

log = logging.getLogger(__name__)

# Default polling interval in seconds (configurable via POLL_INTERVAL env var)
_DEFAULT_POLL_INTERVAL = 5.0


def _mtime(path: Path) -> float:
    """mtime of ``path``; 0.0 for a missing or unreadable file."""
    try:
        return path.stat().st_mtime
    except OSError:
        return 0.0


class FileWatcher:
    """
    Polling watcher for a handful of files.

    Usage:
        watcher = FileWatcher(store, store.watched_paths)
        watcher.start()
        ...
        watcher.stop()
    """

    def __init__(
        self,
        store,
        paths: Iterable[Path],
        poll_interval: Optional[float] = None,
    ) -> None:
        self._store = store
        self._paths: List[Path] = [Path(p) for p in paths]
        self._poll_interval = poll_interval or float(
            os.environ.get("POLL_INTERVAL", _DEFAULT_POLL_INTERVAL)
        )
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._known: Dict[Path, float] = self._snapshot()

    def start(self) -> None:
        """Start the polling thread (daemon)."""
        log.info(
            "Starting file watcher on %d file(s) (polling every %.1fs)",
            len(self._paths),
            self._poll_interval,
        )
        self._known = self._snapshot()
        self._thread = threading.Thread(
            target=self._poll_loop, daemon=True, name="report-watcher"
        )
        self._thread.start()

    def stop(self) -> None:
        """Signal the poll thread to stop and wait for it."""
        log.info("Stopping file watcher")
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=self._poll_interval + 2)

    def check_once(self) -> List[Path]:
        """
        Run a single poll cycle synchronously.

        Returns:
            The paths that changed since the previous cycle
        """
        current = self._snapshot()
        changed = [path for path, mtime in current.items() if mtime != self._known.get(path)]
        self._known = current
        for path in changed:
            log.debug("Watched file changed: %s", path)
            self._store.notify_changed(path)
        return changed

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _poll_loop(self) -> None:
        """Main polling loop; runs until stop_event is set."""
        while not self._stop_event.is_set():
            self._stop_event.wait(self._poll_interval)
            if self._stop_event.is_set():
                break
            try:
                self.check_once()
            except Exception:
                log.exception("Error during poll cycle")

    def _snapshot(self) -> Dict[Path, float]:
        return {path: _mtime(path) for path in self._paths}
