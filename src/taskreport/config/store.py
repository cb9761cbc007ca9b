"""
Config store with explicit reload.

The store owns the current ReportConfig. Nothing is cached at module level:
the file is read when the store is created and again only when reload() is
called, typically from a file-change notification.
"""

import logging
import threading
from pathlib import Path
from typing import Optional, Union

from taskreport.config.schema import ReportConfig, parse_config_text

log = logging.getLogger(__name__)


def load_config(path: Union[str, Path]) -> ReportConfig:
    """Read a config file; defaults (and a warning) if it is missing or unreadable."""
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        log.warning("Config file %s not found, using defaults", path)
        return ReportConfig()
    except (OSError, UnicodeDecodeError) as e:
        log.warning("Cannot read config file %s (%s), using defaults", path, e)
        return ReportConfig()
    return parse_config_text(content)


class ConfigStore:
    """
    Holds the report config for one config file.

    Usage:
        store = ConfigStore(Path("report.config"))
        store.config.project_name
        store.notify_changed(path)   # from a watcher
    """

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self._lock = threading.RLock()
        self._path = Path(path) if path else None
        self._config = ReportConfig()
        self.reload()

    @property
    def path(self) -> Optional[Path]:
        return self._path

    @property
    def config(self) -> ReportConfig:
        with self._lock:
            return self._config

    def reload(self) -> ReportConfig:
        """Re-read the config file and replace the current config."""
        config = load_config(self._path) if self._path else ReportConfig()
        with self._lock:
            self._config = config
        log.info("Config loaded: %s", self._path or "<defaults>")
        return config

    def notify_changed(self, path: Union[str, Path]) -> bool:
        """Reload if ``path`` is this store's config file. Returns True if it reloaded."""
        if self._path is None or Path(path) != self._path:
            return False
        self.reload()
        return True
