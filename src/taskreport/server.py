"""
Task report server entry point.

Startup sequence:
1. Read REPORT_CSV_PATH and REPORT_CONFIG_PATH from environment
2. Load the config file and build the first report
3. Start FileWatcher daemon thread on the CSV and config file
4. Start REST API server in background thread (if API_ENABLED)
5. Run MCP server (stdio transport) if MCP_ENABLED, else keep serving the API
"""

import logging
import os
import sys
import threading
from pathlib import Path

from taskreport.config.store import ConfigStore
from taskreport.store.report_store import ReportStore
from taskreport.watcher.file_watcher import FileWatcher

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    stream=sys.stderr,
)
log = logging.getLogger(__name__)


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("true", "1", "yes")


def _start_api_server(store, port: int) -> None:
    """Run the FastAPI/uvicorn server."""
    import uvicorn

    from taskreport.api.app import create_app

    app = create_app(store)
    log.info("Starting REST API on port %d", port)
    uvicorn.run(app, host="0.0.0.0", port=port, log_level="warning")


def main() -> None:
    csv_path = Path(os.environ.get("REPORT_CSV_PATH", "data/project.csv"))
    config_path = Path(os.environ.get("REPORT_CONFIG_PATH", "report.config"))

    log.info("CSV export: %s", csv_path)
    log.info("Config file: %s", config_path)

    config_store = ConfigStore(config_path)
    store = ReportStore(csv_path, config_store)
    store.initialize()

    watcher = FileWatcher(store, store.watched_paths)
    watcher.start()

    api_enabled = _env_flag("API_ENABLED", "true")
    mcp_enabled = _env_flag("MCP_ENABLED", "true")
    api_port = int(os.environ.get("API_PORT", "9400"))

    if not mcp_enabled:
        if not api_enabled:
            log.error("Both API_ENABLED and MCP_ENABLED are off; nothing to serve")
            watcher.stop()
            sys.exit(1)
        try:
            _start_api_server(store, api_port)
        finally:
            watcher.stop()
        return

    if api_enabled:
        api_thread = threading.Thread(
            target=_start_api_server, args=(store, api_port), daemon=True
        )
        api_thread.start()

    from mcp.server.fastmcp import FastMCP

    from taskreport.api.tools import register_report_tools

    mcp = FastMCP("taskreport")
    register_report_tools(mcp, store)

    log.info("Starting taskreport MCP server")
    try:
        mcp.run(transport="stdio")
    finally:
        watcher.stop()


if __name__ == "__main__":
    main()
