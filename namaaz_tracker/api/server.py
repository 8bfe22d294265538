"""
FastAPI server for the tracker API. Run with run_api_server(app) in a background thread.
Central endpoint: GET /api/components. Per-plugin routes are mounted from
namaaz_tracker.plugins.<package>.api (get_router(tracker_app)) under /api/components/<package>/.
Docs when enabled: http://<host>:<port>/docs
"""
import importlib
import importlib.util
import logging
import threading
from typing import Any, Dict, List

from fastapi import FastAPI

from namaaz_tracker.core.plugin_manager import PLUGIN_PACKAGE

logger = logging.getLogger(__name__)


def create_app(tracker_app: Any) -> FastAPI:
    """Create FastAPI app with routes that use the given TrackerApp (or anything with .state and .config)."""
    app = FastAPI(title="Namaaz Tracker API", description="Prayer log, stats and calendars")

    @app.get("/api/components")
    def list_components() -> List[Dict[str, Any]]:
        """List registered view components with their enabled state."""
        return tracker_app.plugin_manager.view_states(tracker_app.config.data.get("components"))

    # Mount routers of plugins that registered views and ship an api module
    for name in sorted(set(tracker_app.plugin_manager.plugin_of.values())):
        module_name = f"{PLUGIN_PACKAGE}.{name}.api"
        if importlib.util.find_spec(module_name) is None:
            continue
        try:
            router = importlib.import_module(module_name).get_router(tracker_app)
            app.include_router(router, prefix=f"/api/components/{name}")
        except Exception as e:
            logger.warning(f"Failed to mount API router for plugin {name}: {e}", exc_info=True)

    return app


def run_api_server(tracker_app: Any) -> None:
    """
    Start the API server in a daemon thread if api.enabled is true.
    Reads api.host (default 127.0.0.1) and api.port (default 8765) from config.
    """
    api_config = tracker_app.config.data.get("api") or {}
    if not api_config.get("enabled", False):
        logger.info("API server not started: set api.enabled to true in your config file to enable.")
        return
    host = api_config.get("host", "127.0.0.1")
    port = int(api_config.get("port", 8765))
    fastapi_app = create_app(tracker_app)

    def run_uvicorn():
        try:
            import uvicorn
            logger.info(f"API server listening at http://{host}:{port} (docs at /docs)")
            uvicorn.run(fastapi_app, host=host, port=port)
        except Exception as e:
            logger.exception(f"API server thread failed: {e}")

    thread = threading.Thread(target=run_uvicorn, daemon=True)
    thread.start()
    logger.info("API server thread started.")
