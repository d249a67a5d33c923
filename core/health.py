"""
core/health.py
--------------
System health diagnostics for the PropertyInsights backend.

Purpose
-------
- Used by FastAPI `/health` endpoint and the System Status page.
- Validates connectivity to the configured data source.
- Reports backend uptime, version, CPU/memory usage.
- Returns JSON-safe dict ready for serialization.
"""

from __future__ import annotations

import platform
import time
from typing import Any, Dict

import psutil

from core.metadata import __version__
from core.ui_config import DATA_SOURCE


# Cache the process start time for uptime calculation
START_TIME = time.time()


def _check_data_source() -> Dict[str, Any]:
    """Probe the configured store with a one-row read."""
    if DATA_SOURCE == "sqlite":
        from database.db_setup import DB_URL
        from database.queries import ping

        return {"connected": ping(), "url": DB_URL}

    from supabase_client.helpers import test_connection

    url = test_connection()
    return {"connected": url is not None, "url": url}


def system_health() -> Dict[str, Any]:
    """
    Return structured backend health diagnostics.

    Returns
    -------
    dict
        JSON-safe health report compatible with the UI HealthSchema.
    """
    status = "ok"
    message = "Backend operational."

    # --- Data source connectivity test ---
    source = _check_data_source()
    if not source.get("connected"):
        status = "degraded"
        message = f"{DATA_SOURCE} check failed: unreachable"

    # --- System metrics ---
    try:
        cpu_load = psutil.cpu_percent(interval=0.2)
        memory_usage = round(psutil.virtual_memory().used / (1024 * 1024), 2)
    except Exception:
        cpu_load = None
        memory_usage = None

    # --- Construct report ---
    return {
        "status": status,
        "message": message,
        "version": __version__,
        "data_source": DATA_SOURCE,
        "data_source_connected": bool(source.get("connected")),
        "data_source_url": source.get("url"),
        "cpu_load": cpu_load,
        "memory_usage": memory_usage,
        "uptime_sec": round(time.time() - START_TIME, 2),
        "system": platform.system(),
        "release": platform.release(),
    }
