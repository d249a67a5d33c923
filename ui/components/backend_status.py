# ui/components/backend_status.py
"""
Backend health indicator for the Streamlit pages.

Features
--------
✅ Environment-aware: Reads BACKEND_URL from core.ui_config.
✅ Type-safe: Uses Pydantic to validate the /health schema.
✅ Caching: st.cache_data with configurable TTL.
✅ Graceful fallback: never crashes the UI when the backend is offline.
"""

from __future__ import annotations

import os
from typing import Any, Dict, Optional

import requests
import streamlit as st
from pydantic import BaseModel, Field

from core.ui_config import BACKEND_URL

CACHE_TTL = int(os.getenv("BACKEND_STATUS_TTL", "60"))  # seconds

STATUS_COLORS = {
    "ok": "green",
    "healthy": "green",
    "degraded": "orange",
    "error": "red",
    "offline": "red",
}


# --------------------------------------------------------------------------- #
# Typed Health Schema
# --------------------------------------------------------------------------- #

class HealthSchema(BaseModel):
    """Structured schema for the /health endpoint response."""
    status: str = Field(default="unknown", description="Overall backend status")
    message: Optional[str] = Field(default=None, description="Optional status message")
    version: Optional[str] = Field(default=None, description="Backend version string")
    data_source: Optional[str] = Field(default=None, description="'supabase' or 'sqlite'")
    data_source_connected: Optional[bool] = Field(default=None, description="Store connectivity flag")
    data_source_url: Optional[str] = Field(default=None, description="Store URL")
    cpu_load: Optional[float] = Field(default=None, description="Backend CPU load")
    memory_usage: Optional[float] = Field(default=None, description="Backend memory usage in MB")
    uptime_sec: Optional[float] = Field(default=None, description="Backend uptime in seconds")
    latency_ms: Optional[float] = Field(default=None, description="Approximate round-trip latency in ms")

    def color(self) -> str:
        return get_status_color(self.status)


def get_status_color(status: str) -> str:
    """Color name for a health status string."""
    return STATUS_COLORS.get((status or "").lower(), "gray")


# --------------------------------------------------------------------------- #
# Health Fetcher
# --------------------------------------------------------------------------- #

def fetch_health(base_url: str = BACKEND_URL, timeout: float = 5) -> Dict[str, Any]:
    """
    Fetch the backend /health endpoint with structured fallback.

    Returns
    -------
    dict
        Validated health payload, or a dict with ``status`` "error" /
        "offline" and a ``message``.
    """
    url = f"{base_url.rstrip('/')}/health"
    try:
        resp = requests.get(url, timeout=timeout)
        latency_ms = round(resp.elapsed.total_seconds() * 1000, 2)

        if resp.status_code == 200:
            data = resp.json()
            data["latency_ms"] = latency_ms
            return HealthSchema(**data).model_dump()
        return {
            "status": "error",
            "message": f"HTTP {resp.status_code}: {resp.text[:100]}",
        }
    except requests.exceptions.RequestException as e:
        return {
            "status": "offline",
            "message": f"Backend unreachable at {base_url} ({e.__class__.__name__})",
        }
    except (ValueError, TypeError) as e:
        return {
            "status": "error",
            "message": f"Malformed /health payload ({e.__class__.__name__})",
        }


@st.cache_data(ttl=CACHE_TTL)
def get_backend_status() -> Dict[str, Any]:
    return fetch_health()


# --------------------------------------------------------------------------- #
# UI Renderer
# --------------------------------------------------------------------------- #

def render_status_bar(expanded: bool = False) -> None:
    """
    Render a compact backend health summary in the sidebar.

    Parameters
    ----------
    expanded : bool
        If True, show detailed diagnostics; else compact mode.
    """
    st.sidebar.markdown("---")
    st.sidebar.caption("### 🔍 Backend Status")

    health = get_backend_status()
    status = health.get("status", "unknown")

    st.sidebar.markdown(
        f"<span style='color:{get_status_color(status)}; font-weight:600;'>● {status.upper()}</span>",
        unsafe_allow_html=True,
    )

    msg = health.get("message")
    if msg:
        st.sidebar.caption(f"💬 {msg}")

    source = health.get("data_source") or "data source"
    if health.get("data_source_connected"):
        st.sidebar.caption(f"☁️ {source}: connected")
    else:
        st.sidebar.caption(f"☁️ {source}: unavailable")

    if expanded:
        with st.sidebar.expander("Advanced diagnostics", expanded=False):
            latency = health.get("latency_ms")
            if latency:
                st.write(f"⏱ Latency: {latency} ms")
            if health.get("cpu_load") is not None:
                st.write(f"🧠 CPU load: {health['cpu_load']}%")
            if health.get("memory_usage") is not None:
                st.write(f"💾 Memory: {health['memory_usage']} MB")
            if health.get("version"):
                st.write(f"🧩 Version: {health['version']}")
            st.json(health)
