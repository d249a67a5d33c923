import os, sys
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

"""
PropertyInsights — System Status
--------------------------------
Backend and data-store health.

- Backend /health report (via ui.components.backend_status)
- Direct data-source probe from the dashboard process
- Snapshot row counts and cache refresh
"""

import streamlit as st

from core.health import system_health
from core.metadata import get_metadata
from core.ui_config import BACKEND_URL, DATA_SOURCE
from core.ui_helpers import get_snapshot, refresh_snapshot
from ui.components.backend_status import get_backend_status, get_status_color, render_status_bar


# ----------------------------------------------------------------------------
# 1. Page Setup
# ----------------------------------------------------------------------------
st.set_page_config(page_title="PropertyInsights — System Status", layout="wide")
meta = get_metadata()
st.title("🩺 System Status")
st.caption(f"{meta['brand']} · {meta['project']} v{meta['version']}")

render_status_bar(expanded=True)


# ----------------------------------------------------------------------------
# 2. Backend & Data Source
# ----------------------------------------------------------------------------
col1, col2 = st.columns(2)

with col1:
    st.subheader("🔌 Backend")
    st.caption(BACKEND_URL)
    health = get_backend_status()
    status = health.get("status", "unknown")
    st.markdown(
        f"<span style='color:{get_status_color(status)}; font-weight:600;'>● {status.upper()}</span>",
        unsafe_allow_html=True,
    )
    if health.get("message"):
        st.caption(health["message"])
    st.json(health)

with col2:
    st.subheader("🗄️ Data Source")
    with st.spinner(f"Probing {DATA_SOURCE}..."):
        local = system_health()
    if local["data_source_connected"]:
        st.success(f"{DATA_SOURCE} reachable ✅")
    else:
        st.error(f"{DATA_SOURCE} not reachable ❌")
    st.json(
        {
            "data_source": local["data_source"],
            "url": local["data_source_url"],
            "cpu_load": local["cpu_load"],
            "memory_usage": local["memory_usage"],
        }
    )


# ----------------------------------------------------------------------------
# 3. Snapshot
# ----------------------------------------------------------------------------
st.markdown("---")
st.subheader("📦 Portfolio Snapshot")

snapshot = get_snapshot()
counts = {
    "Transactions": len(snapshot.transactions),
    "Properties": len(snapshot.properties),
    "Capital transactions": len(snapshot.capital_transactions),
    "Scenarios": len(snapshot.scenarios),
    "Valuations": len(snapshot.valuations),
}
for col, (label, n) in zip(st.columns(len(counts)), counts.items()):
    col.metric(label, n)

if st.button("↻ Reload snapshot"):
    refresh_snapshot()
    st.rerun()


# ----------------------------------------------------------------------------
# 4. Footer
# ----------------------------------------------------------------------------
st.markdown("---")
st.caption(f"© 2026 {meta['brand']} — Portfolio Analytics")
