"""
Shared FastAPI dependencies.

``get_snapshot`` keeps the last-loaded portfolio snapshot for SNAPSHOT_TTL
seconds, mirroring the dashboard cache. Tests swap it out through
``app.dependency_overrides``.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Optional

from fastapi import HTTPException

from analytics.snapshot import PortfolioSnapshot, load_snapshot
from core.records import Property
from core.ui_config import SNAPSHOT_TTL

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_cached: Optional[PortfolioSnapshot] = None
_loaded_at = 0.0


def get_snapshot() -> PortfolioSnapshot:
    global _cached, _loaded_at
    with _lock:
        if _cached is None or time.monotonic() - _loaded_at > SNAPSHOT_TTL:
            logger.info("[Backend] Loading portfolio snapshot")
            _cached = load_snapshot()
            _loaded_at = time.monotonic()
        return _cached


def require_property(snapshot: PortfolioSnapshot, property_id: Optional[str]) -> Optional[Property]:
    """Resolve ``property_id``; 404 when it is set but unknown."""
    if not property_id:
        return None
    prop = snapshot.property_by_id(property_id)
    if prop is None:
        raise HTTPException(status_code=404, detail=f"Unknown property_id: {property_id}")
    return prop
