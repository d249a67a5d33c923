"""
core/logging_setup.py
---------------------
One-time logging configuration shared by the Streamlit app and the backend.

Every module logs through ``logging.getLogger(__name__)`` and prefixes its
messages with the component tag (``[Supabase]``, ``[Snapshot]``, ...).
"""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

_configured = False


def configure_logging(level: str | None = None) -> None:
    """Install a stream handler on the root logger (idempotent)."""
    global _configured
    if _configured:
        return

    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
    _configured = True
