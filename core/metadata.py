"""
PropertyInsights Core Metadata
------------------------------
Houses global metadata for versioning and branding.
The backend, the health report and the dashboard footer read it from here.
"""

__project__ = "PropertyInsights"
__version__ = "1.0.0"
__brand__ = "Lansdowne Investments"

CORE_METADATA = {
    "project": __project__,
    "version": __version__,
    "brand": __brand__,
    "description": (
        "Read-only P&L and property analytics for a small buy-to-let "
        "portfolio, backed by Supabase."
    ),
}

def get_metadata() -> dict:
    """Return current system metadata as a dict."""
    return CORE_METADATA
