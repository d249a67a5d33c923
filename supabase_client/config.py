# supabase_client/config.py
from supabase import create_client, Client

from core.ui_config import SUPABASE_ANON_KEY, SUPABASE_URL


def get_supabase_client() -> Client:
    """Return a Supabase client for the configured project."""
    if not SUPABASE_URL or not SUPABASE_ANON_KEY:
        raise RuntimeError("Supabase credentials not set in environment variables.")
    return create_client(SUPABASE_URL, SUPABASE_ANON_KEY)
