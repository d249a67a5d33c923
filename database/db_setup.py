# database/db_setup.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base
import os

from core.ui_config import DB_URL as CONFIG_DB_URL

# ---------------------------------------------------------------------
# Database path setup
# ---------------------------------------------------------------------
# Local read-only mirror of the Supabase tables, used when DATA_SOURCE=sqlite.
# Defaults to a file inside the database/ directory.
DB_FILENAME = "propertyinsights.db"
DB_PATH = os.path.join(os.path.dirname(__file__), DB_FILENAME)
DB_URL = CONFIG_DB_URL or f"sqlite:///{DB_PATH}"

# ---------------------------------------------------------------------
# Base class for ORM models
# ---------------------------------------------------------------------
Base = declarative_base()

# ---------------------------------------------------------------------
# Engine factory
# ---------------------------------------------------------------------
def get_engine(url: str | None = None):
    """
    Return a SQLAlchemy Engine connected to the mirror database.

    Example:
        engine = get_engine()
        engine = get_engine("sqlite://")  # in-memory, for tests
    """
    return create_engine(url or DB_URL, echo=False, future=True)


def init_db(engine) -> None:
    """Create the mirror tables if they do not exist yet."""
    # models must be imported so their tables are registered on Base.metadata
    from . import models  # noqa: F401

    Base.metadata.create_all(engine)
