"""Database utilities - engine, session, migrations."""

from src.saas_admin.core.db.engine import dispose_engine, get_engine, set_engine
from src.saas_admin.core.db.migrations import run_migrations_sync
from src.saas_admin.core.db.session import STORE_ERRORS, get_session

__all__ = [
    # Engine
    "dispose_engine",
    "get_engine",
    "set_engine",
    # Session
    "STORE_ERRORS",
    "get_session",
    # Migrations
    "run_migrations_sync",
]
