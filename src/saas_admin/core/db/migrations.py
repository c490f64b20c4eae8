"""Reusable migration runner for both production and tests."""

from pathlib import Path

from alembic.config import Config

from alembic import command

ALEMBIC_INI = Path(__file__).resolve().parents[4] / "alembic.ini"


def run_migrations_sync(revision: str = "head") -> None:
    """Run Alembic migrations synchronously against ``DATABASE_MIGRATIONS_URL`` or ``DATABASE_URL``."""
    alembic_cfg = Config(str(ALEMBIC_INI))
    command.upgrade(alembic_cfg, revision)
