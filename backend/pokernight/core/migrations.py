"""Database migration utilities using Alembic."""
from __future__ import annotations

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext

from .db import engine

logger = logging.getLogger(__name__)

BACKEND_DIR = Path(__file__).resolve().parent.parent.parent


def get_alembic_config() -> Config:
    """Get Alembic configuration object."""
    alembic_ini_path = BACKEND_DIR / "alembic.ini"

    if not alembic_ini_path.exists():
        raise FileNotFoundError(f"alembic.ini not found at {alembic_ini_path}")

    alembic_cfg = Config(str(alembic_ini_path))
    alembic_cfg.set_main_option("script_location", str(BACKEND_DIR / "alembic"))
    return alembic_cfg


def run_migrations(revision: str = "head") -> None:
    """Upgrade the database to ``revision``."""
    try:
        logger.info(f"Running database migrations to {revision}...")
        command.upgrade(get_alembic_config(), revision)
        logger.info("Database migrations completed successfully")
    except Exception as e:
        logger.error(f"Error running migrations: {e}")
        raise


def downgrade(revision: str = "-1") -> None:
    logger.info(f"Downgrading database to {revision}")
    command.downgrade(get_alembic_config(), revision)


def create_revision(message: str) -> None:
    logger.info(f"Creating new migration: {message}")
    command.revision(get_alembic_config(), message=message, autogenerate=True)


def stamp_database(revision: str = "head") -> None:
    """
    Stamp the database with a specific revision without running migrations.

    Useful for marking a database created by ``create_all`` as being at the
    current schema version.
    """
    try:
        logger.info(f"Stamping database with revision: {revision}")
        command.stamp(get_alembic_config(), revision)
        logger.info(f"Database stamped successfully with revision: {revision}")
    except Exception as e:
        logger.error(f"Error stamping database: {e}")
        raise


def show_history() -> None:
    command.history(get_alembic_config())


def get_current_revision() -> str | None:
    """Get the current database revision."""
    with engine.connect() as connection:
        context = MigrationContext.configure(connection)
        return context.get_current_revision()
