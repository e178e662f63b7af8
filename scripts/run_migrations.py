"""
Migration runner for the FCA fines database.

Checks the connection first, then runs `alembic upgrade head` in a
subprocess with a timeout. Safe to run repeatedly.

Usage:
    python scripts/run_migrations.py
"""

import sys
import os
import logging
import subprocess
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

from sqlalchemy import create_engine, text

from fca_fines.config import settings

MIGRATION_TIMEOUT_SECONDS = 300


def _engine():
    return create_engine(
        settings.db.sync_connection_string,
        pool_size=1,
        max_overflow=0,
        pool_pre_ping=True,
        connect_args={"connect_timeout": 10},
    )


def check_database_connection() -> bool:
    """Return True if the database answers SELECT 1."""
    try:
        with _engine().connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection successful")
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


def get_current_migration() -> str:
    """
    Current Alembic revision.

    Returns:
        Revision ID, "None" before the first migration, "Unknown" on error
    """
    try:
        with _engine().connect() as conn:
            table_exists = conn.execute(text(
                "SELECT EXISTS (SELECT FROM information_schema.tables WHERE table_name = 'alembic_version')"
            )).scalar()

            if not table_exists:
                logger.info("No migration history found - will start from initial migration")
                return "None"

            revision = conn.execute(text("SELECT version_num FROM alembic_version LIMIT 1")).scalar()
            logger.info(f"Current migration: {revision}")
            return revision
    except Exception as e:
        logger.warning(f"Could not determine current migration: {e}")
        return "Unknown"


def run_migrations() -> int:
    """
    Run Alembic migrations.

    Returns:
        0 if successful, non-zero on error
    """
    logger.info("=" * 70)
    logger.info("Starting Database Migrations")
    logger.info("=" * 70)

    if not check_database_connection():
        logger.error("Cannot proceed - database connection failed")
        return 1

    logger.info(f"Database state before migrations: {get_current_migration()}")

    os.environ["PYTHONUNBUFFERED"] = "1"
    logger.info("Running: alembic upgrade head")

    try:
        result = subprocess.run(
            [sys.executable, "-m", "alembic", "upgrade", "head"],
            cwd=project_root,
            timeout=MIGRATION_TIMEOUT_SECONDS,
            text=True
        )
    except subprocess.TimeoutExpired:
        logger.error(f"Migration timed out after {MIGRATION_TIMEOUT_SECONDS} seconds")
        return 1

    if result.returncode != 0:
        logger.error(f"Migration failed with return code: {result.returncode}")
        return result.returncode

    logger.info(f"Database state after migrations: {get_current_migration()}")
    logger.info("Migrations completed successfully")
    return 0


if __name__ == "__main__":
    sys.exit(run_migrations())
