"""
Database initialization and housekeeping script.

- Checks connectivity
- Creates missing tables (idempotent; Alembic owns real migrations)
- Reports missing tables
- Purges expired sessions

Usage:
    python -m src.core.init_db
"""

import asyncio
import sys

from sqlalchemy import inspect

from src.core.container import get_database, get_logger, get_session_repository
from src.infrastructure.persistence.database import Database

EXPECTED_TABLES = (
    "users",
    "sessions",
    "two_factor_settings",
    "password_history",
    "roles",
    "permissions",
    "user_roles",
    "role_permissions",
)


async def verify_tables(db: Database) -> list[str]:
    """Return the expected tables that do not exist."""
    async with db.engine.connect() as conn:
        existing = await conn.run_sync(
            lambda sync_conn: set(inspect(sync_conn).get_table_names())
        )
    return [table for table in EXPECTED_TABLES if table not in existing]


async def init_db() -> None:
    """Initialize the database and purge expired sessions."""
    logger = get_logger()
    db = get_database()

    try:
        if not await db.check_connection():
            logger.error("database_connection_failed")
            sys.exit(1)

        await db.create_all()

        missing = await verify_tables(db)
        if missing:
            logger.warning("database_tables_missing", tables=missing)

        async with db.get_session() as session:
            deleted = await get_session_repository(session).cleanup_expired()
        logger.info("database_initialized", expired_sessions_deleted=deleted)
    finally:
        await db.close()


def run_init() -> None:
    """Synchronous wrapper for async init_db."""
    try:
        asyncio.run(init_db())
    except KeyboardInterrupt:
        get_logger().warning("database_init_interrupted")
        sys.exit(1)


if __name__ == "__main__":
    run_init()
