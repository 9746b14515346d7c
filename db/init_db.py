"""
db/init_db.py
-------------
Creates the users table if it does not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import open_cursor
from repositories.user_repo import TABLE_NAME
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = {
    "postgresql": f"""
        CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
            id          SERIAL PRIMARY KEY,
            name        VARCHAR(255) NOT NULL,
            email       VARCHAR(255) NOT NULL,
            created_at  TIMESTAMP NOT NULL
        );
    """,
    "sqlite": f"""
        CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
            id          INTEGER PRIMARY KEY AUTOINCREMENT,
            name        VARCHAR(255) NOT NULL,
            email       VARCHAR(255) NOT NULL,
            created_at  TIMESTAMP NOT NULL
        );
    """,
}

DROP_SQL = f"DROP TABLE IF EXISTS {TABLE_NAME};"


def _run_ddl(provider, sql: str, action: str) -> None:
    with provider.connection() as conn:
        try:
            with open_cursor(conn) as cur:
                cur.execute(sql)
            conn.commit()
            logger.info(f"{action} table '{TABLE_NAME}' ({provider.dialect}).")
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to {action.lower()} table '{TABLE_NAME}': {e}")
            raise


def create_tables(provider) -> None:
    """
    Execute the schema SQL for the provider's dialect.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    _run_ddl(provider, SCHEMA_SQL[provider.dialect], "Created")


def drop_tables(provider) -> None:
    """Drop the users table if present."""
    _run_ddl(provider, DROP_SQL, "Dropped")


if __name__ == "__main__":
    from db.connection import build_provider
    provider = build_provider()
    provider.open()
    try:
        create_tables(provider)
    finally:
        provider.close()
    print("Database schema created successfully.")
