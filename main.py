"""
main.py
-------
Entry point for a local smoke run against the configured database.

Responsibilities:
    - Build and open the connection provider named by DB_BACKEND.
    - Create the users table if needed and check connectivity.
    - Walk one user through save, lookup, update, and delete.
"""

from dataclasses import replace

from db.connection import build_provider, open_cursor
from db.init_db import create_tables
from models.user import User
from repositories.user_repo import SqlUserRepository
from services.user_service import UserService
from utils.logger import get_logger

logger = get_logger(__name__)


def check_connection(provider) -> bool:
    """
    Run a trivial query to confirm the database answers.

    Returns:
        True if `SELECT 1` came back, False otherwise.
    """
    try:
        with provider.connection() as conn, open_cursor(conn) as cur:
            cur.execute("SELECT 1;")
            ok = cur.fetchone() is not None
    except Exception as e:
        logger.error(f"Database connectivity check failed: {e}")
        return False
    logger.info("Database connectivity check passed.")
    return ok


def run_demo(service: UserService) -> None:
    """Save a sample user, read it back, rename it, then delete it."""
    saved = service.save(User("John Doe", "john.doe@example.com"))
    if not saved.is_persisted():
        logger.error("Demo user was not saved; stopping.")
        return
    logger.info(f"Saved: {saved}")

    found = service.find_user_by_id(saved.id)
    logger.info(f"Found: {found}")

    service.update(replace(saved, name="Jane Doe", email="jane.doe@example.com"))
    logger.info(f"After update: {service.find_user_by_id(saved.id)}")

    logger.info(f"Users in table: {len(service.find_all())}")

    deleted = service.delete(saved)
    logger.info(f"Deleted: {deleted}; lookup now returns {service.find_user_by_id(saved.id)}")


def main() -> None:
    """Open the database, provision the schema, and run the demo."""

    # ── 1. Database setup ─────────────────────────────────
    logger.info("Initializing database...")
    provider = build_provider()
    provider.open()

    try:
        create_tables(provider)
        if not check_connection(provider):
            return

        # ── 2. Exercise the repository ────────────────────
        service = UserService(SqlUserRepository(provider))
        run_demo(service)
    finally:
        # ── 3. Cleanup ────────────────────────────────────
        provider.close()
        logger.info("Done.")


if __name__ == "__main__":
    main()
