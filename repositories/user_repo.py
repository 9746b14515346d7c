"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
All SQL queries related to the `users` table live here.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import replace
from typing import Optional

from db.connection import open_cursor
from db.errors import (
    MissingGeneratedKeyError,
    NoRowsAffectedError,
    RepositoryError,
    StatementError,
)
from models.user import User
from utils.logger import get_logger

logger = get_logger(__name__)

TABLE_NAME = "users"


class UserRepository(ABC):
    """Storage-agnostic contract for persisting users."""

    @abstractmethod
    def find_by_id(self, user_id: int) -> Optional[User]:
        """Return the user with this id, or None if there is none."""

    @abstractmethod
    def find_all(self) -> list[User]:
        """Return every stored user, in no particular order."""

    @abstractmethod
    def save(self, user: User) -> User:
        """Insert `user` and return a copy carrying the generated id."""

    @abstractmethod
    def update(self, user: User) -> None:
        """Overwrite name and email of the row matching `user.id`."""

    @abstractmethod
    def delete_by_id(self, user_id: int) -> bool:
        """Remove the row with this id; True if a row was removed."""


class SqlUserRepository(UserRepository):
    """
    UserRepository over any DB-API connection provider.

    By default failures are logged and collapsed into an empty result
    (None, [], the unsaved user, a no-op, or False). Pass ``strict=True`` to
    have the same operations raise a RepositoryError subclass instead.
    """

    def __init__(self, provider, strict: bool = False):
        self.provider = provider
        self.strict = strict

        p = provider.placeholder
        self._select_one_sql = f"SELECT id, name, email, created_at FROM {TABLE_NAME} WHERE id = {p};"
        self._select_all_sql = f"SELECT id, name, email, created_at FROM {TABLE_NAME};"
        self._insert_sql = (
            f"INSERT INTO {TABLE_NAME} (name, email, created_at) "
            f"VALUES ({p}, {p}, {p}) RETURNING id;"
        )
        self._update_sql = f"UPDATE {TABLE_NAME} SET name = {p}, email = {p} WHERE id = {p};"
        self._delete_sql = f"DELETE FROM {TABLE_NAME} WHERE id = {p};"

    # ── READ ──────────────────────────────────────────────

    def find_by_id(self, user_id: int) -> Optional[User]:
        """
        Fetch a single user by primary key.

        Returns:
            A User, or None if no row matches. Outside strict mode None is
            also returned when the store could not be read.
        """
        try:
            with self.provider.connection() as conn, self._statement(conn) as cur:
                cur.execute(self._select_one_sql, (user_id,))
                row = cur.fetchone()
            return self._row_to_user(row) if row else None
        except RepositoryError as e:
            if self.strict:
                raise
            logger.error(f"Failed to fetch user #{user_id}: {e}")
            return None

    def find_all(self) -> list[User]:
        """Fetch every user. Row order is whatever the store returns."""
        try:
            with self.provider.connection() as conn, self._statement(conn) as cur:
                cur.execute(self._select_all_sql)
                rows = cur.fetchall()
            return [self._row_to_user(r) for r in rows]
        except RepositoryError as e:
            if self.strict:
                raise
            logger.error(f"Failed to fetch users: {e}")
            return []

    # ── CREATE ────────────────────────────────────────────

    def save(self, user: User) -> User:
        """
        Insert a new user record.

        Args:
            user: The User to persist. Its `id` is ignored.

        Returns:
            A new User with the store-generated `id`. Outside strict mode a
            failed insert returns the original `user` unchanged.

        Raises:
            NoRowsAffectedError, MissingGeneratedKeyError, StatementError,
            ConnectionAcquisitionError: In strict mode only.
        """
        try:
            with self.provider.connection() as conn, self._statement(conn, commit=True) as cur:
                cur.execute(self._insert_sql, (user.name, user.email, user.created_at))
                rows = cur.fetchall()
                if not rows and cur.rowcount == 0:
                    raise NoRowsAffectedError("Creating user failed, no rows affected.")
                if not rows or rows[0][0] is None:
                    raise MissingGeneratedKeyError("Creating user failed, no ID obtained.")
            saved = replace(user, id=rows[0][0])
            logger.info(f"Saved user #{saved.id} ({saved.email})")
            return saved
        except RepositoryError as e:
            if self.strict:
                raise
            logger.error(f"Failed to save user {user.email}: {e}")
            return user

    # ── UPDATE ────────────────────────────────────────────

    def update(self, user: User) -> None:
        """Update name and email of an existing user; created_at is left alone."""
        try:
            with self.provider.connection() as conn, self._statement(conn, commit=True) as cur:
                cur.execute(self._update_sql, (user.name, user.email, user.id))
                if cur.rowcount == 0:
                    raise NoRowsAffectedError("Updating user failed, no rows affected.")
            logger.info(f"Updated user #{user.id}")
        except RepositoryError as e:
            if self.strict:
                raise
            logger.error(f"Failed to update user #{user.id}: {e}")

    # ── DELETE ────────────────────────────────────────────

    def delete_by_id(self, user_id: int) -> bool:
        """
        Delete a user by ID.

        Returns:
            True if a row was deleted, False otherwise (including, outside
            strict mode, when the store could not be reached).
        """
        try:
            with self.provider.connection() as conn, self._statement(conn, commit=True) as cur:
                cur.execute(self._delete_sql, (user_id,))
                deleted = cur.rowcount > 0
            if deleted:
                logger.info(f"Deleted user #{user_id}")
            return deleted
        except RepositoryError as e:
            if self.strict:
                raise
            logger.error(f"Failed to delete user #{user_id}: {e}")
            return False

    # ── HELPERS ───────────────────────────────────────────

    @contextmanager
    def _statement(self, conn, commit: bool = False):
        """
        Yield a cursor; commit afterwards if asked, roll back on failure.

        Driver exceptions come out as StatementError.
        """
        try:
            with open_cursor(conn) as cur:
                yield cur
            if commit:
                conn.commit()
        except self.provider.driver_error as e:
            self._rollback(conn)
            raise StatementError(str(e)) from e
        except RepositoryError:
            self._rollback(conn)
            raise

    @staticmethod
    def _rollback(conn) -> None:
        try:
            conn.rollback()
        except Exception as e:
            logger.warning(f"Rollback failed: {e}")

    @staticmethod
    def _row_to_user(row: tuple) -> User:
        """Convert a database row tuple to a User domain object."""
        return User(
            id=row[0],
            name=row[1],
            email=row[2],
            created_at=row[3],
        )
