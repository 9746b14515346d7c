"""
Shared fixtures: a throwaway SQLite database per test, plus stub
providers for injecting connection and statement failures.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from db.connection import SQLiteConnectionProvider
from db.errors import ConnectionAcquisitionError
from db.init_db import create_tables
from repositories.user_repo import SqlUserRepository
from services.user_service import UserService


class FailingProvider:
    """Provider whose every acquisition fails."""

    dialect = "sqlite"
    placeholder = "?"
    driver_error = sqlite3.Error

    def open(self) -> None:
        pass

    def close(self) -> None:
        pass

    @contextmanager
    def connection(self):
        raise ConnectionAcquisitionError("Error obtaining connection")
        yield  # pragma: no cover


class StubProvider:
    """Provider handing out one MagicMock connection with a scripted cursor."""

    dialect = "postgresql"
    placeholder = "%s"
    driver_error = sqlite3.Error

    def __init__(self) -> None:
        self.cursor = MagicMock()
        self.conn = MagicMock()
        self.conn.cursor.return_value = self.cursor
        self.released = 0

    def open(self) -> None:
        pass

    def close(self) -> None:
        pass

    @contextmanager
    def connection(self):
        try:
            yield self.conn
        finally:
            self.released += 1


@pytest.fixture()
def provider(tmp_path: Path) -> SQLiteConnectionProvider:
    db = SQLiteConnectionProvider(tmp_path / "users.sqlite3")
    create_tables(db)
    return db


@pytest.fixture()
def user_repo(provider: SQLiteConnectionProvider) -> SqlUserRepository:
    return SqlUserRepository(provider)


@pytest.fixture()
def strict_repo(provider: SQLiteConnectionProvider) -> SqlUserRepository:
    return SqlUserRepository(provider, strict=True)


@pytest.fixture()
def user_service(user_repo: SqlUserRepository) -> UserService:
    return UserService(user_repo)


@pytest.fixture()
def stub_provider() -> StubProvider:
    return StubProvider()


@pytest.fixture()
def failing_provider() -> FailingProvider:
    return FailingProvider()
