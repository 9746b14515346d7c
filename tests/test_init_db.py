from __future__ import annotations

import sqlite3

import pytest

from db.connection import SQLiteConnectionProvider, open_cursor
from db.init_db import SCHEMA_SQL, create_tables, drop_tables
from repositories.user_repo import TABLE_NAME


def _tables(provider: SQLiteConnectionProvider) -> set[str]:
    with provider.connection() as conn, open_cursor(conn) as cur:
        cur.execute("SELECT name FROM sqlite_master WHERE type = 'table';")
        return {r[0] for r in cur.fetchall()}


def test_create_tables_is_idempotent(provider: SQLiteConnectionProvider) -> None:
    create_tables(provider)
    assert TABLE_NAME in _tables(provider)


def test_drop_tables(provider: SQLiteConnectionProvider) -> None:
    drop_tables(provider)
    assert TABLE_NAME not in _tables(provider)


def test_schema_covers_both_dialects() -> None:
    assert "SERIAL PRIMARY KEY" in SCHEMA_SQL["postgresql"]
    assert "AUTOINCREMENT" in SCHEMA_SQL["sqlite"]


def test_create_tables_rolls_back_and_propagates(stub_provider) -> None:
    stub_provider.cursor.execute.side_effect = sqlite3.OperationalError("permission denied")

    with pytest.raises(sqlite3.OperationalError):
        create_tables(stub_provider)

    sql = stub_provider.cursor.execute.call_args.args[0]
    assert "SERIAL PRIMARY KEY" in sql
    stub_provider.conn.rollback.assert_called_once()
    stub_provider.conn.commit.assert_not_called()
