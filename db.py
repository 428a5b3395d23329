"""
db.py
SQLite helpers + initialization (settings table holding the durable session record,
login accounts table for the login provider).
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path

import config
from logger import get_logger

log = get_logger("db")

SESSION_KEY = "imani_user"


def _db_file() -> Path:
    return config.db_file()


@contextmanager
def get_conn():
    conn = sqlite3.connect(_db_file(), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()


def execute(sql: str, params: tuple = ()) -> int:
    with get_conn() as conn:
        cur = conn.execute(sql, params)
        return cur.lastrowid


def fetch_one(sql: str, params: tuple = ()):
    with get_conn() as conn:
        cur = conn.execute(sql, params)
        return cur.fetchone()


def fetch_all(sql: str, params: tuple = ()) -> list[sqlite3.Row]:
    with get_conn() as conn:
        cur = conn.execute(sql, params)
        return cur.fetchall()


def _create_tables() -> None:
    execute(
        """
        CREATE TABLE IF NOT EXISTS app_settings (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        )
        """
    )

    # Accounts used by the login provider only; the console core never reads them.
    execute(
        """
        CREATE TABLE IF NOT EXISTS users (
            id TEXT PRIMARY KEY,
            email TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            name TEXT NOT NULL,
            role TEXT NOT NULL,
            avatar TEXT NOT NULL DEFAULT '',
            member_id TEXT,
            created_at TEXT NOT NULL
        )
        """
    )


def get_setting(key: str, default: str | None = None) -> str | None:
    row = fetch_one("SELECT value FROM app_settings WHERE key = ?", (key,))
    if row:
        return str(row["value"])
    return default


def set_setting(key: str, value: str) -> None:
    execute(
        """
        INSERT INTO app_settings(key, value) VALUES(?, ?)
        ON CONFLICT(key) DO UPDATE SET value=excluded.value
        """,
        (key, value),
    )


def delete_setting(key: str) -> None:
    execute("DELETE FROM app_settings WHERE key = ?", (key,))


def insert_user(
    user_id: str,
    email: str,
    password_hash: str,
    name: str,
    role: str,
    avatar: str = "",
    member_id: str | None = None,
) -> None:
    now = datetime.now().isoformat(timespec="seconds")
    execute(
        """
        INSERT INTO users(id, email, password_hash, name, role, avatar, member_id, created_at)
        VALUES(?,?,?,?,?,?,?,?)
        ON CONFLICT(email) DO NOTHING
        """,
        (user_id, email, password_hash, name, role, avatar, member_id, now),
    )


def init_db() -> None:
    """
    Initialize the database.
    - Create tables (idempotent)
    """
    path = _db_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    _create_tables()
    log.debug("database ready at %s", path)


def count_users() -> int:
    row = fetch_one("SELECT COUNT(*) AS c FROM users")
    return int(row["c"]) if row else 0
