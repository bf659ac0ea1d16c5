"""SQLite database layer for users and their visits."""

import logging
import sqlite3
from datetime import date, datetime
from pathlib import Path

from src.core.schemas import User, Visit

logger = logging.getLogger(__name__)

_USERS_TABLE = """
CREATE TABLE IF NOT EXISTS users (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    username    TEXT    NOT NULL UNIQUE,
    created_at  TEXT    NOT NULL,
    updated_at  TEXT    NOT NULL
);
"""

_VISITS_TABLE = """
CREATE TABLE IF NOT EXISTS visits (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id     INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    enter_at    TEXT    NOT NULL,
    exit_at     TEXT    NOT NULL,
    created_at  TEXT    NOT NULL,
    updated_at  TEXT    NOT NULL,
    CHECK (enter_at <= exit_at)
);
"""

_VISITS_INDEX = """
CREATE INDEX IF NOT EXISTS idx_visits_user_enter ON visits (user_id, enter_at);
"""


def init_db(path: str | Path) -> sqlite3.Connection:
    """Create the database and tables, returning a connection."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    conn.execute(_USERS_TABLE)
    conn.execute(_VISITS_TABLE)
    conn.execute(_VISITS_INDEX)
    conn.commit()
    return conn


def _now() -> str:
    return datetime.now().isoformat(timespec="seconds")


def find_or_create_user(conn: sqlite3.Connection, username: str) -> User:
    """Return the user with this username, creating it if needed.

    Idempotent: calling twice with the same username yields the same row.
    """
    username = username.strip()
    if not username:
        msg = "username must not be empty"
        raise ValueError(msg)
    now = _now()
    cursor = conn.execute(
        """
        INSERT INTO users (username, created_at, updated_at)
        VALUES (?, ?, ?)
        ON CONFLICT(username) DO NOTHING
        """,
        (username, now, now),
    )
    conn.commit()
    if cursor.rowcount:
        logger.info("Created user '%s'", username)
    row = conn.execute(
        "SELECT id, username, created_at, updated_at FROM users WHERE username = ?",
        (username,),
    ).fetchone()
    return User.model_validate(dict(row))


def insert_visit(
    conn: sqlite3.Connection,
    user_id: int,
    enter_at: date,
    exit_at: date,
) -> Visit:
    """Store a visit for a user and return it with its assigned id."""
    now = _now()
    cursor = conn.execute(
        """
        INSERT INTO visits (user_id, enter_at, exit_at, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?)
        """,
        (user_id, enter_at.isoformat(), exit_at.isoformat(), now, now),
    )
    conn.commit()
    row = conn.execute(
        "SELECT * FROM visits WHERE id = ?", (cursor.lastrowid,),
    ).fetchone()
    return Visit.model_validate(dict(row))


def load_visits(conn: sqlite3.Connection, user_id: int) -> list[Visit]:
    """Return all visits of a user ordered by entry date (then id)."""
    rows = conn.execute(
        "SELECT * FROM visits WHERE user_id = ? ORDER BY enter_at, id",
        (user_id,),
    ).fetchall()
    logger.debug("Loaded %d visits for user %d", len(rows), user_id)
    return [Visit.model_validate(dict(row)) for row in rows]


def delete_visit(conn: sqlite3.Connection, user_id: int, visit_id: int) -> int:
    """Delete a visit owned by a user. Returns the number of rows removed.

    A visit that does not exist or belongs to another user is left alone
    and 0 is returned; the two cases are not distinguished.
    """
    cursor = conn.execute(
        "DELETE FROM visits WHERE id = ? AND user_id = ?",
        (visit_id, user_id),
    )
    conn.commit()
    return cursor.rowcount
