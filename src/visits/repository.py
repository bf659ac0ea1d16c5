"""Visit repository contract and its SQLite implementation."""

import sqlite3
from abc import ABC, abstractmethod
from datetime import date

from src.core import db
from src.core.schemas import User, Visit


class VisitRepository(ABC):
    """Storage for users and their visits."""

    @abstractmethod
    def find_or_create_user(self, username: str) -> User:
        """Return the user with this username, creating it if missing."""

    @abstractmethod
    def load_visits(self, user: User) -> list[Visit]:
        """Return the user's visits ordered by entry date."""

    @abstractmethod
    def insert_visit(self, user_id: int, enter_at: date, exit_at: date) -> Visit:
        """Store a visit and return it with its assigned id."""

    @abstractmethod
    def delete_visit(self, user_id: int, visit_id: int) -> int:
        """Delete a visit owned by the user. Returns rows removed (0 or 1)."""


class SqliteVisitRepository(VisitRepository):
    """VisitRepository backed by the SQLite tables in ``src.core.db``."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def find_or_create_user(self, username: str) -> User:
        return db.find_or_create_user(self._conn, username)

    def load_visits(self, user: User) -> list[Visit]:
        return db.load_visits(self._conn, user.id)

    def insert_visit(self, user_id: int, enter_at: date, exit_at: date) -> Visit:
        return db.insert_visit(self._conn, user_id, enter_at, exit_at)

    def delete_visit(self, user_id: int, visit_id: int) -> int:
        return db.delete_visit(self._conn, user_id, visit_id)
