"""Relational database access shared by the services."""

from __future__ import annotations

import os
import re
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.sql.elements import TextClause

_PLACEHOLDER = re.compile(r"\$(\d+)")


def _bind(query: str, args: tuple[Any, ...]) -> tuple[TextClause, dict[str, Any]]:
    """Turn a query with ``$1``-style placeholders into a bound statement."""
    statement = text(_PLACEHOLDER.sub(r":p\1", query))
    params = {f"p{position}": value for position, value in enumerate(args, start=1)}
    return statement, params


class DatabaseConnection(ABC):
    """A connection able to run parameterised SQL queries.

    Queries use positional placeholders ``$1``, ``$2``, ... filled from the
    extra arguments in order.
    """

    @abstractmethod
    def query_one(self, query: str, *args: Any) -> dict[str, Any] | None:
        """Return the first row as a mapping of column to value, or None."""

    @abstractmethod
    def query_all(self, query: str, *args: Any) -> list[dict[str, Any]]:
        """Return every row as a mapping of column to value."""

    @abstractmethod
    def execute(self, query: str, *args: Any) -> None:
        """Run a statement inside its own transaction."""

    @abstractmethod
    def close(self) -> None:
        """Release the connection's resources."""

    def __enter__(self) -> DatabaseConnection:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class SqlAdapter(DatabaseConnection):
    """A database connection backed by an SQLAlchemy engine."""

    def __init__(self, url: str) -> None:
        self._engine = create_engine(url)
        # Fail early, as an unreachable database is of no use to a service.
        with self._engine.connect():
            pass

    def query_one(self, query: str, *args: Any) -> dict[str, Any] | None:
        statement, params = _bind(query, args)
        with self._engine.connect() as conn:
            row = conn.execute(statement, params).mappings().first()
        return dict(row) if row is not None else None

    def query_all(self, query: str, *args: Any) -> list[dict[str, Any]]:
        statement, params = _bind(query, args)
        with self._engine.connect() as conn:
            rows = conn.execute(statement, params).mappings().all()
        return [dict(row) for row in rows]

    def execute(self, query: str, *args: Any) -> None:
        statement, params = _bind(query, args)
        with self._engine.begin() as conn:
            conn.execute(statement, params)

    def close(self) -> None:
        self._engine.dispose()


@lru_cache(maxsize=None)
def get_database() -> SqlAdapter:
    """Return the process-wide connection to the database at DATABASE_URL."""
    url = os.environ.get("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL is not set")
    return SqlAdapter(url)