"""In-memory SQLite content store.

The database lives entirely in memory behind a single pooled connection and
is moved in and out of the blob store as a serialized image
(``sqlite3.Connection.serialize`` / ``deserialize``).
"""

from __future__ import annotations

import logging
import re
import sqlite3
from collections.abc import Mapping, Sequence
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from htmsql.exceptions import StoreError
from htmsql.models.base import Base

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)

Params = Sequence[Any] | Mapping[str, Any]

_READ_STATEMENT_RE = re.compile(r"^\s*(select|with)\b", re.IGNORECASE)

# Pragmas that reach outside the in-memory database or corrupt its schema.
_DENIED_PRAGMAS = frozenset({"data_store_directory", "temp_store_directory", "writable_schema"})


def is_read_statement(sql: str) -> bool:
    """Return True for statements that produce rows (``SELECT`` / ``WITH``)."""
    return _READ_STATEMENT_RE.match(sql) is not None


def _bind(params: Params | None) -> tuple[Any, ...] | dict[str, Any]:
    # A list would be taken as executemany by the driver layer.
    if params is None:
        return ()
    if isinstance(params, Mapping):
        return dict(params)
    if isinstance(params, (str, bytes)):
        raise StoreError("Statement parameters must be a sequence or a mapping")
    return tuple(params)


class ContentStore:
    """Owns the engine handle for the content database."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._session_factory = sessionmaker(engine, expire_on_commit=False)

    @classmethod
    def open(cls, data: bytes | None = None) -> ContentStore:
        """Create a store, hydrated from a serialized image when one is given."""
        engine = create_engine(
            "sqlite://",
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
        event.listen(engine, "connect", _confine_connection)
        store = cls(engine)
        if data:
            try:
                with engine.connect() as conn:
                    _driver_connection(conn).deserialize(data)
                    # deserialize is lazy; force SQLite to read the header.
                    conn.exec_driver_sql("SELECT count(*) FROM sqlite_master").scalar()
            except (SQLAlchemyError, sqlite3.Error) as exc:
                engine.dispose()
                raise StoreError(f"Stored content database is unreadable: {exc}") from exc
            logger.debug("Hydrated content store from %d bytes", len(data))
        return store

    def ensure_schema(self) -> None:
        """Create the ``pages`` and ``blocks`` tables if they are missing."""
        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to create content schema: {exc}") from exc

    def scalar(self, sql: str, params: Params | None = None) -> Any | None:
        """Return the first column of the first row, or None if there is no row."""
        try:
            with self.engine.connect() as conn:
                result = conn.exec_driver_sql(sql, _bind(params))
                row = result.first()
        except (SQLAlchemyError, sqlite3.Error) as exc:
            raise StoreError(f"Query failed: {exc}") from exc
        return None if row is None else row[0]

    def rows(self, sql: str, params: Params | None = None) -> list[dict[str, Any]]:
        """Run a query and return every row as a column-name keyed dict."""
        try:
            with self.engine.connect() as conn:
                result = conn.exec_driver_sql(sql, _bind(params))
                return [dict(row._mapping) for row in result]
        except (SQLAlchemyError, sqlite3.Error) as exc:
            raise StoreError(f"Query failed: {exc}") from exc

    def mutate(self, sql: str, params: Params | None = None) -> None:
        """Run an insert/update/delete (or DDL) statement in its own transaction."""
        try:
            with self.engine.begin() as conn:
                conn.exec_driver_sql(sql, _bind(params))
        except (SQLAlchemyError, sqlite3.Error) as exc:
            raise StoreError(f"Statement failed: {exc}") from exc

    def execute(self, sql: str, params: Params | None = None) -> list[dict[str, Any]]:
        """Run an arbitrary statement: reads return rows, everything else returns []."""
        if is_read_statement(sql):
            return self.rows(sql, params)
        self.mutate(sql, params)
        return []

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Yield an ORM session; database errors surface as StoreError."""
        try:
            with self._session_factory() as session:
                yield session
        except SQLAlchemyError as exc:
            raise StoreError(f"Content session failed: {exc}") from exc

    def page_title(self, slug: str) -> str | None:
        title = self.scalar("SELECT title FROM pages WHERE slug = ?", [slug])
        return None if title is None else str(title)

    def count(self, table: str) -> int:
        if table not in Base.metadata.tables:
            raise StoreError(f"Unknown content table: {table!r}")
        try:
            with self.engine.connect() as conn:
                return int(conn.execute(text(f"SELECT COUNT(*) FROM {table}")).scalar_one())
        except SQLAlchemyError as exc:
            raise StoreError(f"Query failed: {exc}") from exc

    def export_bytes(self) -> bytes:
        """Serialize the whole database to a transportable image."""
        try:
            with self.engine.connect() as conn:
                return bytes(_driver_connection(conn).serialize())
        except (SQLAlchemyError, sqlite3.Error) as exc:
            raise StoreError(f"Failed to export content database: {exc}") from exc

    def close(self) -> None:
        self.engine.dispose()


def _driver_connection(conn: Connection) -> sqlite3.Connection:
    raw = conn.connection.driver_connection
    if not isinstance(raw, sqlite3.Connection):
        raise StoreError("Content store requires the sqlite3 driver")
    return raw


def _authorize(
    action: int,
    arg1: str | None,
    arg2: str | None,
    db_name: str | None,
    source: str | None,
) -> int:
    """Keep statements confined to the in-memory database."""
    if action in (sqlite3.SQLITE_ATTACH, sqlite3.SQLITE_DETACH):
        return sqlite3.SQLITE_DENY
    if action == sqlite3.SQLITE_PRAGMA and (arg1 or "").lower() in _DENIED_PRAGMAS:
        return sqlite3.SQLITE_DENY
    return sqlite3.SQLITE_OK


def _confine_connection(dbapi_connection: sqlite3.Connection, connection_record: Any) -> None:
    # VACUUM (including VACUUM INTO) attaches a scratch database internally,
    # so a zero attach limit rejects it along with ATTACH itself.
    dbapi_connection.setlimit(sqlite3.SQLITE_LIMIT_ATTACHED, 0)
    dbapi_connection.set_authorizer(_authorize)
