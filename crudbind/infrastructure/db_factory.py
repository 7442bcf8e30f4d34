"""
Database connection factory utilities for crudbind.

Opens the DB-API connections the CLI and the integration tests hand to the
runtime. Pooling and transactions stay with the caller; this module only
establishes connections, retrying transient PostgreSQL failures with
tenacity.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import Optional

import psycopg
from psycopg import Connection
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from crudbind.config import get_settings
from crudbind.dialects import resolve_dialect
from crudbind.runtime.handles import DbApiHandle
from crudbind.utils.logging import get_logger

log = get_logger(__name__)

_sqlite_types_registered = False


def build_dsn() -> str:
    """Compose a PostgreSQL DSN string from settings."""
    settings = get_settings()
    return (
        f"postgresql://{settings.db_user}:{settings.db_password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    )


def connect_postgres(dsn: Optional[str] = None) -> Connection:
    """
    Open a psycopg connection with automatic retry.

    Retries ``DB_CONNECT_RETRIES`` times with exponential backoff for
    transient connection errors.

    Parameters
    ----------
    dsn : str, optional
        Connection string; composed from settings when omitted.

    Returns
    -------
    Connection
        A new psycopg connection instance.

    Raises
    ------
    psycopg.OperationalError
        If connection fails after all retry attempts.
    """
    target = dsn or build_dsn()
    retrying = Retrying(
        stop=stop_after_attempt(max(1, get_settings().db_connect_retries)),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type((psycopg.OperationalError, psycopg.InterfaceError)),
        reraise=True,
    )
    for attempt in retrying:
        with attempt:
            conn = psycopg.connect(target)
    log.info("Connected to PostgreSQL", extra={"attempts": retrying.statistics.get("attempt_number", 1)})
    return conn


def _register_sqlite_datetime() -> None:
    global _sqlite_types_registered
    if _sqlite_types_registered:
        return
    sqlite3.register_adapter(datetime, lambda value: value.isoformat(" "))
    sqlite3.register_converter(
        "timestamp", lambda raw: datetime.fromisoformat(raw.decode("utf-8"))
    )
    _sqlite_types_registered = True


def connect_sqlite(path: Optional[str] = None) -> sqlite3.Connection:
    """
    Open a sqlite3 connection that returns ``TIMESTAMP`` columns as datetimes.

    Datetimes are stored as ISO-8601 text; columns declared ``TIMESTAMP`` are
    converted back on read.
    """
    _register_sqlite_datetime()
    target = path or get_settings().sqlite_path
    conn = sqlite3.connect(target, detect_types=sqlite3.PARSE_DECLTYPES)
    log.info("Connected to SQLite", extra={"path": target})
    return conn


def open_handle(dialect_name: Optional[str] = None) -> DbApiHandle:
    """
    Open a connection for ``dialect_name`` (default: ``CRUD_DIALECT``).

    Raises
    ------
    ValueError
        For dialects this factory cannot connect to (MySQL drivers are not
        bundled; wrap your own connection with ``DbApiHandle``).
    """
    dialect = resolve_dialect(dialect_name or get_settings().default_dialect)
    if dialect.name == "sqlite3":
        return DbApiHandle(connect_sqlite())
    if dialect.name == "postgres":
        return DbApiHandle(connect_postgres())
    raise ValueError(f"No bundled driver for dialect '{dialect.name}'")


__all__ = ["build_dsn", "connect_postgres", "connect_sqlite", "open_handle"]
