"""
Executable-SQL and result handles consumed by the persistence runtime.

The runtime never talks to a driver directly. It needs a handle that can
``execute`` a statement and one that can ``query`` and hand back a result
with "next row", "column names" and "scan into slots". ``DbApiHandle`` and
``CursorResult`` adapt any DB-API 2.0 connection (sqlite3, psycopg, ...) to
those capabilities; the same adapter serves plain connections and
connections inside a caller-managed transaction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Protocol, Sequence, runtime_checkable

from crudbind.binding.slots import Destination
from crudbind.errors import ScanError


@runtime_checkable
class ExecResult(Protocol):
    """What a write returns: ``ExecOutcome`` and DB-API cursors satisfy this."""

    rowcount: int
    lastrowid: Any


@dataclass(frozen=True)
class ExecOutcome:
    """Row count and generated row id of a finished write; the cursor is already closed."""

    rowcount: int
    lastrowid: Any = None


@runtime_checkable
class ResultHandle(Protocol):
    def columns(self) -> List[str]:
        ...

    def next(self) -> bool:
        ...

    def scan(self, slots: Sequence[Destination]) -> None:
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class SqlHandle(Protocol):
    def execute(self, statement: str, args: Sequence[Any] = ()) -> ExecResult:
        ...

    def query(self, statement: str, args: Sequence[Any] = ()) -> ResultHandle:
        ...


class CursorResult:
    """
    ResultHandle over an executed DB-API cursor.

    Column names are read once from ``cursor.description``.
    """

    def __init__(self, cursor: Any) -> None:
        self._cursor = cursor
        self._row: Optional[Sequence[Any]] = None
        self._columns: Optional[List[str]] = None

    @property
    def cursor(self) -> Any:
        return self._cursor

    def columns(self) -> List[str]:
        if self._columns is None:
            description = self._cursor.description or ()
            self._columns = [str(col[0]) for col in description]
        return list(self._columns)

    def next(self) -> bool:
        self._row = self._cursor.fetchone()
        return self._row is not None

    def scan(self, slots: Sequence[Destination]) -> None:
        row = self._row
        if row is None:
            raise ScanError("scan called without a current row; call next() first")
        if len(row) != len(slots):
            raise ScanError(f"row has {len(row)} columns but {len(slots)} slots were given")
        for slot, value in zip(slots, row):
            slot.set(value)

    def close(self) -> None:
        self._cursor.close()

    def __enter__(self) -> "CursorResult":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class DbApiHandle:
    """
    SqlHandle over a DB-API 2.0 connection.

    Commit/rollback stay with the caller: wrap calls in the driver's own
    transaction block to run them inside a transaction.
    """

    def __init__(self, connection: Any) -> None:
        self.connection = connection

    def execute(self, statement: str, args: Sequence[Any] = ()) -> ExecOutcome:
        cur = self.connection.cursor()
        try:
            cur.execute(statement, tuple(args))
            # psycopg cursors have no lastrowid
            return ExecOutcome(rowcount=cur.rowcount, lastrowid=getattr(cur, "lastrowid", None))
        finally:
            cur.close()

    def query(self, statement: str, args: Sequence[Any] = ()) -> CursorResult:
        cur = self.connection.cursor()
        try:
            cur.execute(statement, tuple(args))
        except BaseException:
            cur.close()
            raise
        return CursorResult(cur)


def as_handle(db: Any) -> SqlHandle:
    """Return ``db`` if it already is a SqlHandle, otherwise wrap the connection."""
    if callable(getattr(db, "query", None)) and callable(getattr(db, "execute", None)):
        return db
    return DbApiHandle(db)


def as_result(result: Any) -> ResultHandle:
    """Return ``result`` if it already is a ResultHandle, otherwise wrap the cursor."""
    if callable(getattr(result, "columns", None)) and callable(getattr(result, "scan", None)):
        return result
    return CursorResult(result)


__all__ = [
    "CursorResult",
    "DbApiHandle",
    "ExecOutcome",
    "ExecResult",
    "ResultHandle",
    "SqlHandle",
    "as_handle",
    "as_result",
]
