"""
PostgreSQL dialect for psycopg.

PostgreSQL has no last-insert-id facility, so when a key column is given the
INSERT gets a ``RETURNING <key>`` clause and the key is read from the first
row of the result.
"""

from __future__ import annotations

from typing import Optional

from crudbind.binding.protocol import Enumerable
from crudbind.binding.slots import ValueSlot
from crudbind.dialects.base import BaseDialect
from crudbind.errors import ScanError
from crudbind.runtime.generic import format_style, prepare_insert
from crudbind.runtime.handles import SqlHandle
from crudbind.utils.logging import get_logger

log = get_logger(__name__)


class PostgresDialect(BaseDialect):
    """Returning-clause engine targeting psycopg (``%s`` placeholders)."""

    name: str = "postgres"
    paramstyle: str = "format"

    def placeholder(self, position: int) -> str:
        return format_style(position)

    def insert(
        self, db: SqlHandle, table: str, key_column: Optional[str], obj: Enumerable
    ) -> Optional[int]:
        stmt = prepare_insert(table, key_column, obj, self.placeholder)

        if not key_column:
            log.debug("Executing insert", extra={"table": table, "sql": stmt.sql})
            db.execute(stmt.sql, stmt.params)
            return None

        sql = f"{stmt.sql} RETURNING {key_column}"
        log.debug("Executing insert", extra={"table": table, "sql": sql})
        result = db.query(sql, stmt.params)
        try:
            if not result.next():
                raise ScanError(f"INSERT INTO {table} returned no row for {key_column}")
            key = ValueSlot()
            result.scan([key])
            return key.get()
        finally:
            result.close()


__all__ = ["PostgresDialect"]
