"""
SQLite dialect: ``?`` placeholders, generated key from ``cursor.lastrowid``.
"""

from __future__ import annotations

from typing import Optional

from crudbind.binding.protocol import Enumerable
from crudbind.dialects.base import BaseDialect
from crudbind.runtime.generic import generic_insert, qmark
from crudbind.runtime.handles import SqlHandle


class SQLite3Dialect(BaseDialect):
    """Last-insert-id engine targeting the stdlib ``sqlite3`` driver."""

    name: str = "sqlite3"
    paramstyle: str = "qmark"

    def placeholder(self, position: int) -> str:
        return qmark(position)

    def insert(
        self, db: SqlHandle, table: str, key_column: Optional[str], obj: Enumerable
    ) -> Optional[int]:
        return generic_insert(db, table, key_column, obj, self.placeholder)


__all__ = ["SQLite3Dialect"]
