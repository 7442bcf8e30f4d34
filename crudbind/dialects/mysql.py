"""
MySQL/MariaDB dialect: ``%s`` placeholders, generated key from ``cursor.lastrowid``.

No MySQL driver is bundled; any DB-API driver using the ``format``
paramstyle (PyMySQL, mysqlclient, mysql-connector) can be wrapped in a
``DbApiHandle``.
"""

from __future__ import annotations

from typing import Optional

from crudbind.binding.protocol import Enumerable
from crudbind.dialects.base import BaseDialect
from crudbind.runtime.generic import format_style, generic_insert
from crudbind.runtime.handles import SqlHandle


class MySQLDialect(BaseDialect):
    name: str = "mysql"
    paramstyle: str = "format"

    def placeholder(self, position: int) -> str:
        return format_style(position)

    def insert(
        self, db: SqlHandle, table: str, key_column: Optional[str], obj: Enumerable
    ) -> Optional[int]:
        return generic_insert(db, table, key_column, obj, self.placeholder)


__all__ = ["MySQLDialect"]
