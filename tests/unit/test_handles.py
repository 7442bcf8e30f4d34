"""
DB-API adapters: cursors are closed once a write has been read.
"""

from __future__ import annotations

import sqlite3
from typing import List

import pytest

from crudbind.runtime.handles import DbApiHandle, ExecOutcome, as_handle


class RecordingCursor:
    """DB-API cursor stand-in; psycopg-like when ``lastrowid`` is omitted."""

    def __init__(self, fail: bool = False, with_lastrowid: bool = True) -> None:
        self.fail = fail
        self.closed = False
        self.rowcount = -1
        self.description = None
        if with_lastrowid:
            self.lastrowid = None

    def execute(self, statement, args=()):
        if self.fail:
            raise sqlite3.OperationalError("no such table: nowhere")
        self.rowcount = 1
        if hasattr(self, "lastrowid"):
            self.lastrowid = 11

    def close(self):
        self.closed = True


class RecordingConnection:
    def __init__(self, **cursor_kwargs) -> None:
        self.cursor_kwargs = cursor_kwargs
        self.cursors: List[RecordingCursor] = []

    def cursor(self) -> RecordingCursor:
        cur = RecordingCursor(**self.cursor_kwargs)
        self.cursors.append(cur)
        return cur


class TestDbApiHandleExecute:
    def test_cursor_closed_after_write(self):
        conn = RecordingConnection()
        outcome = DbApiHandle(conn).execute("UPDATE foo SET foo_num = ?", (1,))

        assert outcome == ExecOutcome(rowcount=1, lastrowid=11)
        assert [c.closed for c in conn.cursors] == [True]

    def test_cursor_closed_when_statement_fails(self):
        conn = RecordingConnection(fail=True)
        with pytest.raises(sqlite3.OperationalError):
            DbApiHandle(conn).execute("DELETE FROM nowhere")
        assert conn.cursors[0].closed

    def test_missing_lastrowid_reads_as_none(self):
        conn = RecordingConnection(with_lastrowid=False)
        outcome = DbApiHandle(conn).execute("INSERT INTO foo (foo_num) VALUES (%s)", (1,))
        assert outcome.lastrowid is None
        assert outcome.rowcount == 1

    def test_sqlite_lastrowid_survives_closing(self):
        conn = sqlite3.connect(":memory:")
        try:
            conn.execute("CREATE TABLE foo (foo_id INTEGER PRIMARY KEY, foo_num INTEGER)")
            handle = as_handle(conn)
            first = handle.execute("INSERT INTO foo (foo_num) VALUES (?)", (5,))
            second = handle.execute("INSERT INTO foo (foo_num) VALUES (?)", (6,))
        finally:
            conn.close()

        assert (first.lastrowid, second.lastrowid) == (1, 2)
        assert first.rowcount == 1


class TestDbApiHandleQuery:
    def test_cursor_closed_when_query_fails(self):
        conn = RecordingConnection(fail=True)
        with pytest.raises(sqlite3.OperationalError):
            DbApiHandle(conn).query("SELECT * FROM nowhere")
        assert conn.cursors[0].closed

    def test_result_owns_cursor_until_closed(self):
        conn = RecordingConnection()
        result = DbApiHandle(conn).query("SELECT 1")
        assert not conn.cursors[0].closed
        result.close()
        assert conn.cursors[0].closed
