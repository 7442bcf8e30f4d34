"""
Shorthand for the default dialect.

Usage:
    from crudbind import crud

    foo.id = crud.insert(conn, "foo", "foo_id", foo)
    crud.update(conn, "foo", "foo_id", foo)
    foos = crud.fetch_all(conn, Foo, "SELECT * FROM foo")

Every function accepts a raw DB-API connection (or cursor, for scan_all) as
well as the handle types from ``crudbind.runtime``, and takes an explicit
``dialect=`` to bypass the process default.
"""

from __future__ import annotations

from typing import Any, Callable, MutableSequence, Optional

from crudbind.binding.protocol import Bindable, Enumerable
from crudbind.dialects import Dialect, get_default_dialect
from crudbind.runtime import generic
from crudbind.runtime.handles import ResultHandle, as_handle, as_result


def _dialect(dialect: Optional[Dialect]) -> Dialect:
    return dialect if dialect is not None else get_default_dialect()


def scan(result: ResultHandle, *targets: Bindable, dialect: Optional[Dialect] = None) -> None:
    """
    Scan the current row of ``result`` into ``targets``.

    ``result`` must be a ResultHandle positioned on a row by ``next()``; a raw
    DB-API cursor has no current row to scan.
    """
    _dialect(dialect).scan(result, *targets)


def scan_all(
    result: Any,
    cls: type,
    into: Optional[MutableSequence[Any]] = None,
    *,
    dialect: Optional[Dialect] = None,
    reuse_bindings: bool = False,
) -> MutableSequence[Any]:
    """Scan every remaining row of ``result`` into new ``cls`` instances."""
    return _dialect(dialect).scan_all(
        as_result(result), cls, into, reuse_bindings=reuse_bindings
    )


def insert(
    db: Any,
    table: str,
    key_column: Optional[str],
    obj: Enumerable,
    *,
    dialect: Optional[Dialect] = None,
) -> Optional[int]:
    """Insert ``obj`` into ``table`` and return the generated key, if any."""
    return _dialect(dialect).insert(as_handle(db), table, key_column, obj)


def update(
    db: Any,
    table: str,
    key_column: str,
    obj: Enumerable,
    *,
    dialect: Optional[Dialect] = None,
) -> None:
    """Update the row of ``table`` whose ``key_column`` matches ``obj``."""
    _dialect(dialect).update(as_handle(db), table, key_column, obj)


def fetch_one(
    db: Any,
    factory: Callable[[], Any],
    query: str,
    *args: Any,
    dialect: Optional[Dialect] = None,
) -> Optional[Any]:
    return generic.fetch_one(
        as_handle(db), factory, query, args, scan=_dialect(dialect).scan
    )


def fetch_all(
    db: Any,
    cls: type,
    query: str,
    *args: Any,
    dialect: Optional[Dialect] = None,
    reuse_bindings: bool = False,
) -> MutableSequence[Any]:
    return generic.fetch_all(
        as_handle(db),
        cls,
        query,
        args,
        scan=_dialect(dialect).scan,
        reuse_bindings=reuse_bindings,
    )


__all__ = ["fetch_all", "fetch_one", "insert", "scan", "scan_all", "update"]
