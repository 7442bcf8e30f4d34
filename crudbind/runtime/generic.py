"""
Dialect-agnostic scan, insert and update algorithms.

Every dialect builds on these functions. Statements use positional
placeholders whose spelling comes from the dialect (``?`` for sqlite3,
``%s`` for psycopg/MySQL drivers). Driver exceptions raised by ``execute``
or ``query`` propagate unchanged; nothing here retries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    List,
    MutableSequence,
    Optional,
    Sequence,
    Tuple,
)

from crudbind.binding.protocol import Bindable, Enumerable, is_bindable_class
from crudbind.binding.slots import DISCARD, Destination, resolve
from crudbind.errors import LengthMismatchError, ShapeError, UnsetPrimaryKeyError
from crudbind.runtime.handles import ResultHandle, SqlHandle
from crudbind.utils.logging import get_logger

log = get_logger(__name__)

Placeholder = Callable[[int], str]
ScanFunc = Callable[..., None]

_MISSING = object()


def qmark(position: int) -> str:
    """DB-API ``qmark`` paramstyle."""
    return "?"


def format_style(position: int) -> str:
    """DB-API ``format`` paramstyle."""
    return "%s"


@dataclass(frozen=True)
class Statement:
    """SQL text and its positional parameters."""

    sql: str
    params: Tuple[Any, ...]


# ---------------------------------------------------------------------------
# Scan
# ---------------------------------------------------------------------------


def bind_slots(columns: Sequence[str], targets: Sequence[Bindable]) -> List[Destination]:
    """
    Let every target claim its columns, then discard the rest.

    ``columns`` must already be lowercase. Targets may claim disjoint subsets,
    which is how one row fills several objects.
    """
    slots: List[Optional[Destination]] = [None] * len(columns)
    for target in targets:
        target.bind_fields(columns, slots)
    return [DISCARD if slot is None else slot for slot in slots]


def scan_bound(result: ResultHandle, slots: Sequence[Destination], targets: Sequence[Any]) -> None:
    """Scan the current row into prepared slots and run inflate hooks."""
    result.scan(slots)
    for target in targets:
        inflate = target.crud_hooks.inflate
        if inflate is not None:
            inflate(target)


def generic_scan(result: ResultHandle, *targets: Bindable) -> None:
    """
    Populate ``targets`` from the current row of ``result``.

    Unmapped columns are scanned into a discard destination, so a result may
    carry more columns than the targets declare; declared fields absent from
    the result are left as they were.
    """
    columns = [name.lower() for name in result.columns()]
    slots = bind_slots(columns, targets)
    scan_bound(result, slots, targets)


def scan_all(
    result: ResultHandle,
    cls: type,
    into: Optional[MutableSequence[Any]] = None,
    *,
    scan: ScanFunc = generic_scan,
    reuse_bindings: bool = False,
) -> MutableSequence[Any]:
    """
    Scan every remaining row of ``result`` into new ``cls`` instances.

    Parameters
    ----------
    result : ResultHandle
        Result to drain; it is closed before returning.
    cls : type
        Bindable class constructible without arguments.
    into : MutableSequence, optional
        Sequence to append to. A new list is returned when omitted.
    scan : callable
        Single-row scan to use (a dialect's ``scan``).
    reuse_bindings : bool
        Bind columns once, then clone the previous object and retarget the
        slots for each further row. Requires ``cls.clone``; attributes not
        present in the result carry over from the previous row.

    Raises
    ------
    ShapeError
        If ``cls`` is not a bindable class or ``into`` is not a mutable sequence.
    """
    if not is_bindable_class(cls):
        raise ShapeError(f"scan_all needs a class with bind_fields(), got {cls!r}")
    if into is None:
        into = []
    elif not isinstance(into, MutableSequence):
        raise ShapeError(
            f"scan_all needs a mutable sequence to append to, got {type(into).__name__}"
        )
    if reuse_bindings and not callable(getattr(cls, "clone", None)):
        raise ShapeError(f"{cls.__name__} has no clone(); cannot reuse bindings")

    try:
        if reuse_bindings:
            _scan_all_reusing(result, cls, into)
        else:
            while result.next():
                obj = cls()
                scan(result, obj)
                into.append(obj)
    finally:
        result.close()
    return into


def _scan_all_reusing(result: ResultHandle, cls: type, into: MutableSequence[Any]) -> None:
    slots: List[Destination] = []
    previous = None
    while result.next():
        if previous is None:
            obj = cls()
            columns = [name.lower() for name in result.columns()]
            slots = bind_slots(columns, (obj,))
        else:
            obj = previous.clone()
            slots = [slot.retarget(obj) for slot in slots]
        scan_bound(result, slots, (obj,))
        into.append(obj)
        previous = obj


# ---------------------------------------------------------------------------
# Insert / update
# ---------------------------------------------------------------------------


def enumerate_for_write(obj: Enumerable) -> Tuple[List[str], List[Any]]:
    """Run the deflate hook, enumerate fields and enforce equal lengths."""
    deflate = obj.crud_hooks.deflate
    if deflate is not None:
        deflate(obj)

    names, values = obj.enumerate_fields()
    if len(names) != len(values):
        raise LengthMismatchError(len(names), len(values))
    return list(names), list(values)


def prepare_insert(
    table: str,
    key_column: Optional[str],
    obj: Enumerable,
    placeholder: Placeholder = qmark,
) -> Statement:
    """
    Build ``INSERT INTO table (cols) VALUES (...)`` for ``obj``.

    The key column is left out so the server can generate it. When every
    field is excluded the column list is empty and the engine decides
    whether that is acceptable.
    """
    names, values = enumerate_for_write(obj)
    key = (key_column or "").lower()

    columns: List[str] = []
    params: List[Any] = []
    marks: List[str] = []
    for name, value in zip(names, values):
        if key and name.lower() == key:
            continue
        params.append(resolve(value))
        columns.append(name)
        marks.append(placeholder(len(params)))

    sql = f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({', '.join(marks)})"
    return Statement(sql, tuple(params))


def prepare_update(
    table: str,
    key_column: str,
    obj: Enumerable,
    placeholder: Placeholder = qmark,
) -> Statement:
    """
    Build ``UPDATE table SET col = ?, ... WHERE key = ?`` for ``obj``.

    Raises
    ------
    UnsetPrimaryKeyError
        If no enumerated column equals ``key_column``.
    """
    names, values = enumerate_for_write(obj)
    key = (key_column or "").lower()

    assignments: List[str] = []
    params: List[Any] = []
    key_value: Any = _MISSING
    for name, value in zip(names, values):
        if key and name.lower() == key:
            key_value = resolve(value)
            continue
        params.append(resolve(value))
        assignments.append(f"{name} = {placeholder(len(params))}")

    if key_value is _MISSING:
        raise UnsetPrimaryKeyError(key_column)

    params.append(key_value)
    sql = (
        f"UPDATE {table} SET {', '.join(assignments)} "
        f"WHERE {key_column} = {placeholder(len(params))}"
    )
    return Statement(sql, tuple(params))


def generic_insert(
    db: SqlHandle,
    table: str,
    key_column: Optional[str],
    obj: Enumerable,
    placeholder: Placeholder = qmark,
) -> Optional[int]:
    """
    Insert ``obj`` and return the generated key from ``lastrowid``.

    Returns None when no key column was given.
    """
    stmt = prepare_insert(table, key_column, obj, placeholder)
    log.debug("Executing insert", extra={"table": table, "sql": stmt.sql})
    cur = db.execute(stmt.sql, stmt.params)
    if not key_column:
        return None
    return cur.lastrowid


def generic_update(
    db: SqlHandle,
    table: str,
    key_column: str,
    obj: Enumerable,
    placeholder: Placeholder = qmark,
) -> None:
    stmt = prepare_update(table, key_column, obj, placeholder)
    log.debug("Executing update", extra={"table": table, "sql": stmt.sql})
    db.execute(stmt.sql, stmt.params)


# ---------------------------------------------------------------------------
# Fetch helpers
# ---------------------------------------------------------------------------


def fetch_one(
    db: SqlHandle,
    factory: Callable[[], Any],
    query: str,
    args: Sequence[Any] = (),
    *,
    scan: ScanFunc = generic_scan,
) -> Optional[Any]:
    """
    Run ``query`` and return the first row as ``factory()``, or None.

    A class factory is checked before the query runs; any other callable is
    checked on the object it builds.
    """
    if isinstance(factory, type) and not is_bindable_class(factory):
        raise ShapeError(f"fetch_one needs a class with bind_fields(), got {factory!r}")
    result = db.query(query, args)
    try:
        if not result.next():
            return None
        obj = factory()
        if not callable(getattr(obj, "bind_fields", None)):
            raise ShapeError(
                f"fetch_one factory built {type(obj).__name__}, which has no bind_fields()"
            )
        scan(result, obj)
        return obj
    finally:
        result.close()


def fetch_all(
    db: SqlHandle,
    cls: type,
    query: str,
    args: Sequence[Any] = (),
    *,
    scan: ScanFunc = generic_scan,
    reuse_bindings: bool = False,
) -> MutableSequence[Any]:
    """Run ``query`` and return every row as a ``cls`` instance."""
    if not is_bindable_class(cls):
        raise ShapeError(f"fetch_all needs a class with bind_fields(), got {cls!r}")
    return scan_all(db.query(query, args), cls, scan=scan, reuse_bindings=reuse_bindings)


__all__ = [
    "Placeholder",
    "Statement",
    "bind_slots",
    "enumerate_for_write",
    "fetch_all",
    "fetch_one",
    "format_style",
    "generic_insert",
    "generic_scan",
    "generic_update",
    "prepare_insert",
    "prepare_update",
    "qmark",
    "scan_all",
    "scan_bound",
]
