"""
Persistence runtime package for crudbind.

Dialect-agnostic scan/insert/update algorithms plus the handle adapters that
connect them to DB-API drivers.
"""

from crudbind.runtime.generic import (
    Statement,
    fetch_all,
    fetch_one,
    format_style,
    generic_insert,
    generic_scan,
    generic_update,
    prepare_insert,
    prepare_update,
    qmark,
    scan_all,
)
from crudbind.runtime.handles import (
    CursorResult,
    DbApiHandle,
    ExecOutcome,
    ResultHandle,
    SqlHandle,
    as_handle,
    as_result,
)

__all__ = [
    # Algorithms
    "Statement",
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
    # Handles
    "CursorResult",
    "DbApiHandle",
    "ExecOutcome",
    "ResultHandle",
    "SqlHandle",
    "as_handle",
    "as_result",
]
