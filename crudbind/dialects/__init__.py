"""
Dialects package for crudbind.

Re-exports the dialect interfaces and concrete dialects, and owns the
name registry plus the process-wide default dialect. The default is built
once from settings and never reassigned; callers needing another dialect
pass it explicitly.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Callable, Dict, List

from crudbind.config import get_settings
from crudbind.dialects.base import BaseDialect, Dialect
from crudbind.dialects.mysql import MySQLDialect
from crudbind.dialects.postgres import PostgresDialect
from crudbind.dialects.sqlite import SQLite3Dialect
from crudbind.errors import UnknownDialectError
from crudbind.utils.logging import get_logger

log = get_logger(__name__)

_ALIASES: Dict[str, str] = {
    "sqlite": "sqlite3",
    "postgresql": "postgres",
    "pg": "postgres",
    "mariadb": "mysql",
}


def _dialect_factories() -> Dict[str, Callable[[], Dialect]]:
    """Registry of available dialects."""
    return {
        "mysql": lambda: MySQLDialect(),
        "postgres": lambda: PostgresDialect(),
        "sqlite3": lambda: SQLite3Dialect(),
    }


def available_dialects() -> List[str]:
    """List available dialect names."""
    return sorted(_dialect_factories().keys())


def resolve_dialect(name: str) -> Dialect:
    """Build the dialect registered under ``name`` (aliases accepted)."""
    key = name.strip().lower()
    key = _ALIASES.get(key, key)
    factories = _dialect_factories()
    if key not in factories:
        raise UnknownDialectError(
            f"Unknown dialect '{name}'. Available: {', '.join(available_dialects())}"
        )
    return factories[key]()


@lru_cache(maxsize=1)
def get_default_dialect() -> Dialect:
    """
    Return the process-wide default dialect.

    Resolved from ``CRUD_DIALECT`` on first use and cached; swapping it at
    runtime is unsupported.
    """
    dialect = resolve_dialect(get_settings().default_dialect)
    log.info("Default dialect selected", extra={"dialect": dialect.name})
    return dialect


__all__ = [
    "BaseDialect",
    "Dialect",
    "MySQLDialect",
    "PostgresDialect",
    "SQLite3Dialect",
    "available_dialects",
    "get_default_dialect",
    "resolve_dialect",
]
