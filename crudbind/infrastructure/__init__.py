"""
Infrastructure package for crudbind.

Centralizes database connectivity (connection factories with retry). Keep
this layer focused on I/O, decoupled from the binding runtime.
"""

from crudbind.infrastructure.db_factory import (
    build_dsn,
    connect_postgres,
    connect_sqlite,
    open_handle,
)

__all__ = [
    "build_dsn",
    "connect_postgres",
    "connect_sqlite",
    "open_handle",
]
