"""
crudbind - column bindings for dataclasses, generated ahead of time.

Application code tags dataclass fields with SQL column names once:

    @dataclass
    class Foo:
        id: int = column("foo_id", default=0)
        name: str = column("foo_name", default="")

The ``crudbind generate`` command turns those declarations into plain
functions installed on each class, and a small dialect-aware runtime scans
rows into objects and inserts or updates objects without per-call
reflection:

    foo.id = crud.insert(conn, "foo", "foo_id", foo)
    foos = crud.fetch_all(conn, Foo, "SELECT * FROM foo")
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from crudbind import crud
from crudbind.binding import NO_HOOKS, Hooks, install_binding
from crudbind.config import Settings, get_settings
from crudbind.dialects import (
    Dialect,
    MySQLDialect,
    PostgresDialect,
    SQLite3Dialect,
    available_dialects,
    get_default_dialect,
    resolve_dialect,
)
from crudbind.errors import (
    CrudError,
    LengthMismatchError,
    MetadataError,
    ShapeError,
    UnsetPrimaryKeyError,
)
from crudbind.generator import column, generate_bindings, load_bindings
from crudbind.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Facade
    "crud",
    # Declarations
    "column",
    "Hooks",
    "NO_HOOKS",
    "install_binding",
    # Generation
    "generate_bindings",
    "load_bindings",
    # Dialects
    "Dialect",
    "MySQLDialect",
    "PostgresDialect",
    "SQLite3Dialect",
    "available_dialects",
    "get_default_dialect",
    "resolve_dialect",
    # Errors
    "CrudError",
    "LengthMismatchError",
    "MetadataError",
    "ShapeError",
    "UnsetPrimaryKeyError",
    # Configuration
    "Settings",
    "get_settings",
    # Logging
    "configure_logging",
    "get_logger",
]
