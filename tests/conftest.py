"""
Pytest configuration for crudbind.

Provides fixtures for:
- Generating and loading bindings for tests.models
- In-memory SQLite databases with the test schema
- Settings and DSN for PostgreSQL integration tests
"""

from __future__ import annotations

import os
import sqlite3
from types import ModuleType
from typing import Generator

import pytest

from crudbind.config import Settings
from crudbind.generator import generate_bindings, load_bindings, write_bindings
from crudbind.generator.discovery import discover_types
from crudbind.infrastructure.db_factory import connect_sqlite
from tests import models
from tests.fakes import FakeDb

BINDINGS_MODULE = "tests.models_crud"

SQLITE_SCHEMA = """
CREATE TABLE foo
    ( foo_id INTEGER PRIMARY KEY AUTOINCREMENT
    , foo_num INTEGER NOT NULL
    , foo_str VARCHAR(34) NOT NULL
    , foo_time TIMESTAMP NOT NULL
    );
CREATE TABLE ofoo
    ( o_int8 INTEGER
    , o_int16 INTEGER
    , o_int32 INTEGER
    , o_int64 INTEGER
    , o_float32 REAL
    , o_float64 REAL
    , o_bool BOOL
    , o_string VARCHAR(255)
    );
CREATE TABLE tfoo
    ( time_int INTEGER NOT NULL
    , time_int_ptr INTEGER
    , time_val TIMESTAMP NOT NULL
    , time_val_ptr TIMESTAMP
    );
"""


@pytest.fixture(scope="session", autouse=True)
def bindings(tmp_path_factory: pytest.TempPathFactory) -> ModuleType:
    """
    Generate bindings for tests.models, write them and import the file.

    Mirrors what importing a file written by ``crudbind generate`` does.
    """
    path = tmp_path_factory.mktemp("bindings") / "models_crud.py"
    write_bindings(path, generate_bindings(discover_types(models)))
    return load_bindings(path, BINDINGS_MODULE)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "crudbind"),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return (
        f"postgresql://{test_settings.db_user}:{test_settings.db_password}"
        f"@{test_settings.db_host}:{test_settings.db_port}/{test_settings.db_name}"
    )


@pytest.fixture
def sqlite_db() -> Generator[sqlite3.Connection, None, None]:
    """
    Fresh in-memory SQLite database holding the foo/ofoo/tfoo tables.
    """
    conn = connect_sqlite(":memory:")
    conn.executescript(SQLITE_SCHEMA)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def fake_db() -> FakeDb:
    return FakeDb()
