"""
Configuration settings for crudbind.

Uses Pydantic Settings to load environment variables for the default dialect,
database connections used by the CLI and integration tests, logging, and the
code generator's output naming.
"""
from __future__ import annotations

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Dialect used when a call does not pass one explicitly
    default_dialect: str = Field("sqlite3", alias="CRUD_DIALECT")

    # PostgreSQL
    db_host: str = Field("localhost", alias="DB_HOST")
    db_port: int = Field(5432, alias="DB_PORT")
    db_user: str = Field("postgres", alias="DB_USER")
    db_password: str = Field("postgres", alias="DB_PASSWORD")
    db_name: str = Field("crudbind", alias="DB_NAME")
    db_connect_retries: int = Field(3, alias="DB_CONNECT_RETRIES")

    # SQLite
    sqlite_path: str = Field(":memory:", alias="SQLITE_PATH")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Generator
    output_suffix: str = Field("_crud", alias="CRUD_OUTPUT_SUFFIX")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
