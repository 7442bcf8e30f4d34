from __future__ import annotations

import importlib
import sys
from pathlib import Path
from typing import NoReturn, Optional

import typer

from crudbind.config import get_settings
from crudbind.dialects import available_dialects, get_default_dialect
from crudbind.errors import CrudError
from crudbind.generator.discovery import discover_types
from crudbind.generator.loader import default_output_path, generate_module_bindings, write_bindings
from crudbind.reporter import print_types
from crudbind.utils.logging import configure_logging

app = typer.Typer(help="crudbind: generate column bindings for annotated dataclasses.")


def _setup(app_dir: str) -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    path = str(Path(app_dir).resolve())
    if path not in sys.path:
        sys.path.insert(0, path)


def _fail(exc: Exception) -> NoReturn:
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(code=1)


@app.command()
def generate(
    module: str = typer.Argument(..., help="Dotted path of the module holding annotated dataclasses."),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Bindings file to write (default: <module><CRUD_OUTPUT_SUFFIX>.py next to the module).",
    ),
    check: bool = typer.Option(
        False,
        "--check",
        help="Do not write; exit 1 if the bindings file is missing or out of date.",
    ),
    fetch_helpers: bool = typer.Option(
        True,
        "--fetch-helpers/--no-fetch-helpers",
        help="Emit fetch_<type>/fetch_<type>_list helpers.",
    ),
    app_dir: str = typer.Option(".", "--app-dir", help="Directory added to sys.path before importing."),
) -> None:
    """
    Generate the bindings module for MODULE.
    """
    _setup(app_dir)
    try:
        imported, source = generate_module_bindings(module, fetch_helpers=fetch_helpers)
        path = output or default_output_path(imported)
    except (CrudError, ImportError, ValueError) as exc:
        _fail(exc)

    if check:
        current = path.read_text(encoding="utf-8") if path.exists() else None
        if current != source:
            typer.echo(f"Bindings out of date: {path}", err=True)
            raise typer.Exit(code=1)
        typer.echo(f"Bindings up to date: {path}")
        return

    if write_bindings(path, source):
        typer.echo(f"Wrote {path}")
    else:
        typer.echo(f"Unchanged {path}")


@app.command()
def inspect(
    module: str = typer.Argument(..., help="Dotted path of the module holding annotated dataclasses."),
    app_dir: str = typer.Option(".", "--app-dir", help="Directory added to sys.path before importing."),
) -> None:
    """
    Show the annotated types and columns discovered in MODULE.
    """
    _setup(app_dir)
    try:
        types = discover_types(importlib.import_module(module))
    except (CrudError, ImportError) as exc:
        _fail(exc)
    print_types(types)


@app.command()
def dialects() -> None:
    """
    List available dialects; the default one is starred.
    """
    try:
        default = get_default_dialect().name
    except CrudError as exc:
        _fail(exc)
    for name in available_dialects():
        marker = "*" if name == default else " "
        typer.echo(f"{marker} {name}")


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"dialect={settings.default_dialect} | "
        f"DB={settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name} | "
        f"sqlite={settings.sqlite_path} | suffix={settings.output_suffix}"
    )


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
