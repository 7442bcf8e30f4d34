from __future__ import annotations

from typing import Iterable, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from crudbind.domain.metadata import TypeMetadata
from crudbind.domain.ordering import order_type, sort_types


def _flags(meta: TypeMetadata) -> str:
    flags = []
    if meta.has_deflate:
        flags.append("deflate")
    if meta.has_inflate:
        flags.append("inflate")
    if meta.default_constructible:
        flags.append("fetch")
    return ", ".join(flags) or "-"


def build_types_table(types: Iterable[TypeMetadata], title: Optional[str] = None) -> Table:
    """
    Render discovered types as a rich table, one row per persisted field.

    Types and fields appear in generation order (by name, then by column).
    """
    ordered: List[TypeMetadata] = sort_types(order_type(meta) for meta in types)
    table = Table(
        title=title or "Annotated types",
        box=box.ROUNDED,
        caption="Sorted by type name, then column",
    )

    table.add_column("Type", style="cyan", no_wrap=True)
    table.add_column("Column", style="magenta")
    table.add_column("Attribute", style="green")
    table.add_column("Declared type", style="yellow")
    table.add_column("Passed as", justify="center", style="blue")
    table.add_column("Hooks", style="red")

    for meta in ordered:
        if not meta.fields:
            table.add_row(meta.name, "-", "-", "-", "-", _flags(meta))
            continue
        for i, f in enumerate(meta.fields):
            encoding = f" [dim]({f.time_encoding.value})[/dim]" if f.time_encoding else ""
            table.add_row(
                meta.name if i == 0 else "",
                f.column_name,
                f.name,
                f"{f.type_name}{encoding}",
                "address" if f.by_reference else "value",
                _flags(meta) if i == 0 else "",
            )
    return table


def print_types(types: Iterable[TypeMetadata], console: Optional[Console] = None) -> None:
    console = console or Console()
    types = list(types)
    if not types:
        console.print("[yellow]No annotated types found.[/yellow]")
        return
    console.print(build_types_table(types))


__all__ = ["build_types_table", "print_types"]
