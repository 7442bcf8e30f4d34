"""
Deterministic ordering of fields and types.

Generated output must be byte-stable across runs, so fields are ordered by
column name and types by class name before emission. Python's ``sorted`` is
stable, which keeps ties in discovery order.
"""

from __future__ import annotations

from operator import attrgetter
from typing import Iterable, List

from crudbind.domain.metadata import FieldMetadata, TypeMetadata

field_sort_key = attrgetter("column_name")
type_sort_key = attrgetter("name")


def sort_fields(fields: Iterable[FieldMetadata]) -> List[FieldMetadata]:
    return sorted(fields, key=field_sort_key)


def sort_types(types: Iterable[TypeMetadata]) -> List[TypeMetadata]:
    return sorted(types, key=type_sort_key)


def order_type(meta: TypeMetadata) -> TypeMetadata:
    """Return a copy of ``meta`` whose fields are sorted by column name."""
    return meta.model_copy(update={"fields": sort_fields(meta.fields)})


__all__ = ["field_sort_key", "order_type", "sort_fields", "sort_types", "type_sort_key"]
