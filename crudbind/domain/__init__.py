"""
Domain package for crudbind.

Exports the metadata models the generator consumes and the deterministic
ordering applied before code emission. Keep this package free of I/O.
"""

from crudbind.domain.metadata import FieldMetadata, TimeEncoding, TypeMetadata, check_type
from crudbind.domain.ordering import order_type, sort_fields, sort_types

__all__ = [
    "FieldMetadata",
    "TimeEncoding",
    "TypeMetadata",
    "check_type",
    "order_type",
    "sort_fields",
    "sort_types",
]
