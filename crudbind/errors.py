"""
Error kinds raised by crudbind.

Driver exceptions raised while executing SQL are deliberately absent: the
runtime lets them propagate unchanged so callers can inspect engine details.
"""

from __future__ import annotations


class CrudError(Exception):
    """Base class for every error raised by crudbind itself."""


class MetadataError(CrudError):
    """An annotated type cannot be turned into bindings."""

    def __init__(self, type_name: str, detail: str) -> None:
        super().__init__(f"{type_name}: {detail}")
        self.type_name = type_name
        self.detail = detail


class LengthMismatchError(CrudError):
    """enumerate_fields returned name and value sequences of different length."""

    def __init__(self, names: int, values: int) -> None:
        super().__init__(
            "enumerate_fields return values must have the same length "
            f"(got {names} names and {values} values)"
        )
        self.names = names
        self.values = values


class UnsetPrimaryKeyError(CrudError):
    """enumerate_fields did not return a field matching the key column."""

    def __init__(self, key_column: str) -> None:
        super().__init__(
            f"enumerate_fields did not return a field that matched key column {key_column!r}"
        )
        self.key_column = key_column


class ShapeError(CrudError, TypeError):
    """A scan helper received a target of the wrong shape."""


class ScanError(CrudError):
    """A result handle was asked to scan without a matching current row."""


class UnknownDialectError(CrudError, ValueError):
    """No dialect is registered under the requested name."""


__all__ = [
    "CrudError",
    "LengthMismatchError",
    "MetadataError",
    "ScanError",
    "ShapeError",
    "UnknownDialectError",
    "UnsetPrimaryKeyError",
]
