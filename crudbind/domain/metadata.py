"""
Metadata models describing annotated types and their persisted fields.

Discovery produces one TypeMetadata per annotated dataclass; the emitter
consumes them to produce binder/enumerator code. These records are pure data
and carry no reference to the classes they describe.
"""
from __future__ import annotations

from collections import Counter
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from crudbind.errors import MetadataError


class TimeEncoding(str, Enum):
    """How a datetime field is stored in its column."""

    UNIX = "unix"


class FieldMetadata(BaseModel):
    """
    One persisted attribute of an annotated type.
    """

    name: str = Field(..., description="Attribute name on the declaring class.")
    column_name: str = Field(..., description="SQL column, normalized to lowercase.")
    type_name: str = Field("Any", description="Printable declared type.")
    optional: bool = Field(False, description="Declared as Optional[X] / X | None.")
    primitive: bool = Field(True, description="Immutable scalar; clone may share it.")
    time_encoding: Optional[TimeEncoding] = Field(
        None, description="Storage encoding for datetime fields."
    )

    model_config = {
        "frozen": True,
    }

    @field_validator("column_name")
    @classmethod
    def _lowercase(cls, value: str) -> str:
        return value.strip().lower()

    @property
    def by_reference(self) -> bool:
        """
        Whether the enumerator passes a destination handle instead of the value.

        Optional fields already carry indirection (None or a value) and are
        passed as-is; encoded fields need a handle to convert on read.
        """
        return not self.optional or self.time_encoding is not None


class TypeMetadata(BaseModel):
    """
    One annotated type as an ordered collection of persisted fields.
    """

    name: str = Field(..., description="Class name.")
    module: str = Field("", description="Import path of the declaring module.")
    fields: List[FieldMetadata] = Field(default_factory=list)
    has_deflate: bool = Field(False, description="Class defines crud_deflate().")
    has_inflate: bool = Field(False, description="Class defines crud_inflate().")
    default_constructible: bool = Field(
        True, description="cls() succeeds without arguments."
    )

    model_config = {
        "frozen": True,
    }

    @property
    def column_names(self) -> List[str]:
        return [f.column_name for f in self.fields]


def check_type(meta: TypeMetadata) -> TypeMetadata:
    """
    Validate column and attribute uniqueness for one type.

    Raises
    ------
    MetadataError
        On an empty column name or a duplicated column/attribute name.
    """
    for f in meta.fields:
        if not f.column_name:
            raise MetadataError(meta.name, f"field {f.name!r} has an empty column name")

    duplicates = [col for col, n in Counter(meta.column_names).items() if n > 1]
    if duplicates:
        raise MetadataError(meta.name, f"duplicate column name {duplicates[0]!r}")

    names = [n for n, count in Counter(f.name for f in meta.fields).items() if count > 1]
    if names:
        raise MetadataError(meta.name, f"duplicate field name {names[0]!r}")

    return meta


__all__ = ["FieldMetadata", "TimeEncoding", "TypeMetadata", "check_type"]
