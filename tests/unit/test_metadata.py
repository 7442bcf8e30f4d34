from __future__ import annotations

import pytest
from pydantic import ValidationError

from crudbind.domain.metadata import FieldMetadata, TimeEncoding, TypeMetadata, check_type
from crudbind.domain.ordering import order_type, sort_fields, sort_types
from crudbind.errors import MetadataError


def _field(name: str, column: str, **kwargs) -> FieldMetadata:
    return FieldMetadata(name=name, column_name=column, **kwargs)


class TestFieldMetadata:
    """FieldMetadata normalization and reference rules."""

    def test_column_name_is_lowercased(self):
        f = _field("id", "  Foo_ID ")
        assert f.column_name == "foo_id"

    def test_non_optional_field_is_passed_by_reference(self):
        assert _field("id", "foo_id").by_reference is True

    def test_optional_field_is_passed_by_value(self):
        assert _field("n", "o_int", optional=True).by_reference is False

    def test_unix_optional_field_is_passed_by_reference(self):
        f = _field("t", "t_int", optional=True, time_encoding=TimeEncoding.UNIX)
        assert f.by_reference is True

    def test_is_frozen(self):
        f = _field("id", "foo_id")
        with pytest.raises(ValidationError):
            f.column_name = "other"


class TestCheckType:
    """Uniqueness and emptiness checks."""

    def test_valid_type_is_returned(self):
        meta = TypeMetadata(name="Foo", fields=[_field("a", "x"), _field("b", "y")])
        assert check_type(meta) is meta

    def test_zero_fields_is_legal(self):
        meta = TypeMetadata(name="Empty")
        assert check_type(meta).column_names == []

    def test_duplicate_column_is_rejected(self):
        meta = TypeMetadata(name="Foo", fields=[_field("a", "x"), _field("b", "X")])
        with pytest.raises(MetadataError, match="duplicate column name 'x'"):
            check_type(meta)

    def test_duplicate_attribute_is_rejected(self):
        meta = TypeMetadata(name="Foo", fields=[_field("a", "x"), _field("a", "y")])
        with pytest.raises(MetadataError, match="duplicate field name 'a'"):
            check_type(meta)

    def test_empty_column_is_rejected(self):
        meta = TypeMetadata(name="Foo", fields=[_field("a", "   ")])
        with pytest.raises(MetadataError) as excinfo:
            check_type(meta)
        assert excinfo.value.type_name == "Foo"


class TestOrdering:
    """Deterministic sort of fields and types."""

    def test_fields_sorted_by_column(self):
        fields = [_field("c", "zeta"), _field("a", "alpha"), _field("b", "mu")]
        assert [f.column_name for f in sort_fields(fields)] == ["alpha", "mu", "zeta"]

    def test_types_sorted_by_name(self):
        types = [TypeMetadata(name=n) for n in ("TimeFoo", "Foo", "OptionalFoo")]
        assert [t.name for t in sort_types(types)] == ["Foo", "OptionalFoo", "TimeFoo"]

    def test_order_type_copies_without_touching_input(self):
        meta = TypeMetadata(name="Foo", fields=[_field("b", "y"), _field("a", "x")])
        ordered = order_type(meta)
        assert ordered.column_names == ["x", "y"]
        assert meta.column_names == ["y", "x"]

    def test_sorting_is_idempotent(self):
        fields = [_field("b", "y"), _field("a", "x"), _field("c", "w")]
        once = sort_fields(fields)
        assert sort_fields(once) == once
