"""
Discovery of annotated dataclasses.

Runs at generation time only: it inspects classes once to produce
TypeMetadata, and the emitted code never introspects again.
"""

from __future__ import annotations

import dataclasses
import types
from datetime import date, datetime, time
from decimal import Decimal
from types import ModuleType
from typing import Any, List, Tuple, Union, get_args, get_origin, get_type_hints
from uuid import UUID

from crudbind.domain.metadata import FieldMetadata, TimeEncoding, TypeMetadata, check_type
from crudbind.errors import MetadataError
from crudbind.generator.annotations import TAG_KEY, parse_tag
from crudbind.utils.logging import get_logger

log = get_logger(__name__)

_PRIMITIVES = (int, float, str, bool, bytes, Decimal, datetime, date, time, UUID)
_UNION_TYPES: Tuple[Any, ...] = (Union, types.UnionType)


def _split_optional(hint: Any) -> Tuple[Any, bool]:
    """Return ``(inner, True)`` for ``Optional[inner]``, else ``(hint, False)``."""
    if get_origin(hint) in _UNION_TYPES:
        args = get_args(hint)
        rest = tuple(arg for arg in args if arg is not type(None))
        if len(rest) != len(args):
            inner = rest[0] if len(rest) == 1 else Union[rest]
            return inner, True
    return hint, False


def _type_name(hint: Any) -> str:
    if hint is Any:
        return "Any"
    if isinstance(hint, type):
        return hint.__name__
    return str(hint).replace("typing.", "")


def _is_primitive(hint: Any) -> bool:
    return isinstance(hint, type) and issubclass(hint, _PRIMITIVES)


def _has_default(f: dataclasses.Field) -> bool:
    return (
        not f.init
        or f.default is not dataclasses.MISSING
        or f.default_factory is not dataclasses.MISSING  # type: ignore[misc]
    )


def is_annotated(cls: Any) -> bool:
    """Whether ``cls`` is a dataclass with at least one tagged field."""
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        return False
    return any(TAG_KEY in f.metadata for f in dataclasses.fields(cls))


def describe_type(cls: type) -> TypeMetadata:
    """
    Build validated metadata for one dataclass.

    A dataclass without tagged fields yields a type with zero fields.

    Raises
    ------
    MetadataError
        If ``cls`` is not a dataclass, a tag is malformed, a type hint cannot
        be resolved, ``unix`` is used on a non-datetime field, or column
        names collide.
    """
    name = getattr(cls, "__name__", repr(cls))
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise MetadataError(name, "only dataclasses can carry column bindings")

    try:
        hints = get_type_hints(cls)
    except (NameError, TypeError) as exc:
        raise MetadataError(name, f"cannot resolve type hints: {exc}") from exc

    dc_fields = dataclasses.fields(cls)
    fields: List[FieldMetadata] = []
    for f in dc_fields:
        tag = f.metadata.get(TAG_KEY)
        if tag is None:
            continue
        parsed = parse_tag(tag, owner=name)
        hint = hints.get(f.name, Any)
        inner, optional = _split_optional(hint)
        if parsed.unix and not (isinstance(inner, type) and issubclass(inner, datetime)):
            raise MetadataError(
                name, f"field {f.name!r}: the unix option needs a datetime field, got {_type_name(hint)}"
            )
        fields.append(
            FieldMetadata(
                name=f.name,
                column_name=parsed.column,
                type_name=_type_name(hint),
                optional=optional,
                primitive=_is_primitive(inner),
                time_encoding=TimeEncoding.UNIX if parsed.unix else None,
            )
        )

    meta = TypeMetadata(
        name=name,
        module=cls.__module__,
        fields=fields,
        has_deflate=callable(getattr(cls, "crud_deflate", None)),
        has_inflate=callable(getattr(cls, "crud_inflate", None)),
        default_constructible=all(_has_default(f) for f in dc_fields),
    )
    return check_type(meta)


def discover_types(module: ModuleType) -> List[TypeMetadata]:
    """
    Describe every annotated dataclass defined in ``module``.

    Classes imported from elsewhere are skipped. The first malformed type
    aborts discovery.
    """
    found = [
        describe_type(obj)
        for obj in vars(module).values()
        if is_annotated(obj) and obj.__module__ == module.__name__
    ]
    log.info(
        "Discovered annotated types",
        extra={"source_module": module.__name__, "types": [meta.name for meta in found]},
    )
    return found


__all__ = ["describe_type", "discover_types", "is_annotated"]
