"""
Annotation surface: how dataclass fields declare their SQL column.

    @dataclass
    class Foo:
        id: int = column("foo_id", default=0)
        created: datetime = column("foo_created", unix=True, default_factory=now)
        legacy: str = field(default="", metadata={"crud": "foo_legacy"})

The tag stored under the ``crud`` metadata key reads ``"column[,option...]"``;
``unix`` is the only option.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

from crudbind.errors import MetadataError

TAG_KEY = "crud"
UNIX_OPTION = "unix"
_KNOWN_OPTIONS = frozenset({UNIX_OPTION})


@dataclass(frozen=True)
class ColumnTag:
    column: str
    unix: bool = False


def format_tag(name: str, *, unix: bool = False) -> str:
    return f"{name},{UNIX_OPTION}" if unix else name


def parse_tag(tag: str, owner: str = "<unknown>") -> ColumnTag:
    """
    Parse a ``"column[,option...]"`` tag.

    Raises
    ------
    MetadataError
        If the column part is empty or an option is not recognized.
    """
    parts = [part.strip() for part in str(tag).split(",")]
    name = parts[0].lower()
    if not name:
        raise MetadataError(owner, f"empty column name in tag {tag!r}")

    options = {opt.lower() for opt in parts[1:] if opt}
    unknown = sorted(options - _KNOWN_OPTIONS)
    if unknown:
        raise MetadataError(owner, f"unknown option {unknown[0]!r} in tag {tag!r}")

    return ColumnTag(column=name, unix=UNIX_OPTION in options)


def column(name: str, *, unix: bool = False, **field_kwargs: Any) -> Any:
    """
    ``dataclasses.field`` that binds the attribute to SQL column ``name``.

    Extra keyword arguments (``default``, ``default_factory``, ``repr``, ...)
    are passed through to ``dataclasses.field``.
    """
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[TAG_KEY] = format_tag(name, unix=unix)
    return dataclasses.field(metadata=metadata, **field_kwargs)


__all__ = ["ColumnTag", "TAG_KEY", "column", "format_tag", "parse_tag"]
