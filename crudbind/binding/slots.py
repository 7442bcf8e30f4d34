"""
Destination handles placed in the value-slot sequence of a scan.

A scan fills one slot per result column. Generated binders install an
``AttributeSlot`` (or a converting variant) for every column they own; the
runtime fills whatever is left with ``DISCARD``. Enumerators reuse the same
handles as "addresses" of fields whose value is read when parameters are
built.
"""

from __future__ import annotations

import abc
from datetime import datetime, timezone
from typing import Any


class Destination(abc.ABC):
    """A writable location a scanned column value is stored into."""

    __slots__ = ()

    @abc.abstractmethod
    def set(self, value: Any) -> None:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def get(self) -> Any:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def retarget(self, obj: Any) -> "Destination":  # pragma: no cover - interface only
        """Return the same destination on another instance of the same shape."""
        raise NotImplementedError


class AttributeSlot(Destination):
    """Attribute ``attr`` of ``obj``."""

    __slots__ = ("obj", "attr")

    def __init__(self, obj: Any, attr: str) -> None:
        self.obj = obj
        self.attr = attr

    def set(self, value: Any) -> None:
        setattr(self.obj, self.attr, value)

    def get(self) -> Any:
        return getattr(self.obj, self.attr)

    def retarget(self, obj: Any) -> "AttributeSlot":
        return type(self)(obj, self.attr)

    def __eq__(self, other: object) -> bool:
        return (
            type(other) is type(self)
            and other.obj is self.obj  # type: ignore[attr-defined]
            and other.attr == self.attr  # type: ignore[attr-defined]
        )

    def __hash__(self) -> int:
        return hash((type(self), id(self.obj), self.attr))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({type(self.obj).__name__}.{self.attr})"


class UnixTimeSlot(AttributeSlot):
    """
    A datetime attribute stored as integer seconds since the Unix epoch.

    Only timezone-aware datetimes are accepted: a naive value has no fixed
    instant, and scanned values always come back in UTC.
    """

    __slots__ = ()

    def set(self, value: Any) -> None:
        if value is not None and not isinstance(value, datetime):
            value = datetime.fromtimestamp(int(value), tz=timezone.utc)
        setattr(self.obj, self.attr, value)

    def get(self) -> Any:
        value = getattr(self.obj, self.attr)
        if value is None:
            return None
        if value.tzinfo is None or value.utcoffset() is None:
            raise ValueError(
                f"{type(self.obj).__name__}.{self.attr}: unix-encoded datetimes must be "
                f"timezone-aware, got naive {value!r}"
            )
        return int(value.timestamp())


class ValueSlot(Destination):
    """A free-standing holder, used to read single values such as generated keys."""

    __slots__ = ("value",)

    def __init__(self, value: Any = None) -> None:
        self.value = value

    def set(self, value: Any) -> None:
        self.value = value

    def get(self) -> Any:
        return self.value

    def retarget(self, obj: Any) -> "ValueSlot":
        return ValueSlot()


class _Discard(Destination):
    __slots__ = ()

    def set(self, value: Any) -> None:
        pass

    def get(self) -> Any:
        return None

    def retarget(self, obj: Any) -> "_Discard":
        return self

    def __repr__(self) -> str:
        return "DISCARD"


DISCARD = _Discard()


def resolve(value: Any) -> Any:
    """Dereference a destination handle; plain values pass through."""
    if isinstance(value, Destination):
        return value.get()
    return value


__all__ = [
    "AttributeSlot",
    "DISCARD",
    "Destination",
    "UnixTimeSlot",
    "ValueSlot",
    "resolve",
]
