"""
Dialect interfaces for crudbind.

Engines differ mainly in how a generated primary key is read back after an
INSERT and in the placeholder spelling their DB-API driver expects. Concrete
dialects subclass ``BaseDialect`` and override ``insert``; scan and update
go straight to the generic runtime.
"""

from __future__ import annotations

import abc
from typing import Any, MutableSequence, Optional, Protocol, runtime_checkable

from crudbind.binding.protocol import Bindable, Enumerable
from crudbind.runtime.generic import generic_scan, generic_update, scan_all
from crudbind.runtime.handles import ResultHandle, SqlHandle


@runtime_checkable
class Dialect(Protocol):
    """
    Capability set every dialect provides.

    Attributes
    ----------
    name : str
        Registry identifier (e.g. "sqlite3").
    paramstyle : str
        DB-API paramstyle of the driver the dialect targets.
    """

    name: str
    paramstyle: str

    def placeholder(self, position: int) -> str:
        ...

    def scan(self, result: ResultHandle, *targets: Bindable) -> None:
        ...

    def scan_all(
        self,
        result: ResultHandle,
        cls: type,
        into: Optional[MutableSequence[Any]] = None,
        reuse_bindings: bool = False,
    ) -> MutableSequence[Any]:
        ...

    def insert(
        self, db: SqlHandle, table: str, key_column: Optional[str], obj: Enumerable
    ) -> Optional[int]:
        ...

    def update(self, db: SqlHandle, table: str, key_column: str, obj: Enumerable) -> None:
        ...


class BaseDialect(abc.ABC):
    """
    ABC helper for concrete dialects.

    Subclasses set ``name`` and ``paramstyle`` and implement ``placeholder``
    and ``insert``.
    """

    name: str
    paramstyle: str

    @abc.abstractmethod
    def placeholder(self, position: int) -> str:  # pragma: no cover - interface only
        raise NotImplementedError

    def scan(self, result: ResultHandle, *targets: Bindable) -> None:
        generic_scan(result, *targets)

    def scan_all(
        self,
        result: ResultHandle,
        cls: type,
        into: Optional[MutableSequence[Any]] = None,
        reuse_bindings: bool = False,
    ) -> MutableSequence[Any]:
        return scan_all(result, cls, into, scan=self.scan, reuse_bindings=reuse_bindings)

    @abc.abstractmethod
    def insert(
        self, db: SqlHandle, table: str, key_column: Optional[str], obj: Enumerable
    ) -> Optional[int]:  # pragma: no cover - interface only
        raise NotImplementedError

    def update(self, db: SqlHandle, table: str, key_column: str, obj: Enumerable) -> None:
        generic_update(db, table, key_column, obj, self.placeholder)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


__all__ = ["BaseDialect", "Dialect"]
