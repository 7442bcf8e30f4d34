"""
Binding protocol shared by generated code and the persistence runtime.

Generated modules implement these capabilities on annotated classes through
``install_binding``; hand-written classes may implement them directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    List,
    MutableSequence,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    runtime_checkable,
)

from crudbind.binding.slots import Destination
from crudbind.utils.logging import get_logger

log = get_logger(__name__)

Hook = Callable[[Any], None]


@dataclass(frozen=True)
class Hooks:
    """
    Optional pre-insert/update (deflate) and post-scan (inflate) transforms.

    Resolved once when bindings are generated, so the runtime never inspects an
    object for hook methods.
    """

    deflate: Optional[Hook] = None
    inflate: Optional[Hook] = None


NO_HOOKS = Hooks()


@runtime_checkable
class Bindable(Protocol):
    """Maps lowercase column names to writable destinations on ``self``."""

    crud_hooks: Hooks

    def bind_fields(
        self, names: Sequence[str], values: MutableSequence[Optional[Destination]]
    ) -> None:
        """
        For each name owned by this object, set the slot at the same index.

        Slots for names the object does not own must be left untouched.
        """
        ...


@runtime_checkable
class Enumerable(Protocol):
    """Lists persisted column names and their current values."""

    crud_hooks: Hooks

    def enumerate_fields(self) -> Tuple[List[str], List[Any]]:
        """Return parallel sequences of column names and values."""
        ...


@runtime_checkable
class Cloneable(Protocol):
    """Produces a structurally identical instance for binding reuse."""

    def clone(self) -> Any:
        ...


def install_binding(
    cls: type,
    *,
    bind_fields: Callable[..., None],
    enumerate_fields: Callable[..., Tuple[List[str], List[Any]]],
    clone: Optional[Callable[[Any], Any]] = None,
    hooks: Hooks = NO_HOOKS,
) -> type:
    """
    Attach generated binding functions to ``cls`` as methods.

    Called at import time of a generated module; returns ``cls`` unchanged
    apart from the new attributes.
    """
    cls.bind_fields = bind_fields  # type: ignore[attr-defined]
    cls.enumerate_fields = enumerate_fields  # type: ignore[attr-defined]
    if clone is not None:
        cls.clone = clone  # type: ignore[attr-defined]
    cls.crud_hooks = hooks  # type: ignore[attr-defined]
    log.debug("Installed bindings", extra={"type": cls.__qualname__})
    return cls


def is_bindable_class(cls: Any) -> bool:
    return isinstance(cls, type) and callable(getattr(cls, "bind_fields", None))


__all__ = [
    "Bindable",
    "Cloneable",
    "Enumerable",
    "Hook",
    "Hooks",
    "NO_HOOKS",
    "install_binding",
    "is_bindable_class",
]
