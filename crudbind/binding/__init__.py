"""
Binding protocol package for crudbind.

Generated modules import everything they need from here, so this package is
the stable surface between emitted code and the runtime.
"""

from crudbind.binding.protocol import (
    NO_HOOKS,
    Bindable,
    Cloneable,
    Enumerable,
    Hooks,
    install_binding,
    is_bindable_class,
)
from crudbind.binding.slots import (
    DISCARD,
    AttributeSlot,
    Destination,
    UnixTimeSlot,
    ValueSlot,
    resolve,
)

__all__ = [
    # Protocol
    "Bindable",
    "Cloneable",
    "Enumerable",
    "Hooks",
    "NO_HOOKS",
    "install_binding",
    "is_bindable_class",
    # Destinations
    "AttributeSlot",
    "DISCARD",
    "Destination",
    "UnixTimeSlot",
    "ValueSlot",
    "resolve",
]
