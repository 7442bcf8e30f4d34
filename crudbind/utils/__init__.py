"""
Utilities package for crudbind.

Exports shared helpers for logging and other cross-cutting concerns.
Keep this package lightweight and free of binding or dialect logic.
"""

from crudbind.utils.logging import JsonFormatter, configure_logging, get_logger

__all__ = [
    "JsonFormatter",
    "configure_logging",
    "get_logger",
]
