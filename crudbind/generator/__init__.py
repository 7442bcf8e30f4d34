"""
Generator package for crudbind.

Discovery turns annotated dataclasses into metadata; the emitter turns
metadata into binding source; the loader writes or executes that source.
"""

from crudbind.generator.annotations import ColumnTag, column, format_tag, parse_tag
from crudbind.generator.discovery import describe_type, discover_types, is_annotated
from crudbind.generator.emitter import (
    GENERATED_MARKER,
    BindingEmitter,
    generate_bindings,
    snake_case,
)
from crudbind.generator.loader import (
    bindings_module_name,
    default_output_path,
    generate_module_bindings,
    load_bindings,
    write_bindings,
)

__all__ = [
    # Annotations
    "ColumnTag",
    "column",
    "format_tag",
    "parse_tag",
    # Discovery
    "describe_type",
    "discover_types",
    "is_annotated",
    # Emission
    "BindingEmitter",
    "GENERATED_MARKER",
    "generate_bindings",
    "snake_case",
    # Loading
    "bindings_module_name",
    "default_output_path",
    "generate_module_bindings",
    "load_bindings",
    "write_bindings",
]
