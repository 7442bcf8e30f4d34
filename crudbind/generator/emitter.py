"""
Binding code generator.

Turns TypeMetadata into a Python module that installs, on each annotated
class, a binder (``bind_fields``), an enumerator (``enumerate_fields``), a
``clone`` and the type's hooks, plus ``fetch_<type>`` / ``fetch_<type>_list``
helpers for classes constructible without arguments.

The output is a pure function of the metadata: types are sorted by name,
fields by column, and nothing time- or environment-dependent is written, so
regenerating an unchanged tree is byte-identical.
"""

from __future__ import annotations

import json
import re
from collections import Counter, defaultdict
from typing import Dict, Iterable, List

from crudbind.domain.metadata import FieldMetadata, TimeEncoding, TypeMetadata, check_type
from crudbind.domain.ordering import order_type, sort_types
from crudbind.errors import MetadataError
from crudbind.utils.logging import get_logger

log = get_logger(__name__)

GENERATED_MARKER = "# Code generated by crudbind. DO NOT EDIT."


def snake_case(name: str) -> str:
    """``OptionalFoo`` -> ``optional_foo``, ``HTTPLog`` -> ``http_log``."""
    s = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    s = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", s)
    return s.lower()


def _quote(value: str) -> str:
    return json.dumps(value)


def _slot_class(f: FieldMetadata) -> str:
    return "UnixTimeSlot" if f.time_encoding is TimeEncoding.UNIX else "AttributeSlot"


def _address(f: FieldMetadata) -> str:
    return f"{_slot_class(f)}(self, {_quote(f.name)})"


class BindingEmitter:
    """
    Emit binding source for a set of types.

    Parameters
    ----------
    fetch_helpers : bool
        Whether to emit ``fetch_<type>`` / ``fetch_<type>_list`` helpers for
        default-constructible types.
    """

    def __init__(self, fetch_helpers: bool = True) -> None:
        self.fetch_helpers = fetch_helpers

    def emit(self, types: Iterable[TypeMetadata]) -> str:
        ordered = sort_types(order_type(check_type(meta)) for meta in types)
        clashes = [n for n, c in Counter(snake_case(m.name) for m in ordered).items() if c > 1]
        if clashes:
            raise MetadataError(clashes[0], "several types map to the same generated names")

        lines = self._header(ordered)
        exported: List[str] = []
        for meta in ordered:
            lines.extend(self._type_block(meta))
            if self._wants_fetch(meta):
                lines.extend(self._fetch_block(meta))
                base = snake_case(meta.name)
                exported.extend([f"fetch_{base}", f"fetch_{base}_list"])

        lines.append("")
        lines.append("")
        lines.append(f"__all__ = {json.dumps(sorted(exported))}")
        log.debug("Emitted bindings", extra={"types": [m.name for m in ordered]})
        return "\n".join(lines) + "\n"

    def _wants_fetch(self, meta: TypeMetadata) -> bool:
        return self.fetch_helpers and meta.default_constructible

    def _header(self, ordered: List[TypeMetadata]) -> List[str]:
        sources = sorted({meta.module for meta in ordered if meta.module})
        lines = [GENERATED_MARKER]
        if sources:
            lines.append(f"# sources: {', '.join(sources)}")
        lines.extend(["", "from __future__ import annotations", ""])
        if ordered:
            lines.extend(["import copy", ""])

        binding_names = {"install_binding"} if ordered else set()
        for meta in ordered:
            binding_names.add("Hooks" if meta.has_deflate or meta.has_inflate else "NO_HOOKS")
            binding_names.update(_slot_class(f) for f in meta.fields)
        if any(self._wants_fetch(meta) for meta in ordered):
            lines.append("from crudbind import crud")
        if binding_names:
            lines.append(f"from crudbind.binding import {', '.join(sorted(binding_names))}")

        by_module: Dict[str, List[str]] = defaultdict(list)
        for meta in ordered:
            if meta.module:
                by_module[meta.module].append(meta.name)
        for module in sorted(by_module):
            lines.append(f"from {module} import {', '.join(sorted(by_module[module]))}")
        return lines

    def _type_block(self, meta: TypeMetadata) -> List[str]:
        base = snake_case(meta.name)
        lines = ["", "", f"# {meta.name}", "", ""]

        # binder
        lines.append(f"def _{base}_bind_fields(self, names, values):")
        if meta.fields:
            lines.append("    for i, name in enumerate(names):")
            for n, f in enumerate(meta.fields):
                keyword = "if" if n == 0 else "elif"
                lines.append(f"        {keyword} name == {_quote(f.column_name)}:")
                lines.append(f"            values[i] = {_address(f)}")
        else:
            lines.append("    pass")

        # enumerator
        lines.extend(["", "", f"def _{base}_enumerate_fields(self):"])
        if meta.fields:
            lines.append(f"    names = {json.dumps(meta.column_names)}")
            lines.append("    values = [")
            for f in meta.fields:
                value = _address(f) if f.by_reference else f"self.{f.name}"
                lines.append(f"        {value},")
            lines.append("    ]")
            lines.append("    return names, values")
        else:
            lines.append("    return [], []")

        # clone
        lines.extend(["", "", f"def _{base}_clone(self):"])
        deep = [f for f in meta.fields if not f.primitive]
        if deep:
            lines.append("    clone = copy.copy(self)")
            for f in deep:
                lines.append(f"    clone.{f.name} = copy.deepcopy(self.{f.name})")
            lines.append("    return clone")
        else:
            lines.append("    return copy.copy(self)")

        lines.extend(["", ""])
        lines.append("install_binding(")
        lines.append(f"    {meta.name},")
        lines.append(f"    bind_fields=_{base}_bind_fields,")
        lines.append(f"    enumerate_fields=_{base}_enumerate_fields,")
        lines.append(f"    clone=_{base}_clone,")
        lines.append(f"    hooks={self._hooks(meta)},")
        lines.append(")")
        return lines

    @staticmethod
    def _hooks(meta: TypeMetadata) -> str:
        parts = []
        if meta.has_deflate:
            parts.append(f"deflate={meta.name}.crud_deflate")
        if meta.has_inflate:
            parts.append(f"inflate={meta.name}.crud_inflate")
        if not parts:
            return "NO_HOOKS"
        return f"Hooks({', '.join(parts)})"

    @staticmethod
    def _fetch_block(meta: TypeMetadata) -> List[str]:
        base = snake_case(meta.name)
        return [
            "",
            "",
            f"def fetch_{base}(db, query, *args, dialect=None):",
            f'    """Run ``query`` and return the first row as a {meta.name}, or None."""',
            f"    return crud.fetch_one(db, {meta.name}, query, *args, dialect=dialect)",
            "",
            "",
            f"def fetch_{base}_list(db, query, *args, dialect=None):",
            f'    """Run ``query`` and return every row as a {meta.name}."""',
            f"    return crud.fetch_all(db, {meta.name}, query, *args, dialect=dialect)",
        ]


def generate_bindings(types: Iterable[TypeMetadata], fetch_helpers: bool = True) -> str:
    """Shorthand for ``BindingEmitter(fetch_helpers).emit(types)``."""
    return BindingEmitter(fetch_helpers=fetch_helpers).emit(types)


__all__ = ["BindingEmitter", "GENERATED_MARKER", "generate_bindings", "snake_case"]
