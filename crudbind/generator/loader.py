"""
Generation driver: import a source module, emit its bindings, write and import them.
"""

from __future__ import annotations

import importlib
import importlib.util
import sys
from pathlib import Path
from types import ModuleType
from typing import Optional, Tuple

from crudbind.config import get_settings
from crudbind.generator.discovery import discover_types
from crudbind.generator.emitter import generate_bindings
from crudbind.utils.logging import get_logger

log = get_logger(__name__)


def bindings_module_name(module_name: str, suffix: Optional[str] = None) -> str:
    """``app.models`` -> ``app.models_crud`` (suffix from ``CRUD_OUTPUT_SUFFIX``)."""
    return f"{module_name}{suffix if suffix is not None else get_settings().output_suffix}"


def default_output_path(module: ModuleType, suffix: Optional[str] = None) -> Path:
    """Path of the bindings file written next to ``module``'s source."""
    source = getattr(module, "__file__", None)
    if not source:
        raise ValueError(f"module {module.__name__!r} has no source file")
    leaf = bindings_module_name(module.__name__, suffix).rsplit(".", 1)[-1]
    return Path(source).with_name(f"{leaf}.py")


def generate_module_bindings(module_name: str, fetch_helpers: bool = True) -> Tuple[ModuleType, str]:
    """
    Import ``module_name`` and emit bindings for its annotated dataclasses.

    Returns
    -------
    tuple
        The imported module and the generated source.
    """
    module = importlib.import_module(module_name)
    source = generate_bindings(discover_types(module), fetch_helpers=fetch_helpers)
    return module, source


def write_bindings(path: Path, source: str) -> bool:
    """
    Write ``source`` to ``path`` unless the file already holds it.

    Returns True when the file was (re)written.
    """
    path = Path(path)
    if path.exists() and path.read_text(encoding="utf-8") == source:
        log.info("Bindings up to date", extra={"path": str(path)})
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(source, encoding="utf-8")
    log.info("Bindings written", extra={"path": str(path)})
    return True


def load_bindings(path: Path, module_name: str) -> ModuleType:
    """
    Import the bindings file at ``path`` as module ``module_name``.

    Importing installs the bindings on the source classes. The module is
    registered in ``sys.modules`` and removed again if its import fails.
    """
    path = Path(path)
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"cannot load bindings from {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    log.debug("Bindings loaded", extra={"bindings_module": module_name, "path": str(path)})
    return module


__all__ = [
    "bindings_module_name",
    "default_output_path",
    "generate_module_bindings",
    "load_bindings",
    "write_bindings",
]
