from __future__ import annotations

import sys

import pytest

from crudbind.generator.loader import load_bindings, write_bindings

MODULE = "tests._loaded_crud"


@pytest.fixture(autouse=True)
def _unregister():
    yield
    sys.modules.pop(MODULE, None)


class TestWriteBindings:
    def test_unchanged_source_is_not_rewritten(self, tmp_path):
        path = tmp_path / "out" / "models_crud.py"
        assert write_bindings(path, "VALUE = 1\n") is True
        assert write_bindings(path, "VALUE = 1\n") is False
        assert write_bindings(path, "VALUE = 2\n") is True
        assert path.read_text(encoding="utf-8") == "VALUE = 2\n"


class TestLoadBindings:
    """Bindings are imported from the written file, not executed from a string."""

    def test_imports_file_under_given_name(self, tmp_path):
        path = tmp_path / "models_crud.py"
        write_bindings(path, "VALUE = 42\n")

        module = load_bindings(path, MODULE)

        assert module.VALUE == 42
        assert module.__name__ == MODULE
        assert module.__file__ == str(path)
        assert sys.modules[MODULE] is module

    def test_failed_import_is_unregistered(self, tmp_path):
        path = tmp_path / "broken_crud.py"
        write_bindings(path, "raise RuntimeError('boom')\n")

        with pytest.raises(RuntimeError, match="boom"):
            load_bindings(path, MODULE)
        assert MODULE not in sys.modules

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_bindings(tmp_path / "absent_crud.py", MODULE)
