from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from crudbind import main
from crudbind.generator.loader import bindings_module_name, default_output_path
from tests import models

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main, "configure_logging", lambda **_: None)


class TestGenerate:
    def test_writes_then_reports_unchanged(self, tmp_path: Path):
        target = tmp_path / "models_crud.py"

        first = runner.invoke(main.app, ["generate", "tests.models", "--output", str(target)])
        assert first.exit_code == 0, first.output
        assert "Wrote" in first.output
        assert target.read_text(encoding="utf-8").startswith("# Code generated by crudbind.")

        second = runner.invoke(main.app, ["generate", "tests.models", "--output", str(target)])
        assert second.exit_code == 0
        assert "Unchanged" in second.output

    def test_check_detects_stale_file(self, tmp_path: Path):
        target = tmp_path / "models_crud.py"
        runner.invoke(main.app, ["generate", "tests.models", "-o", str(target)])

        ok = runner.invoke(main.app, ["generate", "tests.models", "-o", str(target), "--check"])
        assert ok.exit_code == 0

        target.write_text("# stale\n", encoding="utf-8")
        stale = runner.invoke(main.app, ["generate", "tests.models", "-o", str(target), "--check"])
        assert stale.exit_code == 1
        assert target.read_text(encoding="utf-8") == "# stale\n"

    def test_check_fails_when_file_missing(self, tmp_path: Path):
        target = tmp_path / "missing.py"
        result = runner.invoke(main.app, ["generate", "tests.models", "-o", str(target), "--check"])
        assert result.exit_code == 1
        assert not target.exists()

    def test_no_fetch_helpers(self, tmp_path: Path):
        target = tmp_path / "models_crud.py"
        runner.invoke(main.app, ["generate", "tests.models", "-o", str(target), "--no-fetch-helpers"])
        assert "def fetch_" not in target.read_text(encoding="utf-8")

    def test_unknown_module_exits_with_error(self, tmp_path: Path):
        result = runner.invoke(
            main.app, ["generate", "tests.does_not_exist", "-o", str(tmp_path / "x.py")]
        )
        assert result.exit_code == 1


def test_default_output_path_sits_next_to_module():
    path = default_output_path(models)
    assert path.name == "models_crud.py"
    assert path.parent == Path(models.__file__).parent
    assert bindings_module_name("app.models", "_b") == "app.models_b"


def test_inspect_lists_columns():
    result = runner.invoke(main.app, ["inspect", "tests.models"], env={"COLUMNS": "200"})
    assert result.exit_code == 0, result.output
    assert "foo_id" in result.output
    assert "time_int_ptr" in result.output


def test_dialects_lists_registry():
    result = runner.invoke(main.app, ["dialects"])
    assert result.exit_code == 0
    for name in ("mysql", "postgres", "sqlite3"):
        assert name in result.output


def test_info_shows_settings():
    result = runner.invoke(main.app, ["info"])
    assert result.exit_code == 0
    assert "dialect=" in result.output
