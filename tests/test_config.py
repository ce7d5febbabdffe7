"""Tests for configuration helpers and module side-effect behavior."""

from __future__ import annotations

import importlib
import logging
import sys
import textwrap
from typing import TYPE_CHECKING

import pytest

from covmerge.core.config import CovmergeConfig, get_schema, load_config

if TYPE_CHECKING:
    from pathlib import Path

    from _pytest.monkeypatch import MonkeyPatch


def test_get_schema_cached(monkeypatch: MonkeyPatch) -> None:
    """``get_schema`` should load the schema once and cache the result."""
    from covmerge.core import config

    config.get_schema.cache_clear()
    calls = 0
    original = config.resources.files

    def tracking_files(package: str):
        nonlocal calls
        calls += 1
        return original(package)

    monkeypatch.setattr(config.resources, "files", tracking_files)

    schema1 = config.get_schema()
    schema2 = config.get_schema()

    assert schema1 == schema2
    assert calls == 1


def test_get_schema_unknown_version() -> None:
    with pytest.raises(ValueError, match="Unsupported schema version"):
        get_schema("v9")


def test_import_has_no_side_effects(monkeypatch: MonkeyPatch) -> None:
    """Importing the package should not configure logging."""
    basic_called = False

    def fake_basic(*args, **kwargs):
        nonlocal basic_called
        basic_called = True

    monkeypatch.setattr(logging, "basicConfig", fake_basic)

    for name in [m for m in sys.modules if m == "covmerge" or m.startswith("covmerge.")]:
        monkeypatch.delitem(sys.modules, name)

    importlib.import_module("covmerge")

    assert not basic_called


def test_load_config_missing_file(tmp_path: Path) -> None:
    assert load_config(tmp_path / "pyproject.toml") == CovmergeConfig()


def test_load_config_reads_tool_table(tmp_path: Path) -> None:
    py = tmp_path / "pyproject.toml"
    py.write_text(
        textwrap.dedent(
            """
            [tool.covmerge]
            report_logic = true
            validate_input = false
            unrelated = "ignored"
            """
        ),
        encoding="utf-8",
    )
    assert load_config(py) == CovmergeConfig(report_logic=True, validate_input=False)


def test_load_config_defaults_to_cwd(tmp_path: Path, monkeypatch: MonkeyPatch) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.covmerge]\nreport_logic = true\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert load_config().report_logic is True


def test_load_config_without_table(tmp_path: Path) -> None:
    py = tmp_path / "pyproject.toml"
    py.write_text("[tool.pytest.ini_options]\naddopts = ['-q']\n", encoding="utf-8")
    assert load_config(py) == CovmergeConfig()


def test_load_config_invalid_toml_warns(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    py = tmp_path / "pyproject.toml"
    py.write_text("[tool.covmerge\n", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="covmerge"):
        assert load_config(py) == CovmergeConfig()

    assert "Failed to parse" in caplog.text


def test_load_config_rejects_non_boolean(tmp_path: Path) -> None:
    py = tmp_path / "pyproject.toml"
    py.write_text("[tool.covmerge]\nreport_logic = 'yes'\n", encoding="utf-8")
    with pytest.raises(ValueError, match="report_logic must be a boolean"):
        load_config(py)
