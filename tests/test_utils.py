"""Unit tests for utility functions (scaffoldkit.utils).

Tests cover:
- load_json / load_document (use tmp_path)
- pluralize
- Rich output helpers (print_summary_table, etc.)
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from scaffoldkit.utils import (
    load_document,
    load_json,
    pluralize,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)


# ---------------------------------------------------------------------------
# Document loading
# ---------------------------------------------------------------------------


class TestLoadJson:
    @pytest.mark.unit
    def test_load_mapping(self, tmp_path: Path):
        path = tmp_path / "data.json"
        path.write_text(json.dumps({"key": "value"}))
        assert load_json(path) == {"key": "value"}

    @pytest.mark.unit
    def test_non_mapping_wrapped(self, tmp_path: Path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        assert load_json(path) == {"_root": [1, 2]}

    @pytest.mark.unit
    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_json(tmp_path / "missing.json")

    @pytest.mark.unit
    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(json.JSONDecodeError):
            load_json(path)


class TestLoadDocument:
    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["doc.yaml", "doc.yml"])
    def test_yaml(self, tmp_path: Path, name: str):
        path = tmp_path / name
        path.write_text("builders:\n  - kind: template\n")
        assert load_document(path) == {"builders": [{"kind": "template"}]}

    @pytest.mark.unit
    def test_json_by_default(self, tmp_path: Path):
        path = tmp_path / "doc.json"
        path.write_text('{"a": 1}')
        assert load_document(path) == {"a": 1}

    @pytest.mark.unit
    def test_empty_yaml(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_document(path) == {}

    @pytest.mark.unit
    def test_scalar_yaml_wrapped(self, tmp_path: Path):
        path = tmp_path / "scalar.yaml"
        path.write_text("just text\n")
        assert load_document(path) == {"_root": "just text"}

    @pytest.mark.unit
    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("key: [unclosed\n")
        with pytest.raises(yaml.YAMLError):
            load_document(path)


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


class TestPluralize:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "count, expected",
        [(0, "0 files"), (1, "1 file"), (2, "2 files")],
    )
    def test_pluralize(self, count: int, expected: str):
        assert pluralize(count, "file") == expected


# ---------------------------------------------------------------------------
# Rich output helpers (smoke tests - verify they don't raise)
# ---------------------------------------------------------------------------


class TestRichOutputHelpers:
    @pytest.mark.unit
    def test_print_summary_table(self, capsys):
        print_summary_table({"Written": "2 files", "Skipped": "1 file"}, title="Scaffold")
        output = capsys.readouterr().out
        assert "Written" in output
        assert "2 files" in output

    @pytest.mark.unit
    def test_print_success(self):
        print_success("Scaffolding complete.")

    @pytest.mark.unit
    def test_print_error(self):
        print_error("Something failed")

    @pytest.mark.unit
    def test_print_warning(self):
        print_warning("Skipping missing file")
