"""Unit tests for the command line entry point (scaffoldkit.cli).

Tests cover:
- Argument parsing
- Missing and invalid manifests
- Config precedence (--config, manifest section, environment)
- Dry runs that leave the project untouched
- Scaffold errors reported with a non-zero exit code
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from scaffoldkit.cli import _build_parser, main, run


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_manifest(tmp_path: Path, data: dict, name: str = "manifest.json") -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(data))
    return path


def _domain_manifest(tmp_path: Path, **extra) -> Path:
    return _write_manifest(
        tmp_path,
        {"builders": [{"path": "DOMAIN", "body": "{{ domain }}\n"}], **extra},
    )


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class TestParser:
    @pytest.mark.unit
    def test_defaults(self):
        args = _build_parser().parse_args(["manifest.yaml"])
        assert args.manifest == "manifest.yaml"
        assert args.root == "."
        assert args.config is None
        assert args.boilerplate is None
        assert args.dry_run is False
        assert args.verbose is False

    @pytest.mark.unit
    def test_all_options(self):
        args = _build_parser().parse_args(
            ["m.json", "-r", "out", "-c", "PROJECT", "-b", "hdr.txt", "--dry-run", "-v"]
        )
        assert args.root == "out"
        assert args.config == "PROJECT"
        assert args.boilerplate == "hdr.txt"
        assert args.dry_run is True
        assert args.verbose is True

    @pytest.mark.unit
    def test_manifest_required(self):
        with pytest.raises(SystemExit):
            _build_parser().parse_args([])


# ---------------------------------------------------------------------------
# Runs
# ---------------------------------------------------------------------------


class TestRun:
    @pytest.mark.unit
    def test_missing_manifest(self, tmp_path: Path):
        args = _build_parser().parse_args([str(tmp_path / "missing.yaml")])
        assert run(args) == 1

    @pytest.mark.unit
    def test_invalid_manifest(self, tmp_path: Path):
        manifest = _write_manifest(tmp_path, {"builders": [{"kind": "delete"}]})
        assert run(_build_parser().parse_args([str(manifest)])) == 1

    @pytest.mark.unit
    def test_malformed_yaml(self, tmp_path: Path):
        manifest = tmp_path / "manifest.yaml"
        manifest.write_text("builders: [unclosed\n")
        assert run(_build_parser().parse_args([str(manifest)])) == 1

    @pytest.mark.unit
    def test_list_manifest_rejected(self, tmp_path: Path):
        manifest = tmp_path / "manifest.json"
        manifest.write_text(json.dumps([{"path": "a.txt", "body": "x"}]))
        root = tmp_path / "project"

        assert run(_build_parser().parse_args([str(manifest), "-r", str(root)])) == 1
        assert not (root / "a.txt").exists()

    @pytest.mark.unit
    def test_directory_as_manifest(self, tmp_path: Path):
        manifest = tmp_path / "manifest.yaml"
        manifest.mkdir()
        assert run(_build_parser().parse_args([str(manifest)])) == 1

    @pytest.mark.unit
    @pytest.mark.parametrize("dry_run", [False, True])
    def test_path_outside_root_rejected(self, tmp_path: Path, dry_run: bool):
        outside = tmp_path / "outside.txt"
        manifest = _write_manifest(tmp_path, {"builders": [{"path": str(outside), "body": "x"}]})
        argv = [str(manifest), "-r", str(tmp_path / "project")] + (["--dry-run"] if dry_run else [])

        assert run(_build_parser().parse_args(argv)) == 1
        assert not outside.exists()

    @pytest.mark.unit
    def test_writes_into_root(self, tmp_path: Path):
        manifest = _domain_manifest(tmp_path, config={"domain": "manifest.io"})
        root = tmp_path / "project"

        code = run(_build_parser().parse_args([str(manifest), "--root", str(root)]))

        assert code == 0
        assert (root / "DOMAIN").read_text() == "manifest.io\n"

    @pytest.mark.unit
    def test_config_flag_overrides_manifest(self, tmp_path: Path):
        manifest = _domain_manifest(tmp_path, config={"domain": "manifest.io"})
        config = tmp_path / "PROJECT.yaml"
        config.write_text("domain: flag.io\n")
        root = tmp_path / "project"

        run(_build_parser().parse_args([str(manifest), "-r", str(root), "-c", str(config)]))

        assert (root / "DOMAIN").read_text() == "flag.io\n"

    @pytest.mark.unit
    def test_config_from_env(self, tmp_path: Path):
        manifest = _domain_manifest(tmp_path)
        root = tmp_path / "project"

        with patch.dict(os.environ, {"SCAFFOLDKIT_DOMAIN": "env.io"}, clear=True):
            run(_build_parser().parse_args([str(manifest), "-r", str(root)]))

        assert (root / "DOMAIN").read_text() == "env.io\n"

    @pytest.mark.unit
    def test_missing_config_file(self, tmp_path: Path):
        manifest = _domain_manifest(tmp_path)
        args = _build_parser().parse_args([str(manifest), "-c", str(tmp_path / "missing.json")])
        assert run(args) == 1

    @pytest.mark.unit
    def test_boilerplate_flag(self, tmp_path: Path):
        manifest = _write_manifest(
            tmp_path,
            {"boilerplate": "// manifest", "builders": [{"path": "a.go", "body": "{{ boilerplate }}\n"}]},
        )
        header = tmp_path / "header.txt"
        header.write_text("// flag")
        root = tmp_path / "project"

        run(_build_parser().parse_args([str(manifest), "-r", str(root), "-b", str(header)]))

        assert (root / "a.go").read_text() == "// flag\n"

    @pytest.mark.unit
    def test_body_file_relative_to_manifest(self, tmp_path: Path):
        (tmp_path / "templates").mkdir()
        (tmp_path / "templates" / "readme.j2").write_text("# {{ project_name }}\n")
        manifest = _write_manifest(
            tmp_path,
            {
                "config": {"project_name": "demo"},
                "builders": [{"path": "README.md", "body_file": "templates/readme.j2"}],
            },
        )
        root = tmp_path / "project"

        assert run(_build_parser().parse_args([str(manifest), "-r", str(root)])) == 0
        assert (root / "README.md").read_text() == "# demo\n"

    @pytest.mark.unit
    def test_dry_run_writes_nothing(self, tmp_path: Path):
        root = tmp_path / "project"
        root.mkdir()
        (root / "main.go").write_text("package main\n// +kubebuilder:scaffold:-\n")
        manifest = _write_manifest(
            tmp_path,
            {
                "builders": [
                    {"path": "NEW", "body": "x"},
                    {"kind": "insert", "path": "main.go", "fragments": {"-": ["var a int\n"]}},
                ]
            },
        )

        code = run(_build_parser().parse_args([str(manifest), "-r", str(root), "--dry-run"]))

        assert code == 0
        assert not (root / "NEW").exists()
        assert (root / "main.go").read_text() == "package main\n// +kubebuilder:scaffold:-\n"

    @pytest.mark.unit
    def test_scaffold_error_reported(self, tmp_path: Path):
        root = tmp_path / "project"
        root.mkdir()
        (root / "LOCKED").write_text("user edit")
        manifest = _write_manifest(
            tmp_path, {"builders": [{"path": "LOCKED", "body": "x", "if_exists": "error"}]}
        )

        assert run(_build_parser().parse_args([str(manifest), "-r", str(root)])) == 1
        assert (root / "LOCKED").read_text() == "user edit"

    @pytest.mark.unit
    def test_template_error_reported(self, tmp_path: Path):
        manifest = _write_manifest(tmp_path, {"builders": [{"path": "a.txt", "body": "{{ missing }}"}]})
        assert run(_build_parser().parse_args([str(manifest), "-r", str(tmp_path / "out")])) == 1


class TestMain:
    @pytest.mark.unit
    def test_exit_code_on_failure(self, tmp_path: Path):
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "missing.json")])
        assert exc_info.value.code == 1

    @pytest.mark.unit
    def test_success_returns_normally(self, tmp_path: Path):
        manifest = _write_manifest(tmp_path, {"builders": [{"path": "a.txt", "body": "x"}]})
        main([str(manifest), "--root", str(tmp_path / "out")])
        assert (tmp_path / "out" / "a.txt").read_text() == "x"
