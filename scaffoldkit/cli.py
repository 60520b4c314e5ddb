"""scaffoldkit command line entry point.

Runs a builder manifest against a project directory::

    scaffoldkit manifest.yaml --root ./my-project
    scaffoldkit manifest.yaml --root ./my-project --dry-run --verbose
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import yaml
from jinja2 import TemplateError
from pydantic import ValidationError
from rich.markup import escape

from scaffoldkit.config import ProjectConfig
from scaffoldkit.machinery import LocalFilesystem, MemoryFilesystem, Scaffold, ScaffoldError
from scaffoldkit.machinery.filesystem import Filesystem
from scaffoldkit.manifest import Manifest
from scaffoldkit.utils import console, pluralize, print_error, print_success, print_summary_table


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scaffoldkit",
        description="scaffoldkit -- materialize builder manifests without clobbering edits",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  scaffoldkit manifest.yaml\n"
            "  scaffoldkit manifest.yaml --root ./my-project --verbose\n"
            "  scaffoldkit manifest.json --config PROJECT.yaml --dry-run\n"
        ),
    )
    parser.add_argument("manifest", help="Path to the builder manifest (JSON or YAML)")
    parser.add_argument(
        "--root", "-r",
        default=".",
        help="Project directory to scaffold into (default: .)",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Project configuration file; overrides the manifest's config section",
    )
    parser.add_argument(
        "--boilerplate", "-b",
        default=None,
        help="Boilerplate file; overrides the manifest's boilerplate",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Run against an in-memory copy of the targeted files and write nothing",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Print every file")
    return parser


def _dry_run_filesystem(root: Path, manifest: Manifest) -> MemoryFilesystem:
    """Seed an in-memory filesystem with the existing files the manifest targets."""
    local = LocalFilesystem(root)
    fs = MemoryFilesystem()
    for path in manifest.target_paths():
        if local.exists(path) and not local.stat(path).is_dir:
            fs.write_file(path, local.read_file(path))
    return fs


def run(args: argparse.Namespace) -> int:
    """Execute the parsed command line; return the process exit code."""
    manifest_path = Path(args.manifest)
    if not manifest_path.exists():
        print_error(f"Error: Manifest not found: {escape(str(manifest_path))}")
        return 1

    try:
        manifest = Manifest.load(manifest_path)
    except (ValidationError, ValueError, yaml.YAMLError, OSError) as exc:
        print_error(f"Error: Invalid manifest {escape(str(manifest_path))}")
        console.print(str(exc), markup=False)
        return 1

    base_dir = manifest_path.parent
    root = Path(args.root)

    try:
        if args.config:
            config = ProjectConfig.load(args.config)
        else:
            config = manifest.config or ProjectConfig.from_env()

        if args.boilerplate:
            boilerplate = Path(args.boilerplate).read_text(encoding="utf-8")
        else:
            boilerplate = manifest.read_boilerplate(base_dir)
    except (ValidationError, OSError, yaml.YAMLError) as exc:
        print_error(f"Error: {escape(str(exc))}")
        return 1

    fs: Filesystem
    try:
        if args.dry_run:
            fs = _dry_run_filesystem(root, manifest)
        else:
            root.mkdir(parents=True, exist_ok=True)
            fs = LocalFilesystem(root)

        scaffold = Scaffold(
            fs,
            config=config,
            boilerplate=boilerplate,
            resource=manifest.resource,
            verbose=args.verbose,
        )
        builders = manifest.to_builders(base_dir, comment_tokens=dict(scaffold.comment_tokens))
        report = scaffold.execute(*builders)
    except (ScaffoldError, TemplateError, OSError) as exc:
        print_error(f"Error: {escape(str(exc))}")
        return 1

    print_summary_table(
        {
            "Root": escape(str(root)),
            "Written": pluralize(len(report.written), "file"),
            "Skipped": pluralize(len(report.skipped), "file"),
            "Ignored inserts": pluralize(len(report.ignored), "file"),
        },
        title="Dry run" if args.dry_run else "Scaffold",
    )
    if args.dry_run:
        print_success("Dry run complete -- nothing was written.")
    elif report.changed:
        print_success("Scaffolding complete.")
    else:
        print_success("Nothing to do -- project is up to date.")
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``scaffoldkit`` / ``python -m scaffoldkit``."""
    args = _build_parser().parse_args(argv)
    code = run(args)
    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
