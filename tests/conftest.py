"""Shared pytest fixtures for the scaffoldkit test suite.

Provides reusable fixtures for:
- In-memory and on-disk filesystems
- Sample project configuration and resource descriptors
- Sample boilerplate and Go/YAML contents carrying scaffold markers
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from scaffoldkit.config import ProjectConfig
from scaffoldkit.machinery.filesystem import LocalFilesystem, MemoryFilesystem
from scaffoldkit.resource import Resource


# ---------------------------------------------------------------------------
# Filesystems
# ---------------------------------------------------------------------------


@pytest.fixture
def memory_fs() -> MemoryFilesystem:
    """An empty in-memory filesystem."""
    return MemoryFilesystem()


@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Temporary directory for scaffolded projects (auto-cleanup)."""
    project_dir = tmp_path / "test-project"
    project_dir.mkdir()
    yield project_dir


@pytest.fixture
def local_fs(tmp_project_dir: Path) -> LocalFilesystem:
    """A local filesystem rooted at the temporary project directory."""
    return LocalFilesystem(tmp_project_dir)


# ---------------------------------------------------------------------------
# Project data
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_config() -> ProjectConfig:
    return ProjectConfig(
        domain="my.domain",
        repository="github.com/example/project",
        project_name="project",
    )


@pytest.fixture
def sample_resource() -> Resource:
    return Resource(
        group="batch",
        domain="my.domain",
        version="v1",
        kind="CronJob",
        path="github.com/example/project/api/v1",
    )


@pytest.fixture
def sample_boilerplate() -> str:
    return "/*\nCopyright 2026 The Project Authors.\n*/"


@pytest.fixture
def go_content_with_markers() -> str:
    """A Go file with an import marker and a scheme marker."""
    return textwrap.dedent(
        """\
        package main

        import (
        \t"os"
        \t// +kubebuilder:scaffold:imports
        )

        func init() {
        \t// +kubebuilder:scaffold:scheme
        }
        """
    )
