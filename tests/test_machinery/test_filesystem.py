"""Tests for the local and in-memory filesystems.

Both implementations are exercised through the same behavioural tests so they
stay interchangeable behind the ``Filesystem`` protocol.
"""

from __future__ import annotations

import stat

import pytest

from scaffoldkit.machinery.filesystem import (
    DEFAULT_FILE_PERMISSION,
    LocalFilesystem,
    MemoryFilesystem,
)


pytestmark = pytest.mark.unit


@pytest.fixture(params=["memory", "local"])
def fs(request, tmp_path):
    if request.param == "memory":
        return MemoryFilesystem()
    return LocalFilesystem(tmp_path)


class TestCommonBehaviour:
    def test_write_then_read(self, fs):
        fs.write_file("a.txt", "hello\n")
        assert fs.exists("a.txt")
        assert fs.read_file("a.txt") == "hello\n"

    def test_missing_file(self, fs):
        assert not fs.exists("missing.txt")
        with pytest.raises(FileNotFoundError):
            fs.read_file("missing.txt")

    def test_crlf_preserved(self, fs):
        fs.write_file("win.txt", "a\r\nb\r\n")
        assert fs.read_file("win.txt") == "a\r\nb\r\n"

    def test_mkdir_all_nested(self, fs):
        fs.mkdir_all("config/default/patches")
        assert fs.exists("config")
        assert fs.exists("config/default/patches")
        assert fs.stat("config/default").is_dir

    def test_mkdir_all_idempotent(self, fs):
        fs.mkdir_all("api/v1")
        fs.mkdir_all("api/v1")
        assert fs.stat("api/v1").is_dir

    def test_open_write_truncates(self, fs):
        fs.write_file("a.txt", "a much longer original content")
        with fs.open("a.txt", "w") as handle:
            handle.write("short")
        assert fs.read_file("a.txt") == "short"

    def test_stat_size_and_mode(self, fs):
        fs.write_file("a.txt", "héllo", perm=0o600)
        info = fs.stat("a.txt")
        assert info.size == 6
        assert info.mode == 0o600
        assert not info.is_dir

    def test_unsupported_mode(self, fs):
        with pytest.raises(ValueError, match="unsupported open mode"):
            fs.open("a.txt", "a")


class TestMemoryFilesystem:
    def test_seed_files(self):
        fs = MemoryFilesystem({"main.go": "package main\n"})
        assert fs.read_file("main.go") == "package main\n"
        assert fs.modes["main.go"] == DEFAULT_FILE_PERMISSION

    def test_paths_are_normalized(self):
        fs = MemoryFilesystem()
        fs.write_file("./api//v1/types.go", "x")
        assert fs.exists("api/v1/types.go")
        assert "api/v1/types.go" in fs.files

    def test_content_committed_on_close(self):
        fs = MemoryFilesystem()
        handle = fs.open("a.txt", "w")
        handle.write("pending")
        assert not fs.exists("a.txt")
        handle.close()
        assert fs.read_file("a.txt") == "pending"

    def test_directory_cannot_be_opened(self):
        fs = MemoryFilesystem()
        fs.mkdir_all("api")
        with pytest.raises(IsADirectoryError):
            fs.open("api")

    def test_mkdir_over_file(self):
        fs = MemoryFilesystem({"api": "not a directory"})
        with pytest.raises(FileExistsError):
            fs.mkdir_all("api")


class TestLocalFilesystem:
    def test_relative_to_root(self, tmp_path):
        fs = LocalFilesystem(tmp_path)
        fs.mkdir_all("sub")
        fs.write_file("sub/a.txt", "x")
        assert (tmp_path / "sub" / "a.txt").read_text() == "x"

    def test_permission_on_create(self, tmp_path):
        fs = LocalFilesystem(tmp_path)
        fs.write_file("secret.txt", "x", perm=0o600)
        assert stat.S_IMODE((tmp_path / "secret.txt").stat().st_mode) == 0o600

    @pytest.mark.parametrize("path", ["../outside.txt", "sub/../../outside.txt"])
    def test_relative_escape_rejected(self, tmp_path, path):
        fs = LocalFilesystem(tmp_path / "project")
        with pytest.raises(PermissionError, match="outside of"):
            fs.write_file(path, "x")
        assert not (tmp_path / "outside.txt").exists()

    def test_absolute_escape_rejected(self, tmp_path):
        fs = LocalFilesystem(tmp_path / "project")
        with pytest.raises(PermissionError):
            fs.exists(str(tmp_path / "outside.txt"))

    def test_absolute_path_inside_root_allowed(self, tmp_path):
        fs = LocalFilesystem(tmp_path)
        fs.write_file(str(tmp_path / "a.txt"), "x")
        assert fs.read_file("a.txt") == "x"
