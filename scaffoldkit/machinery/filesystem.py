"""Filesystem abstraction used by the scaffolding machinery.

``Scaffold`` never touches ``os`` or ``pathlib`` directly; it goes through a
``Filesystem`` so the same run can target a real directory
(``LocalFilesystem``) or an in-memory tree (``MemoryFilesystem``), e.g. in
tests or for dry runs.
"""

from __future__ import annotations

import io
import os
import posixpath
import stat as stat_module
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Protocol

DEFAULT_FILE_PERMISSION = 0o644
DEFAULT_DIRECTORY_PERMISSION = 0o755


@dataclass(frozen=True)
class FileInfo:
    """The subset of ``stat`` results the machinery cares about."""

    path: str
    size: int
    mode: int
    is_dir: bool


class Filesystem(Protocol):
    """Operations the scaffolding machinery needs from a filesystem."""

    def exists(self, path: str) -> bool: ...

    def stat(self, path: str) -> FileInfo: ...

    def open(self, path: str, mode: str = "r", perm: int = DEFAULT_FILE_PERMISSION) -> IO[str]: ...

    def read_file(self, path: str) -> str: ...

    def write_file(self, path: str, content: str, perm: int = DEFAULT_FILE_PERMISSION) -> None: ...

    def mkdir_all(self, path: str, perm: int = DEFAULT_DIRECTORY_PERMISSION) -> None: ...


# ---------------------------------------------------------------------------
# Local filesystem
# ---------------------------------------------------------------------------


class LocalFilesystem:
    """A ``Filesystem`` backed by the real disk.

    Paths are resolved against *root* (the current directory by default) and
    must stay inside it; anything else raises ``PermissionError``.  Text is
    read and written as UTF-8 without newline translation.
    """

    def __init__(self, root: str | Path = ".") -> None:
        self.root = Path(root)

    def resolve(self, path: str) -> Path:
        target = self.root / path
        if not target.resolve().is_relative_to(self.root.resolve()):
            raise PermissionError(f"path {path!r} is outside of {self.root}")
        return target

    def exists(self, path: str) -> bool:
        return self.resolve(path).exists()

    def stat(self, path: str) -> FileInfo:
        result = self.resolve(path).stat()
        return FileInfo(
            path=path,
            size=result.st_size,
            mode=stat_module.S_IMODE(result.st_mode),
            is_dir=stat_module.S_ISDIR(result.st_mode),
        )

    def open(self, path: str, mode: str = "r", perm: int = DEFAULT_FILE_PERMISSION) -> IO[str]:
        target = self.resolve(path)
        if mode == "r":
            return open(target, encoding="utf-8", newline="")
        if mode == "w":
            fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, perm)
            return os.fdopen(fd, "w", encoding="utf-8", newline="")
        raise ValueError(f"unsupported open mode: {mode!r}")

    def read_file(self, path: str) -> str:
        with self.open(path) as handle:
            return handle.read()

    def write_file(self, path: str, content: str, perm: int = DEFAULT_FILE_PERMISSION) -> None:
        with self.open(path, "w", perm) as handle:
            handle.write(content)

    def mkdir_all(self, path: str, perm: int = DEFAULT_DIRECTORY_PERMISSION) -> None:
        self.resolve(path).mkdir(mode=perm, parents=True, exist_ok=True)


# ---------------------------------------------------------------------------
# In-memory filesystem
# ---------------------------------------------------------------------------


class _MemoryWriter(io.StringIO):
    """A text buffer that stores its content in the filesystem on close."""

    def __init__(self, fs: MemoryFilesystem, path: str, perm: int) -> None:
        super().__init__()
        self._fs = fs
        self._path = path
        self._perm = perm

    def close(self) -> None:
        if not self.closed:
            self._fs.files[self._path] = self.getvalue()
            self._fs.modes[self._path] = self._perm
        super().close()


class MemoryFilesystem:
    """A ``Filesystem`` that keeps every file in a dictionary.

    Attributes:
        files: Mapping of normalised path to file content.
        modes: Mapping of normalised path to permission bits.
        directories: Set of normalised directory paths.
    """

    def __init__(self, files: dict[str, str] | None = None) -> None:
        self.files: dict[str, str] = {}
        self.modes: dict[str, int] = {}
        self.directories: set[str] = set()
        for path, content in (files or {}).items():
            self.write_file(path, content)

    @staticmethod
    def normalize(path: str) -> str:
        return posixpath.normpath(path.replace("\\", "/"))

    def exists(self, path: str) -> bool:
        key = self.normalize(path)
        return key in self.files or key in self.directories

    def stat(self, path: str) -> FileInfo:
        key = self.normalize(path)
        if key in self.files:
            return FileInfo(
                path=path,
                size=len(self.files[key].encode("utf-8")),
                mode=self.modes.get(key, DEFAULT_FILE_PERMISSION),
                is_dir=False,
            )
        if key in self.directories:
            return FileInfo(path=path, size=0, mode=DEFAULT_DIRECTORY_PERMISSION, is_dir=True)
        raise FileNotFoundError(path)

    def open(self, path: str, mode: str = "r", perm: int = DEFAULT_FILE_PERMISSION) -> IO[str]:
        key = self.normalize(path)
        if mode == "r":
            if key in self.directories:
                raise IsADirectoryError(path)
            if key not in self.files:
                raise FileNotFoundError(path)
            return io.StringIO(self.files[key])
        if mode == "w":
            if key in self.directories:
                raise IsADirectoryError(path)
            return _MemoryWriter(self, key, perm)
        raise ValueError(f"unsupported open mode: {mode!r}")

    def read_file(self, path: str) -> str:
        with self.open(path) as handle:
            return handle.read()

    def write_file(self, path: str, content: str, perm: int = DEFAULT_FILE_PERMISSION) -> None:
        with self.open(path, "w", perm) as handle:
            handle.write(content)

    def mkdir_all(self, path: str, perm: int = DEFAULT_DIRECTORY_PERMISSION) -> None:
        key = self.normalize(path)
        created: list[str] = []
        while key not in ("", ".", "/"):
            if key in self.files:
                raise FileExistsError(key)
            created.append(key)
            key = posixpath.dirname(key)
        self.directories.update(created)
