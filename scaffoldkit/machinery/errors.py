"""Exception hierarchy for the scaffolding machinery.

Every failure the orchestrator can surface has its own type so callers can
branch on the kind of failure instead of parsing messages.  All of them derive
from ``ScaffoldError``.  Wrapped failures keep the original exception both as
``cause`` and as ``__cause__`` (they are raised with ``raise ... from``).

Template syntax and rendering errors are deliberately *not* part of this
hierarchy: ``jinja2.TemplateError`` propagates as-is.
"""

from __future__ import annotations

from typing import Any


class ScaffoldError(Exception):
    """Base class for every error raised by the scaffolding machinery."""


# ---------------------------------------------------------------------------
# Wrapped errors
# ---------------------------------------------------------------------------


class _WrappedError(ScaffoldError):
    """An error that wraps an underlying cause."""

    label = "error"

    def __init__(self, cause: BaseException, path: str | None = None) -> None:
        self.cause = cause
        self.path = path
        where = f" ({path})" if path else ""
        super().__init__(f"{self.label}{where}: {cause}")


class ValidateError(_WrappedError):
    """A builder's ``validate()`` hook failed."""

    label = "validate error"


class SetTemplateDefaultsError(_WrappedError):
    """A template's ``set_template_defaults()`` hook failed."""

    label = "failed to set template defaults"


class ExistsFileError(_WrappedError):
    """Checking whether a file exists failed."""

    label = "failed to check if file exists"


class OpenFileError(_WrappedError):
    """Opening a file for reading failed."""

    label = "failed to open file"


class ReadFileError(_WrappedError):
    """Reading an opened file failed."""

    label = "failed to read file"


class CreateDirectoryError(_WrappedError):
    """Creating the parent directory of a file failed."""

    label = "failed to create directory"


class CreateFileError(_WrappedError):
    """Creating or truncating a file failed."""

    label = "failed to create file"


class WriteFileError(_WrappedError):
    """Writing file contents failed."""

    label = "failed to write file"


class CloseFileError(_WrappedError):
    """Closing a file handle failed."""

    label = "failed to close file"


class PostProcessError(_WrappedError):
    """An extension-keyed post processor failed."""

    label = "failed to post-process file"


# ---------------------------------------------------------------------------
# Policy errors
# ---------------------------------------------------------------------------


class ModelAlreadyExistsError(ScaffoldError):
    """A builder targets a path that is already modeled and its policy is ERROR."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"failed to create {path}: model already exists")


class UnknownIfExistsActionError(ScaffoldError):
    """A builder returned a value outside of ``IfExistsAction``."""

    def __init__(self, path: str, action: Any) -> None:
        self.path = path
        self.action = action
        super().__init__(f"unknown behavior if file exists ({action!r}) for {path}")


class FileAlreadyExistsError(ScaffoldError):
    """The target file exists on disk and the policy is ERROR."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"failed to create {path}: file already exists")
