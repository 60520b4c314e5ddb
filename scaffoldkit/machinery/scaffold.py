"""Scaffold orchestrator.

``Scaffold.execute`` takes an ordered list of builders and, for each one:

1. injects the cross-cutting values the builder asks for,
2. runs its ``validate()`` hook if it has one,
3. renders it into the in-memory ``path → File`` model if it is a template,
4. inserts its code fragments into the best-known content of its path if it
   is an inserter.

Once every builder has been modeled, the models are written to the
filesystem.  Every step is fail-fast: the first error aborts the run, and
files written before the error are left in place.

Quick usage::

    scaffold = Scaffold(LocalFilesystem("my-project"), config=config, boilerplate=header)
    report = scaffold.execute(MainFile(), Types(), TypesUpdater())
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from rich.markup import escape

from scaffoldkit.config import ProjectConfig
from scaffoldkit.machinery.builder import (
    Builder,
    File,
    IfExistsAction,
    IfNotExistsAction,
    Inserter,
    RequiresValidation,
    Template,
)
from scaffoldkit.machinery.errors import (
    CloseFileError,
    CreateDirectoryError,
    CreateFileError,
    ExistsFileError,
    FileAlreadyExistsError,
    ModelAlreadyExistsError,
    OpenFileError,
    PostProcessError,
    ReadFileError,
    SetTemplateDefaultsError,
    UnknownIfExistsActionError,
    ValidateError,
    WriteFileError,
)
from scaffoldkit.machinery.filesystem import Filesystem
from scaffoldkit.machinery.injector import Injector
from scaffoldkit.machinery.inserter import get_valid_code_fragments, insert_fragments
from scaffoldkit.machinery.marker import DEFAULT_COMMENT_TOKENS, DEFAULT_PREFIX, Marker
from scaffoldkit.machinery.templates import FuncMap, TemplateRenderer
from scaffoldkit.resource import Resource
from scaffoldkit.utils import console, print_warning

DEFAULT_DIRECTORY_PERMISSION = 0o700
DEFAULT_FILE_PERMISSION = 0o600

PostProcessor = Callable[[str, str], str]


@dataclass
class ScaffoldReport:
    """Paths written and skipped by one ``Scaffold.execute`` run."""

    written: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    ignored: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.written)


class Scaffold:
    """Materializes builders on a filesystem without clobbering user edits.

    Args:
        fs: Filesystem to read existing files from and write results to.
        config: Project configuration injected into builders.
        boilerplate: License header (or similar) injected into builders.
        resource: Resource descriptor injected into builders.
        dir_perm: Permission bits for directories created while writing.
        file_perm: Permission bits for files created while writing.
        func_map: Functions available to templates; defaults to
            ``DEFAULT_FUNC_MAP``.
        comment_tokens: Extension → comment token table used by
            ``new_marker``; defaults to ``DEFAULT_COMMENT_TOKENS``.
        post_processors: Extension → ``(path, content) -> content`` callables
            applied to rendered and updated content (e.g. formatters).
        verbose: Print one line per written or skipped file.
    """

    def __init__(
        self,
        fs: Filesystem,
        *,
        config: ProjectConfig | None = None,
        boilerplate: str = "",
        resource: Resource | None = None,
        dir_perm: int = DEFAULT_DIRECTORY_PERMISSION,
        file_perm: int = DEFAULT_FILE_PERMISSION,
        func_map: FuncMap | None = None,
        comment_tokens: Mapping[str, str] | None = None,
        post_processors: Mapping[str, PostProcessor] | None = None,
        verbose: bool = False,
    ) -> None:
        self.fs = fs
        self.dir_perm = dir_perm
        self.file_perm = file_perm
        self.injector = Injector(config=config, boilerplate=boilerplate, resource=resource)
        self.renderer = TemplateRenderer(func_map)
        self.comment_tokens: Mapping[str, str] = (
            DEFAULT_COMMENT_TOKENS if comment_tokens is None else comment_tokens
        )
        self.post_processors: dict[str, PostProcessor] = dict(post_processors or {})
        self.verbose = verbose

    # -- Public API --------------------------------------------------------

    def new_marker(self, path: str, value: str, prefix: str = DEFAULT_PREFIX) -> Marker:
        """Create a marker for *path* using this scaffold's comment tokens."""
        return Marker.for_path(path, value, prefix=prefix, comment_tokens=self.comment_tokens)

    def execute(self, *builders: Builder) -> ScaffoldReport:
        """Model every builder in order, then write the models.

        Returns:
            A ``ScaffoldReport`` listing written, skipped and ignored paths.

        Raises:
            ScaffoldError: The first failure, as its specific subclass.
            jinja2.TemplateError: A template failed to parse or render.
        """
        models: dict[str, File] = {}
        report = ScaffoldReport()

        for builder in builders:
            self.injector.inject_into(builder)

            if isinstance(builder, RequiresValidation):
                try:
                    builder.validate()
                except Exception as exc:
                    raise ValidateError(exc, builder.get_path()) from exc

            if isinstance(builder, Template):
                self._build_file_model(builder, models)

            if isinstance(builder, Inserter):
                if not self._update_file_model(builder, models):
                    report.ignored.append(builder.get_path())

        for model in models.values():
            self._write_file(model, report)

        return report

    # -- Modeling ----------------------------------------------------------

    def _build_file_model(self, template: Template, models: dict[str, File]) -> None:
        try:
            template.set_template_defaults()
        except Exception as exc:
            raise SetTemplateDefaultsError(exc, template.get_path() or None) from exc

        path = template.get_path()
        action = template.get_if_exists_action()

        if path in models:
            # A model created with ERROR claims its path for the whole run.
            if _resolve_action(models[path].if_exists_action) is IfExistsAction.ERROR:
                raise ModelAlreadyExistsError(path)
            resolved = _resolve_action(action)
            if resolved is IfExistsAction.SKIP:
                return
            if resolved is IfExistsAction.ERROR:
                raise ModelAlreadyExistsError(path)
            if resolved is None:
                raise UnknownIfExistsActionError(path, action)

        contents = self._post_process(path, self.renderer.render(template))
        models[path] = File(path=path, contents=contents, if_exists_action=action)

    def _update_file_model(self, inserter: Inserter, models: dict[str, File]) -> bool:
        """Insert the inserter's fragments; return ``False`` if its target was ignored."""
        model = self._load_previous_model(inserter, models)
        if model is None:
            return False

        code_fragments = get_valid_code_fragments(inserter)
        contents = insert_fragments(model.contents, code_fragments)
        if contents is None:
            return True

        model.contents = self._post_process(model.path, contents)
        model.if_exists_action = IfExistsAction.OVERWRITE
        models[model.path] = model
        return True

    def _load_previous_model(self, inserter: Inserter, models: dict[str, File]) -> File | None:
        path = inserter.get_path()

        model = models.get(path)
        if model is not None:
            if not self._exists(path):
                return model
            # Both a model and a file exist: the model's policy decides which wins.
            resolved = _resolve_action(model.if_exists_action)
            if resolved is IfExistsAction.SKIP:
                try:
                    return self._load_model_from_file(path)
                except (OpenFileError, ReadFileError, CloseFileError) as exc:
                    print_warning(f"Could not read {escape(path)}, inserting into the new model: {escape(str(exc))}")
                    return model
            if resolved is IfExistsAction.ERROR:
                raise FileAlreadyExistsError(path)
            if resolved is IfExistsAction.OVERWRITE:
                return model
            raise UnknownIfExistsActionError(path, model.if_exists_action)

        if (
            inserter.get_if_not_exists_action() is IfNotExistsAction.IGNORE
            and not self._exists(path)
        ):
            print_warning(f"Skipping missing file {escape(path)}: code fragments were not inserted")
            return None

        return self._load_model_from_file(path)

    def _load_model_from_file(self, path: str) -> File:
        try:
            handle = self.fs.open(path)
        except OSError as exc:
            raise OpenFileError(exc, path) from exc

        try:
            contents = handle.read()
        except (OSError, UnicodeError) as exc:
            handle.close()
            raise ReadFileError(exc, path) from exc

        try:
            handle.close()
        except OSError as exc:
            raise CloseFileError(exc, path) from exc

        return File(path=path, contents=contents)

    def _post_process(self, path: str, contents: str) -> str:
        processor = self.post_processors.get(os.path.splitext(path)[1])
        if processor is None:
            return contents
        try:
            return processor(path, contents)
        except Exception as exc:
            raise PostProcessError(exc, path) from exc

    # -- Persistence -------------------------------------------------------

    def _write_file(self, model: File, report: ScaffoldReport) -> None:
        path = model.path

        # Re-checked right before writing: the file may have appeared since modeling.
        if self._exists(path):
            resolved = _resolve_action(model.if_exists_action)
            if resolved is IfExistsAction.SKIP:
                report.skipped.append(path)
                if self.verbose:
                    console.print(f"  [yellow]~[/yellow] {escape(path)} (exists, skipped)")
                return
            if resolved is IfExistsAction.ERROR:
                raise FileAlreadyExistsError(path)
            if resolved is None:
                raise UnknownIfExistsActionError(path, model.if_exists_action)

        directory = os.path.dirname(path)
        if directory:
            try:
                self.fs.mkdir_all(directory, self.dir_perm)
            except OSError as exc:
                raise CreateDirectoryError(exc, directory) from exc

        try:
            handle = self.fs.open(path, "w", self.file_perm)
        except OSError as exc:
            raise CreateFileError(exc, path) from exc

        try:
            handle.write(model.contents)
        except OSError as exc:
            handle.close()
            raise WriteFileError(exc, path) from exc

        try:
            handle.close()
        except OSError as exc:
            raise CloseFileError(exc, path) from exc

        report.written.append(path)
        if self.verbose:
            console.print(f"  [green]+[/green] {escape(path)}")

    def _exists(self, path: str) -> bool:
        try:
            return self.fs.exists(path)
        except OSError as exc:
            raise ExistsFileError(exc, path) from exc


def _resolve_action(action: Any) -> IfExistsAction | None:
    """Return *action* as an ``IfExistsAction``, or ``None`` if it is not one."""
    if isinstance(action, IfExistsAction):
        return action
    try:
        return IfExistsAction(action)
    except ValueError:
        return None
