"""Scaffolding machinery: builders, markers, templates and the orchestrator.

Quick usage::

    from scaffoldkit.machinery import LocalFilesystem, Scaffold

    scaffold = Scaffold(LocalFilesystem("my-project"), boilerplate=header)
    report = scaffold.execute(MainFile(), TypesUpdater())
"""

from scaffoldkit.machinery.builder import (
    Builder,
    File,
    HasBoilerplate,
    HasComponentConfig,
    HasDomain,
    HasMultiGroup,
    HasProjectName,
    HasRepository,
    HasResource,
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
    ScaffoldError,
    SetTemplateDefaultsError,
    UnknownIfExistsActionError,
    ValidateError,
    WriteFileError,
)
from scaffoldkit.machinery.filesystem import FileInfo, Filesystem, LocalFilesystem, MemoryFilesystem
from scaffoldkit.machinery.injector import Injector
from scaffoldkit.machinery.marker import (
    DEFAULT_COMMENT_TOKENS,
    DEFAULT_PREFIX,
    CodeFragmentsMap,
    Marker,
)
from scaffoldkit.machinery.mixins import (
    BoilerplateMixin,
    ComponentConfigMixin,
    DomainMixin,
    IfExistsActionMixin,
    IfNotExistsActionMixin,
    InserterMixin,
    MultiGroupMixin,
    PathMixin,
    ProjectNameMixin,
    RepositoryMixin,
    ResourceMixin,
    TemplateMixin,
    set_if_empty,
)
from scaffoldkit.machinery.scaffold import Scaffold, ScaffoldReport
from scaffoldkit.machinery.templates import DEFAULT_FUNC_MAP, TemplateRenderer

__all__ = [
    "Builder",
    "BoilerplateMixin",
    "CloseFileError",
    "CodeFragmentsMap",
    "ComponentConfigMixin",
    "CreateDirectoryError",
    "CreateFileError",
    "DEFAULT_COMMENT_TOKENS",
    "DEFAULT_FUNC_MAP",
    "DEFAULT_PREFIX",
    "DomainMixin",
    "ExistsFileError",
    "File",
    "FileAlreadyExistsError",
    "FileInfo",
    "Filesystem",
    "HasBoilerplate",
    "HasComponentConfig",
    "HasDomain",
    "HasMultiGroup",
    "HasProjectName",
    "HasRepository",
    "HasResource",
    "IfExistsAction",
    "IfExistsActionMixin",
    "IfNotExistsAction",
    "IfNotExistsActionMixin",
    "Injector",
    "Inserter",
    "InserterMixin",
    "LocalFilesystem",
    "Marker",
    "MemoryFilesystem",
    "ModelAlreadyExistsError",
    "MultiGroupMixin",
    "OpenFileError",
    "PathMixin",
    "PostProcessError",
    "ProjectNameMixin",
    "ReadFileError",
    "RepositoryMixin",
    "RequiresValidation",
    "ResourceMixin",
    "Scaffold",
    "ScaffoldError",
    "ScaffoldReport",
    "SetTemplateDefaultsError",
    "Template",
    "TemplateMixin",
    "TemplateRenderer",
    "UnknownIfExistsActionError",
    "ValidateError",
    "WriteFileError",
    "set_if_empty",
]
