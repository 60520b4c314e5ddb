"""scaffoldkit -- deterministic, incremental project scaffolding.

Builders (file templates and marker-anchored code insertions) are modeled in
memory, their conflicts resolved per path, and the result written to a
filesystem without clobbering edits made since the previous run.

Quick usage::

    from scaffoldkit import LocalFilesystem, ProjectConfig, Scaffold

    scaffold = Scaffold(LocalFilesystem("my-project"), config=ProjectConfig(domain="example.com"))
    report = scaffold.execute(*builders)
"""

from scaffoldkit.config import ProjectConfig
from scaffoldkit.machinery import (
    IfExistsAction,
    IfNotExistsAction,
    LocalFilesystem,
    Marker,
    MemoryFilesystem,
    Scaffold,
    ScaffoldError,
    ScaffoldReport,
)
from scaffoldkit.manifest import Manifest
from scaffoldkit.resource import Resource

__all__ = [
    "IfExistsAction",
    "IfNotExistsAction",
    "LocalFilesystem",
    "Manifest",
    "Marker",
    "MemoryFilesystem",
    "ProjectConfig",
    "Resource",
    "Scaffold",
    "ScaffoldError",
    "ScaffoldReport",
]
