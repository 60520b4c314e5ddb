"""Declarative builder manifests.

A manifest describes a scaffolding run as data (JSON or YAML)::

    config:
      domain: example.com
      repository: github.com/example/project
    boilerplate_file: hack/boilerplate.go.txt
    resource: {group: batch, version: v1, kind: CronJob}
    builders:
      - kind: template
        path: api/%[version]/%[kind]_types.go
        body_file: templates/types.go.j2
      - kind: insert
        path: cmd/main.go
        fragments:
          imports: ['%[package-name]%[version] "github.com/example/project/api/%[version]"\\n']

Manifest entries turn into ``ManifestTemplate`` / ``ManifestInserter``
builders, which accept every injectable value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from scaffoldkit.config import ProjectConfig
from scaffoldkit.machinery.builder import (
    Builder,
    IfExistsAction,
    IfNotExistsAction,
    RequiresValidation,
)
from scaffoldkit.machinery.marker import (
    DEFAULT_COMMENT_TOKENS,
    DEFAULT_PREFIX,
    CodeFragmentsMap,
    Marker,
    comment_token_for,
)
from scaffoldkit.machinery.mixins import (
    BoilerplateMixin,
    ComponentConfigMixin,
    DomainMixin,
    InserterMixin,
    MultiGroupMixin,
    ProjectNameMixin,
    RepositoryMixin,
    ResourceMixin,
    TemplateMixin,
)
from scaffoldkit.resource import Resource
from scaffoldkit.utils import load_document


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def _unresolved_placeholder(path: str) -> bool:
    return "%[" in path


def _outside_root(path: str) -> bool:
    posix = PurePosixPath(path.replace("\\", "/"))
    return posix.is_absolute() or ".." in posix.parts


@dataclass
class ManifestTemplate(
    TemplateMixin,
    DomainMixin,
    RepositoryMixin,
    ProjectNameMixin,
    MultiGroupMixin,
    ComponentConfigMixin,
    BoilerplateMixin,
    ResourceMixin,
    RequiresValidation,
):
    """A template declared in a manifest; its path may use ``%[...]`` placeholders."""

    def validate(self) -> None:
        if not self.path:
            raise ValueError("template path is empty")
        if self.resource is None and _unresolved_placeholder(self.path):
            raise ValueError(f"path {self.path!r} uses resource placeholders but no resource is set")
        if _outside_root(self.path):
            raise ValueError(f"path {self.path!r} must stay inside the project root")

    def set_template_defaults(self) -> None:
        if self.resource is not None:
            self.path = self.resource.replace(self.path)


@dataclass
class ManifestInserter(InserterMixin, ResourceMixin, RequiresValidation):
    """Code fragments declared in a manifest, keyed by marker value."""

    fragments: dict[str, list[str]] = field(default_factory=dict)
    marker_prefix: str = DEFAULT_PREFIX
    comment_tokens: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_COMMENT_TOKENS))

    def get_path(self) -> str:
        if self.resource is not None:
            return self.resource.replace(self.path)
        return self.path

    def validate(self) -> None:
        path = self.get_path()
        if not path:
            raise ValueError("insert path is empty")
        if _unresolved_placeholder(path):
            raise ValueError(f"path {path!r} uses resource placeholders but no resource is set")
        if _outside_root(path):
            raise ValueError(f"path {path!r} must stay inside the project root")
        comment_token_for(path, self.comment_tokens)

    def get_markers(self) -> list[Marker]:
        return [self._marker(value) for value in self.fragments]

    def get_code_fragments(self) -> CodeFragmentsMap:
        return {
            self._marker(value): [self._expand(fragment) for fragment in fragments]
            for value, fragments in self.fragments.items()
            if fragments
        }

    def _marker(self, value: str) -> Marker:
        return Marker.for_path(
            self.get_path(), value, prefix=self.marker_prefix, comment_tokens=self.comment_tokens
        )

    def _expand(self, fragment: str) -> str:
        if self.resource is not None:
            fragment = self.resource.replace(fragment)
        # Fragments typed in YAML often lack the final newline.
        return fragment if fragment.endswith("\n") else fragment + "\n"


# ---------------------------------------------------------------------------
# Manifest models
# ---------------------------------------------------------------------------


class TemplateSpec(BaseModel):
    """A ``kind: template`` manifest entry."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["template"] = "template"
    path: str
    body: str | None = None
    body_file: str | None = None
    if_exists: IfExistsAction = IfExistsAction.SKIP
    delimiters: tuple[str, str] | None = None

    @model_validator(mode="after")
    def _one_body(self) -> "TemplateSpec":
        if (self.body is None) == (self.body_file is None):
            raise ValueError("exactly one of 'body' or 'body_file' is required")
        return self


class InsertSpec(BaseModel):
    """A ``kind: insert`` manifest entry."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["insert"]
    path: str
    fragments: dict[str, list[str]] = Field(default_factory=dict)
    marker_prefix: str = DEFAULT_PREFIX
    if_not_exists: IfNotExistsAction = IfNotExistsAction.ERROR


BuilderSpec = Annotated[Union[TemplateSpec, InsertSpec], Field(discriminator="kind")]


class Manifest(BaseModel):
    """A whole scaffolding run described as data."""

    model_config = ConfigDict(extra="forbid")

    config: ProjectConfig | None = None
    boilerplate: str = ""
    boilerplate_file: str | None = None
    resource: Resource | None = None
    builders: list[BuilderSpec] = Field(default_factory=list)

    @field_validator("builders", mode="before")
    @classmethod
    def _default_kind(cls, value: Any) -> Any:
        # Entries without a kind are templates.
        if not isinstance(value, list):
            return value
        return [
            {"kind": "template", **entry} if isinstance(entry, dict) and "kind" not in entry else entry
            for entry in value
        ]

    @classmethod
    def load(cls, path: str | Path) -> "Manifest":
        """Load a manifest from a JSON or YAML file.

        Raises:
            ValueError: If the document is not a mapping or does not validate.
        """
        data = load_document(path)
        if set(data) == {"_root"}:
            raise ValueError(f"manifest {path} must be a mapping, got {type(data['_root']).__name__}")
        return cls.model_validate(data)

    def read_boilerplate(self, base_dir: str | Path = ".") -> str:
        """Return the inline boilerplate, or the content of ``boilerplate_file``."""
        if self.boilerplate_file:
            return (Path(base_dir) / self.boilerplate_file).read_text(encoding="utf-8")
        return self.boilerplate

    def target_paths(self) -> list[str]:
        """Return every builder path with resource placeholders expanded."""
        if self.resource is None:
            return [spec.path for spec in self.builders]
        return [self.resource.replace(spec.path) for spec in self.builders]

    def to_builders(
        self,
        base_dir: str | Path = ".",
        comment_tokens: dict[str, str] | None = None,
    ) -> list[Builder]:
        """Create the builders, in manifest order.

        Args:
            base_dir: Directory ``body_file`` paths are relative to.
            comment_tokens: Comment-token table for insert markers.
        """
        tokens = dict(DEFAULT_COMMENT_TOKENS if comment_tokens is None else comment_tokens)
        builders: list[Builder] = []
        for spec in self.builders:
            if isinstance(spec, TemplateSpec):
                body = spec.body
                if spec.body_file is not None:
                    body = (Path(base_dir) / spec.body_file).read_text(encoding="utf-8")
                template = ManifestTemplate(
                    path=spec.path,
                    if_exists_action=spec.if_exists,
                    template_body=body or "",
                )
                if spec.delimiters is not None:
                    template.set_delim(*spec.delimiters)
                builders.append(template)
            else:
                builders.append(
                    ManifestInserter(
                        path=spec.path,
                        if_not_exists_action=spec.if_not_exists,
                        fragments={key: list(values) for key, values in spec.fragments.items()},
                        marker_prefix=spec.marker_prefix,
                        comment_tokens=tokens,
                    )
                )
        return builders
