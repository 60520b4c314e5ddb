"""Dataclass mixins implementing the builder contracts.

Compose them to write a builder::

    @dataclass
    class Types(TemplateMixin, BoilerplateMixin, ResourceMixin):
        def set_template_defaults(self) -> None:
            if not self.path:
                self.path = "api/%[version]/%[kind]_types.go"
            self.path = self.resource.replace(self.path)
            self.template_body = TYPES_TEMPLATE

Every ``inject_*`` setter goes through ``set_if_empty``: a value set
explicitly on the builder is never replaced by the injector.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from scaffoldkit.machinery.builder import (
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
    Template,
)
from scaffoldkit.resource import Resource


def is_unset(value: Any) -> bool:
    """Return ``True`` for ``None``, ``""`` and ``False``."""
    return value is None or value == "" or value is False


def set_if_empty(target: object, attribute: str, value: Any) -> bool:
    """Assign *value* to ``target.attribute`` unless it already holds a value.

    Returns ``True`` if the assignment happened.
    """
    if not is_unset(getattr(target, attribute, None)):
        return False
    setattr(target, attribute, value)
    return True


# ---------------------------------------------------------------------------
# Builder mixins
# ---------------------------------------------------------------------------


@dataclass
class PathMixin:
    path: str = ""

    def get_path(self) -> str:
        return self.path


@dataclass
class IfExistsActionMixin:
    if_exists_action: IfExistsAction = IfExistsAction.SKIP

    def get_if_exists_action(self) -> IfExistsAction:
        return self.if_exists_action


@dataclass
class IfNotExistsActionMixin:
    if_not_exists_action: IfNotExistsAction = IfNotExistsAction.ERROR

    def get_if_not_exists_action(self) -> IfNotExistsAction:
        return self.if_not_exists_action


@dataclass
class TemplateMixin(PathMixin, IfExistsActionMixin, Template):
    """Base for template builders; subclasses implement ``set_template_defaults``."""

    template_body: str = ""
    delim_left: str = field(default="", repr=False)
    delim_right: str = field(default="", repr=False)

    def get_body(self) -> str:
        return self.template_body

    def get_delim(self) -> tuple[str, str]:
        return self.delim_left, self.delim_right

    def set_delim(self, left: str, right: str) -> None:
        self.delim_left = left
        self.delim_right = right


@dataclass
class InserterMixin(PathMixin, IfNotExistsActionMixin, Inserter):
    """Base for inserter builders; subclasses implement markers and fragments.

    Inserters always overwrite: the file they update is expected to exist.
    """

    def get_if_exists_action(self) -> IfExistsAction:
        return IfExistsAction.OVERWRITE


# ---------------------------------------------------------------------------
# Injection mixins
# ---------------------------------------------------------------------------


@dataclass
class DomainMixin(HasDomain):
    domain: str = ""

    def inject_domain(self, domain: str) -> None:
        set_if_empty(self, "domain", domain)


@dataclass
class RepositoryMixin(HasRepository):
    repo: str = ""

    def inject_repository(self, repository: str) -> None:
        set_if_empty(self, "repo", repository)


@dataclass
class ProjectNameMixin(HasProjectName):
    project_name: str = ""

    def inject_project_name(self, project_name: str) -> None:
        set_if_empty(self, "project_name", project_name)


@dataclass
class MultiGroupMixin(HasMultiGroup):
    multi_group: bool = False

    def inject_multi_group(self, multi_group: bool) -> None:
        set_if_empty(self, "multi_group", multi_group)


@dataclass
class ComponentConfigMixin(HasComponentConfig):
    component_config: bool = False

    def inject_component_config(self, component_config: bool) -> None:
        set_if_empty(self, "component_config", component_config)


@dataclass
class BoilerplateMixin(HasBoilerplate):
    boilerplate: str = ""

    def inject_boilerplate(self, boilerplate: str) -> None:
        set_if_empty(self, "boilerplate", boilerplate)


@dataclass
class ResourceMixin(HasResource):
    resource: Resource | None = None

    def inject_resource(self, resource: Resource) -> None:
        set_if_empty(self, "resource", resource)
