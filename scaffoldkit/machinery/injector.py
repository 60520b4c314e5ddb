"""Injection of cross-cutting values into builders."""

from __future__ import annotations

from dataclasses import dataclass

from scaffoldkit.config import ProjectConfig
from scaffoldkit.machinery.builder import (
    Builder,
    HasBoilerplate,
    HasComponentConfig,
    HasDomain,
    HasMultiGroup,
    HasProjectName,
    HasRepository,
    HasResource,
)
from scaffoldkit.resource import Resource


@dataclass
class Injector:
    """Fills the values a builder asks for through its ``Has*`` capabilities.

    A value is only injected when the source is present (non-empty string,
    ``True`` flag, resource set); the builder's setter then decides whether
    its own field is still empty.
    """

    config: ProjectConfig | None = None
    boilerplate: str = ""
    resource: Resource | None = None

    def inject_into(self, builder: Builder) -> None:
        config = self.config
        if config is not None:
            if isinstance(builder, HasDomain) and config.domain:
                builder.inject_domain(config.domain)
            if isinstance(builder, HasRepository) and config.repository:
                builder.inject_repository(config.repository)
            if isinstance(builder, HasProjectName) and config.project_name:
                builder.inject_project_name(config.project_name)
            if isinstance(builder, HasMultiGroup) and config.multi_group:
                builder.inject_multi_group(config.multi_group)
            if isinstance(builder, HasComponentConfig) and config.component_config:
                builder.inject_component_config(config.component_config)
        if isinstance(builder, HasBoilerplate) and self.boilerplate:
            builder.inject_boilerplate(self.boilerplate)
        if isinstance(builder, HasResource) and self.resource is not None:
            builder.inject_resource(self.resource)
