"""Project configuration injected into scaffold builders.

Typed configuration for a scaffolded project.  All settings use Pydantic v2
models so they are validated at construction time and serialised to/from
JSON, YAML or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

_YAML_SUFFIXES = (".yaml", ".yml")
_TRUTHY = ("1", "true", "yes", "on")


class ProjectConfig(BaseModel):
    """Cross-cutting project settings.

    Every field is optional: an unset value is simply never injected into the
    builders.
    """

    version: str = Field(default="3", description="Configuration format version")
    domain: str = Field(default="", description="Domain used to qualify API groups")
    repository: str = Field(default="", description="Import path of the project")
    project_name: str = Field(default="", description="Human-readable project name")
    multi_group: bool = Field(default=False, description="Whether APIs live in per-group directories")
    component_config: bool = Field(default=False, description="Whether component config is enabled")

    @field_validator("domain", "repository", "project_name")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: str | Path) -> Path:
        """Persist the configuration.

        The format follows the suffix: YAML for ``.yaml``/``.yml``, JSON
        otherwise.  Parent directories are created automatically.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        if target.suffix in _YAML_SUFFIXES:
            target.write_text(yaml.safe_dump(self.model_dump(), sort_keys=False), encoding="utf-8")
        else:
            target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: str | Path) -> "ProjectConfig":
        """Load a previously-saved configuration from JSON or YAML.

        Args:
            path: The file to read.

        Returns:
            A validated ``ProjectConfig`` instance.
        """
        source = Path(path)
        raw = source.read_text(encoding="utf-8")
        if source.suffix in _YAML_SUFFIXES:
            return cls.model_validate(yaml.safe_load(raw) or {})
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "ProjectConfig":
        """Build a ``ProjectConfig`` from environment variables.

        Recognised variables (all optional):
            SCAFFOLDKIT_DOMAIN, SCAFFOLDKIT_REPOSITORY, SCAFFOLDKIT_PROJECT_NAME,
            SCAFFOLDKIT_MULTI_GROUP, SCAFFOLDKIT_COMPONENT_CONFIG.
        """
        kwargs: dict[str, Any] = {}
        for key in ("domain", "repository", "project_name"):
            value = os.environ.get(f"SCAFFOLDKIT_{key.upper()}")
            if value:
                kwargs[key] = value
        for key in ("multi_group", "component_config"):
            value = os.environ.get(f"SCAFFOLDKIT_{key.upper()}")
            if value:
                kwargs[key] = value.strip().lower() in _TRUTHY
        return cls(**kwargs)
