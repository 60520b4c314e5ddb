"""Builder contracts for the scaffolding machinery.

A *builder* is anything that knows which path it targets and what to do when
that path is already taken.  On top of that minimal contract the orchestrator
recognises a closed set of capabilities, each one an abstract base class that
a builder opts into by inheritance:

- ``Template``: renders the full content of a file.
- ``Inserter``: inserts code fragments at marker lines of an existing file.
- ``RequiresValidation``: exposes a ``validate()`` hook.
- ``HasDomain``, ``HasRepository``, ``HasProjectName``, ``HasMultiGroup``,
  ``HasComponentConfig``, ``HasBoilerplate``, ``HasResource``: accept a
  cross-cutting value from the ``Injector``.

The ready-made dataclass implementations live in ``mixins.py``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from scaffoldkit.machinery.marker import CodeFragmentsMap, Marker
    from scaffoldkit.resource import Resource


# ---------------------------------------------------------------------------
# Policies
# ---------------------------------------------------------------------------


class IfExistsAction(str, Enum):
    """What to do when a path is already modeled or already on disk."""

    SKIP = "skip"
    ERROR = "error"
    OVERWRITE = "overwrite"


class IfNotExistsAction(str, Enum):
    """What an inserter does when its target is neither modeled nor on disk."""

    ERROR = "error"
    IGNORE = "ignore"


# ---------------------------------------------------------------------------
# File model
# ---------------------------------------------------------------------------


@dataclass
class File:
    """In-memory result for one path during one orchestration run."""

    path: str
    contents: str = ""
    if_exists_action: IfExistsAction = IfExistsAction.SKIP


# ---------------------------------------------------------------------------
# Core contracts
# ---------------------------------------------------------------------------


class Builder(ABC):
    """Minimal contract shared by every scaffolded artifact."""

    @abstractmethod
    def get_path(self) -> str:
        """Return the path of the file to scaffold."""

    @abstractmethod
    def get_if_exists_action(self) -> IfExistsAction:
        """Return the behavior when the path is already taken."""


class RequiresValidation(Builder):
    """A builder that must pass ``validate()`` before it is used."""

    @abstractmethod
    def validate(self) -> None:
        """Raise if the builder is not in a usable state."""


class Template(Builder):
    """A builder that renders the full content of a file."""

    @abstractmethod
    def get_body(self) -> str:
        """Return the raw template body."""

    @abstractmethod
    def set_template_defaults(self) -> None:
        """Finalize path, body and if-exists action.

        Called once, after injection and validation, before the template is
        rendered.
        """

    @abstractmethod
    def get_delim(self) -> tuple[str, str]:
        """Return the custom ``(left, right)`` delimiters, or empty strings."""

    @abstractmethod
    def set_delim(self, left: str, right: str) -> None:
        """Set custom delimiters for the template body."""

    def get_func_map(self) -> dict[str, Callable[..., Any]] | None:
        """Return a function map replacing the default one, if any."""
        return None


class Inserter(Builder):
    """A builder that inserts code fragments at marker lines."""

    @abstractmethod
    def get_markers(self) -> list[Marker]:
        """Return the markers this inserter is allowed to use."""

    @abstractmethod
    def get_code_fragments(self) -> CodeFragmentsMap:
        """Return the fragments to insert, keyed by marker."""

    def get_if_not_exists_action(self) -> IfNotExistsAction:
        return IfNotExistsAction.ERROR


# ---------------------------------------------------------------------------
# Injection capabilities
# ---------------------------------------------------------------------------


class HasDomain(ABC):
    @abstractmethod
    def inject_domain(self, domain: str) -> None: ...


class HasRepository(ABC):
    @abstractmethod
    def inject_repository(self, repository: str) -> None: ...


class HasProjectName(ABC):
    @abstractmethod
    def inject_project_name(self, project_name: str) -> None: ...


class HasMultiGroup(ABC):
    @abstractmethod
    def inject_multi_group(self, multi_group: bool) -> None: ...


class HasComponentConfig(ABC):
    @abstractmethod
    def inject_component_config(self, component_config: bool) -> None: ...


class HasBoilerplate(ABC):
    @abstractmethod
    def inject_boilerplate(self, boilerplate: str) -> None: ...


class HasResource(ABC):
    @abstractmethod
    def inject_resource(self, resource: Resource) -> None: ...
