"""Resource descriptor injected into builders.

A resource identifies the API type a scaffolding run is about (group,
version, kind).  Builders use it both in their template bodies and in path
patterns such as ``api/%[version]/%[kind]_types.go``, which ``replace``
expands.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class Resource(BaseModel):
    """Group/version/kind of the resource being scaffolded."""

    group: str = Field(default="", description="API group, without the domain")
    domain: str = Field(default="", description="Domain the group belongs to")
    version: str = Field(..., description="API version, e.g. v1alpha1")
    kind: str = Field(..., description="Kind, e.g. CronJob")
    plural: str = Field(default="", description="Plural resource name; derived from kind if empty")
    path: str = Field(default="", description="Import path of the API package")

    @field_validator("version", "kind")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    def qualified_group(self) -> str:
        """Return ``group.domain``, or whichever of the two is set."""
        return ".".join(part for part in (self.group, self.domain) if part)

    def package_name(self) -> str:
        """Return a safe package name: the group, or the domain when there is no group."""
        name = self.group or self.domain
        return name.replace(".", "").replace("-", "").lower()

    def import_alias(self) -> str:
        """Return an import alias unique per group and version."""
        return f"{self.package_name()}{self.version}".lower()

    def plural_name(self) -> str:
        """Return ``plural``, or a naive lower-case plural of the kind."""
        if self.plural:
            return self.plural
        kind = self.kind.lower()
        if kind.endswith("y") and kind[-2:-1] not in ("a", "e", "i", "o", "u"):
            return kind[:-1] + "ies"
        if kind.endswith(("s", "x", "z", "ch", "sh")):
            return kind + "es"
        return kind + "s"

    # ------------------------------------------------------------------
    # Path patterns
    # ------------------------------------------------------------------

    def replacements(self) -> dict[str, str]:
        """Return the ``%[...]`` placeholders and the values they expand to."""
        return {
            "%[group]": self.group,
            "%[version]": self.version,
            "%[kind]": self.kind.lower(),
            "%[plural]": self.plural_name(),
            "%[package-name]": self.package_name(),
        }

    def replace(self, text: str) -> str:
        """Expand every ``%[...]`` placeholder in *text*."""
        for pattern, value in self.replacements().items():
            text = text.replace(pattern, value)
        return text
