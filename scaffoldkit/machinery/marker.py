"""Scaffold markers: comment-line anchors for incremental code insertion.

A marker is written verbatim into generated files, e.g.::

    // +kubebuilder:scaffold:imports
    # +kubebuilder:scaffold:crdkustomizeresource

Later runs look for those lines to know where new code fragments go, so the
textual form is a durable contract: ``<comment token> +<prefix>:<value>``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import PurePosixPath
from types import MappingProxyType

DEFAULT_PREFIX = "+kubebuilder:scaffold:"

DEFAULT_COMMENT_TOKENS: Mapping[str, str] = MappingProxyType(
    {
        ".go": "//",
        ".yaml": "#",
        ".yml": "#",
        ".py": "#",
        ".sh": "#",
        ".toml": "#",
        "Makefile": "#",
        "Dockerfile": "#",
    }
)


@dataclass(frozen=True)
class Marker:
    """A scaffold marker bound to a comment token.

    Instances are hashable so they can key a ``CodeFragmentsMap``.
    """

    comment: str
    value: str
    prefix: str = DEFAULT_PREFIX

    @classmethod
    def for_path(
        cls,
        path: str,
        value: str,
        *,
        prefix: str = DEFAULT_PREFIX,
        comment_tokens: Mapping[str, str] | None = None,
    ) -> Marker:
        """Create a marker whose comment token matches *path*.

        The extension is looked up first, then the bare file name (for files
        such as ``Makefile``).

        Raises:
            ValueError: If no comment token is known for *path*.  This is a
                programming error in the code that declares the marker.
        """
        tokens = DEFAULT_COMMENT_TOKENS if comment_tokens is None else comment_tokens
        comment = comment_token_for(path, tokens)
        return cls(comment=comment, value=value, prefix=normalize_prefix(prefix))

    def __str__(self) -> str:
        return f"{self.comment} {self.prefix}{self.value}"

    def equals_line(self, line: str) -> bool:
        """Return ``True`` if *line* is this marker, ignoring surrounding whitespace."""
        stripped = line.strip()
        if stripped.startswith(self.comment):
            stripped = stripped[len(self.comment):]
        return stripped.strip() == f"{self.prefix}{self.value}".strip()


CodeFragments = list[str]
CodeFragmentsMap = dict[Marker, CodeFragments]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def comment_token_for(path: str, comment_tokens: Mapping[str, str]) -> str:
    """Return the comment token used for *path*."""
    pure = PurePosixPath(path)
    if pure.suffix and pure.suffix in comment_tokens:
        return comment_tokens[pure.suffix]
    if pure.name in comment_tokens:
        return comment_tokens[pure.name]
    known = ", ".join(f"'{ext}'" for ext in sorted(comment_tokens))
    raise ValueError(
        f"unknown file extension: '{pure.suffix or pure.name}', expected one of {known}"
    )


def normalize_prefix(prefix: str) -> str:
    """Make sure a marker prefix starts with ``+`` and ends with ``:``."""
    trimmed = prefix.strip()
    if not trimmed.startswith("+"):
        trimmed = "+" + trimmed
    if not trimmed.endswith(":"):
        trimmed += ":"
    return trimmed
