"""Jinja2 template rendering for scaffold builders.

Provides the ``TemplateRenderer`` class, which renders the body of a
``Template`` builder with the builder's own fields as the template context,
plus the default function map available to every template.

Functions in the map are registered both as filters and as globals, so both
spellings work::

    {{ kind | title }}
    {{ title(kind) }}

Undefined fields are errors (``StrictUndefined``), and neither syntax nor
rendering errors are wrapped: callers see the ``jinja2.TemplateError`` that
explains what went wrong.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from jinja2 import Environment, StrictUndefined

from scaffoldkit.machinery.builder import Template

FuncMap = Mapping[str, Callable[..., Any]]


# ---------------------------------------------------------------------------
# Default function map
# ---------------------------------------------------------------------------

_FNV32_OFFSET = 0x811C9DC5
_FNV32_PRIME = 0x01000193


def title(value: str) -> str:
    """Upper-case every letter that starts a word, leaving the rest untouched.

    A word starts after any character other than a letter, a digit or ``_``,
    so ``"my kind"`` → ``"My Kind"``, ``"foo-bar.baz"`` → ``"Foo-Bar.Baz"`` and
    ``"cronJob"`` → ``"CronJob"``.
    """
    out: list[str] = []
    previous = " "
    for char in value:
        out.append(char.upper() if _is_separator(previous) else char)
        previous = char
    return "".join(out)


def _is_separator(char: str) -> bool:
    if char.isascii():
        return not (char.isalnum() or char == "_")
    if char.isalpha() or char.isdigit():
        return False
    return char.isspace()


def lower(value: str) -> str:
    return value.lower()


def upper(value: str) -> str:
    return value.upper()


def is_empty(value: Any) -> bool:
    """Return ``True`` for ``None`` and the empty string."""
    return value is None or value == ""


def hash_fnv(value: str) -> str:
    """Return the 32-bit FNV-1a hash of *value* as 8 lowercase hex digits.

    Stable across runs and platforms, which makes it suitable for generated
    identifiers such as leader-election IDs.
    """
    digest = _FNV32_OFFSET
    for byte in value.encode("utf-8"):
        digest ^= byte
        digest = (digest * _FNV32_PRIME) & 0xFFFFFFFF
    return f"{digest:08x}"


DEFAULT_FUNC_MAP: FuncMap = MappingProxyType(
    {
        "title": title,
        "lower": lower,
        "upper": upper,
        "is_empty": is_empty,
        "hash_fnv": hash_fnv,
    }
)


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders ``Template`` builders with Jinja2.

    Args:
        func_map: Functions exposed to every template.  Defaults to
            ``DEFAULT_FUNC_MAP``.  A builder returning its own map from
            ``get_func_map()`` replaces this one for that builder only.
    """

    def __init__(self, func_map: FuncMap | None = None) -> None:
        self.func_map: FuncMap = DEFAULT_FUNC_MAP if func_map is None else func_map

    def render(self, template: Template) -> str:
        """Render the body of *template* against its own fields."""
        func_map = template.get_func_map()
        if func_map is None:
            func_map = self.func_map
        left, right = template.get_delim()
        return self.render_string(
            template.get_body(),
            template_context(template),
            func_map=func_map,
            delims=(left, right) if left and right else None,
        )

    def render_string(
        self,
        body: str,
        context: Mapping[str, Any],
        *,
        func_map: FuncMap | None = None,
        delims: tuple[str, str] | None = None,
    ) -> str:
        """Render an inline template string with the provided context.

        Custom *delims* replace the ``{{ }}`` variable delimiters; block tags
        keep the ``{% %}`` syntax.
        """
        env = self._environment(self.func_map if func_map is None else func_map, delims)
        return env.from_string(body).render(**context)

    # -- Internal ----------------------------------------------------------

    @staticmethod
    def _environment(func_map: FuncMap, delims: tuple[str, str] | None) -> Environment:
        options: dict[str, Any] = {}
        if delims is not None:
            options["variable_start_string"], options["variable_end_string"] = delims
        env = Environment(
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
            **options,
        )
        env.filters = dict(func_map)
        env.globals.update(func_map)
        return env


def template_context(template: Template) -> dict[str, Any]:
    """Build the rendering context of *template* from its public fields.

    Dataclass builders expose their declared fields; other objects expose
    their public instance attributes.  The builder itself is available as
    ``this``.
    """
    if dataclasses.is_dataclass(template):
        names = [f.name for f in dataclasses.fields(template)]
    else:
        names = list(vars(template))
    context = {name: getattr(template, name) for name in names if not name.startswith("_")}
    context["this"] = template
    return context
