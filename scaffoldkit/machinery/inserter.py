"""Idempotent insertion of code fragments at marker lines.

The insertion happens in two steps:

1. ``filter_existing_values`` drops every fragment that is already present in
   the content.  A fragment of N lines is compared against every window of N
   consecutive content lines, with each line stripped, so re-indented copies
   of a previously inserted fragment are recognised too.
2. ``insert_strings`` makes a single forward pass over the content and, right
   before each marker line, emits the remaining fragments for that marker in
   declaration order.

Running both steps on their own output is a no-op, which is what makes
repeated scaffolding runs safe.
"""

from __future__ import annotations

from scaffoldkit.machinery.builder import Inserter
from scaffoldkit.machinery.marker import CodeFragmentsMap


def get_valid_code_fragments(inserter: Inserter) -> CodeFragmentsMap:
    """Return a copy of the inserter's fragments restricted to its declared markers."""
    valid_markers = set(inserter.get_markers())
    return {
        marker: list(fragments)
        for marker, fragments in inserter.get_code_fragments().items()
        if marker in valid_markers
    }


def filter_existing_values(content: str, code_fragments: CodeFragmentsMap) -> CodeFragmentsMap:
    """Return *code_fragments* without the fragments already found in *content*.

    Duplicate fragments for the same marker are collapsed into the first
    one.  Markers left with no fragment are removed from the result.
    """
    lines = [line.strip() for line in split_lines(content)]
    filtered: CodeFragmentsMap = {}
    for marker, fragments in code_fragments.items():
        seen: set[tuple[str, ...]] = set()
        remaining: list[str] = []
        for fragment in fragments:
            key = tuple(_fragment_lines(fragment))
            if key in seen or _contains(lines, fragment):
                continue
            seen.add(key)
            remaining.append(fragment)
        if remaining:
            filtered[marker] = remaining
    return filtered


def insert_strings(content: str, code_fragments: CodeFragmentsMap) -> str:
    """Insert the fragments right before their marker lines.

    Every emitted line is terminated with ``\\n``, fragments included, so a
    fragment never ends up on the same line as its marker.
    """
    out: list[str] = []
    for line in split_lines(content):
        for marker, fragments in code_fragments.items():
            if marker.equals_line(line):
                out.extend(_terminated(fragment) for fragment in fragments)
        out.append(line + "\n")
    return "".join(out)


def insert_fragments(content: str, code_fragments: CodeFragmentsMap) -> str | None:
    """Filter then insert *code_fragments* into *content*.

    Returns ``None`` when every fragment is already present, so callers can
    tell a no-op apart from a change.
    """
    pending = filter_existing_values(content, code_fragments)
    if not pending:
        return None
    return insert_strings(content, pending)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def split_lines(content: str) -> list[str]:
    """Split on ``\\n`` the way a line scanner does: no trailing empty line, no ``\\r``."""
    if not content:
        return []
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.rstrip("\r") for line in lines]


def _terminated(fragment: str) -> str:
    return fragment if fragment.endswith("\n") else fragment + "\n"


def _fragment_lines(fragment: str) -> list[str]:
    return [line.strip() for line in split_lines(fragment.strip())] or [""]


def _contains(stripped_lines: list[str], fragment: str) -> bool:
    fragment_lines = _fragment_lines(fragment)
    size = len(fragment_lines)
    for start in range(len(stripped_lines) - size + 1):
        if stripped_lines[start:start + size] == fragment_lines:
            return True
    return False
