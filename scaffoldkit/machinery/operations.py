"""Direct edits of existing files.

These helpers complement marker-based insertion for files that were not
scaffolded with markers (or were edited by hand): they locate a literal
snippet and edit around it, keeping the file's permission bits.  A snippet
that cannot be found is an error, so a silently skipped edit never goes
unnoticed.

Pairs are passed flat: ``insert_before(fs, "main.go", target1, text1,
target2, text2)``.
"""

from __future__ import annotations

import re

from scaffoldkit.machinery.filesystem import Filesystem


def _pairs(values: tuple[str, ...], what: str) -> list[tuple[str, str]]:
    if len(values) % 2 != 0:
        raise ValueError(f"an even number of {what} strings is required")
    return list(zip(values[::2], values[1::2]))


def _read(fs: Filesystem, filename: str) -> tuple[str, int]:
    info = fs.stat(filename)
    return fs.read_file(filename), info.mode


def has_fragment(fs: Filesystem, filename: str, fragment: str) -> bool:
    """Return ``True`` if *fragment* appears verbatim in *filename*."""
    return fragment in fs.read_file(filename)


def insert_before(fs: Filesystem, filename: str, *insertions: str) -> None:
    """Insert each text right before the first occurrence of its target."""
    content, mode = _read(fs, filename)
    for target, text in _pairs(insertions, "insertion"):
        index = content.find(target)
        if index < 0:
            raise ValueError(f"unable to find {target!r} in {filename}")
        content = content[:index] + text + content[index:]
    fs.write_file(filename, content, mode)


def insert_after(fs: Filesystem, filename: str, *insertions: str) -> None:
    """Insert each text right after the first occurrence of its target."""
    content, mode = _read(fs, filename)
    for target, text in _pairs(insertions, "insertion"):
        index = content.find(target)
        if index < 0:
            raise ValueError(f"unable to find {target!r} in {filename}")
        index += len(target)
        content = content[:index] + text + content[index:]
    fs.write_file(filename, content, mode)


def replace(fs: Filesystem, filename: str, *replacements: str) -> None:
    """Replace every occurrence of each target."""
    content, mode = _read(fs, filename)
    for target, text in _pairs(replacements, "replacement"):
        if target not in content:
            raise ValueError(f"unable to find {target!r} in {filename}")
        content = content.replace(target, text)
    fs.write_file(filename, content, mode)


def replace_regexp(fs: Filesystem, filename: str, *replacements: str) -> None:
    """Replace every match of each pattern; ``re.sub`` replacement syntax applies."""
    content, mode = _read(fs, filename)
    for pattern, text in _pairs(replacements, "replacement"):
        updated = re.sub(pattern, text, content)
        if updated == content:
            raise ValueError(f"unable to find {pattern!r} in {filename}")
        content = updated
    fs.write_file(filename, content, mode)


def add_prefix(fs: Filesystem, filename: str, code_block: str, prefix: str) -> None:
    """Prefix every line of *code_block*, e.g. to comment it out."""
    content, mode = _read(fs, filename)
    index = content.find(code_block)
    if index < 0:
        raise ValueError(f"unable to find {code_block!r} in {filename}")
    block = "\n".join(prefix + line for line in code_block.split("\n"))
    content = content[:index] + block + content[index + len(code_block):]
    fs.write_file(filename, content, mode)


def remove_prefix(fs: Filesystem, filename: str, prefix: str, code_block: str) -> None:
    """Strip *prefix* from every line of *code_block*, e.g. to uncomment it."""
    content, mode = _read(fs, filename)
    index = content.find(code_block)
    if index < 0:
        raise ValueError(f"unable to find {code_block!r} in {filename}")
    block = "\n".join(line.removeprefix(prefix) for line in code_block.split("\n"))
    content = content[:index] + block + content[index + len(code_block):]
    fs.write_file(filename, content, mode)
