"""Input file lines: ``path [+ flag]*``.

Each line names one file and optionally a ``+``-separated list of flags:

    src/tool.sh + v
    README.org + doc + toc
    LICENSE

Whitespace around ``+`` and repeated ``+`` are insignificant, flag names
are case-insensitive, and blank lines are skipped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.release.errors import FileNotFound, InputError, UnknownFlag

__all__ = ["FileEntry", "Flag", "parse_flag_line", "split_flag_line"]

# A "+" with any surrounding whitespace and any further "+" runs.
_SEPARATOR_RE = re.compile(r"\s*\+[\s+]*")


class Flag(Enum):
    """Per-file behaviour switches."""

    VERSIONED = "v"
    DOC = "doc"
    TOC = "toc"

    def __str__(self) -> str:
        return self.value


_FLAGS_BY_NAME = {flag.value: flag for flag in Flag}


@dataclass(frozen=True, slots=True)
class FileEntry:
    """One input file and the flags attached to it."""

    path: str
    flags: frozenset[Flag] = field(default_factory=frozenset)

    def has(self, flag: Flag) -> bool:
        return flag in self.flags


def split_flag_line(line: str) -> tuple[str, tuple[str, ...]] | None:
    """Split a line into its path and raw flag names.

    Returns None for a line with nothing to parse: blank, or an empty path
    in front of the first ``+``.
    """
    text = line.strip()
    if not text:
        return None

    path, *names = _SEPARATOR_RE.split(text)
    if not path:
        return None
    return path, tuple(name for name in names if name)


def parse_flag_line(line: str, *, root: Path) -> Result[FileEntry | None, InputError]:
    """Parse one input line into a ``FileEntry``.

    Args:
        line: Raw line text.
        root: Directory the path is resolved against.

    Returns:
        Ok(None) for a skipped line, Ok(FileEntry) for a valid one,
        Err(UnknownFlag) or Err(FileNotFound) otherwise. Flags are checked
        before the file, so a bad flag is reported even for a missing path.
    """
    parts = split_flag_line(line)
    if parts is None:
        return Ok(None)
    path, names = parts

    flags: set[Flag] = set()
    for name in names:
        flag = _FLAGS_BY_NAME.get(name.lower())
        if flag is None:
            return Err(UnknownFlag(name=name, line=line.strip()))
        flags.add(flag)

    if not (root / path).is_file():
        return Err(FileNotFound(path=path))

    return Ok(FileEntry(path=path, flags=frozenset(flags)))
