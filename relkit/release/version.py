"""Version assignment lines: ``PROJECT_VERSION=1.2.3``.

A versioned file carries at least one shell-style assignment whose variable
name is one or more upper-case words joined by ``_`` and ending in
``_VERSION``. Only the first such line in a file is rewritten.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.platform.files import atomic_write_text, read_text

__all__ = ["VERSION_RE", "VersionWriteError", "has_version_line", "set_version"]

VERSION_RE = re.compile(r"^((?:[A-Z]+_)+VERSION)=[^\r\n]+", re.MULTILINE)


@dataclass(frozen=True, slots=True)
class VersionWriteError:
    path: Path
    message: str


def has_version_line(text: str) -> bool:
    return VERSION_RE.search(text) is not None


def replace_version(text: str, value: str) -> str:
    """Return ``text`` with the first version line set to ``value``."""
    return VERSION_RE.sub(lambda m: f"{m.group(1)}={value}", text, count=1)


def set_version(
    root: Path, paths: Iterable[str], value: str
) -> Result[tuple[str, ...], VersionWriteError]:
    """Stamp ``value`` into each file under ``root``.

    Returns:
        Ok(paths whose content changed), or Err on the first I/O failure.
    """
    changed: list[str] = []
    for rel in sorted(paths):
        path = root / rel
        try:
            before = read_text(path)
            after = replace_version(before, value)
            if after != before:
                atomic_write_text(path, after)
                changed.append(rel)
        except (OSError, UnicodeDecodeError) as e:
            return Err(VersionWriteError(path=path, message=str(e)))
    return Ok(tuple(changed))
