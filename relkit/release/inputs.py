"""Input table: every file going into a release plus its flags."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.release.errors import DuplicateFile, InputError
from relkit.release.flags import FileEntry, Flag, parse_flag_line

__all__ = ["InputTable", "parse_input_files"]


@dataclass(frozen=True, slots=True)
class InputTable:
    """Parsed input files.

    ``entries`` is sorted by path. The per-flag sets are derived from it,
    so each one is always a subset of ``files``.

    Attributes:
        entries: One entry per distinct path.
        bump: Post-release bump token, or None when not requested or when no
            file is versioned.
    """

    entries: tuple[FileEntry, ...]
    bump: str | None = None

    @property
    def files(self) -> frozenset[str]:
        return frozenset(e.path for e in self.entries)

    def flagged(self, flag: Flag) -> frozenset[str]:
        return frozenset(e.path for e in self.entries if e.has(flag))

    @property
    def versioned(self) -> frozenset[str]:
        return self.flagged(Flag.VERSIONED)

    @property
    def docs(self) -> frozenset[str]:
        return self.flagged(Flag.DOC)

    @property
    def toc(self) -> frozenset[str]:
        return self.flagged(Flag.TOC)


def parse_input_files(
    text: str,
    *,
    root: Path,
    bump: str | None = None,
    default_files: Iterable[str] = (),
) -> Result[InputTable, InputError]:
    """Build the input table from newline-separated input lines.

    Args:
        text: Input lines, see ``relkit.release.flags``.
        root: Project root that paths are relative to.
        bump: Optional post-release bump token.
        default_files: Files added without flags when they exist and are
            not listed already. Missing ones are skipped.

    Returns:
        Ok(InputTable), or Err with the first UnknownFlag, FileNotFound or
        DuplicateFile encountered.
    """
    entries: dict[str, FileEntry] = {}

    for line in text.splitlines():
        parsed = parse_flag_line(line, root=root)
        if isinstance(parsed, Err):
            return parsed
        entry = parsed.value
        if entry is None:
            continue
        if entry.path in entries:
            return Err(DuplicateFile(path=entry.path))
        entries[entry.path] = entry

    for path in default_files:
        if path not in entries and (root / path).is_file():
            entries[path] = FileEntry(path=path)

    ordered = tuple(entries[p] for p in sorted(entries))
    has_versioned = any(e.has(Flag.VERSIONED) for e in ordered)

    return Ok(InputTable(entries=ordered, bump=(bump or None) if has_versioned else None))
