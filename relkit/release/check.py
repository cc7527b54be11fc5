"""Cross-file consistency checks on the input table.

Checks run in a fixed order and stop at the first failure:

1. doc files are ``.org`` or ``.md``
2. no two doc files share a stem
3. no listed ``<stem>`` or ``<stem>.html`` is overwritten by a rendered doc
4. toc files are doc files
5. versioned files contain a version line
6. the bump token has no whitespace
"""

from __future__ import annotations

import os
from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.release.errors import (
    DocOutputCollision,
    DuplicateDocStem,
    FileNotFound,
    InputError,
    InvalidBumpValue,
    InvalidDocExtension,
    TocRequiresDoc,
    VersionPatternMissing,
)
from relkit.release.inputs import InputTable
from relkit.release.version import has_version_line

__all__ = ["DOC_EXTENSIONS", "check_flags", "check_input", "split_ext"]

DOC_EXTENSIONS = ("org", "md")


def split_ext(path: str) -> tuple[str, str]:
    """Split ``path`` into (stem, extension) without the dot.

    ``README`` -> ("README", ""), ``docs/a.b.md`` -> ("docs/a.b", "md").
    """
    stem, ext = os.path.splitext(path)
    return stem, ext[1:]


def check_flags(table: InputTable) -> Result[None, InputError]:
    """Validate flag combinations and doc output names."""
    docs = sorted(table.docs)

    for path in docs:
        if split_ext(path)[1] not in DOC_EXTENSIONS:
            return Err(InvalidDocExtension(path=path))

    doc_by_stem: dict[str, str] = {}
    for path in docs:
        stem = split_ext(path)[0]
        if stem in doc_by_stem:
            return Err(DuplicateDocStem(stem=stem, first=doc_by_stem[stem], second=path))
        doc_by_stem[stem] = path

    for path in sorted(table.files):
        stem, ext = split_ext(path)
        if ext not in ("", "html"):
            continue
        doc = doc_by_stem.get(stem)
        if doc is not None:
            return Err(
                DocOutputCollision(
                    doc_path=doc,
                    colliding_path=path,
                    kind="html" if ext == "html" else "plaintext",
                )
            )

    for path in sorted(table.toc):
        if path not in table.docs:
            return Err(TocRequiresDoc(path=path))

    return Ok(None)


def check_input(table: InputTable, *, root: Path) -> Result[None, InputError]:
    """Run every consistency check against ``table``.

    Args:
        table: Parsed input table.
        root: Project root, used to read versioned files.
    """
    flags = check_flags(table)
    if isinstance(flags, Err):
        return flags

    for path in sorted(table.versioned):
        try:
            text = (root / path).read_text(encoding="utf-8", errors="replace")
        except OSError:
            return Err(FileNotFound(path=path))
        if not has_version_line(text):
            return Err(VersionPatternMissing(path=path))

    if table.bump is not None and any(c.isspace() for c in table.bump):
        return Err(InvalidBumpValue(value=table.bump))

    return Ok(None)
