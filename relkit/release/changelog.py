"""Release notes from the project changelog.

The changelog is ``CHANGELOG.org`` or ``CHANGELOG.md``, newest release
first. When the topmost heading mentions the release tag, the text between
it and the next top-level heading becomes the release notes. Org text is
converted to GitHub markdown; markdown is passed through with leading blank
lines removed.

The tag is matched as a plain substring of the heading, so ``v1.2`` also
matches a heading for ``v1.2.3``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.platform.files import read_text
from relkit.release.pandoc import Renderer, RenderError

__all__ = [
    "CHANGELOGS",
    "ChangelogFormat",
    "Heading",
    "extract_section",
    "find_headings",
    "release_notes",
    "section_range",
    "strip_leading_blank_lines",
]


@dataclass(frozen=True, slots=True)
class ChangelogFormat:
    filename: str
    marker: str
    # Pandoc reader used to convert the section to gfm; None keeps it as is.
    reader: str | None


CHANGELOGS = (
    ChangelogFormat(filename="CHANGELOG.org", marker="*", reader="org"),
    ChangelogFormat(filename="CHANGELOG.md", marker="#", reader=None),
)


@dataclass(frozen=True, slots=True)
class Heading:
    line: int  # 1-based
    text: str


def find_headings(lines: list[str], marker: str, *, limit: int = 2) -> list[Heading]:
    """First ``limit`` top-level headings (``<marker> `` at column 0)."""
    prefix = f"{marker} "
    found: list[Heading] = []
    for number, line in enumerate(lines, start=1):
        if line.startswith(prefix):
            found.append(Heading(line=number, text=line.rstrip("\r\n")))
            if len(found) == limit:
                break
    return found


def section_range(headings: list[Heading], line_count: int) -> tuple[int, int]:
    """Inclusive 1-based line range of the body under ``headings[0]``."""
    start = headings[0].line + 1
    end = headings[1].line - 1 if len(headings) > 1 else line_count
    return start, end


def extract_section(text: str, *, tag: str, marker: str) -> str | None:
    """Body of the topmost section if its heading contains ``tag``.

    Returns None when there is no heading or the topmost one does not
    mention the tag.
    """
    lines = text.splitlines(keepends=True)
    headings = find_headings(lines, marker)
    if not headings or tag not in headings[0].text:
        return None

    start, end = section_range(headings, len(lines))
    return "".join(lines[start - 1 : end])


def strip_leading_blank_lines(text: str) -> str:
    lines = text.splitlines(keepends=True)
    index = 0
    while index < len(lines) and not lines[index].strip():
        index += 1
    return "".join(lines[index:])


def _notes_from(
    fmt: ChangelogFormat, text: str, *, tag: str, renderer: Renderer
) -> Result[str, RenderError] | None:
    section = extract_section(text, tag=tag, marker=fmt.marker)
    if section is None:
        return None
    if fmt.reader is None:
        return Ok(strip_leading_blank_lines(section))
    return renderer.convert(section, src=fmt.reader, dst="gfm")


def release_notes(root: Path, *, tag: str, renderer: Renderer) -> Result[str, RenderError]:
    """Release notes for ``tag``.

    Changelogs are tried in ``CHANGELOGS`` order and the first one whose
    topmost heading mentions the tag wins.

    Returns:
        Ok(notes), Ok("") when no changelog matches, or Err when converting
        org text fails.
    """
    for fmt in CHANGELOGS:
        path = root / fmt.filename
        if not path.is_file():
            continue
        try:
            text = read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            return Err(
                RenderError(kind="read_failed", message=f"failed to read {fmt.filename}: {e}")
            )
        notes = _notes_from(fmt, text, tag=tag, renderer=renderer)
        if notes is not None:
            return notes
    return Ok("")
