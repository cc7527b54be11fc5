"""Stage the release tree ``<project>-<tag>/``.

Staging copies every input file, stamps the tag into versioned copies and
renders each doc copy to ``<stem>.html`` and plain-text ``<stem>``. The
source tree is never modified. Archiving and publishing the staged tree is
left to the CI workflow.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.output.console import ConsoleProtocol, Style
from relkit.platform.files import atomic_write_text, read_text
from relkit.release.check import split_ext
from relkit.release.errors import ReleaseError
from relkit.release.inputs import InputTable
from relkit.release.pandoc import Renderer, markup_format
from relkit.release.version import set_version

__all__ = ["StagedRelease", "release_name", "stage_release"]


@dataclass(frozen=True, slots=True)
class StagedRelease:
    path: Path
    name: str
    files: tuple[str, ...]
    rendered: tuple[str, ...]


def release_name(project: str, tag: str) -> str:
    return f"{project}-{tag}"


def _copy_files(root: Path, dest: Path, paths: tuple[str, ...]) -> Result[None, ReleaseError]:
    for rel in paths:
        target = dest / rel
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(root / rel, target)
        except OSError as e:
            return Err(ReleaseError(kind="io_failed", message=f"failed to copy {rel}: {e}"))
    return Ok(None)


def _render_doc(
    dest: Path,
    doc: str,
    *,
    name: str,
    toc: bool,
    renderer: Renderer,
) -> Result[tuple[str, ...], ReleaseError]:
    stem, ext = split_ext(doc)
    fmt = markup_format(ext)
    try:
        text = read_text(dest / doc)
    except (OSError, UnicodeDecodeError) as e:
        return Err(ReleaseError(kind="io_failed", message=f"failed to read {doc}: {e}"))

    outputs = (
        (f"{stem}.html", dict(dst="html", standalone=True, toc=toc, title=f"{name} :: {stem}")),
        (stem, dict(dst="plain")),
    )
    written: list[str] = []
    for rel, options in outputs:
        rendered = renderer.convert(text, src=fmt, **options)
        if isinstance(rendered, Err):
            return Err(
                ReleaseError(
                    kind="render_failed",
                    message=f"{rendered.error.message} ({doc})",
                    hint=rendered.error.hint,
                )
            )
        try:
            atomic_write_text(dest / rel, rendered.value)
        except OSError as e:
            return Err(ReleaseError(kind="io_failed", message=f"failed to write {rel}: {e}"))
        written.append(rel)
    return Ok(tuple(written))


def stage_release(
    *,
    root: Path,
    table: InputTable,
    tag: str,
    project: str,
    out_dir: Path,
    renderer: Renderer,
    console: ConsoleProtocol,
) -> Result[StagedRelease, ReleaseError]:
    """Build ``out_dir/<project>-<tag>`` from a checked input table.

    The target directory must not exist yet.
    """
    name = release_name(project, tag)
    dest = out_dir / name
    if dest.exists():
        return Err(
            ReleaseError(
                kind="dist_exists",
                message=f"release directory already exists: {dest}",
                hint="remove it or choose another --out",
            )
        )
    try:
        dest.mkdir(parents=True)
    except OSError as e:
        return Err(ReleaseError(kind="io_failed", message=f"failed to create {dest}: {e}"))

    files = tuple(e.path for e in table.entries)
    copied = _copy_files(root, dest, files)
    if isinstance(copied, Err):
        return copied
    for rel in files:
        console.print(f"  {rel}", Style.DIM)

    stamped = set_version(dest, table.versioned, tag)
    if isinstance(stamped, Err):
        return Err(
            ReleaseError(
                kind="io_failed",
                message=f"failed to set version in {stamped.error.path}: {stamped.error.message}",
            )
        )
    for rel in stamped.value:
        console.info(f"{rel}: version set to {tag}")

    rendered: list[str] = []
    for doc in sorted(table.docs):
        result = _render_doc(dest, doc, name=name, toc=doc in table.toc, renderer=renderer)
        if isinstance(result, Err):
            return result
        rendered.extend(result.value)
        console.info(f"{doc}: rendered {', '.join(result.value)}")

    return Ok(StagedRelease(path=dest, name=name, files=files, rendered=tuple(rendered)))
