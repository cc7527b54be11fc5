"""Markup conversion through pandoc.

Documents and changelog excerpts are rendered by piping text through the
``pandoc`` executable. Callers depend on the ``Renderer`` protocol so tests
can substitute a fake.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Protocol

from relkit.core.result import Err, Ok, Result
from relkit.platform.process import run as run_process
from relkit.platform.process import which

__all__ = [
    "PandocRenderer",
    "RenderError",
    "Renderer",
    "ensure_pandoc",
    "markup_format",
]

PANDOC_TIMEOUT_SECONDS = 120.0

# Source extension -> pandoc reader.
_FORMATS = {"org": "org", "md": "gfm"}


@dataclass(frozen=True, slots=True)
class RenderError:
    kind: Literal["pandoc_missing", "convert_failed", "read_failed"]
    message: str
    hint: str | None = None


class Renderer(Protocol):
    def convert(
        self,
        text: str,
        *,
        src: str,
        dst: str,
        standalone: bool = False,
        toc: bool = False,
        title: str | None = None,
    ) -> Result[str, RenderError]: ...


def markup_format(ext: str) -> str:
    """Pandoc reader name for a doc file extension (``org`` or ``md``)."""
    return _FORMATS[ext]


def ensure_pandoc() -> Result[None, RenderError]:
    if which("pandoc") is None:
        return Err(
            RenderError(
                kind="pandoc_missing",
                message="pandoc: missing",
                hint="Install pandoc: https://pandoc.org/installing.html",
            )
        )
    return Ok(None)


@dataclass(frozen=True, slots=True)
class PandocRenderer:
    """Renderer that shells out to ``pandoc`` in ``cwd``."""

    cwd: Path
    timeout: float = PANDOC_TIMEOUT_SECONDS

    def convert(
        self,
        text: str,
        *,
        src: str,
        dst: str,
        standalone: bool = False,
        toc: bool = False,
        title: str | None = None,
    ) -> Result[str, RenderError]:
        cmd = ["pandoc", "-f", src, "-t", dst]
        if standalone:
            cmd.append("-s")
        if toc:
            cmd.append("--toc")
        if title is not None:
            cmd += ["--metadata", f"pagetitle={title}"]

        result = run_process(cmd, cwd=self.cwd, input=text, timeout=self.timeout)
        if isinstance(result, Err):
            return Err(
                RenderError(
                    kind="convert_failed",
                    message=f"pandoc {src} -> {dst} failed",
                    hint=result.error.stderr.strip() or None,
                )
            )
        return Ok(result.value)
