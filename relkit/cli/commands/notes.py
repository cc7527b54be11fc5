from __future__ import annotations

from pathlib import Path

import typer

from relkit.cli.commands._helpers import ROOT_OPTION, exit_on_error, render_error_code
from relkit.cli.context import build_context
from relkit.core.errors import ErrorCode
from relkit.core.result import Err
from relkit.release.changelog import CHANGELOGS, release_notes
from relkit.release.pandoc import PandocRenderer, ensure_pandoc


def notes(
    tag: str = typer.Option(..., "--tag", help="Release tag to look up in the changelog"),
    out: Path | None = typer.Option(None, "--out", help="Write notes here instead of stdout"),
    root: Path = ROOT_OPTION,
) -> None:
    """Print the changelog section for a release tag."""
    ctx = build_context(root)
    # org changelogs are converted to markdown by pandoc
    if any(fmt.reader and (ctx.root / fmt.filename).is_file() for fmt in CHANGELOGS):
        exit_on_error(ensure_pandoc(), ctx, ErrorCode.ENV_ERROR)

    result = release_notes(ctx.root, tag=tag, renderer=PandocRenderer(cwd=ctx.root))
    if isinstance(result, Err):
        exit_on_error(result, ctx, render_error_code(result.error))
    text = result.value

    if not text:
        ctx.console.warning(f"no changelog section for {tag}")

    if out is None:
        typer.echo(text, nl=False)
        return

    try:
        out.write_text(text, encoding="utf-8")
    except OSError as e:
        ctx.console.error(f"failed to write notes: {e}")
        raise typer.Exit(code=int(ErrorCode.IO_ERROR))
    ctx.console.success(str(out))
