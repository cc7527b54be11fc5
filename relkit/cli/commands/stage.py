from __future__ import annotations

from pathlib import Path

import typer

from relkit.cli.commands._helpers import (
    FILES_FROM_OPTION,
    FILES_OPTION,
    NO_DEFAULTS_OPTION,
    ROOT_OPTION,
    exit_on_error,
    load_checked_table,
    release_error_code,
)
from relkit.cli.context import build_context
from relkit.core.errors import ErrorCode
from relkit.core.result import Err
from relkit.release.pandoc import PandocRenderer, ensure_pandoc
from relkit.release.stage import stage_release


def stage(
    tag: str = typer.Option(..., "--tag", help="Release tag, e.g. v1.2.0"),
    project: str = typer.Option(..., "--project", help="Project name used in <project>-<tag>"),
    files: str = FILES_OPTION,
    files_from: Path | None = FILES_FROM_OPTION,
    out: Path | None = typer.Option(
        None, "--out", help="Directory receiving <project>-<tag>/ (default: config out_dir)"
    ),
    root: Path = ROOT_OPTION,
    no_default_files: bool = NO_DEFAULTS_OPTION,
) -> None:
    """Stage the release tree: copy files, stamp the tag, render docs."""
    ctx = build_context(root)
    table = load_checked_table(
        ctx,
        files=files,
        files_from=files_from,
        bump=None,
        no_default_files=no_default_files,
    )
    if table.docs:
        exit_on_error(ensure_pandoc(), ctx, ErrorCode.ENV_ERROR)

    ctx.console.header(f"Staging {project}-{tag}")
    result = stage_release(
        root=ctx.root,
        table=table,
        tag=tag,
        project=project,
        out_dir=ctx.root / (out if out is not None else Path(ctx.config.out_dir)),
        renderer=PandocRenderer(cwd=ctx.root),
        console=ctx.console,
    )
    code = release_error_code(result.error) if isinstance(result, Err) else ErrorCode.OK
    staged = exit_on_error(result, ctx, code)
    ctx.console.success(str(staged.path))
