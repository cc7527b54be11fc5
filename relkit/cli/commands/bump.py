from __future__ import annotations

from pathlib import Path

import typer

from relkit.cli.commands._helpers import (
    BUMP_OPTION,
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
from relkit.git.repository import Repository
from relkit.output.console import Style
from relkit.release.bump import bump_dev_version


def bump(
    tag: str = typer.Option(..., "--tag", help="Tag that was just released"),
    bump: str | None = BUMP_OPTION,
    files: str = FILES_OPTION,
    files_from: Path | None = FILES_FROM_OPTION,
    root: Path = ROOT_OPTION,
    no_default_files: bool = NO_DEFAULTS_OPTION,
) -> None:
    """Commit and push the post-release development version."""
    ctx = build_context(root)
    table = load_checked_table(
        ctx,
        files=files,
        files_from=files_from,
        bump=bump,
        no_default_files=no_default_files,
    )
    if table.bump is None:
        ctx.console.print("nothing to bump", Style.DIM)
        return

    bumped = bump_dev_version(
        root=ctx.root,
        table=table,
        tag=tag,
        config=ctx.config,
        repo=Repository(ctx.root),
    )
    code = release_error_code(bumped.error) if isinstance(bumped, Err) else ErrorCode.OK
    result = exit_on_error(bumped, ctx, code)
    if result.committed:
        ctx.console.success(f"{result.version}: committed {', '.join(result.committed)}")
    else:
        ctx.console.print(f"{result.version}: no changes", Style.DIM)
