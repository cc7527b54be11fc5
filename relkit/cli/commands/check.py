from __future__ import annotations

from pathlib import Path

from relkit.cli.commands._helpers import (
    BUMP_OPTION,
    FILES_FROM_OPTION,
    FILES_OPTION,
    NO_DEFAULTS_OPTION,
    ROOT_OPTION,
    load_checked_table,
)
from relkit.cli.context import build_context
from relkit.output.console import Style


def check(
    files: str = FILES_OPTION,
    files_from: Path | None = FILES_FROM_OPTION,
    bump: str | None = BUMP_OPTION,
    root: Path = ROOT_OPTION,
    no_default_files: bool = NO_DEFAULTS_OPTION,
) -> None:
    """Validate the input file list without touching anything."""
    ctx = build_context(root)
    table = load_checked_table(
        ctx,
        files=files,
        files_from=files_from,
        bump=bump,
        no_default_files=no_default_files,
    )

    ctx.console.header("Input files")
    for entry in table.entries:
        flags = " ".join(sorted(str(f) for f in entry.flags))
        ctx.console.print(f"{entry.path}  {flags}".rstrip(), Style.DEFAULT)
    if table.bump is not None:
        ctx.console.print(f"bump: {table.bump}", Style.DIM)
    ctx.console.success(f"{len(table.entries)} file(s) ok")
