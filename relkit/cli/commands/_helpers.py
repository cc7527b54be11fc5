"""Shared helpers for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, NoReturn, TypeVar

import typer

from relkit.core.errors import ErrorCode
from relkit.core.result import Err, Result
from relkit.output.console import Style
from relkit.release.check import check_input
from relkit.release.errors import ReleaseError, describe
from relkit.release.inputs import InputTable, parse_input_files
from relkit.release.pandoc import RenderError

if TYPE_CHECKING:
    from relkit.cli.context import CLIContext

ROOT_OPTION = typer.Option(Path("."), "--root", help="Project root (input paths are relative to it)")
FILES_OPTION = typer.Option(
    "", "--files", help="Input lines: 'path [+ v|doc|toc]...', one per line"
)
FILES_FROM_OPTION = typer.Option(
    None, "--files-from", help="Read input lines from this file (appended to --files)"
)
BUMP_OPTION = typer.Option(
    None, "--bump", help="Post-release suffix appended to the tag, e.g. '+dev'"
)
NO_DEFAULTS_OPTION = typer.Option(
    False, "--no-default-files", help="Do not add configured default files (LICENSE)"
)

T = TypeVar("T")


def exit_with_code(code: ErrorCode) -> NoReturn:
    raise typer.Exit(code=int(code))


def exit_on_error(
    result: Result[T, ReleaseError | RenderError],
    ctx: CLIContext,
    error_code: ErrorCode = ErrorCode.RELEASE_ERROR,
) -> T:
    """Return the Ok value, or print the error and exit with ``error_code``."""
    if isinstance(result, Err):
        error = result.error
        ctx.console.error(error.message)
        if error.hint:
            ctx.console.print(f"hint: {error.hint}", Style.DIM)
        exit_with_code(error_code)
    return result.value


def release_error_code(error: ReleaseError) -> ErrorCode:
    if error.kind in {"dist_exists", "io_failed"}:
        return ErrorCode.IO_ERROR
    return ErrorCode.RELEASE_ERROR


def render_error_code(error: RenderError) -> ErrorCode:
    match error.kind:
        case "pandoc_missing":
            return ErrorCode.ENV_ERROR
        case "read_failed":
            return ErrorCode.IO_ERROR
        case _:
            return ErrorCode.RELEASE_ERROR


def read_input_lines(ctx: CLIContext, files: str, files_from: Path | None) -> str:
    if files_from is None:
        return files
    try:
        extra = files_from.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        ctx.console.error(f"failed to read --files-from: {e}")
        exit_with_code(ErrorCode.IO_ERROR)
    return f"{files}\n{extra}"


def load_checked_table(
    ctx: CLIContext,
    *,
    files: str,
    files_from: Path | None,
    bump: str | None,
    no_default_files: bool,
) -> InputTable:
    """Parse and check the input table, exiting on the first problem."""
    text = read_input_lines(ctx, files, files_from)
    parsed = parse_input_files(
        text,
        root=ctx.root,
        bump=bump,
        default_files=() if no_default_files else ctx.config.default_files,
    )
    if isinstance(parsed, Err):
        ctx.console.error(describe(parsed.error))
        exit_with_code(ErrorCode.USER_ERROR)

    table = parsed.value
    checked = check_input(table, root=ctx.root)
    if isinstance(checked, Err):
        ctx.console.error(describe(checked.error))
        exit_with_code(ErrorCode.USER_ERROR)
    return table
