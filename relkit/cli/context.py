from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from relkit.core.config import ReleaseConfig, load_config
from relkit.core.errors import ErrorCode
from relkit.core.result import Err
from relkit.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: ReleaseConfig
    console: ConsoleProtocol


def build_context(root: Path) -> CLIContext:
    console = RichConsole()
    try:
        resolved = root.expanduser().resolve()
    except OSError as e:
        console.error(f"invalid --root: {e}")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if not resolved.is_dir():
        console.error(f"--root '{resolved}' is not a directory")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    config_result = load_config(resolved)
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(root=resolved, config=config_result.value, console=console)
