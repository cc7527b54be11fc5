from __future__ import annotations

import typer

from relkit import __version__
from relkit.cli.commands.bump import bump
from relkit.cli.commands.check import check
from relkit.cli.commands.notes import notes
from relkit.cli.commands.stage import stage

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command()(check)
app.command()(stage)
app.command()(notes)
app.command()(bump)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_print_version,
        is_eager=True,
    ),
) -> None:
    """Release packaging helpers for CI."""


def main() -> None:
    app()
