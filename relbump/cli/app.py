from __future__ import annotations

import typer

from relbump import __version__
from relbump.cli.commands.preview_cmd import preview
from relbump.cli.commands.run_cmd import run

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Bump release versions, splice the changelog, commit/tag/push.",
)

app.command()(run)
app.command()(preview)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)


def main() -> None:
    app()
