from __future__ import annotations

from pathlib import Path

import typer

from relbump.cli.context import build_context, exit_with
from relbump.core.config import ReleaseInputs
from relbump.core.result import Err
from relbump.output.console import Style
from relbump.release.errors import release_error_code
from relbump.release.pipeline import run_release


def preview(
    version: str = typer.Option(..., "--version", help="Release tag, e.g. v1.2.3."),
    changelog: str = typer.Option(..., "--changelog", help="Changelog excerpt."),
    root: Path = typer.Option(Path("."), "--root", help="Repository checkout."),
    config: Path | None = typer.Option(None, "--config", help="Settings file."),
) -> None:
    """Show the cleaned excerpt and the spliced changelog without touching anything."""
    ctx = build_context(root=root, config=config, github_actions=False)
    console = ctx.console

    result = run_release(
        ReleaseInputs(version=version, changelog=changelog),
        ctx.settings,
        root=ctx.root,
        repo=ctx.repo,
        console=console,
        dry_run=True,
    )
    if isinstance(result, Err):
        err = result.error
        exit_with(err.pretty(), code=release_error_code(err.kind), console=console)

    plan = result.value.plan
    console.header("Excerpt")
    console.print(plan.excerpt)
    for planned in plan.files:
        console.header(planned.path.name)
        console.print(planned.content, Style.DIM)
