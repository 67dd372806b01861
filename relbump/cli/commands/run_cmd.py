from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import typer

from relbump.cli.context import build_context, exit_with
from relbump.core.config import ReleaseInputs
from relbump.core.errors import ErrorCode
from relbump.core.result import Err
from relbump.release.errors import release_error_code
from relbump.release.pipeline import run_release


def run(
    version: str = typer.Option(
        "",
        "--version",
        envvar="INPUT_VERSION",
        show_envvar=True,
        help="Release tag, e.g. v1.2.3 or refs/tags/v1.2.3.",
    ),
    changelog: str = typer.Option(
        "",
        "--changelog",
        envvar="INPUT_CHANGELOG",
        show_envvar=True,
        help="Changelog excerpt for this release.",
    ),
    root: Path = typer.Option(Path("."), "--root", help="Repository checkout to release."),
    config: Path | None = typer.Option(
        None, "--config", help="Settings file (default: <root>/relbump.toml if present)."
    ),
    strict_tags: bool = typer.Option(
        False, "--strict-tags", help="Fail when the temporary tag is already gone."
    ),
    no_pull: bool = typer.Option(False, "--no-pull", help="Skip pulling before the bump."),
    no_push: bool = typer.Option(False, "--no-push", help="Commit and tag locally only."),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Compute the release without writing or running git."
    ),
    github_actions: bool = typer.Option(
        False,
        "--github-actions",
        envvar="GITHUB_ACTIONS",
        help="Emit workflow commands and write step outputs.",
    ),
) -> None:
    """Bump versions, update the changelog, then commit, tag and push."""
    ctx = build_context(root=root, config=config, github_actions=github_actions)
    console = ctx.console

    git = ctx.settings.git
    if strict_tags:
        git = replace(git, tag_policy="strict")
    if no_pull:
        git = replace(git, pull=False)
    if no_push:
        git = replace(git, push=False)
    settings = replace(ctx.settings, git=git)

    if not dry_run and not ctx.repo.exists():
        exit_with(f"not a git repository: {ctx.root}", code=ErrorCode.ENV_ERROR, console=console)

    result = run_release(
        ReleaseInputs(version=version, changelog=changelog),
        settings,
        root=ctx.root,
        repo=ctx.repo,
        console=console,
        dry_run=dry_run,
    )
    if isinstance(result, Err):
        err = result.error
        exit_with(err.pretty(), code=release_error_code(err.kind), console=console)

    outcome = result.value
    if dry_run:
        console.success(f"Dry run for {outcome.plan.version.raw}: nothing written")
        return
    sha = ctx.repo.head_sha()
    at = f" at {sha[:7]}" if sha else ""
    console.success(f"Released {outcome.plan.version.raw}{at} ({outcome.state})")
