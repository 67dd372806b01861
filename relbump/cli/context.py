from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

import typer

from relbump.core.config import CONFIG_FILE_NAME, ReleaseSettings, load_settings
from relbump.core.errors import ErrorCode
from relbump.core.result import Err
from relbump.git.repository import Repository
from relbump.output.console import ActionsConsole, ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    settings: ReleaseSettings
    repo: Repository
    console: ConsoleProtocol


def exit_with(message: str, *, code: ErrorCode, console: ConsoleProtocol) -> NoReturn:
    console.error(message)
    raise typer.Exit(code=int(code))


def build_context(*, root: Path, config: Path | None, github_actions: bool) -> CLIContext:
    console: ConsoleProtocol = ActionsConsole() if github_actions else RichConsole()

    try:
        resolved = root.expanduser().resolve()
    except OSError as e:
        exit_with(f"invalid --root: {e}", code=ErrorCode.USER_ERROR, console=console)
    if not resolved.is_dir():
        exit_with(
            f"--root '{resolved}' is not a directory",
            code=ErrorCode.USER_ERROR,
            console=console,
        )

    config_path = config if config is not None else resolved / CONFIG_FILE_NAME
    settings = load_settings(config_path, required=config is not None)
    if isinstance(settings, Err):
        exit_with(settings.error.message, code=ErrorCode.USER_ERROR, console=console)

    return CLIContext(
        root=resolved,
        settings=settings.value,
        repo=Repository(resolved),
        console=console,
    )
