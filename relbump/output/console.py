"""Console output abstraction.

The release pipeline reports progress through ConsoleProtocol and never
branches on what the console does with it. Implementations:
- RichConsole: styled output for a local terminal
- ActionsConsole: GitHub Actions workflow commands and step outputs
- MockConsole: captures output for tests
"""

from __future__ import annotations

import os
import sys
import uuid
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Protocol, TextIO

__all__ = [
    "Style",
    "ConsoleProtocol",
    "ActionsConsole",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()
    HEADER = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Observer for release progress.

    ``group`` scopes a block of messages (a collapsible log group on CI).
    ``set_output`` publishes a named result for the invoking workflow.
    """

    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...

    def group(self, title: str) -> AbstractContextManager[None]: ...

    def set_output(self, name: str, value: str) -> None: ...


class RichConsole:
    """Console implementation using Rich library."""

    def __init__(self) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._console = Console()
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow",
            Style.INFO: "cyan",
            Style.DIM: "dim",
            Style.HEADER: "blue bold",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = self._style_map.get(style, "")
        if rich_style:
            self._console.print(message, style=rich_style, markup=False)
        else:
            self._console.print(message, markup=False)

    def success(self, message: str) -> None:
        self._console.print(f"[green]OK[/green] {_escape(message)}")

    def error(self, message: str) -> None:
        self._console.print(f"[red bold]error:[/red bold] {_escape(message)}")

    def warning(self, message: str) -> None:
        self._console.print(f"[yellow]warning:[/yellow] {_escape(message)}")

    def info(self, message: str) -> None:
        self._console.print(f"[cyan]info:[/cyan] {_escape(message)}")

    def header(self, message: str) -> None:
        self._console.print(f"\n[blue bold]{_escape(message)}[/blue bold]")

    @contextmanager
    def group(self, title: str) -> Iterator[None]:
        from rich.rule import Rule

        self._console.print(Rule(title, style="blue", align="left"))
        yield

    def set_output(self, name: str, value: str) -> None:
        self._console.print(f"[dim]output {_escape(name)}:[/dim]")
        self._console.print(value, markup=False)


def _escape(text: str) -> str:
    from rich.markup import escape

    return escape(text)


def _escape_command_data(text: str) -> str:
    """Escape a workflow command payload (``::error::<data>``)."""
    return text.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ActionsConsole:
    """Console speaking the GitHub Actions workflow-command protocol.

    Step outputs are appended to the file named by ``$GITHUB_OUTPUT`` using the
    multi-line ``name<<delimiter`` form. Without that variable the same block
    is written to the stream.
    """

    def __init__(self, stream: TextIO | None = None, output_path: Path | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout
        if output_path is None:
            env_path = os.environ.get("GITHUB_OUTPUT")
            output_path = Path(env_path) if env_path else None
        self._output_path = output_path

    def _emit(self, line: str) -> None:
        self._stream.write(line + "\n")
        self._stream.flush()

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._emit(message)

    def success(self, message: str) -> None:
        self._emit(f"OK {message}")

    def error(self, message: str) -> None:
        self._emit(f"::error::{_escape_command_data(message)}")

    def warning(self, message: str) -> None:
        self._emit(f"::warning::{_escape_command_data(message)}")

    def info(self, message: str) -> None:
        self._emit(message)

    def header(self, message: str) -> None:
        self._emit("")
        self._emit(message)

    @contextmanager
    def group(self, title: str) -> Iterator[None]:
        self._emit(f"::group::{title}")
        try:
            yield
        finally:
            self._emit("::endgroup::")

    def set_output(self, name: str, value: str) -> None:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        block = f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
        if self._output_path is None:
            self._stream.write(block)
            self._stream.flush()
            return

        with self._output_path.open("a", encoding="utf-8") as handle:
            handle.write(block)


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


def _empty_step_outputs() -> dict[str, str]:
    return {}


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)
    step_outputs: dict[str, str] = field(default_factory=_empty_step_outputs)
    open_groups: int = 0

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"info: {message}", Style.INFO))

    def header(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    @contextmanager
    def group(self, title: str) -> Iterator[None]:
        self.outputs.append(OutputRecord(f"[{title}]", Style.HEADER))
        self.open_groups += 1
        try:
            yield
        finally:
            self.open_groups -= 1
            self.outputs.append(OutputRecord(f"[/{title}]", Style.HEADER))

    def set_output(self, name: str, value: str) -> None:
        self.step_outputs[name] = value

    # Test helper methods

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_warning(self) -> bool:
        return any(o.style == Style.WARNING for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]
