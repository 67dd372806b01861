from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from relbump.core.errors import ErrorCode

ReleaseErrorKind = Literal[
    "invalid_input",
    "io_error",
    "parse_error",
    "git_failed",
    "tag_not_found",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message


def release_error_code(kind: ReleaseErrorKind) -> ErrorCode:
    if kind in {"git_failed", "tag_not_found"}:
        return ErrorCode.GIT_ERROR
    if kind in {"io_error", "parse_error"}:
        return ErrorCode.IO_ERROR
    return ErrorCode.USER_ERROR
