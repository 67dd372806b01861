"""Git repository abstraction.

This module provides the Repository class used by the release committer.
All operations return Result types for proper error handling.

Usage:
    repo = Repository(Path("/path/to/checkout"))

    match repo.commit("Releasing v1.2.3"):
        case Ok(_):
            print("committed")
        case Err(e):
            print(f"{e.command} failed: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relbump.core.result import Err, Ok, Result
from relbump.platform.process import ProcessError
from relbump.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0
_NETWORK_COMMANDS = frozenset({"fetch", "pull", "push", "clone", "ls-remote"})

__all__ = [
    "GitError",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """Git checkout that a release is committed into.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        """Check if this is a valid git repository (.git dir or file)."""
        return (self.path / ".git").exists()

    def pull(self, remote: str, branch: str) -> Result[str, GitError]:
        """Pull ``branch`` from ``remote`` into the current branch."""
        return self._git("pull", ["pull", remote, branch])

    def set_config(self, key: str, value: str) -> Result[None, GitError]:
        """Set a repository-local config value."""
        return self._git("config", ["config", key, value]).map(lambda _: None)

    def head_sha(self) -> str | None:
        """Full SHA of HEAD, None if unborn or on error."""
        result = self._run(["rev-parse", "HEAD"])
        match result:
            case Ok(stdout):
                return stdout.strip() or None
            case Err(_):
                return None

    def tag_exists(self, tag: str) -> bool:
        """Check whether a local tag ref exists."""
        result = self._run(["rev-parse", "-q", "--verify", f"refs/tags/{tag}"])
        return isinstance(result, Ok)

    def remote_tag_exists(self, remote: str, tag: str) -> Result[bool, GitError]:
        """Check whether ``remote`` advertises the tag."""
        result = self._git("ls-remote", ["ls-remote", "--tags", remote, f"refs/tags/{tag}"])
        if isinstance(result, Err):
            return result
        return Ok(bool(result.value.strip()))

    def delete_tag(self, tag: str) -> Result[None, GitError]:
        """Delete a local tag. Fails if the tag does not exist."""
        return self._git("tag -d", ["tag", "-d", tag]).map(lambda _: None)

    def delete_remote_tag(self, remote: str, tag: str) -> Result[None, GitError]:
        """Delete a tag on ``remote``. Fails if the remote has no such tag."""
        return self._git("push --delete", ["push", remote, "--delete", f"refs/tags/{tag}"]).map(
            lambda _: None
        )

    def add_all(self) -> Result[None, GitError]:
        """Stage every working-tree change, including deletions."""
        return self._git("add", ["add", "-A"]).map(lambda _: None)

    def commit(self, message: str) -> Result[None, GitError]:
        return self._git("commit", ["commit", "-m", message]).map(lambda _: None)

    def create_tag(self, tag: str, message: str | None = None) -> Result[None, GitError]:
        """Tag HEAD.

        Args:
            tag: Tag name
            message: Annotation message; None creates a lightweight tag
        """
        if message is None:
            args = ["tag", tag]
        else:
            args = ["tag", "-a", tag, "-m", message]
        return self._git("tag", args).map(lambda _: None)

    def push(self, remote: str, refspec: str) -> Result[None, GitError]:
        """Push a single refspec, e.g. ``HEAD:main`` or ``refs/tags/v1.2.3``."""
        return self._git("push", ["push", remote, refspec]).map(lambda _: None)

    def _git(self, label: str, args: list[str]) -> Result[str, GitError]:
        """Run git and convert a process failure into a GitError."""
        result = self._run(args)
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command=label,
                        message=e.stderr.strip() or e.stdout.strip() or f"git {label} failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok(stdout)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = (
            _GIT_NETWORK_TIMEOUT_SECONDS if command in _NETWORK_COMMANDS else _GIT_TIMEOUT_SECONDS
        )
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)
