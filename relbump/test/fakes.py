"""Test doubles shared across the suite."""

from __future__ import annotations

from dataclasses import dataclass, field

from relbump.core.result import Err, Ok, Result
from relbump.git.repository import GitError


@dataclass
class FakeRepository:
    """In-memory stand-in for relbump.git.Repository.

    Records every mutating call in ``calls`` and fails the operation named in
    ``fail_on`` (keyed by method name).
    """

    local_tags: set[str] = field(default_factory=set)
    remote_tags: set[str] = field(default_factory=set)
    fail_on: dict[str, str] = field(default_factory=dict)
    calls: list[tuple[str, ...]] = field(default_factory=list)
    remote_lookups: int = 0

    def _check(self, op: str, *args: str) -> Result[None, GitError]:
        self.calls.append((op, *args))
        if op in self.fail_on:
            return Err(GitError(command=op, message=self.fail_on[op]))
        return Ok(None)

    def exists(self) -> bool:
        return True

    def head_sha(self) -> str | None:
        return "0123456789abcdef"

    def pull(self, remote: str, branch: str) -> Result[str, GitError]:
        checked = self._check("pull", remote, branch)
        if isinstance(checked, Err):
            return checked
        return Ok("Already up to date.")

    def set_config(self, key: str, value: str) -> Result[None, GitError]:
        return self._check("config", key, value)

    def tag_exists(self, tag: str) -> bool:
        return tag in self.local_tags

    def remote_tag_exists(self, remote: str, tag: str) -> Result[bool, GitError]:
        self.remote_lookups += 1
        if "ls-remote" in self.fail_on:
            return Err(GitError(command="ls-remote", message=self.fail_on["ls-remote"]))
        return Ok(tag in self.remote_tags)

    def delete_tag(self, tag: str) -> Result[None, GitError]:
        result = self._check("delete_tag", tag)
        if isinstance(result, Ok):
            self.local_tags.discard(tag)
        return result

    def delete_remote_tag(self, remote: str, tag: str) -> Result[None, GitError]:
        result = self._check("delete_remote_tag", remote, tag)
        if isinstance(result, Ok):
            self.remote_tags.discard(tag)
        return result

    def add_all(self) -> Result[None, GitError]:
        return self._check("add_all")

    def commit(self, message: str) -> Result[None, GitError]:
        return self._check("commit", message)

    def create_tag(self, tag: str, message: str | None = None) -> Result[None, GitError]:
        result = self._check("create_tag", tag, message or "")
        if isinstance(result, Ok):
            self.local_tags.add(tag)
        return result

    def push(self, remote: str, refspec: str) -> Result[None, GitError]:
        return self._check("push", remote, refspec)

    @property
    def ops(self) -> list[str]:
        return [c[0] for c in self.calls]
