"""Commit, tag and push a release.

The committer walks a fixed sequence of states:

    UNCONFIGURED -> CONFIGURED -> TAG_DELETED -> STAGED -> COMMITTED
                 -> TAGGED -> PUSHED

The release trigger creates a temporary tag before this step runs. It is
deleted (locally and on the remote) before the release commit exists so the
real tag can be created on that commit without a duplicate-tag conflict.
Any git failure moves to FAILED and stops; nothing is rolled back.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from relbump.core.config import GitSettings
from relbump.core.result import Err, Ok, Result
from relbump.git.repository import GitError
from relbump.output.console import ConsoleProtocol
from relbump.release.errors import ReleaseError
from relbump.release.plan import ReleasePlan


class CommitState(Enum):
    UNCONFIGURED = "unconfigured"
    CONFIGURED = "configured"
    TAG_DELETED = "tag_deleted"
    STAGED = "staged"
    COMMITTED = "committed"
    TAGGED = "tagged"
    PUSHED = "pushed"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value


class ReleaseRepository(Protocol):
    """Git operations the release pipeline needs."""

    def pull(self, remote: str, branch: str) -> Result[str, GitError]: ...

    def set_config(self, key: str, value: str) -> Result[None, GitError]: ...

    def tag_exists(self, tag: str) -> bool: ...

    def remote_tag_exists(self, remote: str, tag: str) -> Result[bool, GitError]: ...

    def delete_tag(self, tag: str) -> Result[None, GitError]: ...

    def delete_remote_tag(self, remote: str, tag: str) -> Result[None, GitError]: ...

    def add_all(self) -> Result[None, GitError]: ...

    def commit(self, message: str) -> Result[None, GitError]: ...

    def create_tag(self, tag: str, message: str | None = None) -> Result[None, GitError]: ...

    def push(self, remote: str, refspec: str) -> Result[None, GitError]: ...


@dataclass(frozen=True, slots=True)
class TagPresence:
    local: bool
    remote: bool


def git_failure(e: GitError) -> ReleaseError:
    return ReleaseError(kind="git_failed", message=f"git {e.command} failed: {e.message}")


class ReleaseCommitter:
    """Runs the git half of a release against one repository."""

    def __init__(
        self,
        repo: ReleaseRepository,
        settings: GitSettings,
        console: ConsoleProtocol,
    ) -> None:
        self.repo = repo
        self.settings = settings
        self.console = console
        self.state = CommitState.UNCONFIGURED
        self._presence: TagPresence | None = None

    def probe_tag(self, tag: str) -> Result[TagPresence, ReleaseError]:
        """Find where the temporary tag exists.

        Under the strict policy a tag missing in either place is an error, so
        callers can reject a run before writing any file.
        """
        remote = self.repo.remote_tag_exists(self.settings.remote, tag)
        if isinstance(remote, Err):
            return Err(git_failure(remote.error))

        presence = TagPresence(local=self.repo.tag_exists(tag), remote=remote.value)
        if self.settings.tag_policy == "strict":
            missing: list[str] = []
            if not presence.local:
                missing.append("locally")
            if not presence.remote:
                missing.append("on the remote")
            if missing:
                return Err(
                    ReleaseError(
                        kind="tag_not_found",
                        message=f"tag {tag} not found {' or '.join(missing)}",
                        hint="set git.tag_policy = \"tolerant\" to allow re-runs",
                    )
                )
        return Ok(presence)

    def run(
        self, plan: ReleasePlan, presence: TagPresence | None = None
    ) -> Result[CommitState, ReleaseError]:
        """Drive the state machine to PUSHED (or TAGGED when push is off).

        ``presence`` is the result of an earlier ``probe_tag``; without it the
        tag is probed when the delete step runs.
        """
        self._presence = presence
        steps = (
            self._configure,
            self._delete_tag,
            self._stage,
            self._commit,
            self._tag,
            self._push,
        )
        for step in steps:
            result = step(plan)
            if isinstance(result, Err):
                failed_after = self.state
                self.state = CommitState.FAILED
                err = result.error
                return Err(
                    ReleaseError(
                        kind=err.kind,
                        message=err.message,
                        hint=err.hint or f"last completed step: {failed_after}",
                    )
                )
        return Ok(self.state)

    def _advance(
        self, result: Result[None, GitError], state: CommitState
    ) -> Result[None, ReleaseError]:
        if isinstance(result, Err):
            return Err(git_failure(result.error))
        self.state = state
        return Ok(None)

    def _configure(self, plan: ReleasePlan) -> Result[None, ReleaseError]:
        email = self.repo.set_config("user.email", self.settings.user_email)
        if isinstance(email, Err):
            return Err(git_failure(email.error))
        name = self.repo.set_config("user.name", self.settings.user_name)
        result = self._advance(name, CommitState.CONFIGURED)
        if isinstance(result, Ok):
            self.console.info("Git configured")
        return result

    def _delete_tag(self, plan: ReleasePlan) -> Result[None, ReleaseError]:
        tag = plan.version.tag
        presence = self._presence
        if presence is None:
            probed = self.probe_tag(tag)
            if isinstance(probed, Err):
                return probed
            presence = probed.value

        if presence.local:
            deleted = self.repo.delete_tag(tag)
            if isinstance(deleted, Err):
                return Err(git_failure(deleted.error))
        else:
            self.console.warning(f"Local tag {tag} not found, skipping delete")

        if presence.remote:
            deleted = self.repo.delete_remote_tag(self.settings.remote, tag)
            if isinstance(deleted, Err):
                return Err(git_failure(deleted.error))
        else:
            self.console.warning(f"Remote tag {tag} not found, skipping delete")

        self.state = CommitState.TAG_DELETED
        self.console.info("Temp tag deleted")
        return Ok(None)

    def _stage(self, plan: ReleasePlan) -> Result[None, ReleaseError]:
        return self._advance(self.repo.add_all(), CommitState.STAGED)

    def _commit(self, plan: ReleasePlan) -> Result[None, ReleaseError]:
        return self._advance(self.repo.commit(plan.commit_message), CommitState.COMMITTED)

    def _tag(self, plan: ReleasePlan) -> Result[None, ReleaseError]:
        tag = plan.version.tag
        result = self._advance(self.repo.create_tag(tag, tag), CommitState.TAGGED)
        if isinstance(result, Ok):
            self.console.info("Changes committed and tagged")
        return result

    def _push(self, plan: ReleasePlan) -> Result[None, ReleaseError]:
        if not self.settings.push:
            self.console.warning("Push disabled, release commit and tag are local only")
            return Ok(None)

        remote = self.settings.remote
        branch_ref = f"HEAD:{self.settings.branch}"
        pushed = self.repo.push(remote, branch_ref)
        if isinstance(pushed, Err):
            return Err(git_failure(pushed.error))

        result = self._advance(
            self.repo.push(remote, f"refs/tags/{plan.version.tag}"), CommitState.PUSHED
        )
        if isinstance(result, Ok):
            self.console.success(f"Changes pushed to {branch_ref}")
        return result
