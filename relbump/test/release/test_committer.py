from __future__ import annotations

import pytest

from relbump.core.config import GitSettings
from relbump.core.result import Err, Ok
from relbump.output.console import MockConsole
from relbump.release.committer import CommitState, ReleaseCommitter, TagPresence
from relbump.release.plan import ReleasePlan
from relbump.release.version import normalize_version
from relbump.test.fakes import FakeRepository


@pytest.fixture
def plan() -> ReleasePlan:
    return ReleasePlan(version=normalize_version("refs/tags/v2.0.1"), excerpt="-   Fix", files=())


def test_runs_operations_in_release_order(
    fake_repo: FakeRepository, console: MockConsole, plan: ReleasePlan
) -> None:
    committer = ReleaseCommitter(fake_repo, GitSettings(), console)

    result = committer.run(plan)

    assert result == Ok(CommitState.PUSHED)
    assert committer.state is CommitState.PUSHED
    assert fake_repo.calls == [
        ("config", "user.email", "action@github.com"),
        ("config", "user.name", "GitHub Action"),
        ("delete_tag", "v2.0.1"),
        ("delete_remote_tag", "origin", "v2.0.1"),
        ("add_all",),
        ("commit", "Releasing v2.0.1"),
        ("create_tag", "v2.0.1", "v2.0.1"),
        ("push", "origin", "HEAD:main"),
        ("push", "origin", "refs/tags/v2.0.1"),
    ]


def test_branch_and_remote_are_configurable(
    fake_repo: FakeRepository, console: MockConsole, plan: ReleasePlan
) -> None:
    fake_repo.remote_tags = {"v2.0.1"}
    settings = GitSettings(remote="upstream", branch="master")
    committer = ReleaseCommitter(fake_repo, settings, console)

    committer.run(plan)

    assert ("push", "upstream", "HEAD:master") in fake_repo.calls
    assert ("push", "upstream", "refs/tags/v2.0.1") in fake_repo.calls


def test_tolerant_policy_skips_missing_tags(
    fake_repo: FakeRepository, console: MockConsole, plan: ReleasePlan
) -> None:
    fake_repo.local_tags.clear()
    fake_repo.remote_tags.clear()
    committer = ReleaseCommitter(fake_repo, GitSettings(tag_policy="tolerant"), console)

    result = committer.run(plan)

    assert isinstance(result, Ok)
    assert "delete_tag" not in fake_repo.ops
    assert "delete_remote_tag" not in fake_repo.ops
    assert console.has_warning()


def test_strict_policy_fails_on_missing_tag(
    fake_repo: FakeRepository, console: MockConsole, plan: ReleasePlan
) -> None:
    fake_repo.remote_tags.clear()
    committer = ReleaseCommitter(fake_repo, GitSettings(tag_policy="strict"), console)

    result = committer.run(plan)

    assert isinstance(result, Err)
    assert result.error.kind == "tag_not_found"
    assert "on the remote" in result.error.message
    assert committer.state is CommitState.FAILED
    assert "commit" not in fake_repo.ops


def test_probe_tag_reports_presence(fake_repo: FakeRepository, console: MockConsole) -> None:
    fake_repo.local_tags.clear()
    committer = ReleaseCommitter(fake_repo, GitSettings(), console)

    result = committer.probe_tag("v2.0.1")

    assert isinstance(result, Ok)
    assert result.value.local is False
    assert result.value.remote is True


def test_failure_stops_the_sequence(
    fake_repo: FakeRepository, console: MockConsole, plan: ReleasePlan
) -> None:
    fake_repo.fail_on["commit"] = "nothing to commit, working tree clean"
    committer = ReleaseCommitter(fake_repo, GitSettings(), console)

    result = committer.run(plan)

    assert isinstance(result, Err)
    assert result.error.kind == "git_failed"
    assert "nothing to commit" in result.error.message
    assert result.error.hint == "last completed step: staged"
    assert "create_tag" not in fake_repo.ops
    assert "push" not in fake_repo.ops


def test_push_failure_after_tag(
    fake_repo: FakeRepository, console: MockConsole, plan: ReleasePlan
) -> None:
    fake_repo.fail_on["push"] = "rejected"
    committer = ReleaseCommitter(fake_repo, GitSettings(), console)

    result = committer.run(plan)

    assert isinstance(result, Err)
    assert result.error.hint == "last completed step: tagged"
    assert fake_repo.ops.count("push") == 1


def test_push_disabled_stops_at_tagged(
    fake_repo: FakeRepository, console: MockConsole, plan: ReleasePlan
) -> None:
    committer = ReleaseCommitter(fake_repo, GitSettings(push=False), console)

    result = committer.run(plan)

    assert result == Ok(CommitState.TAGGED)
    assert "push" not in fake_repo.ops


def test_remote_lookup_failure_is_git_error(
    fake_repo: FakeRepository, console: MockConsole, plan: ReleasePlan
) -> None:
    fake_repo.fail_on["ls-remote"] = "could not read from remote repository"
    committer = ReleaseCommitter(fake_repo, GitSettings(), console)

    result = committer.run(plan)

    assert isinstance(result, Err)
    assert result.error.kind == "git_failed"
    assert result.error.hint == "last completed step: configured"


def test_earlier_probe_is_reused(
    fake_repo: FakeRepository, console: MockConsole, plan: ReleasePlan
) -> None:
    committer = ReleaseCommitter(fake_repo, GitSettings(), console)
    presence = committer.probe_tag("v2.0.1")
    assert isinstance(presence, Ok)

    result = committer.run(plan, presence.value)

    assert result == Ok(CommitState.PUSHED)
    assert fake_repo.remote_lookups == 1
    assert "delete_remote_tag" in fake_repo.ops


def test_given_presence_decides_what_is_deleted(
    fake_repo: FakeRepository, console: MockConsole, plan: ReleasePlan
) -> None:
    committer = ReleaseCommitter(fake_repo, GitSettings(), console)

    result = committer.run(plan, TagPresence(local=True, remote=False))

    assert isinstance(result, Ok)
    assert fake_repo.remote_lookups == 0
    assert "delete_tag" in fake_repo.ops
    assert "delete_remote_tag" not in fake_repo.ops
    assert console.has_warning()
