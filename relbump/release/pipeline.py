"""Release pipeline entry point.

Order of work:
1. validate inputs
2. pull the remote default branch
3. build the release plan in memory (all reads and parses)
4. probe the temporary tag (strict policy fails here, before any write)
5. write files
6. configure, delete tag, stage, commit, tag, push

Nothing is written before step 5, so input, JSON and tag problems never
leave a half-bumped checkout behind.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path

from relbump.core.config import ReleaseInputs, ReleaseSettings
from relbump.core.result import Err, Ok, Result
from relbump.output.console import ConsoleProtocol
from relbump.release.committer import (
    CommitState,
    ReleaseCommitter,
    ReleaseRepository,
    git_failure,
)
from relbump.release.errors import ReleaseError
from relbump.release.plan import ReleasePlan, build_plan, validate_inputs
from relbump.release.writer import write_plan


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    plan: ReleasePlan
    state: CommitState | None
    written: tuple[Path, ...]


def utc_today() -> date:
    """Release dates follow UTC, matching the CI clock."""
    return datetime.now(timezone.utc).date()


def run_release(
    inputs: ReleaseInputs,
    settings: ReleaseSettings,
    *,
    root: Path,
    repo: ReleaseRepository,
    console: ConsoleProtocol,
    today: date | None = None,
    dry_run: bool = False,
) -> Result[ReleaseOutcome, ReleaseError]:
    """Bump versions, splice the changelog, and publish the release.

    With ``dry_run`` the plan is computed and reported but nothing is pulled,
    written, committed or pushed.
    """
    day = today or utc_today()
    git = settings.git

    checked = validate_inputs(inputs)
    if isinstance(checked, Err):
        return checked

    if git.pull and not dry_run:
        with console.group("Checkout code"):
            pulled = repo.pull(git.remote, git.branch)
            if isinstance(pulled, Err):
                return Err(git_failure(pulled.error))
            console.info("Latest changes pulled")

    with console.group("Update files"):
        plan = build_plan(root=root, inputs=inputs, settings=settings, today=day, console=console)
        if isinstance(plan, Err):
            return plan
    console.set_output("changelog", plan.value.excerpt)

    if dry_run:
        return Ok(ReleaseOutcome(plan=plan.value, state=None, written=()))

    committer = ReleaseCommitter(repo, git, console)
    probe = committer.probe_tag(plan.value.version.tag)
    if isinstance(probe, Err):
        return probe

    with console.group("Write files"):
        written = write_plan(plan.value, console=console)
        if isinstance(written, Err):
            return written

    with console.group("Commit changes"):
        state = committer.run(plan.value, probe.value)
        if isinstance(state, Err):
            return state

    return Ok(
        ReleaseOutcome(plan=plan.value, state=state.value, written=tuple(written.value))
    )
