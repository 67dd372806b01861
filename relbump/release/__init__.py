"""Release bump: version files, changelog, commit/tag/push.

- version: tag reference normalization
- manifests / changelog: in-memory file transformations
- plan: everything a release writes, computed before any side effect
- writer: persists a plan
- committer: git state machine
- pipeline: sequencing of the above
"""

from __future__ import annotations

from relbump.release.errors import ReleaseError
from relbump.release.pipeline import ReleaseOutcome, run_release
from relbump.release.version import ReleaseVersion, normalize_version

__all__ = [
    "ReleaseError",
    "ReleaseOutcome",
    "ReleaseVersion",
    "normalize_version",
    "run_release",
]
