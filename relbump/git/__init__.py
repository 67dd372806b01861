"""Git operations used to commit, tag and push a release.

Usage:
    from relbump.git import Repository

    repo = Repository(Path("."))
    repo.add_all()
"""

from relbump.git.repository import GitError, Repository

__all__ = [
    "GitError",
    "Repository",
]
