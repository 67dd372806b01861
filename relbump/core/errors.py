"""Process exit codes.

A release run either succeeds or fails with one message; the exit code only
tells a calling workflow which family of failure it was.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (missing input, bad option, unreadable config)
    - 2: Environment error (not a git checkout)
    - 3: Git error (pull, commit, tag or push failed)
    - 5: I/O error (manifest missing, unwritable file, invalid JSON)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    GIT_ERROR = 3
    IO_ERROR = 5
