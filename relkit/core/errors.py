"""Exit codes for the relkit CLI.

Each release failure is mapped onto one of these codes so CI logs can tell
bad input apart from a broken environment.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes.

    - 0: Success
    - 1: User error (invalid input table, bad flags, bad bump value)
    - 2: Environment error (pandoc or git missing)
    - 3: Release error (rendering, staging or git commit failed)
    - 5: I/O error (file unreadable, directory already exists)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    RELEASE_ERROR = 3
    IO_ERROR = 5
