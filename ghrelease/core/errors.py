"""Exit codes for the ghrelease command.

Aborting a release (user cancel, nothing new to release, empty message) exits
with OK. Only failures are non-zero.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    OK = 0
    # Invalid tag, rejected input, no previous release.
    USER_ERROR = 1
    # Not a repository, no token, editor missing, unusable remote.
    ENV_ERROR = 2
    # GitHub unreachable or rejecting a request.
    NETWORK_ERROR = 4
    # Scratch message file cannot be written or read.
    IO_ERROR = 5
