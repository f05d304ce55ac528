"""Exit codes for the jsr-release command.

The numeric values are part of the CLI contract and should remain stable:
- 0: Success
- 1: User error (cancelled, dirty tree, wrong branch, invalid version string)
- 2: Config error (config file missing or unparsable, bad version field shape)
- 3: Git error (status/add/commit/tag/push failed)
- 5: I/O error (config file unreadable or unwritable)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    OK = 0
    USER_ERROR = 1
    CONFIG_ERROR = 2
    GIT_ERROR = 3
    IO_ERROR = 5
