"""Git access for the release flow.

Usage:
    from jsr_release.core.result import Ok
    from jsr_release.git import Repository

    repo = Repository(Path("."))
    status = repo.status()
    if isinstance(status, Ok):
        print(f"Branch: {status.value.branch}")
"""

from jsr_release.git.repository import (
    GitError,
    GitStatus,
    Repository,
    RepositoryProtocol,
    StatusEntry,
)

__all__ = [
    "GitError",
    "GitStatus",
    "Repository",
    "RepositoryProtocol",
    "StatusEntry",
]
