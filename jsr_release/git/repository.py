"""Git repository adapter.

The release flow talks to git through ``RepositoryProtocol``: status, add,
commit, tag and push. ``Repository`` implements it with the git executable;
tests substitute an in-memory fake.

Usage:
    repo = Repository(Path("."))

    match repo.status():
        case Ok(status):
            print(f"Branch: {status.branch}")
            if status.is_clean:
                print("Working tree clean")
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from jsr_release.core.result import Err, Ok, Result
from jsr_release.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0
_UNBORN_PREFIX = "No commits yet on "

__all__ = [
    "GitError",
    "GitStatus",
    "Repository",
    "RepositoryProtocol",
    "StatusEntry",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed (e.g. "push origin release/1.0.0")
        message: Error message (stderr, or a fallback)
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """A single ``XY path`` line of porcelain status."""

    xy: str
    path: str

    @property
    def is_untracked(self) -> bool:
        return self.xy == "??"


@dataclass(frozen=True, slots=True)
class GitStatus:
    """Current branch and working tree entries."""

    branch: str
    entries: tuple[StatusEntry, ...] = field(default_factory=tuple)

    @property
    def is_clean(self) -> bool:
        """True if working tree has no changes (untracked files count as changes)."""
        return len(self.entries) == 0


class RepositoryProtocol(Protocol):
    """The git operations a release needs."""

    def status(self) -> Result[GitStatus, GitError]: ...

    def add(self, path: str) -> Result[str, GitError]: ...

    def commit(self, message: str) -> Result[str, GitError]: ...

    def tag(self, name: str) -> Result[str, GitError]: ...

    def push(self, remote: str | None = None, ref: str | None = None) -> Result[str, GitError]:
        """Push the current branch, or ``ref`` to ``remote`` when both are given."""
        ...


class Repository:
    """Git repository rooted at ``path``."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def status(self) -> Result[GitStatus, GitError]:
        """Run ``git status --porcelain=v1 -b`` and parse it."""
        result = self._git(["status", "--porcelain=v1", "-b"])
        if isinstance(result, Err):
            return result
        return Ok(self._parse_status(result.value))

    def add(self, path: str) -> Result[str, GitError]:
        return self._git(["add", "--", path])

    def commit(self, message: str) -> Result[str, GitError]:
        return self._git(["commit", "-m", message])

    def tag(self, name: str) -> Result[str, GitError]:
        return self._git(["tag", name])

    def push(self, remote: str | None = None, ref: str | None = None) -> Result[str, GitError]:
        args = ["push"]
        if remote is not None:
            args.append(remote)
            if ref is not None:
                args.append(ref)
        return self._git(args)

    def _git(self, args: list[str]) -> Result[str, GitError]:
        """Run a git command in this repository, mapping failures to GitError."""
        timeout = _GIT_NETWORK_TIMEOUT_SECONDS if args[0] == "push" else _GIT_TIMEOUT_SECONDS
        result = run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)
        match result:
            case Err(e):
                # Drop "-m <message>" from the label, keep the rest readable.
                label = " ".join(args[:1] if args[0] == "commit" else args)
                return Err(
                    GitError(
                        command=label,
                        message=e.stderr.strip() or e.stdout.strip() or f"git {label} failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok(stdout.strip())

    def _parse_status(self, output: str) -> GitStatus:
        lines = [ln for ln in output.splitlines() if ln.strip()]
        if not lines:
            return GitStatus(branch="")

        branch = self._parse_branch_line(lines[0])
        entries = tuple(
            StatusEntry(xy=line[:2], path=line[3:]) for line in lines[1:] if len(line) >= 4
        )
        return GitStatus(branch=branch, entries=entries)

    def _parse_branch_line(self, line: str) -> str:
        """Parse ``## branch...upstream [ahead N]`` down to the branch name."""
        s = line.strip()
        if s.startswith("##"):
            s = s[2:].lstrip()

        s = s.split(" [", 1)[0].strip()
        if s.startswith(_UNBORN_PREFIX):
            s = s[len(_UNBORN_PREFIX) :]
        return s.split("...", 1)[0].strip()
