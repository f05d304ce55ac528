"""Release orchestration.

One linear flow per invocation:

1. refuse a dirty tree or a non-trunk branch (unless ``allow_dirty``);
2. resolve the release and post-release versions (flags or prompts);
3. ask for confirmation;
4. write the release version, commit, tag, push branch and tag;
5. write the post-release version, commit, push.

Steps 4 and 5 are skipped under ``dry_run``. The first failure stops the run;
git operations that already happened are not undone.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from jsr_release.core.config import DEFAULT_TAG_PREFIX, ReleaseSettings
from jsr_release.core.result import Err, Ok, Result
from jsr_release.git.repository import GitError, RepositoryProtocol
from jsr_release.output.console import ConsoleProtocol
from jsr_release.release.errors import ReleaseError
from jsr_release.release.interaction import InteractionProtocol
from jsr_release.release.semver import SemVer, default_post_release, try_parse
from jsr_release.release.version_store import read_version, write_version

__all__ = [
    "UNKNOWN_VERSION",
    "ReleaseOutcome",
    "ReleaseParams",
    "ReleaseService",
]

UNKNOWN_VERSION = "(unknown)"


@dataclass(frozen=True, slots=True)
class ReleaseParams:
    dry_run: bool = False
    release_version: str | None = None
    post_release_version: str | None = None
    enable_confirm: bool = True
    allow_dirty: bool = False
    tag_prefix: str = DEFAULT_TAG_PREFIX


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    config_file: str
    current_version: str
    release_version: str
    post_release_version: str
    tag: str
    dry_run: bool


@dataclass(frozen=True, slots=True)
class _Versions:
    config_file: str
    current: str
    release: str
    post_release: str


def _git_failed(error: GitError) -> ReleaseError:
    return ReleaseError(
        kind="git_failed",
        message=f"git {error.command} failed (exit {error.returncode})",
        hint=error.message,
    )


class ReleaseService:
    def __init__(
        self,
        *,
        root: Path,
        repository: RepositoryProtocol,
        console: ConsoleProtocol,
        interaction: InteractionProtocol,
        settings: ReleaseSettings | None = None,
    ) -> None:
        self._root = root
        self._repo = repository
        self._console = console
        self._interaction = interaction
        self._settings = settings or ReleaseSettings()

    def release(self, params: ReleaseParams) -> Result[ReleaseOutcome, ReleaseError]:
        if not params.allow_dirty:
            checked = self._check_worktree()
            if isinstance(checked, Err):
                return checked

        resolved = self._resolve_versions(params)
        if isinstance(resolved, Err):
            return resolved
        versions = resolved.value

        if params.enable_confirm and not self._interaction.confirm("Continue?"):
            return Err(ReleaseError(kind="aborted", message="Release cancelled"))

        tag = f"{params.tag_prefix}{versions.release}"

        if params.dry_run:
            self._console.warning("Skipping config file update (dry-run)")
        else:
            self._console.info(f"Updating config file version to {versions.release}")
            written = write_version(
                root=self._root, current=versions.current, new=versions.release
            )
            if isinstance(written, Err):
                return written

        if params.dry_run:
            self._console.warning(
                f"Skipping Git operations for version {versions.release} (dry-run)"
            )
        else:
            published = self._publish_release(versions, tag)
            if isinstance(published, Err):
                return published

        if params.dry_run:
            self._console.warning("Skipping config file update (dry-run)")
        else:
            self._console.info(f"Updating config file version to {versions.post_release}")
            # The file now holds the release version, not the original one.
            written = write_version(
                root=self._root, current=versions.release, new=versions.post_release
            )
            if isinstance(written, Err):
                return written

        if params.dry_run:
            self._console.warning(
                "Skipping Git operations for post-release version "
                f"{versions.post_release} (dry-run)"
            )
        else:
            bumped = self._publish_post_release(versions)
            if isinstance(bumped, Err):
                return bumped

        if params.dry_run:
            self._console.success(f"Dry run of release {versions.release} complete")
        else:
            self._console.success(f"Released {versions.release} ({tag})")

        return Ok(
            ReleaseOutcome(
                config_file=versions.config_file,
                current_version=versions.current,
                release_version=versions.release,
                post_release_version=versions.post_release,
                tag=tag,
                dry_run=params.dry_run,
            )
        )

    def _check_worktree(self) -> Result[None, ReleaseError]:
        status = self._repo.status()
        if isinstance(status, Err):
            return Err(_git_failed(status.error))

        if not status.value.is_clean:
            paths = ", ".join(
                f"{e.path} (untracked)" if e.is_untracked else e.path
                for e in status.value.entries[:5]
            )
            return Err(
                ReleaseError(
                    kind="aborted",
                    message="Aborting due to uncommitted changes",
                    hint=f"commit or stash: {paths} (or pass --allow-dirty)",
                )
            )

        branch = self._settings.branch
        if status.value.branch != branch:
            return Err(
                ReleaseError(
                    kind="aborted",
                    message=f"Aborting due to non-{branch} branch",
                    hint=f"on {status.value.branch or 'detached HEAD'}; switch to {branch}",
                )
            )
        return Ok(None)

    def _resolve_versions(self, params: ReleaseParams) -> Result[_Versions, ReleaseError]:
        config = read_version(root=self._root)
        if isinstance(config, Err):
            return config

        current = config.value.version
        current_str = current.format() if current is not None else UNKNOWN_VERSION
        self._console.info(f"Current version: {current_str}")

        release_str = params.release_version
        if release_str is None:
            release_str = self._interaction.ask("Release version:")
            if release_str is None:
                return Err(_not_interactive("release version", "--release-version"))
        release = _parse_version(release_str, what="release version")
        if isinstance(release, Err):
            return release

        post_str = params.post_release_version
        if post_str is None:
            default = default_post_release(release.value).format()
            post_str = self._interaction.ask("Post-release version:", default)
            if post_str is None:
                return Err(_not_interactive("post-release version", "--post-release-version"))
        # Validated only; the string is used as typed.
        post = _parse_version(post_str, what="post-release version")
        if isinstance(post, Err):
            return post

        self._console.info(f"Releasing version: {release_str}")
        self._console.info(f"Bumping after release: {post_str}")
        return Ok(
            _Versions(
                config_file=config.value.filename,
                current=current_str,
                release=release_str,
                post_release=post_str,
            )
        )

    def _publish_release(self, versions: _Versions, tag: str) -> Result[None, ReleaseError]:
        self._console.info(f"Committing version bump {versions.release}")
        steps = [
            lambda: self._repo.add(versions.config_file),
            lambda: self._repo.commit(f"chore: release version {versions.release}"),
            lambda: self._repo.tag(tag),
        ]
        done = self._run_git(steps)
        if isinstance(done, Err):
            return done

        self._console.info("Pushing changes and tag")
        return self._run_git(
            [
                lambda: self._repo.push(),
                lambda: self._repo.push(self._settings.remote, tag),
            ]
        )

    def _publish_post_release(self, versions: _Versions) -> Result[None, ReleaseError]:
        self._console.info(f"Committing version bump {versions.post_release}")
        done = self._run_git(
            [
                lambda: self._repo.add(versions.config_file),
                lambda: self._repo.commit(f"chore: bump version to {versions.post_release}"),
            ]
        )
        if isinstance(done, Err):
            return done

        self._console.info("Pushing changes")
        return self._run_git([lambda: self._repo.push()])

    def _run_git(
        self, steps: list[Callable[[], Result[str, GitError]]]
    ) -> Result[None, ReleaseError]:
        for step in steps:
            result = step()
            if isinstance(result, Err):
                return Err(_git_failed(result.error))
        return Ok(None)


def _parse_version(text: str, *, what: str) -> Result[SemVer, ReleaseError]:
    parsed = try_parse(text)
    if isinstance(parsed, Err):
        return Err(
            ReleaseError(
                kind="version_format",
                message=f"Invalid {what} {text!r}",
                hint=parsed.error,
            )
        )
    return parsed


def _not_interactive(what: str, flag: str) -> ReleaseError:
    return ReleaseError(
        kind="aborted",
        message=f"Cannot prompt for the {what}: not interactive",
        hint=f"pass {flag}",
    )
