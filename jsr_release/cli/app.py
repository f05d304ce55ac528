from __future__ import annotations

from pathlib import Path

import typer

from jsr_release import __version__
from jsr_release.cli.context import build_context
from jsr_release.core.config import DEFAULT_TAG_PREFIX
from jsr_release.core.errors import ErrorCode
from jsr_release.core.result import Err, Ok
from jsr_release.git.repository import Repository
from jsr_release.output.console import Style
from jsr_release.release.errors import ReleaseError
from jsr_release.release.interaction import TyperInteraction
from jsr_release.release.service import ReleaseParams, ReleaseService

app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
)


def release_error_code(error: ReleaseError) -> ErrorCode:
    match error.kind:
        case "aborted" | "version_format":
            return ErrorCode.USER_ERROR
        case "not_found" | "parse_error" | "schema_error" | "write_verification":
            return ErrorCode.CONFIG_ERROR
        case "git_failed":
            return ErrorCode.GIT_ERROR
        case "io_error":
            return ErrorCode.IO_ERROR
    # Fallback for exhaustiveness
    return ErrorCode.USER_ERROR


@app.command()
def release(
    allow_dirty: bool = typer.Option(False, "--allow-dirty", help="Skip git status check"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Skip write operations"),
    tag_prefix: str | None = typer.Option(
        None,
        "--tag-prefix",
        help="Prefix of the release tag",
        show_default=DEFAULT_TAG_PREFIX,
    ),
    release_version: str | None = typer.Option(
        None, "--release-version", help="Release version (prompted if omitted)"
    ),
    post_release_version: str | None = typer.Option(
        None,
        "--post-release-version",
        help="Version to bump to after the release (prompted if omitted)",
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
    root: Path | None = typer.Option(
        None,
        "--root",
        help="Project root containing jsr.json / deno.json / deno.jsonc",
    ),
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Release the project version found in jsr.json, deno.json or deno.jsonc.

    Commits and tags the release version, pushes it, then bumps the config to
    the post-release version and pushes again.
    """
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=int(ErrorCode.OK))

    ctx = build_context(root)
    service = ReleaseService(
        root=ctx.root,
        repository=Repository(ctx.root),
        console=ctx.console,
        interaction=TyperInteraction(),
        settings=ctx.settings,
    )
    params = ReleaseParams(
        dry_run=dry_run,
        release_version=release_version,
        post_release_version=post_release_version,
        enable_confirm=ctx.settings.confirm and not yes,
        allow_dirty=allow_dirty,
        tag_prefix=ctx.settings.tag_prefix if tag_prefix is None else tag_prefix,
    )

    match service.release(params):
        case Ok(_):
            pass
        case Err(e):
            ctx.console.error(e.message)
            if e.hint:
                ctx.console.print(f"hint: {e.hint}", Style.DIM)
            raise typer.Exit(code=int(release_error_code(e)))


def main() -> None:
    app()
