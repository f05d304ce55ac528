from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from jsr_release.core.config import ReleaseSettings, load_settings
from jsr_release.core.errors import ErrorCode
from jsr_release.core.result import Err
from jsr_release.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    settings: ReleaseSettings
    console: ConsoleProtocol


def build_context(root: Path | None) -> CLIContext:
    try:
        resolved = (root or Path.cwd()).expanduser().resolve()
    except OSError as e:
        typer.echo(f"error: invalid --root: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if not resolved.is_dir():
        typer.echo(f"error: --root '{resolved}' is not a directory", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    settings = load_settings(resolved)
    if isinstance(settings, Err):
        typer.echo(f"error: {settings.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))

    return CLIContext(root=resolved, settings=settings.value, console=RichConsole())
