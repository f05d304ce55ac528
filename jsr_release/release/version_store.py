"""Read and rewrite the ``version`` field of the project config file.

The config is the first of ``jsr.json``, ``deno.json``, ``deno.jsonc`` found in
the project root. Reads go through the JSONC parser; writes are a textual
substitution of the version value only, so comments, key order and
formatting elsewhere in the file survive byte for byte.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path

from jsr_release.core.result import Err, Ok, Result
from jsr_release.core.structured import as_str_dict
from jsr_release.platform.files import atomic_write_text, read_text_exact
from jsr_release.release import jsonc
from jsr_release.release.errors import ReleaseError
from jsr_release.release.semver import SemVer, SemVerError
from jsr_release.release.semver import parse as parse_semver

__all__ = [
    "CONFIG_CANDIDATES",
    "ConfigFile",
    "ConfigVersion",
    "locate_config_file",
    "read_version",
    "write_version",
]

CONFIG_CANDIDATES: tuple[str, ...] = ("jsr.json", "deno.json", "deno.jsonc")


@dataclass(frozen=True, slots=True)
class ConfigFile:
    filename: str
    path: Path
    contents: str


@dataclass(frozen=True, slots=True)
class ConfigVersion:
    """Version declared by the config; ``None`` when it has no version key."""

    filename: str
    version: SemVer | None


def locate_config_file(*, root: Path) -> Result[ConfigFile, ReleaseError]:
    """Return the first existing config candidate under root, with its text."""
    for filename in CONFIG_CANDIDATES:
        path = root / filename
        try:
            contents = read_text_exact(path)
        except FileNotFoundError:
            continue
        except (OSError, UnicodeDecodeError) as e:
            return Err(
                ReleaseError(
                    kind="io_error",
                    message=f"failed to read {filename}: {e}",
                    hint=str(path),
                )
            )
        return Ok(ConfigFile(filename=filename, path=path, contents=contents))

    return Err(
        ReleaseError(
            kind="not_found",
            message=f"No config file found: {', '.join(CONFIG_CANDIDATES)}",
            hint=str(root),
        )
    )


def read_version(*, root: Path) -> Result[ConfigVersion, ReleaseError]:
    located = locate_config_file(root=root)
    if isinstance(located, Err):
        return located
    config = located.value

    try:
        obj = jsonc.loads(config.contents)
    except jsonc.JsoncError as e:
        return Err(
            ReleaseError(
                kind="parse_error",
                message=f"Could not parse {config.filename}: {e}",
                hint=str(config.path),
            )
        )

    data = as_str_dict(obj)
    if data is None:
        return Err(
            ReleaseError(
                kind="schema_error",
                message=f"Invalid config file {config.filename}",
                hint="the top level must be a JSON object",
            )
        )

    if "version" not in data:
        return Ok(ConfigVersion(filename=config.filename, version=None))

    raw = data["version"]
    if not isinstance(raw, str):
        return Err(
            ReleaseError(
                kind="schema_error",
                message=f'Invalid "version" field in {config.filename}',
                hint=f"expected a string, got {json.dumps(raw)}",
            )
        )

    try:
        version = parse_semver(raw)
    except SemVerError as e:
        return Err(
            ReleaseError(
                kind="version_format",
                message=f"Invalid version {json.dumps(raw)} in {config.filename}",
                hint=str(e),
            )
        )
    return Ok(ConfigVersion(filename=config.filename, version=version))


def _version_pattern(current: str) -> re.Pattern[str]:
    return re.compile(rf'("version"\s*:\s*)"{re.escape(current)}"')


def write_version(*, root: Path, current: str, new: str) -> Result[ConfigFile, ReleaseError]:
    """Replace the value of the first ``"version": "<current>"`` pair with new.

    Only the quoted value changes; the whitespace around the colon is kept.
    ``current`` is matched literally. A replacement that leaves the text
    byte-identical (no match, or ``new == current``) is ``not_found`` and
    nothing is written. The config is located and read again rather than
    reused from an earlier read. After writing, the file is read back and
    compared with what was intended.
    """
    located = locate_config_file(root=root)
    if isinstance(located, Err):
        return located
    config = located.value

    new_contents = config.contents
    match = _version_pattern(current).search(config.contents)
    if match is not None:
        new_contents = (
            config.contents[: match.start()]
            + f'{match.group(1)}"{new}"'
            + config.contents[match.end() :]
        )

    # A no-op replacement counts as not found.
    if new_contents == config.contents:
        return Err(
            ReleaseError(
                kind="not_found",
                message=f"Version {current} not found in {config.filename}",
                hint=str(config.path),
            )
        )

    try:
        atomic_write_text(config.path, new_contents)
    except OSError as e:
        return Err(
            ReleaseError(
                kind="io_error",
                message=f"failed to write {config.filename}: {e}",
                hint=str(config.path),
            )
        )

    reread = locate_config_file(root=root)
    if isinstance(reread, Err):
        return reread
    if reread.value.contents != new_contents:
        return Err(
            ReleaseError(
                kind="write_verification",
                message=f"Failed to update version in {config.filename}",
                hint=f"{reread.value.filename} does not contain the written contents",
            )
        )
    return Ok(reread.value)
