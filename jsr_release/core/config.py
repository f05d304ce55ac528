"""Release settings.

Defaults cover the common case (release from ``main``, push to ``origin``,
tag as ``release/<version>``). A project can override them with an optional
``.release.toml`` next to its config file:

    branch = "trunk"
    remote = "upstream"
    tag_prefix = "v"
    confirm = false
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_str

__all__ = [
    "DEFAULT_BRANCH",
    "DEFAULT_REMOTE",
    "DEFAULT_TAG_PREFIX",
    "SETTINGS_FILENAME",
    "ReleaseSettings",
    "SettingsError",
    "load_settings",
]

DEFAULT_BRANCH = "main"
DEFAULT_REMOTE = "origin"
DEFAULT_TAG_PREFIX = "release/"
SETTINGS_FILENAME = ".release.toml"


@dataclass(frozen=True, slots=True)
class SettingsError:
    """Error when settings cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseSettings:
    branch: str = DEFAULT_BRANCH
    remote: str = DEFAULT_REMOTE
    tag_prefix: str = DEFAULT_TAG_PREFIX
    confirm: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ReleaseSettings:
        """Create settings from a mapping (parsed TOML)."""
        # An empty tag prefix is valid, so it can't go through get_str.
        tag_prefix = data.get("tag_prefix")
        confirm = get_bool(data, "confirm")
        return cls(
            branch=get_str(data, "branch") or DEFAULT_BRANCH,
            remote=get_str(data, "remote") or DEFAULT_REMOTE,
            tag_prefix=tag_prefix if isinstance(tag_prefix, str) else DEFAULT_TAG_PREFIX,
            confirm=True if confirm is None else confirm,
        )


def _parse_toml(path: Path) -> Result[StrDict, SettingsError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
    except PermissionError:
        return Err(SettingsError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(SettingsError(f"Invalid TOML syntax: {e}", path=path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(SettingsError(f"Error reading settings: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(SettingsError("Settings root must be a TOML table", path=path))
    return Ok(data)


def load_settings(root: Path) -> Result[ReleaseSettings, SettingsError]:
    """Load ``.release.toml`` from root, falling back to defaults.

    A missing file is not an error; a malformed one is.
    """
    path = root / SETTINGS_FILENAME
    if not path.is_file():
        return Ok(ReleaseSettings())

    result = _parse_toml(path)
    if isinstance(result, Err):
        return result
    return Ok(ReleaseSettings.from_dict(result.value))
