"""Error payload for the release flow."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "not_found",
    "parse_error",
    "schema_error",
    "version_format",
    "write_verification",
    "aborted",
    "git_failed",
    "io_error",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Canonical release error.

    ``message`` is what the operator sees; ``hint`` carries the underlying
    cause (parser message, git stderr, path) when there is one.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None
