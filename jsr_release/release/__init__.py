"""Release flow: config version store, semver rules, orchestration."""

from __future__ import annotations

from .errors import ReleaseError, ReleaseErrorKind
from .service import ReleaseOutcome, ReleaseParams, ReleaseService

__all__ = [
    "ReleaseError",
    "ReleaseErrorKind",
    "ReleaseOutcome",
    "ReleaseParams",
    "ReleaseService",
]
