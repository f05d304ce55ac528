"""Semantic Versioning 2.0.0 parsing, formatting and prerelease bumps."""

from __future__ import annotations

import re
from dataclasses import dataclass

from jsr_release.core.result import Err, Ok, Result

__all__ = [
    "DEFAULT_PRERELEASE_IDENTIFIER",
    "SemVer",
    "SemVerError",
    "default_post_release",
    "parse",
    "try_parse",
]

DEFAULT_PRERELEASE_IDENTIFIER = "dev"

_NUM = r"0|[1-9][0-9]*"
_PRE_ID = r"0|[1-9][0-9]*|[0-9]*[A-Za-z-][0-9A-Za-z-]*"
_BUILD_ID = r"[0-9A-Za-z-]+"
_SEMVER_RE = re.compile(
    rf"(?P<major>{_NUM})\.(?P<minor>{_NUM})\.(?P<patch>{_NUM})"
    rf"(?:-(?P<pre>(?:{_PRE_ID})(?:\.(?:{_PRE_ID}))*))?"
    rf"(?:\+(?P<build>{_BUILD_ID}(?:\.{_BUILD_ID})*))?"
)

PrereleaseId = str | int


class SemVerError(ValueError):
    """Raised for strings that are not valid semantic versions."""


@dataclass(frozen=True, slots=True)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: tuple[PrereleaseId, ...] = ()
    build: tuple[str, ...] = ()

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def format(self) -> str:
        out = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            out += "-" + ".".join(str(p) for p in self.prerelease)
        if self.build:
            out += "+" + ".".join(self.build)
        return out

    def __str__(self) -> str:
        return self.format()

    def increment_prerelease(self, identifier: str) -> SemVer:
        """Bump to the next prerelease under ``identifier``.

        A stable version moves to the next patch (``1.2.3`` -> ``1.2.4-dev.0``).
        A prerelease keeps its patch and bumps its last numeric component
        (``1.2.3-beta.1`` -> ``1.2.3-beta.2``); when the result does not look
        like ``<identifier>.<n>`` it restarts at ``<identifier>.0``.
        Build metadata is dropped.
        """
        values: list[PrereleaseId] = list(self.prerelease)
        for i in range(len(values) - 1, -1, -1):
            value = values[i]
            if isinstance(value, int):
                values[i] = value + 1
                break
        else:
            values.append(0)

        if values[0] != identifier or len(values) < 2 or not isinstance(values[1], int):
            values = [identifier, 0]

        patch = self.patch if self.is_prerelease else self.patch + 1
        return SemVer(self.major, self.minor, patch, tuple(values))


def parse(text: str) -> SemVer:
    """Parse a strict semantic version string (no ``v`` prefix, no whitespace)."""
    m = _SEMVER_RE.fullmatch(text)
    if m is None:
        raise SemVerError(f"invalid semantic version: {text!r}")

    prerelease: tuple[PrereleaseId, ...] = ()
    if m.group("pre"):
        prerelease = tuple(int(p) if p.isdigit() else p for p in m.group("pre").split("."))
    build = tuple(m.group("build").split(".")) if m.group("build") else ()

    return SemVer(
        int(m.group("major")),
        int(m.group("minor")),
        int(m.group("patch")),
        prerelease,
        build,
    )


def try_parse(text: str) -> Result[SemVer, str]:
    try:
        return Ok(parse(text))
    except SemVerError as e:
        return Err(str(e))


def default_post_release(release: SemVer) -> SemVer:
    """Next development version after ``release``.

    Reuses the release's own prerelease identifier if it has one
    (``2.0.0-beta.1`` -> ``2.0.0-beta.2``), otherwise ``dev``
    (``2.0.0`` -> ``2.0.1-dev.0``).
    """
    identifier = (
        str(release.prerelease[0]) if release.prerelease else DEFAULT_PRERELEASE_IDENTIFIER
    )
    return release.increment_prerelease(identifier)
