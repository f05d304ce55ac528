from __future__ import annotations

import pytest

from jsr_release.core.result import Err, Ok
from jsr_release.release.semver import (
    SemVer,
    SemVerError,
    default_post_release,
    parse,
    try_parse,
)


def test_parse_stable() -> None:
    assert parse("1.2.3") == SemVer(1, 2, 3)
    assert parse("0.0.0") == SemVer(0, 0, 0)


def test_parse_prerelease_and_build() -> None:
    v = parse("1.0.0-beta.11+exp.sha.5114f85")
    assert v.prerelease == ("beta", 11)
    assert v.build == ("exp", "sha", "5114f85")
    assert v.is_prerelease is True


@pytest.mark.parametrize(
    "text",
    ["not-a-semver", "1.2", "v1.2.3", " 1.2.3", "01.2.3", "1.2.3-", "1.2.3-01", "1.2.3+", ""],
)
def test_parse_rejects_invalid(text: str) -> None:
    with pytest.raises(SemVerError):
        parse(text)


def test_try_parse() -> None:
    assert try_parse("2.0.0") == Ok(SemVer(2, 0, 0))
    result = try_parse("2.0")
    assert isinstance(result, Err)
    assert "'2.0'" in result.error


def test_format_is_canonical() -> None:
    assert parse("1.0.0-rc.1+build.7").format() == "1.0.0-rc.1+build.7"
    assert str(SemVer(1, 2, 3, ("dev", 0))) == "1.2.3-dev.0"


class TestIncrementPrerelease:
    def test_stable_bumps_patch(self) -> None:
        assert parse("1.2.3").increment_prerelease("dev").format() == "1.2.4-dev.0"

    def test_same_identifier_bumps_number(self) -> None:
        assert parse("1.2.3-beta.1").increment_prerelease("beta").format() == "1.2.3-beta.2"

    def test_identifier_without_number_gets_zero(self) -> None:
        assert parse("1.2.3-rc").increment_prerelease("rc").format() == "1.2.3-rc.0"

    def test_other_identifier_restarts(self) -> None:
        assert parse("1.2.3-alpha.4").increment_prerelease("beta").format() == "1.2.3-beta.0"

    def test_non_numeric_second_component_restarts(self) -> None:
        assert parse("1.2.3-beta.x").increment_prerelease("beta").format() == "1.2.3-beta.0"

    def test_drops_build_metadata(self) -> None:
        assert parse("1.2.3+abc").increment_prerelease("dev").format() == "1.2.4-dev.0"


class TestDefaultPostRelease:
    def test_stable_release_uses_dev(self) -> None:
        assert default_post_release(parse("2.0.0")).format() == "2.0.1-dev.0"
        assert default_post_release(parse("1.0.1")).format() == "1.0.2-dev.0"

    def test_prerelease_reuses_identifier(self) -> None:
        post = default_post_release(parse("2.0.0-beta.1"))
        assert post.prerelease[0] == "beta"
        assert post.format() == "2.0.0-beta.2"

    def test_numeric_first_identifier(self) -> None:
        # The identifier is taken as text, so "1" never equals the bumped number.
        assert default_post_release(parse("1.0.0-1")).format() == "1.0.0-1.0"
