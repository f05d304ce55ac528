"""Tests for jsr_release.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from jsr_release.core.config import ReleaseSettings, SettingsError, load_settings
from jsr_release.core.result import Err, Ok


class TestReleaseSettings:
    def test_defaults(self) -> None:
        settings = ReleaseSettings()
        assert settings.branch == "main"
        assert settings.remote == "origin"
        assert settings.tag_prefix == "release/"
        assert settings.confirm is True

    def test_frozen(self) -> None:
        settings = ReleaseSettings()
        with pytest.raises(AttributeError):
            settings.branch = "dev"  # type: ignore[misc]

    def test_from_dict_overrides(self) -> None:
        settings = ReleaseSettings.from_dict(
            {"branch": "trunk", "remote": "upstream", "tag_prefix": "v", "confirm": False}
        )
        assert settings == ReleaseSettings(
            branch="trunk", remote="upstream", tag_prefix="v", confirm=False
        )

    def test_from_dict_allows_empty_tag_prefix(self) -> None:
        assert ReleaseSettings.from_dict({"tag_prefix": ""}).tag_prefix == ""

    def test_from_dict_ignores_wrong_types(self) -> None:
        settings = ReleaseSettings.from_dict({"branch": 3, "tag_prefix": 1, "confirm": "no"})
        assert settings == ReleaseSettings()


class TestLoadSettings:
    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        result = load_settings(tmp_path)
        assert isinstance(result, Ok)
        assert result.value == ReleaseSettings()

    def test_reads_release_toml(self, tmp_path: Path) -> None:
        (tmp_path / ".release.toml").write_text(
            'branch = "trunk"\ntag_prefix = "v"\n', encoding="utf-8"
        )

        result = load_settings(tmp_path)

        assert isinstance(result, Ok)
        assert result.value.branch == "trunk"
        assert result.value.tag_prefix == "v"
        assert result.value.remote == "origin"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / ".release.toml"
        path.write_text("branch = \n", encoding="utf-8")

        result = load_settings(tmp_path)

        assert isinstance(result, Err)
        assert isinstance(result.error, SettingsError)
        assert "Invalid TOML syntax" in result.error.message
        assert result.error.path == path
