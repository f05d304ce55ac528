"""Tests for git/repository.py."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

from jsr_release.core.result import Err, Ok
from jsr_release.git.repository import GitStatus, Repository, StatusEntry


def make_completed_process(
    stdout: str = "",
    stderr: str = "",
    returncode: int = 0,
) -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(
        args=["git"],
        returncode=returncode,
        stdout=stdout,
        stderr=stderr,
    )


def git_args(mock_run: MagicMock) -> list[str]:
    """Arguments after ``git -C <path>`` of the last call."""
    cmd = mock_run.call_args.args[0]
    assert cmd[:2] == ["git", "-C"]
    return cmd[3:]


# =============================================================================
# GitStatus Tests
# =============================================================================


class TestGitStatus:
    def test_clean(self) -> None:
        assert GitStatus(branch="main").is_clean is True

    def test_untracked_file_makes_tree_dirty(self) -> None:
        status = GitStatus(branch="main", entries=(StatusEntry(xy="??", path="new.ts"),))
        assert status.is_clean is False
        assert status.entries[0].is_untracked is True


# =============================================================================
# Repository Tests - Mocked subprocess
# =============================================================================


class TestRepositoryStatus:
    @patch("subprocess.run")
    def test_status_clean(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="## main...origin/main\n")

        result = Repository(tmp_path).status()

        assert isinstance(result, Ok)
        assert result.value.branch == "main"
        assert result.value.is_clean is True
        assert git_args(mock_run) == ["status", "--porcelain=v1", "-b"]

    @patch("subprocess.run")
    def test_status_with_changes(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            stdout="## main...origin/main [ahead 1]\nM  deno.json\n?? notes.md\n"
        )

        result = Repository(tmp_path).status()

        assert isinstance(result, Ok)
        status = result.unwrap()
        assert status.branch == "main"
        assert status.is_clean is False
        assert [e.path for e in status.entries] == ["deno.json", "notes.md"]

    @patch("subprocess.run")
    def test_status_no_upstream(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="## feature/x\n")

        result = Repository(tmp_path).status()

        assert isinstance(result, Ok)
        assert result.value.branch == "feature/x"

    @patch("subprocess.run")
    def test_status_unborn_branch(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="## No commits yet on main\n")

        result = Repository(tmp_path).status()

        assert isinstance(result, Ok)
        assert result.value.branch == "main"

    @patch("subprocess.run")
    def test_status_error(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            returncode=128,
            stderr="fatal: not a git repository\n",
        )

        result = Repository(tmp_path).status()

        assert isinstance(result, Err)
        error = result.unwrap_err()
        assert error.command.startswith("status")
        assert error.message == "fatal: not a git repository"
        assert error.returncode == 128


class TestRepositoryWrites:
    @patch("subprocess.run")
    def test_add(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process()

        assert isinstance(Repository(tmp_path).add("deno.json"), Ok)
        assert git_args(mock_run) == ["add", "--", "deno.json"]

    @patch("subprocess.run")
    def test_commit(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="[main abc123] chore\n")

        result = Repository(tmp_path).commit("chore: release version 1.0.1")

        assert result == Ok("[main abc123] chore")
        assert git_args(mock_run) == ["commit", "-m", "chore: release version 1.0.1"]

    @patch("subprocess.run")
    def test_commit_error_label_omits_message(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            returncode=1, stdout="nothing to commit, working tree clean\n"
        )

        result = Repository(tmp_path).commit("chore: bump version to 1.0.2-dev.0")

        assert isinstance(result, Err)
        assert result.error.command == "commit"
        assert result.error.message == "nothing to commit, working tree clean"

    @patch("subprocess.run")
    def test_tag(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process()

        assert isinstance(Repository(tmp_path).tag("release/1.0.1"), Ok)
        assert git_args(mock_run) == ["tag", "release/1.0.1"]

    @patch("subprocess.run")
    def test_push_current_branch(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process()

        assert isinstance(Repository(tmp_path).push(), Ok)
        assert git_args(mock_run) == ["push"]
        assert mock_run.call_args.kwargs["timeout"] == 180.0

    @patch("subprocess.run")
    def test_push_ref_to_remote(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process()

        assert isinstance(Repository(tmp_path).push("origin", "release/1.0.1"), Ok)
        assert git_args(mock_run) == ["push", "origin", "release/1.0.1"]

    @patch("subprocess.run")
    def test_push_rejected(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            returncode=1, stderr="! [rejected] main -> main (fetch first)\n"
        )

        result = Repository(tmp_path).push()

        assert isinstance(result, Err)
        assert result.error.command == "push"
        assert "rejected" in result.error.message

    @patch("subprocess.run", side_effect=FileNotFoundError("git"))
    def test_git_missing(self, _mock_run: MagicMock, tmp_path: Path) -> None:
        result = Repository(tmp_path).tag("release/1.0.1")

        assert isinstance(result, Err)
        assert result.error.returncode == -1
