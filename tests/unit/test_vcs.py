"""Tests for best-effort version-control lookups."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

from projspec.core.vcs import disk_version, git_remote_url


def _completed(stdout: str) -> MagicMock:
    result = MagicMock()
    result.stdout = stdout
    return result


class TestGitRemoteUrl:
    def test_first_remote_url(self, tmp_path: Path) -> None:
        output = (
            "upstream\thttps://example.com/upstream.git (fetch)\n"
            "origin\tgit@example.com:me/fork.git (fetch)\n"
        )
        with patch("subprocess.run", return_value=_completed(output)) as run:
            assert git_remote_url(tmp_path) == "https://example.com/upstream.git"
        assert run.call_args.kwargs["cwd"] == tmp_path

    def test_no_remotes(self) -> None:
        with patch("subprocess.run", return_value=_completed("")):
            assert git_remote_url() is None

    def test_malformed_output(self) -> None:
        with patch("subprocess.run", return_value=_completed("origin-without-tab\n")):
            assert git_remote_url() is None

    def test_not_a_repository(self) -> None:
        error = subprocess.CalledProcessError(128, ["git", "remote", "-v"])
        with patch("subprocess.run", side_effect=error):
            assert git_remote_url() is None

    def test_git_not_installed(self) -> None:
        with patch("subprocess.run", side_effect=FileNotFoundError("git")):
            assert git_remote_url() is None


class TestDiskVersion:
    def test_formats_found_version(self, tmp_path: Path) -> None:
        (tmp_path / ".semver").write_text(":major: 2\n:minor: 3\n:patch: 4\n:special: 'rc'\n")
        assert disk_version(tmp_path) == "2.3.4"
        assert disk_version(tmp_path, "%M.%m.%p%s") == "2.3.4-rc"

    def test_missing_is_none(self, tmp_path: Path) -> None:
        assert disk_version(tmp_path) is None

    def test_unreadable_is_none(self, tmp_path: Path) -> None:
        (tmp_path / ".semver").write_text(":major: [1\n")
        assert disk_version(tmp_path) is None
