from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from branch_diff.vcs import GitClient, GitCommandError


def _completed(stdout: str = "", returncode: int = 0, stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


def test_fork_point_strips_line_endings(tmp_path: Path) -> None:
    with patch("branch_diff.vcs.git.subprocess.run", return_value=_completed("abc123\r\n")) as run:
        fork = GitClient(tmp_path).resolve_fork_point("develop", "HEAD")

    assert fork == "abc123"
    assert run.call_args.args[0] == ["git", "merge-base", "develop", "HEAD"]
    assert run.call_args.kwargs["cwd"] == tmp_path


def test_changed_paths_drop_blanks_and_repeats(tmp_path: Path) -> None:
    output = "b.cls\r\n\r\na.cls\nb.cls\n\n"
    with patch("branch_diff.vcs.git.subprocess.run", return_value=_completed(output)) as run:
        paths = GitClient(tmp_path).list_changed_paths("abc123", "HEAD")

    assert paths == ["b.cls", "a.cls"]
    assert run.call_args.args[0] == [
        "git",
        "-c",
        "core.quotepath=off",
        "diff",
        "--name-only",
        "abc123",
        "HEAD",
    ]


def test_read_file_at_revision_uses_revision_colon_path(tmp_path: Path) -> None:
    with patch("branch_diff.vcs.git.subprocess.run", return_value=_completed("<Profile/>")) as run:
        content = GitClient(tmp_path).read_file_at_revision("profiles/A.profile-meta.xml", "abc")

    assert content == "<Profile/>"
    assert run.call_args.args[0] == ["git", "show", "abc:profiles/A.profile-meta.xml"]


def test_non_zero_exit_raises_with_command_and_stderr(tmp_path: Path) -> None:
    failure = _completed(returncode=128, stderr="fatal: Not a valid object name develop\n")
    with patch("branch_diff.vcs.git.subprocess.run", return_value=failure):
        with pytest.raises(GitCommandError) as error:
            GitClient(tmp_path).resolve_fork_point("develop", "HEAD")

    assert error.value.returncode == 128
    assert error.value.command == ("git", "merge-base", "develop", "HEAD")
    assert str(error.value) == "git merge-base develop HEAD: fatal: Not a valid object name develop"


def test_silent_failure_reports_exit_status(tmp_path: Path) -> None:
    with patch("branch_diff.vcs.git.subprocess.run", return_value=_completed(returncode=1)):
        with pytest.raises(GitCommandError, match="exit status 1"):
            GitClient(tmp_path).read_file_at_revision("x", "abc")
