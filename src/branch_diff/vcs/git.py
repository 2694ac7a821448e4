"""Git-backed fork point, change list and revision reads."""

from __future__ import annotations

import subprocess
from pathlib import Path


class GitCommandError(Exception):
    """Raised when a git invocation exits with a non-zero status."""

    def __init__(self, command: tuple[str, ...], returncode: int, stderr: str) -> None:
        detail = stderr.strip() or f"exit status {returncode}"
        super().__init__(f"{' '.join(command)}: {detail}")
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class GitClient:
    """Runs read-only git commands inside one repository."""

    def __init__(self, repo_root: Path, executable: str = "git") -> None:
        self._repo_root = repo_root
        self._executable = executable

    def _run(self, args: list[str]) -> str:
        command = (self._executable, *args)
        completed = subprocess.run(
            list(command),
            cwd=self._repo_root,
            check=False,
            capture_output=True,
            encoding="utf-8",
        )
        if completed.returncode != 0:
            raise GitCommandError(
                command=("git", *args),
                returncode=completed.returncode,
                stderr=completed.stderr or "",
            )
        return completed.stdout

    def resolve_fork_point(self, parent_ref: str, current_ref: str) -> str:
        """Return the merge base of the parent and current references."""
        output = self._run(["merge-base", parent_ref, current_ref])
        return output.replace("\r\n", "\n").replace("\n", "")

    def list_changed_paths(self, from_revision: str, to_revision: str) -> list[str]:
        """Return changed paths in git order, without blanks or repeats."""
        output = self._run(
            ["-c", "core.quotepath=off", "diff", "--name-only", from_revision, to_revision]
        )
        lines = output.replace("\r\n", "\n").split("\n")
        return list(dict.fromkeys(line for line in lines if line))

    def read_file_at_revision(self, path: str, revision: str) -> str:
        """Return file content as it existed at revision."""
        return self._run(["show", f"{revision}:{path}"])
