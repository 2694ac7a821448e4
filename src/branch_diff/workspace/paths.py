"""Path resolution helpers for root-scoped file access."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Final

WINDOWS_ABSOLUTE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[a-zA-Z]:[\\/]")


class PathBlockedError(Exception):
    """Raised when a changed path cannot be mapped safely under a root."""

    def __init__(self, reason: str, hint: str) -> None:
        super().__init__(reason)
        self.reason = reason
        self.hint = hint


def split_relative_path(candidate: str) -> list[str]:
    """Split a repository-relative path into posix segments."""
    normalized = candidate.replace("\\", "/")
    if not normalized.strip():
        raise PathBlockedError(
            reason="Path is empty.",
            hint="Provide a repository-relative path such as 'force-app/main/default'.",
        )
    if normalized.startswith("/") or WINDOWS_ABSOLUTE_PATTERN.match(normalized):
        raise PathBlockedError(
            reason="Absolute paths are not accepted.",
            hint="Use a path relative to the repository root.",
        )
    parts = [part for part in normalized.split("/") if part not in ("", ".")]
    if any(part == ".." for part in parts):
        raise PathBlockedError(
            reason="Path traversal is blocked.",
            hint="Remove '..' segments and use a repository-relative path.",
        )
    return parts


def resolve_under_root(root: Path, candidate: str) -> Path:
    """Join a relative path onto root without resolving symlinks."""
    return root.joinpath(*split_relative_path(candidate))
