"""Source tree and output directory access."""

from .files import DirectoryCopyOutcome, Workspace
from .paths import PathBlockedError, resolve_under_root, split_relative_path

__all__ = [
    "DirectoryCopyOutcome",
    "PathBlockedError",
    "Workspace",
    "resolve_under_root",
    "split_relative_path",
]
