"""Version control access."""

from .git import GitClient, GitCommandError

__all__ = ["GitClient", "GitCommandError"]
