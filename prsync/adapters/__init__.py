"""Git platform adapters (base and implementations)."""

from prsync.adapters.base import GitPlatformAdapter, GitPlatformError
from prsync.adapters.github import GitHubAdapter

__all__ = ["GitPlatformAdapter", "GitPlatformError", "GitHubAdapter"]
