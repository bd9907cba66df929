"""Git platform adapters (base and implementations)."""

from milestone_closer.adapters.base import GitPlatformAdapter, GitPlatformError
from milestone_closer.adapters.github import GitHubAdapter

__all__ = ["GitPlatformAdapter", "GitPlatformError", "GitHubAdapter"]
