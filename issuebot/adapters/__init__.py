"""Git platform adapters."""

from issuebot.adapters.base import GitPlatformAdapter, GitPlatformError
from issuebot.adapters.github import GitHubAdapter

__all__ = ["GitPlatformAdapter", "GitPlatformError", "GitHubAdapter"]
