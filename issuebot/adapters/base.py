"""Abstract base for Git platform adapters.

This is everything the command actors are allowed to do on the host
platform. Repositories are addressed by full name ("owner/repo").
"""

from abc import ABC, abstractmethod
from typing import List, Set

from issuebot.models import PR, CheckRun, Comment, Issue


class GitPlatformError(Exception):
    """Raised when a Git platform API call fails."""

    pass


class GitPlatformAdapter(ABC):
    """Abstract interface for Git hosting platforms."""

    @abstractmethod
    def add_assignees(self, repo: str, issue_number: int, logins: List[str]) -> None:
        """Assign users to an issue."""
        ...

    @abstractmethod
    def remove_assignees(self, repo: str, issue_number: int, logins: List[str]) -> None:
        """Remove users from the issue assignees."""
        ...

    @abstractmethod
    def add_labels(self, repo: str, issue_number: int, labels: List[str]) -> None:
        """Attach existing repository labels to an issue."""
        ...

    @abstractmethod
    def remove_label(self, repo: str, issue_number: int, label: str) -> None:
        """Remove a label from an issue; no-op if the issue does not carry
        it."""
        ...

    @abstractmethod
    def list_repo_labels(self, repo: str) -> Set[str]:
        """Names of all labels defined in the repository."""
        ...

    @abstractmethod
    def list_issue_labels(self, repo: str, issue_number: int) -> Set[str]:
        """Names of the labels currently on an issue."""
        ...

    @abstractmethod
    def create_comment(self, repo: str, issue_number: int, body: str) -> Comment:
        """Post a comment on an issue."""
        ...

    @abstractmethod
    def add_reaction(self, repo: str, comment_id: int, reaction: str) -> None:
        """React to an issue comment (e.g. "+1", "rocket")."""
        ...

    @abstractmethod
    def get_issue(self, repo: str, issue_number: int) -> Issue:
        """Fetch issue by number."""
        ...

    @abstractmethod
    def get_pr(self, repo: str, pr_number: int) -> PR:
        """Fetch PR by number (an issue number on a PR is the PR number)."""
        ...

    @abstractmethod
    def list_check_runs(self, repo: str, ref: str) -> List[CheckRun]:
        """List check runs for a commit SHA, branch or tag."""
        ...

    @abstractmethod
    def rerun_job(self, repo: str, job_id: int) -> None:
        """Re-run a single workflow job."""
        ...

    def has_label(self, repo: str, issue_number: int, label: str) -> bool:
        """Whether the issue currently carries the label."""
        return label in self.list_issue_labels(repo, issue_number)
