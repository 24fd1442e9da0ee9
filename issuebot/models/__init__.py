"""Data models returned by the Git platform adapter (Pydantic)."""

from issuebot.models.check_run import CheckRun
from issuebot.models.comment import Comment
from issuebot.models.issue import Issue
from issuebot.models.pr import PR

__all__ = ["CheckRun", "Comment", "Issue", "PR"]
