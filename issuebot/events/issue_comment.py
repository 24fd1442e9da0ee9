"""Schema for the GitHub 'issue_comment' webhook.

Only the fields the command actors read are modelled; everything else in
the payload is ignored. A comment on a pull request arrives as an issue
comment whose issue carries a ``pull_request`` object.
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field

ISSUE_COMMENT = "issue_comment"


class _Payload(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class User(_Payload):
    """GitHub account reference."""

    id: int | None = None
    login: str = ""

    def same_account(self, other: "User") -> bool:
        """Compare by id; fall back to login when either id is missing."""
        if self.id is not None and other.id is not None:
            return self.id == other.id
        return bool(self.login) and self.login == other.login


class Label(_Payload):
    name: str


class PullRequestLinks(_Payload):
    url: str | None = None
    html_url: str | None = None


class Repository(_Payload):
    full_name: str = Field(description="owner/repo")
    name: str = ""
    owner: User | None = None


class IssuePayload(_Payload):
    """Issue (or pull request) the comment was posted on."""

    number: int
    title: str = ""
    state: str = "open"
    html_url: str | None = None
    user: User | None = None
    assignees: List[User] = Field(default_factory=list)
    labels: List[Label] = Field(default_factory=list)
    pull_request: PullRequestLinks | None = None
    closed_at: datetime | None = None
    closed_by: User | None = None

    @property
    def is_pull_request(self) -> bool:
        return self.pull_request is not None

    @property
    def is_closed(self) -> bool:
        """Either a close timestamp or a closer identity marks the issue
        closed."""
        return self.closed_at is not None or self.closed_by is not None

    def is_assigned_to(self, user: User) -> bool:
        return any(a.same_account(user) for a in self.assignees)


class CommentPayload(_Payload):
    id: int
    body: str = ""
    user: User = Field(default_factory=User)


class IssueCommentEvent(_Payload):
    """issue_comment webhook payload (action created/edited/deleted)."""

    action: str = ""
    repository: Repository
    issue: IssuePayload
    comment: CommentPayload
    sender: User | None = None


def decode_issue_comment(raw: bytes | str) -> IssueCommentEvent:
    """Parse a JSON payload; raises pydantic.ValidationError on bad input."""
    return IssueCommentEvent.model_validate_json(raw)
