"""Webhook event schemas and the generic envelope handed to actors.

Supported events:
- issue_comment: a comment was created on an issue or pull request
"""

from issuebot.events.envelope import GenericEvent
from issuebot.events.issue_comment import (
    ISSUE_COMMENT,
    IssueCommentEvent,
    decode_issue_comment,
)

DECODERS = {
    ISSUE_COMMENT: decode_issue_comment,
}

__all__ = [
    "DECODERS",
    "GenericEvent",
    "ISSUE_COMMENT",
    "IssueCommentEvent",
    "decode_issue_comment",
]
