"""Builders for issue_comment webhook payloads."""

from typing import Any, Dict, Iterable


def build_payload(
    body: str = "/assign",
    login: str = "alice",
    user_id: int = 1,
    assignees: Iterable[Dict[str, Any]] = (),
    labels: Iterable[str] = (),
    pull_request: bool = False,
    closed_at: str | None = None,
    closed_by: Dict[str, Any] | None = None,
    number: int = 7,
    comment_id: int = 100,
) -> Dict[str, Any]:
    """issue_comment webhook payload as GitHub sends it (trimmed)."""
    issue: Dict[str, Any] = {
        "number": number,
        "title": "Crash on start",
        "state": "open",
        "html_url": f"https://github.com/owner/repo/issues/{number}",
        "user": {"login": "reporter", "id": 50},
        "assignees": list(assignees),
        "labels": [{"name": name} for name in labels],
        "closed_at": closed_at,
        "closed_by": closed_by,
    }
    if pull_request:
        issue["pull_request"] = {"url": f"https://api.github.com/repos/owner/repo/pulls/{number}"}
    return {
        "action": "created",
        "repository": {"full_name": "owner/repo", "name": "repo", "owner": {"login": "owner", "id": 9}},
        "issue": issue,
        "comment": {"id": comment_id, "body": body, "user": {"login": login, "id": user_id}},
        "sender": {"login": login, "id": user_id},
    }
