"""GitHub API adapter."""

import logging
from datetime import datetime
from typing import Any, Dict, Iterator, List, Set
from urllib.parse import quote

import requests

from issuebot.adapters.base import GitPlatformAdapter, GitPlatformError
from issuebot.models import PR, CheckRun, Comment, Issue

LOG = logging.getLogger("issuebot.adapters.github")

PER_PAGE = 100


def _parse_iso(s: str) -> datetime:
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def _label_names(items: List[Dict[str, Any]]) -> List[str]:
    return [lb["name"] for lb in items if isinstance(lb, dict) and "name" in lb]


def _issue_from_api(data: Dict[str, Any]) -> Issue:
    user = data.get("user") or {}
    return Issue(
        number=data["number"],
        title=data.get("title") or "",
        body=data.get("body") or "",
        author=user.get("login", ""),
        labels=_label_names(data.get("labels") or []),
        state=data.get("state", "open"),
        html_url=data.get("html_url"),
    )


def _comment_from_api(data: Dict[str, Any]) -> Comment:
    user = data.get("user") or {}
    created = data.get("created_at")
    return Comment(
        id=data["id"],
        body=data.get("body") or "",
        author=user.get("login", ""),
        created_at=_parse_iso(created) if created else None,
    )


def _pr_from_api(data: Dict[str, Any]) -> PR:
    head = data.get("head") or {}
    base = data.get("base") or {}
    return PR(
        number=data["number"],
        title=data.get("title") or "",
        head_branch=head.get("ref", ""),
        head_sha=head.get("sha", ""),
        base_branch=base.get("ref", ""),
        state=data.get("state", "open"),
        html_url=data.get("html_url"),
    )


def _check_run_from_api(data: Dict[str, Any]) -> CheckRun:
    return CheckRun(
        id=data["id"],
        name=data.get("name") or "",
        status=data.get("status") or "completed",
        conclusion=data.get("conclusion"),
    )


class GitHubAdapter(GitPlatformAdapter):
    """GitHub REST API implementation."""

    def __init__(self, token: str, api_url: str = "https://api.github.com", timeout: int = 30) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers["Authorization"] = f"token {token}"
        self._session.headers["Accept"] = "application/vnd.github.v3+json"

    def _url(self, path: str) -> str:
        return f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"

    def _request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] | None = None,
        json: Dict[str, Any] | None = None,
    ) -> requests.Response:
        url = path if path.startswith("http") else self._url(path)
        try:
            resp = self._session.request(method, url, params=params, json=json, timeout=self._timeout)
        except requests.RequestException as e:
            raise GitPlatformError(f"{method} {url}: {e}") from e
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                msg = resp.json().get("message", msg)
            except (ValueError, AttributeError):
                pass
            raise GitPlatformError(f"{resp.status_code}: {msg}")
        return resp

    def _paginate(self, path: str, key: str | None = None) -> Iterator[Dict[str, Any]]:
        """Yield items from every page, following the Link: rel="next"
        header."""
        url: str | None = path
        params: Dict[str, Any] | None = {"per_page": PER_PAGE}
        while url:
            resp = self._request("GET", url, params=params)
            data = resp.json() or ([] if key is None else {})
            items = data if key is None else (data.get(key) or [])
            yield from items
            url = resp.links.get("next", {}).get("url")
            # next URL already carries the query string
            params = None

    def add_assignees(self, repo: str, issue_number: int, logins: List[str]) -> None:
        self._request("POST", f"/repos/{repo}/issues/{issue_number}/assignees", json={"assignees": logins})

    def remove_assignees(self, repo: str, issue_number: int, logins: List[str]) -> None:
        self._request("DELETE", f"/repos/{repo}/issues/{issue_number}/assignees", json={"assignees": logins})

    def add_labels(self, repo: str, issue_number: int, labels: List[str]) -> None:
        self._request("POST", f"/repos/{repo}/issues/{issue_number}/labels", json={"labels": labels})

    def remove_label(self, repo: str, issue_number: int, label: str) -> None:
        if label not in self.list_issue_labels(repo, issue_number):
            LOG.debug("Issue #%s has no label '%s', nothing to remove", issue_number, label)
            return
        self._request("DELETE", f"/repos/{repo}/issues/{issue_number}/labels/{quote(label, safe='')}")

    def list_repo_labels(self, repo: str) -> Set[str]:
        return set(_label_names(list(self._paginate(f"/repos/{repo}/labels"))))

    def list_issue_labels(self, repo: str, issue_number: int) -> Set[str]:
        return set(_label_names(list(self._paginate(f"/repos/{repo}/issues/{issue_number}/labels"))))

    def create_comment(self, repo: str, issue_number: int, body: str) -> Comment:
        resp = self._request("POST", f"/repos/{repo}/issues/{issue_number}/comments", json={"body": body})
        return _comment_from_api(resp.json())

    def add_reaction(self, repo: str, comment_id: int, reaction: str) -> None:
        self._request(
            "POST",
            f"/repos/{repo}/issues/comments/{comment_id}/reactions",
            json={"content": reaction},
        )

    def get_issue(self, repo: str, issue_number: int) -> Issue:
        resp = self._request("GET", f"/repos/{repo}/issues/{issue_number}")
        return _issue_from_api(resp.json())

    def get_pr(self, repo: str, pr_number: int) -> PR:
        resp = self._request("GET", f"/repos/{repo}/pulls/{pr_number}")
        return _pr_from_api(resp.json())

    def list_check_runs(self, repo: str, ref: str) -> List[CheckRun]:
        items = self._paginate(f"/repos/{repo}/commits/{ref}/check-runs", key="check_runs")
        return [_check_run_from_api(d) for d in items]

    def rerun_job(self, repo: str, job_id: int) -> None:
        self._request("POST", f"/repos/{repo}/actions/jobs/{job_id}/rerun")
