"""DingTalk group robot client.

Issues synced with ``/sync`` are announced in the DingTalk group so that
community contributors can pick them up. Messages are sent in markdown
format.
"""

import logging

import requests

from issuebot.notify.base import ChatNotifier, NotificationError

DEFAULT_ENDPOINT = "https://oapi.dingtalk.com/robot/send?access_token={token}"


class DingTalkClient(ChatNotifier):
    """Posts markdown messages through a DingTalk custom robot."""

    name = "DingTalk"

    def __init__(
        self,
        token: str,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: int = 10,
        log: logging.Logger | None = None,
    ) -> None:
        self._token = token or ""
        self._endpoint = endpoint
        self._timeout = timeout
        self._log = log or logging.getLogger("issuebot.notify.dingtalk")
        self._session = requests.Session()

    def send_message(self, issue_number: int, content: str) -> None:
        if not self._token:
            raise NotificationError("chat group robot endpoint cannot be empty")
        if not issue_number:
            raise NotificationError("issue number cannot be zero")

        message = {
            "msgtype": "markdown",
            "markdown": {
                "title": f"Issue #{issue_number}",
                "text": content,
            },
        }
        url = self._endpoint.format(token=self._token)
        try:
            resp = self._session.post(url, json=message, timeout=self._timeout)
        except requests.RequestException as e:
            raise NotificationError(f"failed to send message: {e}") from e

        if resp.status_code != 200:
            raise NotificationError(f"failed to send message, status code: {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as e:
            raise NotificationError(f"failed to unmarshal response body: {e}") from e
        self._log.debug("Response from DingTalk: %s", data)

        # DingTalk answers 200 with errcode != 0 for bad tokens, keyword filters, rate limits
        if isinstance(data, dict) and data.get("errcode", 0) != 0:
            raise NotificationError(f"DingTalk error {data.get('errcode')}: {data.get('errmsg', '')}")
