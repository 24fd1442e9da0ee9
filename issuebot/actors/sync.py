"""/sync: announce an issue in the community chat group.

Synced issues get the sync label, so a second /sync is a no-op.
"""

import re

from issuebot.actors.base import Actor
from issuebot.events import GenericEvent
from issuebot.models import Issue
from issuebot.notify.base import NotificationError

SYNC_RE = re.compile(r"^/sync\s*\Z", re.ASCII)


class SyncActor(Actor):
    """Sends an issue summary through the chat notifier."""

    name = "SyncActor"

    def claim(self, event: GenericEvent) -> bool:
        evt = self._issue_comment(event)
        if evt is None or not self._is_open_comment(evt, pull_request=False):
            return False
        if not SYNC_RE.match(evt.comment.body):
            return False
        self._event = evt
        return True

    def execute(self) -> None:
        self._log.info(
            "actor %s started processing events, repo: %s, issue number: #%s",
            self.name,
            self.repo,
            self.issue_number,
        )
        sync_label = self._options.bot.sync_label
        if self._adapter.has_label(self.repo, self.issue_number, sync_label):
            self._log.info("issue #%s has label %s, skip sending message", self.issue_number, sync_label)
            return

        notifier = self._options.notifier
        if notifier is None:
            raise NotificationError("no chat notifier configured")

        # Title and labels may have changed since the webhook fired
        issue = self._adapter.get_issue(self.repo, self.issue_number)
        notifier.send_message(self.issue_number, self.build_message(issue))
        self._log.info("sent issue #%s to %s", self.issue_number, notifier.name)

        self._adapter.add_labels(self.repo, self.issue_number, [sync_label])
        self._log.info("add label %s to issue #%s", sync_label, self.issue_number)

    def build_message(self, issue: Issue) -> str:
        """Markdown summary: link, title and labels of the issue."""
        url = issue.html_url or f"{self._options.html_url}/{self.repo}/issues/{issue.number}"
        labels = ", ".join(issue.labels)
        return (
            f"### Issue: [#{issue.number}]({url})\n\n"
            f"##### Title: {issue.title}\n\n"
            f"##### Labels: {labels}\n\n"
            "Please pay attention to. 👀"
        )
