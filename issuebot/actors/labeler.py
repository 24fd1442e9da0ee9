"""/kind, /area, /unkind, /unarea: namespaced labels on issues.

``/kind bug performance`` attaches ``kind/bug`` and ``kind/performance``.
Labels must already exist in the repository; a missing label fails the
command without telling the commenter (maintainers see it in the logs).
"""

import re
from typing import List, Set

from issuebot.actors.base import Actor
from issuebot.events import GenericEvent

# Only ASCII whitespace separates the command from its labels
LABEL_RE = re.compile(r"^/(un)?(kind|area)\s+(.+)\Z", re.ASCII)


class LabelNotFoundError(Exception):
    """Raised when a command names a label the repository does not define."""

    def __init__(self, label: str) -> None:
        super().__init__(f"label '{label}' does not exist")
        self.label = label


class LabelerActor(Actor):
    """Adds or removes kind/ and area/ labels."""

    name = "LabelerActor"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.add = True
        self.labels: List[str] = []

    def _prefix(self, namespace: str) -> str:
        bot = self._options.bot
        return bot.kind_prefix if namespace == "kind" else bot.area_prefix

    def claim(self, event: GenericEvent) -> bool:
        evt = self._issue_comment(event)
        if evt is None or not self._is_open_comment(evt, pull_request=False):
            return False
        match = LABEL_RE.match(evt.comment.body)
        if match is None:
            return False
        un, namespace, rest = match.groups()
        prefix = self._prefix(namespace)
        self.add = un != "un"
        self.labels = [prefix + token for token in rest.split()]
        self._event = evt
        return True

    def execute(self) -> None:
        self._log.info("actor %s started processing events, issue number: #%s", self.name, self.issue_number)
        repo_labels: Set[str] | None = None
        for label in self.labels:
            if self.add:
                if repo_labels is None:
                    repo_labels = self._adapter.list_repo_labels(self.repo)
                self._check_and_add_label(label, repo_labels)
            else:
                self._adapter.remove_label(self.repo, self.issue_number, label)
                self._log.info("removed label '%s' from issue #%s", label, self.issue_number)

    def _check_and_add_label(self, label: str, repo_labels: Set[str]) -> None:
        if label not in repo_labels:
            raise LabelNotFoundError(label)
        self._adapter.add_labels(self.repo, self.issue_number, [label])
        self._log.info("added label '%s' to issue #%s", label, self.issue_number)
