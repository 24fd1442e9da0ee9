"""/assign and /unassign: contributors take or release an issue."""

import re

from issuebot.actors.base import COMMEND_REACTION, Actor
from issuebot.events import GenericEvent

# \b is ASCII-only: "/assigné" still reads as /assign
ASSIGN_RE = re.compile(r"^/(un)?assign\b", re.ASCII)

ALREADY_ASSIGNED = "The issue has been assigned to you. Please do not attempt to assign it"
NOT_ASSIGNED = "This issue is not assigned to you. Please do not try to unassign it again"


class AssignActor(Actor):
    """Assigns the commenter to the issue (or removes them with /unassign)."""

    name = "AssignActor"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.add = True

    def claim(self, event: GenericEvent) -> bool:
        evt = self._issue_comment(event)
        if evt is None or not self._is_open_comment(evt, pull_request=False):
            return False
        match = ASSIGN_RE.match(evt.comment.body)
        if match is None:
            return False
        self.add = match.group(1) != "un"
        self._event = evt
        return True

    def execute(self) -> None:
        self._log.info("actor %s started processing events, issue number: #%s", self.name, self.issue_number)
        if self.add:
            self._assign()
        else:
            self._unassign()

    def _assign(self) -> None:
        evt = self.event
        user = evt.comment.user
        if evt.issue.is_assigned_to(user):
            self._reply(ALREADY_ASSIGNED)
            return

        self._adapter.add_assignees(self.repo, self.issue_number, [user.login])
        self._log.info("assigned issue #%s to '%s'", self.issue_number, user.login)

        self._adapter.add_reaction(self.repo, evt.comment.id, COMMEND_REACTION)
        self._log.info(
            "add a reaction '%s' to comment %s of issue #%s", COMMEND_REACTION, evt.comment.id, self.issue_number
        )

        label = self._options.bot.help_wanted_label
        self._adapter.remove_label(self.repo, self.issue_number, label)
        self._log.info("remove '%s' label from issue #%s", label, self.issue_number)

    def _unassign(self) -> None:
        evt = self.event
        user = evt.comment.user
        if not evt.issue.is_assigned_to(user):
            self._reply(NOT_ASSIGNED)
            return

        self._adapter.remove_assignees(self.repo, self.issue_number, [user.login])
        self._log.info("unassigned issue #%s from '%s'", self.issue_number, user.login)

        if self._options.bot.restore_help_wanted:
            label = self._options.bot.help_wanted_label
            self._adapter.add_labels(self.repo, self.issue_number, [label])
            self._log.info("add '%s' label to issue #%s", label, self.issue_number)
