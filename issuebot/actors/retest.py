"""/retest: rerun the failed checks of a pull request."""

import re
from typing import List, Tuple

from issuebot.actors.base import ROCKET_REACTION, Actor
from issuebot.adapters.base import GitPlatformError
from issuebot.events import GenericEvent

RETEST_RE = re.compile(r"^/retest\s*\Z", re.ASCII)

ALL_PASSED = "The current checks run has all been run successfully and there is no need to rerun it again"


class RerunError(Exception):
    """One or more failed jobs could not be restarted.

    Carries every (job name, error) pair; raised once after all jobs were
    attempted.
    """

    def __init__(self, errors: List[Tuple[str, Exception]]) -> None:
        self.errors = errors
        details = "; ".join(f"{name}: {err}" for name, err in errors)
        super().__init__(f"failed to rerun {len(errors)} job(s): {details}")


class RetestActor(Actor):
    """Reruns every check run whose conclusion is failure."""

    name = "RetestActor"

    def claim(self, event: GenericEvent) -> bool:
        evt = self._issue_comment(event)
        if evt is None or not self._is_open_comment(evt, pull_request=True):
            return False
        if not RETEST_RE.match(evt.comment.body):
            return False
        self._event = evt
        return True

    def execute(self) -> None:
        evt = self.event
        self._log.info("actor %s started processing events, pr number: #%s", self.name, self.issue_number)

        pr = self._adapter.get_pr(self.repo, self.issue_number)
        runs = self._adapter.list_check_runs(self.repo, pr.head_sha)
        failed = [run for run in runs if run.failed]

        if not failed:
            self._reply(ALL_PASSED)
            return

        try:
            self._adapter.add_reaction(self.repo, evt.comment.id, ROCKET_REACTION)
        except GitPlatformError as e:
            self._log.error(
                "failed to add reaction %s to comment %s in #%s: %s",
                ROCKET_REACTION,
                evt.comment.id,
                self.issue_number,
                e,
            )

        errors: List[Tuple[str, Exception]] = []
        for run in failed:
            try:
                self._adapter.rerun_job(self.repo, run.id)
            except GitPlatformError as e:
                self._log.error("failed to rerun failed '%s' job: %s", run.name, e)
                errors.append((run.name, e))
                continue
            self._log.info("rerun failed '%s' job", run.name)

        if errors:
            raise RerunError(errors)
