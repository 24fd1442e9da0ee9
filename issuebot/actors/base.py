"""Actor contract: claim an event, then execute the command.

An actor is built fresh for every dispatch cycle. ``claim`` inspects its
own copy of the event and, when the comment is addressed to it, records
whatever it needs. ``execute`` then runs the command using only that
recorded state. An actor never un-claims: once ``claim`` returned True,
``execute`` must be called.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable

from issuebot.adapters.base import GitPlatformAdapter
from issuebot.config import BotConfig
from issuebot.events import GenericEvent, IssueCommentEvent
from issuebot.notify.base import ChatNotifier

# Comment reactions (GitHub reaction content names)
COMMEND_REACTION = "+1"
ROCKET_REACTION = "rocket"


class ActorOptions:
    """Extension points handed to every actor besides the platform adapter
    (chat notifier, label names, link base URL)."""

    def __init__(
        self,
        notifier: ChatNotifier | None = None,
        bot: BotConfig | None = None,
        html_url: str = "https://github.com",
    ) -> None:
        self.notifier = notifier
        self.bot = bot or BotConfig()
        self.html_url = html_url.rstrip("/")


class Actor(ABC):
    """One slash command."""

    name: str = "Actor"

    def __init__(self, adapter: GitPlatformAdapter, log: logging.Logger, options: ActorOptions) -> None:
        self._adapter = adapter
        self._log = log
        self._options = options
        self._event: IssueCommentEvent | None = None

    @abstractmethod
    def claim(self, event: GenericEvent) -> bool:
        """Return True and capture the event if this actor handles it."""
        ...

    @abstractmethod
    def execute(self) -> None:
        """Run the command for the claimed event; raise on failure."""
        ...

    @property
    def event(self) -> IssueCommentEvent:
        """The claimed event. Only valid after a successful claim."""
        if self._event is None:
            raise RuntimeError(f"actor {self.name} executed without a claimed event")
        return self._event

    @property
    def repo(self) -> str:
        return self.event.repository.full_name

    @property
    def issue_number(self) -> int:
        return self.event.issue.number

    def _issue_comment(self, event: GenericEvent) -> IssueCommentEvent | None:
        """Unwrap the envelope; a different payload type is a routing miss."""
        payload = event.event
        if not isinstance(payload, IssueCommentEvent):
            self._log.debug("%s: event %s is not an issue comment event", self.name, type(payload).__name__)
            return None
        return payload

    @staticmethod
    def _is_open_comment(evt: IssueCommentEvent, pull_request: bool) -> bool:
        """Common filters: issue vs pull request, not closed, non-empty
        body."""
        if evt.issue.is_pull_request != pull_request:
            return False
        if evt.issue.is_closed:
            return False
        return bool(evt.comment.body)

    def _reply(self, text: str) -> None:
        """Post ``@commenter text`` on the issue."""
        login = self.event.comment.user.login
        self._adapter.create_comment(self.repo, self.issue_number, f"@{login} {text}")


ActorFactory = Callable[[GitPlatformAdapter, logging.Logger, ActorOptions], Actor]
