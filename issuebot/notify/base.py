"""Abstract chat notifier."""

from abc import ABC, abstractmethod


class NotificationError(Exception):
    """Raised when a chat message cannot be delivered."""

    pass


class ChatNotifier(ABC):
    """Sends issue summaries to a chat channel."""

    name: str = "chat"

    @abstractmethod
    def send_message(self, issue_number: int, content: str) -> None:
        """Deliver markdown content about an issue; raise NotificationError on
        failure."""
        ...
