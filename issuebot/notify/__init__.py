"""Outbound chat notifications (e.g. DingTalk group robot)."""

from issuebot.notify.base import ChatNotifier, NotificationError
from issuebot.notify.dingtalk import DingTalkClient

__all__ = ["ChatNotifier", "DingTalkClient", "NotificationError"]
