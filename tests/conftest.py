"""Shared fixtures: issue comment envelopes and a mocked platform adapter."""

import logging
from typing import Any
from unittest.mock import MagicMock

import pytest

from issuebot.actors import ActorOptions
from issuebot.adapters.base import GitPlatformAdapter
from issuebot.config import BotConfig
from issuebot.events import GenericEvent, IssueCommentEvent
from issuebot.notify.base import ChatNotifier
from tests.helpers import build_payload


@pytest.fixture
def make_event():
    """Builder for GenericEvent envelopes around an issue comment."""

    def _make(**kwargs: Any) -> GenericEvent:
        return GenericEvent(event=IssueCommentEvent.model_validate(build_payload(**kwargs)))

    return _make


@pytest.fixture
def adapter() -> MagicMock:
    mock = MagicMock(spec=GitPlatformAdapter)
    mock.has_label.return_value = False
    mock.list_issue_labels.return_value = set()
    mock.list_repo_labels.return_value = set()
    return mock


@pytest.fixture
def notifier() -> MagicMock:
    mock = MagicMock(spec=ChatNotifier)
    mock.name = "FakeChat"
    return mock


@pytest.fixture
def options(notifier: MagicMock) -> ActorOptions:
    return ActorOptions(notifier=notifier, bot=BotConfig(), html_url="https://github.com")


@pytest.fixture
def log() -> logging.Logger:
    return logging.getLogger("issuebot.tests")
