"""Slash-command actors (assign, labeler, retest, sync)."""

from issuebot.actors.assign import AssignActor
from issuebot.actors.base import Actor, ActorFactory, ActorOptions
from issuebot.actors.labeler import LabelerActor, LabelNotFoundError
from issuebot.actors.retest import RerunError, RetestActor
from issuebot.actors.sync import SyncActor

__all__ = [
    "Actor",
    "ActorFactory",
    "ActorOptions",
    "AssignActor",
    "LabelNotFoundError",
    "LabelerActor",
    "RerunError",
    "RetestActor",
    "SyncActor",
]
