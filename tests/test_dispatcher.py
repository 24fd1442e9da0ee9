"""Tests for Dispatcher (decode once, clone per actor, fail fast)."""

import json
import logging
from pathlib import Path
from typing import List

import pytest

from issuebot.actors import Actor, ActorOptions
from issuebot.dispatcher import ActorFailedError, Dispatcher, DispatchError, read_event_file
from issuebot.events import ISSUE_COMMENT, GenericEvent, IssueCommentEvent
from issuebot.events.issue_comment import User
from issuebot.registry import ActorRegistry, default_registry

from tests.helpers import build_payload


def _raw(**kwargs) -> str:
    return json.dumps(build_payload(**kwargs))


class RecordingActor(Actor):
    """Claims every issue comment and remembers what it was given."""

    name = "RecordingActor"

    def __init__(self, adapter, log, options, sink: List["RecordingActor"], fail: bool = False) -> None:
        super().__init__(adapter, log, options)
        self.sink = sink
        self.fail = fail
        self.envelope: GenericEvent | None = None
        self.executed = False

    def claim(self, event: GenericEvent) -> bool:
        evt = self._issue_comment(event)
        if evt is None:
            return False
        self.envelope = event
        self._event = evt
        self.sink.append(self)
        return True

    def execute(self) -> None:
        self.executed = True
        # Scribble over our own copy; nobody else may see it
        self.event.issue.assignees.append(User(login="intruder", id=666))
        if self.fail:
            raise RuntimeError("boom")


def _recording_factory(sink: List[RecordingActor], fail: bool = False):
    def factory(adapter, log, options):
        return RecordingActor(adapter, log, options, sink, fail=fail)

    return factory


@pytest.fixture
def dispatcher(adapter, options, log) -> Dispatcher:
    return Dispatcher(default_registry(), adapter, options, log=log)


class TestDecode:
    """Decode failures abort before any actor runs."""

    def test_empty_event_name(self, dispatcher) -> None:
        with pytest.raises(DispatchError, match="empty github event"):
            dispatcher.dispatch("", _raw())

    def test_unsupported_event(self, dispatcher, adapter) -> None:
        with pytest.raises(DispatchError, match="unsupported github event"):
            dispatcher.dispatch("push", _raw())
        assert not adapter.method_calls

    def test_invalid_json(self, dispatcher) -> None:
        with pytest.raises(DispatchError, match="unmarshal 'issue_comment'"):
            dispatcher.dispatch(ISSUE_COMMENT, "{not json")

    def test_wrong_shape(self, dispatcher, adapter) -> None:
        with pytest.raises(DispatchError):
            dispatcher.dispatch(ISSUE_COMMENT, json.dumps({"action": "created", "issue": {"number": 1}}))
        assert not adapter.method_calls

    def test_decode_wraps_payload(self, dispatcher) -> None:
        envelope = dispatcher.decode(ISSUE_COMMENT, _raw(body="/assign"))
        assert isinstance(envelope.event, IssueCommentEvent)
        assert envelope.event.comment.body == "/assign"


class TestEventFile:
    def test_missing_path(self) -> None:
        with pytest.raises(DispatchError, match="empty github event path"):
            read_event_file("")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DispatchError, match="not found"):
            read_event_file(tmp_path / "event.json")

    def test_dispatch_file_reads_payload(self, dispatcher, adapter, tmp_path: Path) -> None:
        path = tmp_path / "event.json"
        path.write_text(_raw(body="/assign"))
        assert dispatcher.dispatch_file(ISSUE_COMMENT, path) == ["AssignActor"]
        adapter.add_assignees.assert_called_once_with("owner/repo", 7, ["alice"])

    def test_dispatch_file_checks_event_name_first(self, dispatcher) -> None:
        with pytest.raises(DispatchError, match="empty github event"):
            dispatcher.dispatch_file("", None)


class TestRouting:
    """Default registry scenarios."""

    def test_unknown_command_is_not_an_error(self, dispatcher, adapter) -> None:
        """/foo is claimed by nobody and touches nothing."""
        assert dispatcher.dispatch(ISSUE_COMMENT, _raw(body="/foo")) == []
        assert not adapter.method_calls

    def test_assign_scenario(self, dispatcher, adapter) -> None:
        handled = dispatcher.dispatch(ISSUE_COMMENT, _raw(body="/assign", labels=["help wanted"]))
        assert handled == ["AssignActor"]
        adapter.add_assignees.assert_called_once_with("owner/repo", 7, ["alice"])
        adapter.add_reaction.assert_called_once_with("owner/repo", 100, "+1")
        adapter.remove_label.assert_called_once_with("owner/repo", 7, "help wanted")

    def test_success_is_logged(self, dispatcher, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="issuebot.tests"):
            dispatcher.dispatch(ISSUE_COMMENT, _raw(body="/assign"))
        assert "actor AssignActor successfully handle issue_comment event" in caplog.text

    def test_actor_failure_is_fatal(self, dispatcher, adapter) -> None:
        adapter.list_repo_labels.return_value = {"kind/bug"}
        with pytest.raises(ActorFailedError) as exc_info:
            dispatcher.dispatch(ISSUE_COMMENT, _raw(body="/kind bug performance"))
        assert exc_info.value.actor_name == "LabelerActor"
        assert "does not exist" in str(exc_info.value)


class TestIsolation:
    """Each actor gets its own copy of the event."""

    def test_actors_see_independent_copies(self, adapter, options, log) -> None:
        sink: List[RecordingActor] = []
        registry = ActorRegistry({ISSUE_COMMENT: [_recording_factory(sink), _recording_factory(sink)]})
        dispatcher = Dispatcher(registry, adapter, options, log=log)

        dispatcher.dispatch(ISSUE_COMMENT, _raw(body="/anything"))

        first, second = sink
        assert first.envelope is not second.envelope
        assert first.event is not second.event
        assert [a.login for a in first.event.issue.assignees] == ["intruder"]
        assert second.event.issue.assignees == [User(login="intruder", id=666)]
        # Each actor saw only its own scribble, not the other's
        assert len(second.event.issue.assignees) == 1

    def test_mutation_after_cycle_does_not_leak(self, adapter, options, log) -> None:
        sink: List[RecordingActor] = []
        registry = ActorRegistry({ISSUE_COMMENT: [_recording_factory(sink), _recording_factory(sink)]})
        Dispatcher(registry, adapter, options, log=log).dispatch(ISSUE_COMMENT, _raw(body="/x"))

        first, second = sink
        first.event.issue.assignees.clear()
        first.event.issue.assignees.append(User(login="mallory", id=7))
        assert [a.login for a in second.event.issue.assignees] == ["intruder"]

    def test_failure_stops_later_actors(self, adapter, options, log) -> None:
        sink: List[RecordingActor] = []
        registry = ActorRegistry(
            {ISSUE_COMMENT: [_recording_factory(sink, fail=True), _recording_factory(sink)]}
        )
        dispatcher = Dispatcher(registry, adapter, options, log=log)

        with pytest.raises(ActorFailedError) as exc_info:
            dispatcher.dispatch(ISSUE_COMMENT, _raw(body="/x"))

        assert len(sink) == 1
        assert isinstance(exc_info.value.cause, RuntimeError)

    def test_actors_run_in_registration_order(self, adapter, log) -> None:
        order: List[str] = []

        def factory(tag: str):
            class Tagged(RecordingActor):
                name = tag

                def execute(self) -> None:
                    order.append(self.name)

            return lambda adapter, log, options: Tagged(adapter, log, options, [])

        registry = ActorRegistry({ISSUE_COMMENT: [factory("one"), factory("two"), factory("three")]})
        handled = Dispatcher(registry, adapter, ActorOptions(), log=log).dispatch(ISSUE_COMMENT, _raw())
        assert order == ["one", "two", "three"]
        assert handled == order
