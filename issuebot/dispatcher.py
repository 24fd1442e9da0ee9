"""Decode one webhook event and run it past every registered actor.

The payload is decoded once. Each actor gets a fresh deep copy of the
envelope, so nothing one actor records or mutates can leak into the next.
Actors run sequentially in registration order; the first actor that
fails aborts the rest of the cycle.
"""

import logging
from pathlib import Path
from typing import List

from pydantic import ValidationError

from issuebot.actors import ActorOptions
from issuebot.adapters.base import GitPlatformAdapter
from issuebot.events import DECODERS, GenericEvent
from issuebot.registry import ActorRegistry


class DispatchError(Exception):
    """The event could not be routed or decoded; nothing was processed."""

    pass


class ActorFailedError(Exception):
    """An actor claimed the event and then failed to execute."""

    def __init__(self, actor_name: str, cause: Exception) -> None:
        super().__init__(f"actor {actor_name} handle by err: {cause}")
        self.actor_name = actor_name
        self.cause = cause


def read_event_file(event_path: str | Path | None) -> bytes:
    """Read the webhook payload file written by the Actions runner."""
    if not event_path:
        raise DispatchError("empty github event path")
    path = Path(event_path)
    if not path.is_file():
        raise DispatchError(f"github event file not found: {path}")
    try:
        return path.read_bytes()
    except OSError as e:
        raise DispatchError(f"cannot read github event file {path}: {e}") from e


class Dispatcher:
    """Runs claim/execute for every actor registered for an event."""

    def __init__(
        self,
        registry: ActorRegistry,
        adapter: GitPlatformAdapter,
        options: ActorOptions,
        log: logging.Logger | None = None,
    ) -> None:
        self._registry = registry
        self._adapter = adapter
        self._options = options
        self._log = log or logging.getLogger("issuebot.dispatcher")

    def decode(self, event_name: str, raw: bytes | str) -> GenericEvent:
        """Build the envelope for a raw payload; DispatchError if it does not
        parse."""
        if not event_name:
            raise DispatchError("empty github event")
        decoder = DECODERS.get(event_name)
        if decoder is None or not self._registry.supports(event_name):
            raise DispatchError(f"unsupported github event: {event_name}")
        try:
            return GenericEvent(event=decoder(raw))
        except ValidationError as e:
            raise DispatchError(f"unmarshal '{event_name}' github event: {e}") from e

    def dispatch_file(self, event_name: str, event_path: str | Path | None) -> List[str]:
        """Read the payload file, then dispatch it."""
        if not event_name:
            raise DispatchError("empty github event")
        return self.dispatch(event_name, read_event_file(event_path))

    def dispatch(self, event_name: str, raw: bytes | str) -> List[str]:
        """Offer the event to every registered actor; return the names of
        those that handled it."""
        envelope = self.decode(event_name, raw)
        handled: List[str] = []
        for factory in self._registry.factories_for(event_name):
            actor = factory(self._adapter, self._log, self._options)
            if not actor.claim(envelope.clone()):
                continue
            try:
                actor.execute()
            except Exception as e:
                raise ActorFailedError(actor.name, e) from e
            self._log.info("actor %s successfully handle %s event", actor.name, event_name)
            handled.append(actor.name)
        if not handled:
            self._log.info("no actor claimed %s event", event_name)
        return handled
