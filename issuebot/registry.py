"""Which actors look at which webhook event, and in what order."""

from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Tuple

from issuebot.actors import ActorFactory, AssignActor, LabelerActor, RetestActor, SyncActor
from issuebot.events import ISSUE_COMMENT


class ActorRegistry:
    """Read-only mapping event name -> ordered actor factories.

    Earlier factories examine (and act on) the event first. Actors must not
    depend on each other's side effects.
    """

    def __init__(self, table: Mapping[str, Iterable[ActorFactory]]) -> None:
        frozen: Dict[str, Tuple[ActorFactory, ...]] = {event: tuple(factories) for event, factories in table.items()}
        self._table = MappingProxyType(frozen)

    def factories_for(self, event_name: str) -> Tuple[ActorFactory, ...]:
        return self._table.get(event_name, ())

    def supports(self, event_name: str) -> bool:
        return event_name in self._table

    @property
    def event_names(self) -> Tuple[str, ...]:
        return tuple(self._table)


def default_registry() -> ActorRegistry:
    """The actors shipped with issuebot."""
    return ActorRegistry(
        {
            ISSUE_COMMENT: (
                AssignActor,
                RetestActor,
                SyncActor,
                LabelerActor,
            ),
        }
    )
