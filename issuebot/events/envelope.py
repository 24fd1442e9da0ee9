"""Generic envelope around a decoded webhook payload."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class GenericEvent(BaseModel):
    """Wraps the decoded payload; its concrete type depends on the event
    name."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    event: Any

    def clone(self) -> "GenericEvent":
        """Independent deep copy; every actor gets its own."""
        return self.model_copy(deep=True)
