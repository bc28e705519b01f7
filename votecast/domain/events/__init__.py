"""Domain events for votecast."""

from votecast.domain.events.election_lifecycle import (
    ELECTION_STATE_CHANGED_EVENT_TYPE,
    ElectionStateChangedEvent,
)

__all__: list[str] = [
    "ELECTION_STATE_CHANGED_EVENT_TYPE",
    "ElectionStateChangedEvent",
]
