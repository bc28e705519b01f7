"""Election lifecycle event payloads.

Every status transition of an election produces exactly one
ElectionStateChangedEvent, which the application layer fans out to all
subscribed observers (audit log, notifier).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from votecast.domain.models.election import Election, ElectionStatus

# Event type constant for election status changes
ELECTION_STATE_CHANGED_EVENT_TYPE: str = "election.state_changed"


@dataclass(frozen=True, eq=True)
class ElectionStateChangedEvent:
    """Payload for an election status transition - immutable.

    Attributes:
        election: Snapshot of the election after the transition.
        previous_status: Status before the transition.
        new_status: Status after the transition.
        occurred_at: When the transition happened (UTC).
    """

    election: Election
    previous_status: ElectionStatus
    new_status: ElectionStatus
    occurred_at: datetime

    @property
    def event_type(self) -> str:
        return ELECTION_STATE_CHANGED_EVENT_TYPE

    @property
    def is_opening(self) -> bool:
        """True for the DRAFT -> ACTIVE transition."""
        return (
            self.previous_status is ElectionStatus.DRAFT
            and self.new_status is ElectionStatus.ACTIVE
        )

    @property
    def is_closing(self) -> bool:
        """True for any transition into CLOSED."""
        return self.new_status is ElectionStatus.CLOSED

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured logging and audit storage."""
        return {
            "event_type": self.event_type,
            "election": self.election.to_dict(),
            "previous_status": self.previous_status.value,
            "new_status": self.new_status.value,
            "occurred_at": self.occurred_at.isoformat(),
        }
