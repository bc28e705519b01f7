"""Vote confirmation receipt domain model.

A confirmation proves that a voter cast a vote in an election without
revealing what was chosen. It is created paired with a Ballot (same
timestamp, independent identifier) and is queried later by voter ID to
build the voter's voting history.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, eq=True)
class VoteConfirmation:
    """Proof-of-cast receipt tied to a voter; contains no vote content.

    Attributes:
        confirmation_id: Opaque identifier, independent of the ballot ID.
        voter_id: The voter who cast the vote.
        election_id: The election voted in.
        confirmed_at: Cast timestamp, equal to the paired ballot's cast_at.
    """

    confirmation_id: UUID
    voter_id: UUID
    election_id: UUID
    confirmed_at: datetime

    def __post_init__(self) -> None:
        if self.confirmed_at.tzinfo is None:
            raise ValueError("confirmed_at must be timezone-aware (UTC)")

    @property
    def confirmation_code(self) -> str:
        """Short human-readable code shown to the voter."""
        return self.confirmation_id.hex[:8].upper()

    def to_dict(self) -> dict[str, object]:
        return {
            "confirmation_id": str(self.confirmation_id),
            "voter_id": str(self.voter_id),
            "election_id": str(self.election_id),
            "confirmed_at": self.confirmed_at.isoformat(),
            "confirmation_code": self.confirmation_code,
        }
