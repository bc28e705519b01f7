"""Voter eligibility record.

Keyed by (voter_id, election_id). Once ``has_voted`` is True it never
reverts; the backing store enforces one record per key.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, eq=True)
class VoterEligibility:
    """Per (voter, election) flag preventing double voting.

    Attributes:
        voter_id: The voter.
        election_id: The election.
        has_voted: Whether a vote has been recorded.
        voted_at: When the vote was recorded (None until voted).
    """

    voter_id: UUID
    election_id: UUID
    has_voted: bool = field(default=False)
    voted_at: datetime | None = field(default=None)

    @classmethod
    def create_initial(cls, voter_id: UUID, election_id: UUID) -> VoterEligibility:
        return cls(voter_id=voter_id, election_id=election_id)

    def mark_as_voted(self, voted_at: datetime) -> VoterEligibility:
        """Return the voted record. Already-voted records are returned unchanged."""
        if self.has_voted:
            return self
        return VoterEligibility(
            voter_id=self.voter_id,
            election_id=self.election_id,
            has_voted=True,
            voted_at=voted_at,
        )
