"""Voter eligibility repository port.

The store enforces at most one voted record per (voter_id, election_id).
That uniqueness is the only guard against two concurrent casts by the same
voter; casting holds no in-process lock. CastRecorderProtocol writes the
claim of a cast together with its ballot and receipt.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from votecast.domain.models.voter_eligibility import VoterEligibility


class EligibilityRepositoryProtocol(Protocol):
    """Protocol for per (voter, election) voted flags."""

    async def has_voted(self, voter_id: UUID, election_id: UUID) -> bool:
        ...

    async def mark_voted(
        self, voter_id: UUID, election_id: UUID, voted_at: datetime
    ) -> VoterEligibility:
        """Record that the voter has voted in the election.

        Returns:
            The stored eligibility record.

        Raises:
            DuplicateRecordError: If the pair is already marked as voted.
        """
        ...

    async def get(self, voter_id: UUID, election_id: UUID) -> VoterEligibility | None:
        ...
