"""In-memory stub for EligibilityRepositoryProtocol.

Simulates the store's unique constraint on (voter_id, election_id).
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from votecast.domain.errors import DuplicateRecordError
from votecast.domain.models.voter_eligibility import VoterEligibility


class EligibilityRepositoryStub:
    """In-memory stub implementation of EligibilityRepositoryProtocol.

    Thread-safety note: mark_voted has no await point between the
    uniqueness check and the write, so on one event loop two concurrent
    claims for the same pair can never both succeed.
    """

    def __init__(self) -> None:
        """Initialize empty stub."""
        # Key: (voter_id, election_id)
        self._records: dict[tuple[UUID, UUID], VoterEligibility] = {}

    async def has_voted(self, voter_id: UUID, election_id: UUID) -> bool:
        record = self._records.get((voter_id, election_id))
        return record is not None and record.has_voted

    async def mark_voted(
        self, voter_id: UUID, election_id: UUID, voted_at: datetime
    ) -> VoterEligibility:
        """Record a vote.

        Raises:
            DuplicateRecordError: Unique constraint violation.
        """
        key = (voter_id, election_id)
        existing = self._records.get(key)
        if existing is not None and existing.has_voted:
            raise DuplicateRecordError("voter_eligibility", key)

        record = VoterEligibility.create_initial(voter_id, election_id).mark_as_voted(
            voted_at
        )
        self._records[key] = record
        return record

    async def get(self, voter_id: UUID, election_id: UUID) -> VoterEligibility | None:
        return self._records.get((voter_id, election_id))

    def discard(self, voter_id: UUID, election_id: UUID) -> None:
        self._records.pop((voter_id, election_id), None)

    def clear(self) -> None:
        """Clear all records (for test cleanup)."""
        self._records.clear()
