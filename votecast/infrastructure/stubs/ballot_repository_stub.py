"""In-memory stubs for the ballot and confirmation stores.

The two stores are deliberately separate objects with no shared key
beyond the public election ID.
"""

from __future__ import annotations

from uuid import UUID

from votecast.domain.errors import DuplicateRecordError
from votecast.domain.models.ballot import Ballot
from votecast.domain.models.vote_confirmation import VoteConfirmation


class BallotRepositoryStub:
    """In-memory stub implementation of BallotRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize empty stub."""
        self._ballots: dict[UUID, Ballot] = {}

    async def save(self, ballot: Ballot) -> None:
        """Store a ballot.

        Raises:
            DuplicateRecordError: Ballot ID already stored.
        """
        if ballot.ballot_id in self._ballots:
            raise DuplicateRecordError("ballot", (ballot.ballot_id,))
        self._ballots[ballot.ballot_id] = ballot

    async def list_by_election(self, election_id: UUID) -> list[Ballot]:
        return [b for b in self._ballots.values() if b.election_id == election_id]

    async def count_by_election(self, election_id: UUID) -> int:
        return sum(1 for b in self._ballots.values() if b.election_id == election_id)

    def contains(self, ballot_id: UUID) -> bool:
        return ballot_id in self._ballots

    def discard(self, ballot_id: UUID) -> None:
        self._ballots.pop(ballot_id, None)

    def all_ballots(self) -> list[Ballot]:
        """Every stored ballot (for test assertions)."""
        return list(self._ballots.values())

    def clear(self) -> None:
        """Clear all stored ballots (for test cleanup)."""
        self._ballots.clear()


class ConfirmationRepositoryStub:
    """In-memory stub implementation of ConfirmationRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize empty stub."""
        self._confirmations: dict[UUID, VoteConfirmation] = {}

    async def save(self, confirmation: VoteConfirmation) -> None:
        """Store a confirmation.

        Raises:
            DuplicateRecordError: Confirmation ID already stored.
        """
        if confirmation.confirmation_id in self._confirmations:
            raise DuplicateRecordError(
                "vote_confirmation", (confirmation.confirmation_id,)
            )
        self._confirmations[confirmation.confirmation_id] = confirmation

    async def list_by_voter(self, voter_id: UUID) -> list[VoteConfirmation]:
        return sorted(
            (c for c in self._confirmations.values() if c.voter_id == voter_id),
            key=lambda c: c.confirmed_at,
            reverse=True,
        )

    def contains(self, confirmation_id: UUID) -> bool:
        return confirmation_id in self._confirmations

    def discard(self, confirmation_id: UUID) -> None:
        self._confirmations.pop(confirmation_id, None)

    def all_confirmations(self) -> list[VoteConfirmation]:
        """Every stored confirmation (for test assertions)."""
        return list(self._confirmations.values())

    def clear(self) -> None:
        """Clear all stored confirmations (for test cleanup)."""
        self._confirmations.clear()
