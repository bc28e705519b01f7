"""Ballot repository port.

The ballot store holds anonymous ballots only. Nothing passed through this
port identifies a voter.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from votecast.domain.models.ballot import Ballot


class BallotRepositoryProtocol(Protocol):
    """Protocol for anonymous ballot storage."""

    async def save(self, ballot: Ballot) -> None:
        """Store a ballot. Ballots are never updated afterwards.

        Raises:
            DuplicateRecordError: If the ballot ID already exists.
        """
        ...

    async def list_by_election(self, election_id: UUID) -> list[Ballot]:
        """Snapshot of every committed ballot of an election."""
        ...

    async def count_by_election(self, election_id: UUID) -> int:
        ...
