"""Candidate repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from votecast.domain.models.candidate import Candidate


class CandidateRepositoryProtocol(Protocol):
    """Protocol for candidate storage, scoped by election."""

    async def save(self, candidate: Candidate) -> None:
        ...

    async def get(self, candidate_id: UUID) -> Candidate | None:
        ...

    async def list_by_election(self, election_id: UUID) -> list[Candidate]:
        """List an election's candidates in insertion order."""
        ...

    async def count_by_election(self, election_id: UUID) -> int:
        ...

    async def delete(self, candidate_id: UUID) -> None:
        ...

    async def delete_by_election(self, election_id: UUID) -> None:
        """Remove every candidate of an election."""
        ...
