"""In-memory stubs for ElectionRepositoryProtocol and CandidateRepositoryProtocol."""

from __future__ import annotations

from dataclasses import replace
from uuid import UUID

from votecast.domain.models.candidate import Candidate
from votecast.domain.models.election import Election, ElectionStatus


class ElectionRepositoryStub:
    """In-memory stub implementation of ElectionRepositoryProtocol.

    Thread-safety note: This stub is NOT thread-safe. For concurrent
    tests, use separate instances.
    """

    def __init__(self) -> None:
        """Initialize empty stub."""
        self._elections: dict[UUID, Election] = {}

    async def save(self, election: Election) -> None:
        self._elections[election.election_id] = election

    async def get(self, election_id: UUID) -> Election | None:
        return self._elections.get(election_id)

    async def update_status(
        self, election_id: UUID, expected: ElectionStatus, new: ElectionStatus
    ) -> bool:
        election = self._elections.get(election_id)
        if election is None or election.status is not expected:
            return False
        self._elections[election_id] = replace(election, status=new)
        return True

    async def list_all(self) -> list[Election]:
        return sorted(
            self._elections.values(), key=lambda e: e.start_date, reverse=True
        )

    async def list_by_status(self, status: ElectionStatus) -> list[Election]:
        return [e for e in self._elections.values() if e.status is status]

    async def delete(self, election_id: UUID) -> None:
        self._elections.pop(election_id, None)

    def clear(self) -> None:
        """Clear all stored elections (for test cleanup)."""
        self._elections.clear()


class CandidateRepositoryStub:
    """In-memory stub implementation of CandidateRepositoryProtocol.

    Candidates are kept in insertion order.
    """

    def __init__(self) -> None:
        """Initialize empty stub."""
        self._candidates: dict[UUID, Candidate] = {}

    async def save(self, candidate: Candidate) -> None:
        self._candidates[candidate.candidate_id] = candidate

    async def get(self, candidate_id: UUID) -> Candidate | None:
        return self._candidates.get(candidate_id)

    async def list_by_election(self, election_id: UUID) -> list[Candidate]:
        return [c for c in self._candidates.values() if c.election_id == election_id]

    async def count_by_election(self, election_id: UUID) -> int:
        return len(await self.list_by_election(election_id))

    async def delete(self, candidate_id: UUID) -> None:
        self._candidates.pop(candidate_id, None)

    async def delete_by_election(self, election_id: UUID) -> None:
        self._candidates = {
            cid: c for cid, c in self._candidates.items() if c.election_id != election_id
        }

    def clear(self) -> None:
        """Clear all stored candidates (for test cleanup)."""
        self._candidates.clear()
