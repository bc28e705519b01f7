"""Election repository port.

Election lookup, update and list-by-status for the voting core, plus the
create/delete operations used by election administration.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from votecast.domain.models.election import Election, ElectionStatus


class ElectionRepositoryProtocol(Protocol):
    """Protocol for election storage."""

    async def save(self, election: Election) -> None:
        """Insert or replace an election.

        Args:
            election: The election to store.
        """
        ...

    async def get(self, election_id: UUID) -> Election | None:
        """Get an election by ID.

        Returns:
            The election if found, None otherwise.
        """
        ...

    async def update_status(
        self, election_id: UUID, expected: ElectionStatus, new: ElectionStatus
    ) -> bool:
        """Compare-and-swap an election's status.

        The status is written only while the stored status still equals
        ``expected``; check and write happen in one atomic step.

        Args:
            election_id: The election to update.
            expected: The status the caller read.
            new: The status to write.

        Returns:
            True if the swap happened, False if the election is missing or
            its status is no longer ``expected``.
        """
        ...

    async def list_all(self) -> list[Election]:
        """List every election, most recent start date first."""
        ...

    async def list_by_status(self, status: ElectionStatus) -> list[Election]:
        """List elections currently in ``status``."""
        ...

    async def delete(self, election_id: UUID) -> None:
        """Remove an election. Missing IDs are ignored."""
        ...
