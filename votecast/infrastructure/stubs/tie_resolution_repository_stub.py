"""In-memory stub for TieResolutionRepositoryProtocol.

Simulates the unique constraint on election_id.
"""

from __future__ import annotations

from uuid import UUID

from votecast.domain.errors import DuplicateRecordError
from votecast.domain.models.tie_resolution import TieResolution


class TieResolutionRepositoryStub:
    """In-memory stub implementation of TieResolutionRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize empty stub."""
        self._resolutions: dict[UUID, TieResolution] = {}

    async def save(self, resolution: TieResolution) -> None:
        """Store a resolution.

        Raises:
            DuplicateRecordError: The election already has a resolution.
        """
        if resolution.election_id in self._resolutions:
            raise DuplicateRecordError("tie_resolution", (resolution.election_id,))
        self._resolutions[resolution.election_id] = resolution

    async def get_by_election(self, election_id: UUID) -> TieResolution | None:
        return self._resolutions.get(election_id)

    def clear(self) -> None:
        """Clear all resolutions (for test cleanup)."""
        self._resolutions.clear()
