"""Tie resolution repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from votecast.domain.models.tie_resolution import TieResolution


class TieResolutionRepositoryProtocol(Protocol):
    """Protocol for the one-per-election tie resolution record."""

    async def save(self, resolution: TieResolution) -> None:
        """Store a resolution.

        Raises:
            DuplicateRecordError: If the election already has a resolution.
        """
        ...

    async def get_by_election(self, election_id: UUID) -> TieResolution | None:
        ...
