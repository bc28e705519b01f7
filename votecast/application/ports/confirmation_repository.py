"""Vote confirmation repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from votecast.domain.models.vote_confirmation import VoteConfirmation


class ConfirmationRepositoryProtocol(Protocol):
    """Protocol for proof-of-cast receipts, queried by voter."""

    async def save(self, confirmation: VoteConfirmation) -> None:
        ...

    async def list_by_voter(self, voter_id: UUID) -> list[VoteConfirmation]:
        """List a voter's confirmations, newest first."""
        ...
