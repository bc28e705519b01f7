"""Tie resolution errors.

A tie may only be resolved once per election, only after the election is
CLOSED, and only when its computed results flag a tie among the top
vote-getters.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import UUID

from votecast.domain.exceptions import VotecastError

if TYPE_CHECKING:
    from votecast.domain.models.tie_resolution import TieResolutionKind


class TieResolutionError(VotecastError):
    """Base error for tie resolution operations."""

    problem_type: str = "urn:votecast:tie:error"
    title: str = "Tie Resolution Error"
    status: int = 409

    def to_problem_dict(self) -> dict[str, Any]:
        """Serialize to RFC 7807 problem details."""
        return {
            "type": self.problem_type,
            "title": self.title,
            "status": self.status,
            "detail": str(self),
        }


class NoTieError(TieResolutionError):
    """Raised when resolving a tie for an election whose results have none."""

    problem_type = "urn:votecast:tie:no-tie"
    title = "No Tie"

    def __init__(self, election_id: UUID) -> None:
        self.election_id = election_id
        super().__init__(f"No tie to resolve in election {election_id}")


class TieAlreadyResolvedError(TieResolutionError):
    """Raised when a second resolution is attempted for the same election.

    Attributes:
        election_id: The election already resolved.
        existing_resolution_id: ID of the existing resolution, if known.
    """

    problem_type = "urn:votecast:tie:already-resolved"
    title = "Tie Already Resolved"

    def __init__(
        self, election_id: UUID, existing_resolution_id: UUID | None = None
    ) -> None:
        self.election_id = election_id
        self.existing_resolution_id = existing_resolution_id
        super().__init__(f"Tie in election {election_id} has already been resolved")


class InvalidTieSelectionError(TieResolutionError):
    """Raised when a manual resolution does not pick one of the tied candidates.

    Attributes:
        election_id: The election being resolved.
        kind: The requested resolution kind.
        candidate_id: The selected candidate (None when missing).
    """

    problem_type = "urn:votecast:tie:invalid-selection"
    title = "Invalid Tie Selection"
    status = 422

    def __init__(
        self,
        election_id: UUID,
        kind: TieResolutionKind,
        candidate_id: UUID | None,
    ) -> None:
        self.election_id = election_id
        self.kind = kind
        self.candidate_id = candidate_id
        if candidate_id is None:
            message = f"{kind.value} resolution requires selecting a candidate"
        else:
            message = (
                f"Selected candidate {candidate_id} is not among the tied "
                f"candidates of election {election_id}"
            )
        super().__init__(message)
