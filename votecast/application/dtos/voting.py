"""Request models for the voting core.

Pydantic models the (external) web layer builds from user input and hands
to VotingService.cast_vote and TieResolutionService.resolve_tie. Shape
checks that depend on the election's counting rule happen in the service,
not here, so that precondition errors surface in their documented order.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from votecast.domain.models.tie_resolution import TieResolutionKind


class CastVoteRequest(BaseModel):
    """A voter's submission for one election.

    Attributes:
        election_id: The election being voted in.
        candidate_id: Single choice, used by plurality elections.
        preferences: Ranked choices, used by ranked elections.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    election_id: UUID = Field(
        ...,
        description="The election being voted in",
    )
    candidate_id: UUID | None = Field(
        default=None,
        description="Single choice for plurality elections",
    )
    preferences: tuple[UUID, ...] = Field(
        default=(),
        description="Candidate IDs in preference order for ranked elections",
    )

    @property
    def referenced_candidates(self) -> tuple[UUID, ...]:
        """Every candidate ID mentioned by the submission."""
        if self.candidate_id is None:
            return self.preferences
        return (self.candidate_id, *self.preferences)


class TieResolutionRequest(BaseModel):
    """An administrator's decision on a tied election.

    Attributes:
        election_id: The closed, tied election.
        kind: RANDOM, MANUAL or RECALL.
        candidate_id: The chosen candidate (MANUAL only).
        resolved_by: Identity of the administrator.
        notes: Optional free text.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    election_id: UUID = Field(..., description="The tied election")
    kind: TieResolutionKind = Field(..., description="How the tie is broken")
    candidate_id: UUID | None = Field(
        default=None,
        description="Chosen candidate for MANUAL resolutions",
    )
    resolved_by: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Identity of the resolving administrator",
    )
    notes: str | None = Field(
        default=None,
        max_length=2000,
        description="Free-text rationale",
    )
